"""Curve25519 Diffie-Hellman scalar multiplication."""

BYTES = 32
SCALAR_BYTES = 32

P = 2**255 - 19
_A24 = 121665
_LOW_255 = (1 << 255) - 1

BASE_POINT = bytes([9]) + bytes(31)


def _check_length(name: str, value: bytes, size: int) -> bytes:
    value = bytes(value)
    if len(value) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(value)}")
    return value


def _clamp(scalar: bytes) -> int:
    k = bytearray(scalar)
    k[0] &= 248
    k[31] = (k[31] & 127) | 64
    return int.from_bytes(k, "little")


def scalarmult(scalar: bytes, point: bytes) -> bytes:
    """Multiply a Curve25519 point (u-coordinate) by a clamped 32-byte scalar."""
    scalar = _check_length("scalar", scalar, SCALAR_BYTES)
    point = _check_length("point", point, BYTES)
    k = _clamp(scalar)
    u = int.from_bytes(point, "little") & _LOW_255

    x1 = u % P
    x2, z2 = 1, 0
    x3, z3 = x1, 1
    swap = 0
    for t in range(254, -1, -1):
        bit = (k >> t) & 1
        swap ^= bit
        if swap:
            x2, x3 = x3, x2
            z2, z3 = z3, z2
        swap = bit

        a = (x2 + z2) % P
        aa = a * a % P
        b = (x2 - z2) % P
        bb = b * b % P
        e = (aa - bb) % P
        c = (x3 + z3) % P
        d = (x3 - z3) % P
        da = d * a % P
        cb = c * b % P
        x3 = (da + cb) ** 2 % P
        z3 = x1 * (da - cb) ** 2 % P
        x2 = aa * bb % P
        z2 = e * (aa + _A24 * e) % P

    if swap:
        x2, x3 = x3, x2
        z2, z3 = z3, z2

    result = x2 * pow(z2, P - 2, P) % P
    return result.to_bytes(BYTES, "little")


def scalarmult_base(scalar: bytes) -> bytes:
    """Multiply the standard base point (u = 9) by a 32-byte scalar."""
    return scalarmult(scalar, BASE_POINT)