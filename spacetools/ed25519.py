"""Ed25519 signatures over attached messages."""

import os

from spacetools.errors import CryptoError
from spacetools.sha512 import hash_sha512
from spacetools.verify import verify_32

SIGNATURE_BYTES = 64
PUBLIC_KEY_BYTES = 32
SECRET_KEY_BYTES = 64
SEED_BYTES = 32

P = 2**255 - 19
L = 2**252 + 27742317777372353535851937790883648493
_LOW_255 = (1 << 255) - 1


def _from_limbs(*limbs: int) -> int:
    return sum(limb << (16 * i) for i, limb in enumerate(limbs))


_D = _from_limbs(
    0x78A3, 0x1359, 0x4DCA, 0x75EB, 0xD8AB, 0x4141, 0x0A4D, 0x0070,
    0xE898, 0x7779, 0x4079, 0x8CC7, 0xFE73, 0x2B6F, 0x6CEE, 0x5203,
)
_D2 = _from_limbs(
    0xF159, 0x26B2, 0x9B94, 0xEBD6, 0xB156, 0x8283, 0x149A, 0x00E0,
    0xD130, 0xEEF3, 0x80F2, 0x198E, 0xFCE7, 0x56DF, 0xD9DC, 0x2406,
)
_BASE_X = _from_limbs(
    0xD51A, 0x8F25, 0x2D60, 0xC956, 0xA7B2, 0x9525, 0xC760, 0x692C,
    0xDC5C, 0xFDD6, 0xE231, 0xC0A4, 0x53FE, 0xCD6E, 0x36D3, 0x2169,
)
_BASE_Y = _from_limbs(0x6658, *([0x6666] * 15))
_SQRT_M1 = _from_limbs(
    0xA0B0, 0x4A0E, 0x1B27, 0xC4EE, 0xE478, 0xAD2F, 0x1806, 0x2F43,
    0xD7A7, 0x3DFB, 0x0099, 0x2B4D, 0xDF0B, 0x4FC1, 0x2480, 0x2B83,
)

Point = tuple[int, int, int, int]

_IDENTITY: Point = (0, 1, 1, 0)
_BASE: Point = (_BASE_X, _BASE_Y, 1, _BASE_X * _BASE_Y % P)


def _add(p: Point, q: Point) -> Point:
    x1, y1, z1, t1 = p
    x2, y2, z2, t2 = q
    a = (y1 - x1) * (y2 - x2) % P
    b = (y1 + x1) * (y2 + x2) % P
    c = t1 * t2 % P * _D2 % P
    d = 2 * z1 * z2 % P
    e, f, g, h = (b - a) % P, (d - c) % P, (d + c) % P, (b + a) % P
    return (e * f % P, h * g % P, g * f % P, e * h % P)


def _multiply(point: Point, n: int) -> Point:
    result = _IDENTITY
    addend = point
    while n:
        if n & 1:
            result = _add(result, addend)
        addend = _add(addend, addend)
        n >>= 1
    return result


def _encode(point: Point) -> bytes:
    x, y, z, _ = point
    zi = pow(z, P - 2, P)
    x = x * zi % P
    y = y * zi % P
    return (y | ((x & 1) << 255)).to_bytes(32, "little")


def _decode_negated(encoded: bytes) -> Point:
    """Decode a public key into the negation of the point it names."""
    y = int.from_bytes(encoded, "little") & _LOW_255
    y2 = y * y % P
    num = (y2 - 1) % P
    den = (_D * y2 + 1) % P
    t = pow(num * pow(den, 7, P) % P, (P - 5) // 8, P)
    x = t * num % P * pow(den, 3, P) % P
    if (x * x % P * den - num) % P:
        x = x * _SQRT_M1 % P
    if (x * x % P * den - num) % P:
        raise CryptoError("public key is not a valid curve point")
    if (x & 1) == encoded[31] >> 7:
        x = (-x) % P
    y %= P
    return (x, y, 1, x * y % P)


def _clamped_scalar(digest: bytes) -> int:
    k = bytearray(digest[:32])
    k[0] &= 248
    k[31] = (k[31] & 127) | 64
    return int.from_bytes(k, "little")


def _reduce(digest: bytes) -> int:
    return int.from_bytes(digest, "little") % L


def sign_keypair(seed: bytes | None = None) -> tuple[bytes, bytes]:
    """Make a key pair from a 32-byte seed (random if omitted).

    Returns ``(public_key, secret_key)``; the 64-byte secret key is the seed
    followed by the public key.
    """
    seed = os.urandom(SEED_BYTES) if seed is None else bytes(seed)
    if len(seed) != SEED_BYTES:
        raise ValueError(f"seed must be {SEED_BYTES} bytes, got {len(seed)}")
    a = _clamped_scalar(hash_sha512(seed))
    public_key = _encode(_multiply(_BASE, a))
    return public_key, seed + public_key


def sign(message: bytes, secret_key: bytes) -> bytes:
    """Return the 64-byte signature followed by ``message``."""
    secret_key = bytes(secret_key)
    if len(secret_key) != SECRET_KEY_BYTES:
        raise ValueError(
            f"secret key must be {SECRET_KEY_BYTES} bytes, got {len(secret_key)}"
        )
    message = bytes(message)
    digest = hash_sha512(secret_key[:32])
    a = _clamped_scalar(digest)
    r = _reduce(hash_sha512(digest[32:] + message))
    big_r = _encode(_multiply(_BASE, r))
    h = _reduce(hash_sha512(big_r + secret_key[32:] + message))
    s = (r + h * a) % L
    return big_r + s.to_bytes(32, "little") + message


def sign_open(signed_message: bytes, public_key: bytes) -> bytes:
    """Verify a signed message and return the message; raises CryptoError if invalid."""
    signed_message = bytes(signed_message)
    public_key = bytes(public_key)
    if len(public_key) != PUBLIC_KEY_BYTES:
        raise ValueError(
            f"public key must be {PUBLIC_KEY_BYTES} bytes, got {len(public_key)}"
        )
    if len(signed_message) < SIGNATURE_BYTES:
        raise CryptoError("signed message is shorter than a signature")
    negated = _decode_negated(public_key)
    h = _reduce(hash_sha512(signed_message[:32] + public_key + signed_message[64:]))
    s = int.from_bytes(signed_message[32:64], "little")
    check = _encode(_add(_multiply(negated, h), _multiply(_BASE, s)))
    if not verify_32(signed_message[:32], check):
        raise CryptoError("signature verification failed")
    return signed_message[64:]