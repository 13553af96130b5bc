"""Salsa20 and HSalsa20 cores and the Salsa20 / XSalsa20 stream ciphers."""

import struct

SIGMA = b"expand 32-byte k"

CORE_OUTPUT_BYTES = 64
HCORE_OUTPUT_BYTES = 32
CORE_INPUT_BYTES = 16
KEY_BYTES = 32
CONST_BYTES = 16
SALSA20_NONCE_BYTES = 8
XSALSA20_NONCE_BYTES = 24

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _check_length(name: str, value: bytes, size: int) -> bytes:
    value = bytes(value)
    if len(value) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(value)}")
    return value


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK32


def _rounds(x: list[int]) -> list[int]:
    for _ in range(20):
        w = [0] * 16
        for j in range(4):
            t0, t1, t2, t3 = (x[(5 * j + 4 * m) % 16] for m in range(4))
            t1 ^= _rotl((t0 + t3) & _MASK32, 7)
            t2 ^= _rotl((t1 + t0) & _MASK32, 9)
            t3 ^= _rotl((t2 + t1) & _MASK32, 13)
            t0 ^= _rotl((t3 + t2) & _MASK32, 18)
            for m, t in enumerate((t0, t1, t2, t3)):
                w[4 * j + (j + m) % 4] = t
        x = w
    return x


def _initial_state(inp: bytes, key: bytes, const: bytes) -> list[int]:
    inp = _check_length("input", inp, CORE_INPUT_BYTES)
    key = _check_length("key", key, KEY_BYTES)
    const = _check_length("constant", const, CONST_BYTES)
    c = struct.unpack("<4I", const)
    k = struct.unpack("<8I", key)
    n = struct.unpack("<4I", inp)
    return [
        c[0], k[0], k[1], k[2],
        k[3], c[1], n[0], n[1],
        n[2], n[3], c[2], k[4],
        k[5], k[6], k[7], c[3],
    ]


def core_salsa20(inp: bytes, key: bytes, const: bytes) -> bytes:
    """Apply the Salsa20 core to a 16-byte input; returns 64 bytes."""
    start = _initial_state(inp, key, const)
    mixed = _rounds(start)
    return struct.pack("<16I", *((a + b) & _MASK32 for a, b in zip(mixed, start)))


def core_hsalsa20(inp: bytes, key: bytes, const: bytes) -> bytes:
    """Apply the HSalsa20 core to a 16-byte input; returns 32 bytes."""
    x = _rounds(_initial_state(inp, key, const))
    return struct.pack("<8I", x[0], x[5], x[10], x[15], x[6], x[7], x[8], x[9])


def _xor_bytes(data: bytes, pad: bytes) -> bytes:
    return bytes(a ^ b for a, b in zip(data, pad))


def stream_salsa20_xor(message: bytes, nonce: bytes, key: bytes) -> bytes:
    """XOR a message with the Salsa20 keystream for an 8-byte nonce."""
    message = bytes(message)
    nonce = _check_length("nonce", nonce, SALSA20_NONCE_BYTES)
    key = _check_length("key", key, KEY_BYTES)
    chunks = []
    for counter, start in enumerate(range(0, len(message), CORE_OUTPUT_BYTES)):
        block_input = nonce + (counter & _MASK64).to_bytes(8, "little")
        block = core_salsa20(block_input, key, SIGMA)
        chunks.append(_xor_bytes(message[start:start + CORE_OUTPUT_BYTES], block))
    return b"".join(chunks)


def stream_salsa20(length: int, nonce: bytes, key: bytes) -> bytes:
    """Return ``length`` bytes of Salsa20 keystream."""
    if length < 0:
        raise ValueError("length must not be negative")
    return stream_salsa20_xor(bytes(length), nonce, key)


def _xsalsa20_subkey(nonce: bytes, key: bytes) -> tuple[bytes, bytes]:
    nonce = _check_length("nonce", nonce, XSALSA20_NONCE_BYTES)
    subkey = core_hsalsa20(nonce[:16], key, SIGMA)
    return subkey, nonce[16:]


def stream_xsalsa20(length: int, nonce: bytes, key: bytes) -> bytes:
    """Return ``length`` bytes of XSalsa20 keystream for a 24-byte nonce."""
    subkey, tail = _xsalsa20_subkey(nonce, key)
    return stream_salsa20(length, tail, subkey)


def stream_xsalsa20_xor(message: bytes, nonce: bytes, key: bytes) -> bytes:
    """XOR a message with the XSalsa20 keystream for a 24-byte nonce."""
    subkey, tail = _xsalsa20_subkey(nonce, key)
    return stream_salsa20_xor(message, tail, subkey)