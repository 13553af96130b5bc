"""SHA-512 block compression and hashing."""

import math
import struct

STATE_BYTES = 64
BLOCK_BYTES = 128
HASH_BYTES = 64

_MASK64 = (1 << 64) - 1


def _first_primes(count: int) -> list[int]:
    primes: list[int] = []
    candidate = 2
    while len(primes) < count:
        if all(candidate % p for p in primes if p * p <= candidate):
            primes.append(candidate)
        candidate += 1
    return primes


def _integer_cube_root(n: int) -> int:
    x = 1 << ((n.bit_length() + 2) // 3)
    while True:
        y = (2 * x + n // (x * x)) // 3
        if y >= x:
            return x
        x = y


# Fractional parts of the cube roots of the first 80 primes.
_K = tuple(_integer_cube_root(p << 192) & _MASK64 for p in _first_primes(80))

# Fractional parts of the square roots of the first 8 primes.
IV = b"".join(
    (math.isqrt(p << 128) & _MASK64).to_bytes(8, "big") for p in _first_primes(8)
)


def _rotr(x: int, c: int) -> int:
    return ((x >> c) | (x << (64 - c))) & _MASK64


def _compress(state: list[int], block: bytes) -> list[int]:
    w = list(struct.unpack(">16Q", block))
    for i in range(16, 80):
        s0 = _rotr(w[i - 15], 1) ^ _rotr(w[i - 15], 8) ^ (w[i - 15] >> 7)
        s1 = _rotr(w[i - 2], 19) ^ _rotr(w[i - 2], 61) ^ (w[i - 2] >> 6)
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & _MASK64)

    a, b, c, d, e, f, g, h = state
    for k, wi in zip(_K, w):
        big_s1 = _rotr(e, 14) ^ _rotr(e, 18) ^ _rotr(e, 41)
        choose = (e & f) ^ (~e & g)
        t1 = (h + big_s1 + choose + k + wi) & _MASK64
        big_s0 = _rotr(a, 28) ^ _rotr(a, 34) ^ _rotr(a, 39)
        majority = (a & b) ^ (a & c) ^ (b & c)
        t2 = (big_s0 + majority) & _MASK64
        h, g, f, e, d, c, b, a = g, f, e, (d + t1) & _MASK64, c, b, a, (t1 + t2) & _MASK64

    return [(x + y) & _MASK64 for x, y in zip(state, (a, b, c, d, e, f, g, h))]


def hashblocks(state: bytes, message: bytes) -> bytes:
    """Compress every complete 128-byte block of ``message`` into a 64-byte state.

    Trailing bytes that do not fill a whole block are left unprocessed.
    """
    state = bytes(state)
    if len(state) != STATE_BYTES:
        raise ValueError(f"state must be {STATE_BYTES} bytes, got {len(state)}")
    message = bytes(message)
    words = list(struct.unpack(">8Q", state))
    full = len(message) - len(message) % BLOCK_BYTES
    for start in range(0, full, BLOCK_BYTES):
        words = _compress(words, message[start:start + BLOCK_BYTES])
    return struct.pack(">8Q", *words)


def hash_sha512(message: bytes) -> bytes:
    """Return the 64-byte SHA-512 digest of ``message``."""
    message = bytes(message)
    bit_length = (len(message) * 8) & ((1 << 128) - 1)
    padding = b"\x80" + bytes((111 - len(message)) % BLOCK_BYTES)
    return hashblocks(IV, message + padding + bit_length.to_bytes(16, "big"))