"""Constant-time comparison of fixed-size byte strings."""

import hmac

VERIFY_16_BYTES = 16
VERIFY_32_BYTES = 32


def _verify(x: bytes, y: bytes, size: int) -> bool:
    x = bytes(x)
    y = bytes(y)
    if len(x) != size or len(y) != size:
        raise ValueError(f"both inputs must be exactly {size} bytes")
    return hmac.compare_digest(x, y)


def verify_16(x: bytes, y: bytes) -> bool:
    """Return True if the two 16-byte strings are equal, in constant time."""
    return _verify(x, y, VERIFY_16_BYTES)


def verify_32(x: bytes, y: bytes) -> bool:
    """Return True if the two 32-byte strings are equal, in constant time."""
    return _verify(x, y, VERIFY_32_BYTES)