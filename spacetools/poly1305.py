"""Poly1305 one-time authenticator."""

from spacetools.verify import verify_16

TAG_BYTES = 16
KEY_BYTES = 32

_P = (1 << 130) - 5
_CLAMP = 0x0FFFFFFC0FFFFFFC0FFFFFFC0FFFFFFF
_MASK128 = (1 << 128) - 1


def onetimeauth(message: bytes, key: bytes) -> bytes:
    """Return the 16-byte Poly1305 tag of ``message`` under a 32-byte key."""
    key = bytes(key)
    if len(key) != KEY_BYTES:
        raise ValueError(f"key must be {KEY_BYTES} bytes, got {len(key)}")
    message = bytes(message)
    r = int.from_bytes(key[:16], "little") & _CLAMP
    s = int.from_bytes(key[16:], "little")
    acc = 0
    for start in range(0, len(message), 16):
        block = int.from_bytes(message[start:start + 16] + b"\x01", "little")
        acc = (acc + block) * r % _P
    return ((acc + s) & _MASK128).to_bytes(TAG_BYTES, "little")


def onetimeauth_verify(tag: bytes, message: bytes, key: bytes) -> bool:
    """Return True if ``tag`` authenticates ``message`` under ``key``."""
    return verify_16(tag, onetimeauth(message, key))