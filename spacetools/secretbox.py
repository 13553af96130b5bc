"""XSalsa20-Poly1305 authenticated secret-key encryption."""

from spacetools.errors import CryptoError
from spacetools.poly1305 import onetimeauth, onetimeauth_verify
from spacetools.salsa20 import stream_xsalsa20, stream_xsalsa20_xor

KEY_BYTES = 32
NONCE_BYTES = 24
ZERO_BYTES = 32
BOXZERO_BYTES = 16
MAC_BYTES = ZERO_BYTES - BOXZERO_BYTES


def _check_length(name: str, value: bytes, size: int) -> bytes:
    value = bytes(value)
    if len(value) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(value)}")
    return value


def secretbox(message: bytes, nonce: bytes, key: bytes) -> bytes:
    """Encrypt and authenticate ``message``; returns the 16-byte tag followed by the ciphertext."""
    nonce = _check_length("nonce", nonce, NONCE_BYTES)
    key = _check_length("key", key, KEY_BYTES)
    stream = stream_xsalsa20_xor(bytes(ZERO_BYTES) + bytes(message), nonce, key)
    auth_key, body = stream[:ZERO_BYTES], stream[ZERO_BYTES:]
    return onetimeauth(body, auth_key) + body


def secretbox_open(ciphertext: bytes, nonce: bytes, key: bytes) -> bytes:
    """Verify and decrypt a box made by :func:`secretbox`.

    Raises CryptoError if the box is too short or fails authentication.
    """
    nonce = _check_length("nonce", nonce, NONCE_BYTES)
    key = _check_length("key", key, KEY_BYTES)
    ciphertext = bytes(ciphertext)
    if len(ciphertext) < MAC_BYTES:
        raise CryptoError("ciphertext is shorter than the authenticator")
    tag, body = ciphertext[:MAC_BYTES], ciphertext[MAC_BYTES:]
    auth_key = stream_xsalsa20(ZERO_BYTES, nonce, key)
    if not onetimeauth_verify(tag, body, auth_key):
        raise CryptoError("ciphertext failed authentication")
    return stream_xsalsa20_xor(bytes(ZERO_BYTES) + body, nonce, key)[ZERO_BYTES:]