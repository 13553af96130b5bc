"""Curve25519-XSalsa20-Poly1305 public-key authenticated encryption."""

import os

from spacetools.curve25519 import scalarmult, scalarmult_base
from spacetools.salsa20 import SIGMA, core_hsalsa20
from spacetools.secretbox import secretbox, secretbox_open

PUBLIC_KEY_BYTES = 32
SECRET_KEY_BYTES = 32
BEFORENM_BYTES = 32
NONCE_BYTES = 24


def box_keypair() -> tuple[bytes, bytes]:
    """Generate a random key pair; returns ``(public_key, secret_key)``."""
    secret_key = os.urandom(SECRET_KEY_BYTES)
    return scalarmult_base(secret_key), secret_key


def box_beforenm(public_key: bytes, secret_key: bytes) -> bytes:
    """Derive the 32-byte shared key for a peer's public key and our secret key."""
    shared = scalarmult(secret_key, public_key)
    return core_hsalsa20(bytes(16), shared, SIGMA)


def box_afternm(message: bytes, nonce: bytes, key: bytes) -> bytes:
    """Encrypt with a precomputed shared key."""
    return secretbox(message, nonce, key)


def box_open_afternm(ciphertext: bytes, nonce: bytes, key: bytes) -> bytes:
    """Decrypt with a precomputed shared key; raises CryptoError on failure."""
    return secretbox_open(ciphertext, nonce, key)


def box(message: bytes, nonce: bytes, public_key: bytes, secret_key: bytes) -> bytes:
    """Encrypt ``message`` for the holder of ``public_key``."""
    return box_afternm(message, nonce, box_beforenm(public_key, secret_key))


def box_open(
    ciphertext: bytes, nonce: bytes, public_key: bytes, secret_key: bytes
) -> bytes:
    """Decrypt a box sent by the holder of ``public_key``; raises CryptoError on failure."""
    return box_open_afternm(ciphertext, nonce, box_beforenm(public_key, secret_key))