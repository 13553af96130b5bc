"""Exceptions raised by the cryptographic primitives."""


class CryptoError(Exception):
    """Raised when authentication, verification or decoding fails."""