import pytest

from spacetools.errors import CryptoError
from spacetools.secretbox import secretbox, secretbox_open

KEY = bytes(range(32))
NONCE = bytes(range(50, 74))


@pytest.mark.parametrize("message", [b"", b"a", b"hello world" * 20])
def test_round_trip(message):
    boxed = secretbox(message, NONCE, KEY)
    assert secretbox_open(boxed, NONCE, KEY) == message


def test_length_is_message_plus_tag():
    assert len(secretbox(b"x" * 100, NONCE, KEY)) == 116


def test_ciphertext_hides_message():
    message = b"attack at dawn!!"
    assert message not in secretbox(message, NONCE, KEY)


def test_nonce_changes_output():
    other = bytes(24)
    assert secretbox(b"data", NONCE, KEY) != secretbox(b"data", other, KEY)


def test_tampered_body_rejected():
    boxed = bytearray(secretbox(b"important message", NONCE, KEY))
    boxed[-1] ^= 1
    with pytest.raises(CryptoError):
        secretbox_open(bytes(boxed), NONCE, KEY)


def test_tampered_tag_rejected():
    boxed = bytearray(secretbox(b"important message", NONCE, KEY))
    boxed[0] ^= 0x40
    with pytest.raises(CryptoError):
        secretbox_open(bytes(boxed), NONCE, KEY)


def test_wrong_key_rejected():
    boxed = secretbox(b"payload", NONCE, KEY)
    with pytest.raises(CryptoError):
        secretbox_open(boxed, NONCE, bytes(32))


def test_too_short_rejected():
    with pytest.raises(CryptoError):
        secretbox_open(bytes(15), NONCE, KEY)


def test_bad_key_length():
    with pytest.raises(ValueError):
        secretbox(b"x", NONCE, bytes(31))


def test_bad_nonce_length():
    with pytest.raises(ValueError):
        secretbox(b"x", bytes(23), KEY)