import pytest

from spacetools.ed25519 import sign, sign_keypair, sign_open
from spacetools.errors import CryptoError

SEED = bytes.fromhex(
    "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
)

SEED_2 = bytes.fromhex(
    "4ccd089b28ff96da9db6c346ec114e0f5b8a319f35aba624da8cf6ed4fb8a6fb"
)


def test_known_public_key():
    public_key, _ = sign_keypair(SEED)
    assert public_key == bytes.fromhex(
        "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
    )


def test_known_signature_empty_message():
    _, secret_key = sign_keypair(SEED)
    assert sign(b"", secret_key) == bytes.fromhex(
        "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065"
        "224901555fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24"
        "655141438e7a100b"
    )


def test_secret_key_layout():
    public_key, secret_key = sign_keypair(SEED)
    assert secret_key == SEED + public_key


def test_second_known_vector():
    public_key, secret_key = sign_keypair(SEED_2)
    assert public_key == bytes.fromhex(
        "3d4017c3e843895a92b70aa74d1b7ebc9c982ccf2ec4968cc0cd55f12af4660c"
    )
    assert sign(b"\x72", secret_key)[:64] == bytes.fromhex(
        "92a009a9f0d4cab8720e820b5f642540a2b27b5416503f8fb3762223ebdb69da"
        "085ac1e43e15996e458f3613d0f11d8c387b2eaeb4302aeeb00d291612bb0c00"
    )


def test_random_keypair_round_trip():
    public_key, secret_key = sign_keypair()
    signed = sign(b"command", secret_key)
    assert sign_open(signed, public_key) == b"command"


@pytest.mark.parametrize("message", [b"", b"x", bytes(range(256)) * 2])
def test_round_trip(message):
    public_key, secret_key = sign_keypair(SEED)
    signed = sign(message, secret_key)
    assert len(signed) == 64 + len(message)
    assert signed[64:] == message
    assert sign_open(signed, public_key) == message


def test_tampered_message_rejected():
    public_key, secret_key = sign_keypair(SEED)
    signed = bytearray(sign(b"reboot node 5", secret_key))
    signed[-1] ^= 1
    with pytest.raises(CryptoError):
        sign_open(bytes(signed), public_key)


def test_tampered_signature_rejected():
    public_key, secret_key = sign_keypair(SEED)
    signed = bytearray(sign(b"reboot node 5", secret_key))
    signed[40] ^= 0x10
    with pytest.raises(CryptoError):
        sign_open(bytes(signed), public_key)


def test_wrong_public_key_rejected():
    _, secret_key = sign_keypair(SEED)
    other_public, _ = sign_keypair(bytes(32))
    with pytest.raises(CryptoError):
        sign_open(sign(b"hello", secret_key), other_public)


def test_short_signed_message_rejected():
    public_key, _ = sign_keypair(SEED)
    with pytest.raises(CryptoError):
        sign_open(bytes(63), public_key)


def test_bad_seed_length():
    with pytest.raises(ValueError):
        sign_keypair(bytes(31))


def test_bad_secret_key_length():
    with pytest.raises(ValueError):
        sign(b"msg", bytes(32))