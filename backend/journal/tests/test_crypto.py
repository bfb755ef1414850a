"""
Tests for the AES-GCM envelope.
"""
import base64
import pytest
from journal.core import crypto

KEY = bytes(range(32))
OTHER_KEY = bytes(reversed(range(32)))


def test_seal_and_open():
    ciphertext, nonce = crypto.seal(KEY, b"dear diary")
    assert len(nonce) == crypto.NONCE_SIZE
    assert ciphertext != b"dear diary"
    assert crypto.open_sealed(KEY, ciphertext, nonce) == b"dear diary"


def test_fresh_nonce_per_seal():
    first = crypto.seal(KEY, b"same text")
    second = crypto.seal(KEY, b"same text")
    assert first[1] != second[1]
    assert first[0] != second[0]


@pytest.mark.parametrize("key", [b"", b"short", bytes(16), bytes(33)])
def test_invalid_key_length(key):
    with pytest.raises(crypto.InvalidKeyLength):
        crypto.seal(key, b"text")


def test_wrong_key_fails_authentication():
    ciphertext, nonce = crypto.seal(KEY, b"secret")
    with pytest.raises(crypto.AuthenticationFailed):
        crypto.open_sealed(OTHER_KEY, ciphertext, nonce)


def test_tampered_ciphertext_fails_authentication():
    ciphertext, nonce = crypto.seal(KEY, b"secret")
    tampered = bytes([ciphertext[0] ^ 0x01]) + ciphertext[1:]
    with pytest.raises(crypto.AuthenticationFailed):
        crypto.open_sealed(KEY, tampered, nonce)


def test_tampered_nonce_fails_authentication():
    ciphertext, nonce = crypto.seal(KEY, b"secret")
    tampered = nonce[:-1] + bytes([nonce[-1] ^ 0x80])
    with pytest.raises(crypto.AuthenticationFailed):
        crypto.open_sealed(KEY, ciphertext, tampered)


def test_wrong_nonce_length():
    ciphertext, nonce = crypto.seal(KEY, b"secret")
    with pytest.raises(crypto.AuthenticationFailed):
        crypto.open_sealed(KEY, ciphertext, nonce[:8])


def test_string_envelope():
    token = crypto.seal_to_string(KEY, "비 오는 날")
    assert token != "비 오는 날"
    raw = base64.b64decode(token)
    assert len(raw) > crypto.NONCE_SIZE
    assert crypto.open_from_string(KEY, token) == "비 오는 날"


def test_string_envelope_empty():
    assert crypto.seal_to_string(KEY, "") == ""
    assert crypto.open_from_string(KEY, "") == ""


@pytest.mark.parametrize("token", ["not base64!", "Sunny", base64.b64encode(b"tooshort").decode()])
def test_open_from_string_rejects_non_ciphertext(token):
    with pytest.raises(crypto.AuthenticationFailed):
        crypto.open_from_string(KEY, token)


def test_authentication_failure_is_cipher_error():
    assert issubclass(crypto.AuthenticationFailed, crypto.CipherError)
    assert issubclass(crypto.InvalidKeyLength, crypto.CipherError)
