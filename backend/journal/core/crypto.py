"""
AES-256-GCM envelope for diary content and metadata fields.

``seal``/``open_sealed`` work on raw bytes and keep the nonce separate, which is
how diary content is stored (two binary columns). ``seal_to_string`` and
``open_from_string`` pack ``nonce || ciphertext`` into one base64 string for
text columns.
"""
import base64
import binascii
import os
from typing import Tuple

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

KEY_SIZE = 32
NONCE_SIZE = 12


class CipherError(Exception):
    """Base class for envelope failures."""


class InvalidKeyLength(CipherError):
    """Key is not exactly 32 bytes."""


class AuthenticationFailed(CipherError):
    """Ciphertext could not be authenticated (tampered, wrong key, or not ciphertext at all)."""


def _aead(key: bytes) -> AESGCM:
    if key is None or len(key) != KEY_SIZE:
        raise InvalidKeyLength(f"key length must be {KEY_SIZE} bytes")
    return AESGCM(key)


def seal(key: bytes, plaintext: bytes) -> Tuple[bytes, bytes]:
    """Encrypt ``plaintext`` and return ``(ciphertext, nonce)``.

    A fresh random nonce is drawn for every call.
    """
    aead = _aead(key)
    nonce = os.urandom(NONCE_SIZE)
    ciphertext = aead.encrypt(nonce, plaintext, None)
    return ciphertext, nonce


def open_sealed(key: bytes, ciphertext: bytes, nonce: bytes) -> bytes:
    """Decrypt and authenticate ``ciphertext`` sealed under ``nonce``."""
    aead = _aead(key)
    if nonce is None or len(nonce) != NONCE_SIZE:
        raise AuthenticationFailed("invalid nonce length")
    try:
        return aead.decrypt(nonce, ciphertext, None)
    except InvalidTag:
        raise AuthenticationFailed("ciphertext authentication failed")


def seal_to_string(key: bytes, plaintext: str) -> str:
    """Encrypt a string into base64(nonce || ciphertext)."""
    if plaintext == "":
        return ""
    ciphertext, nonce = seal(key, plaintext.encode("utf-8"))
    return base64.b64encode(nonce + ciphertext).decode("ascii")


def open_from_string(key: bytes, token: str) -> str:
    """Reverse of :func:`seal_to_string`."""
    if token == "":
        return ""
    try:
        data = base64.b64decode(token, validate=True)
    except (binascii.Error, ValueError):
        raise AuthenticationFailed("token is not valid base64")
    if len(data) < NONCE_SIZE:
        raise AuthenticationFailed("ciphertext too short")
    plaintext = open_sealed(key, data[NONCE_SIZE:], data[:NONCE_SIZE])
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError:
        raise AuthenticationFailed("decrypted payload is not utf-8")
