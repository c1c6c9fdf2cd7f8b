"""Authenticated encryption of small blobs with AES-GCM.

Output has the form ``nonce | ciphertext | tag``.
"""

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

MAX_PLAINTEXT_SIZE = 32 * 1024 * 1024
NONCE_SIZE = 12
_VALID_KEY_SIZES = (16, 24, 32)


class ExceedsMaxSizeError(ValueError):
    """Raised when the plaintext is too large to encrypt."""

    def __init__(self, message: str = "plaintext is too large, limited to 32MiB") -> None:
        super().__init__(message)


def _cipher(key: bytes) -> AESGCM:
    key = bytes(key)
    if len(key) not in _VALID_KEY_SIZES:
        raise ValueError(f"invalid key size {len(key)}")
    return AESGCM(key)


def encrypt(plaintext: bytes, key: bytes) -> bytes:
    """Encrypt and authenticate ``plaintext``; a 32-byte key gives AES-256."""
    if len(plaintext) > MAX_PLAINTEXT_SIZE:
        raise ExceedsMaxSizeError()
    gcm = _cipher(key)
    nonce = os.urandom(NONCE_SIZE)
    return nonce + gcm.encrypt(nonce, bytes(plaintext), None)


def decrypt(ciphertext: bytes, key: bytes) -> bytes:
    """Check and decrypt data produced by :func:`encrypt`."""
    gcm = _cipher(key)
    if len(ciphertext) < NONCE_SIZE:
        raise ValueError("malformed ciphertext")
    nonce, body = bytes(ciphertext[:NONCE_SIZE]), bytes(ciphertext[NONCE_SIZE:])
    try:
        return gcm.decrypt(nonce, body, None)
    except InvalidTag as exc:
        raise ValueError("message authentication failed") from exc