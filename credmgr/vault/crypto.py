"""
AES-256-GCM envelope for the credential store.

The key is derived from the PIN on every call and never cached. Each envelope
is hex text of a fresh 12-byte nonce followed by ciphertext + 16-byte tag.
"""

from __future__ import annotations

import secrets

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from credmgr.vault.errors import AuthenticationFailed, MalformedEnvelope

NONCE_SIZE = 12  # AES-GCM standard
KEY_SIZE = 32  # 256 bits


def derive_key(pin: str) -> bytes:
    """Derive a 32-byte key from the PIN (single unsalted SHA-256)."""
    digest = hashes.Hash(hashes.SHA256())
    digest.update(pin.encode("utf-8"))
    return digest.finalize()


def seal(plaintext: bytes | str, pin: str) -> str:
    """Encrypt plaintext under the PIN. Returns hex of nonce + ciphertext + tag."""
    if isinstance(plaintext, str):
        plaintext = plaintext.encode("utf-8")
    nonce = secrets.token_bytes(NONCE_SIZE)
    aesgcm = AESGCM(derive_key(pin))
    ciphertext = aesgcm.encrypt(nonce, plaintext, None)
    return (nonce + ciphertext).hex()


def open(envelope: str, pin: str) -> bytes:
    """Decrypt an envelope produced by seal().

    Raises MalformedEnvelope when the text is not hex or is shorter than one
    nonce, and AuthenticationFailed when the tag does not verify.
    """
    try:
        data = bytes.fromhex(envelope)
    except ValueError as e:
        raise MalformedEnvelope("Stored data is not a valid envelope") from e
    if len(data) < NONCE_SIZE:
        raise MalformedEnvelope("Encrypted data too short")

    nonce, ciphertext = data[:NONCE_SIZE], data[NONCE_SIZE:]
    aesgcm = AESGCM(derive_key(pin))
    try:
        return aesgcm.decrypt(nonce, ciphertext, None)
    except InvalidTag as e:
        raise AuthenticationFailed() from e
