"""
Typed failures raised by the credential vault.

Every failure a caller can see derives from VaultError so the menu and CLI can
catch the whole family in one place. Messages never carry the PIN or any
secret value.
"""

from __future__ import annotations


class VaultError(Exception):
    """Base class for all vault failures."""


class AuthenticationFailed(VaultError):
    """Wrong PIN, or the ciphertext was corrupted or tampered with.

    AES-GCM cannot tell these apart, so neither can we.
    """

    def __init__(self, message: str = "Wrong PIN or corrupted data"):
        super().__init__(message)


class MalformedEnvelope(VaultError):
    """Stored bytes are not valid hex text, or shorter than one nonce."""


class MalformedStore(VaultError):
    """Envelope decrypted, but the payload is not a valid credential list."""


class DuplicateName(VaultError):
    """A credential with the same name already exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Credential with name '{name}' already exists")


class IndexOutOfRange(VaultError):
    """Selection does not identify a record in the freshly loaded list."""


class CredentialNotFound(IndexOutOfRange):
    """No record with the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No credential named '{name}'")


class StoreIOError(VaultError):
    """File system failure while reading, writing, or creating the store directory.

    The underlying OSError is chained as ``__cause__``.
    """
