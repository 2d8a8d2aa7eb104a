"""
Credmgr Vault — PIN-protected credential store backed by one AES-256-GCM file.

Public API:
    store = CredentialStore(path)
    store.add(pin, credential)     → append (name must be unique)
    store.list(pin)                → decrypted credentials, insertion order
    store.remove_at(pin, index)    → remove by position, returns the record
    store.remove(pin, name)        → remove by name, returns the record
"""

from __future__ import annotations

from credmgr.vault.errors import (
    AuthenticationFailed,
    CredentialNotFound,
    DuplicateName,
    IndexOutOfRange,
    MalformedEnvelope,
    MalformedStore,
    StoreIOError,
    VaultError,
)
from credmgr.vault.models import Credential, CredentialKind
from credmgr.vault.store import CredentialStore

__all__ = [
    "AuthenticationFailed",
    "Credential",
    "CredentialKind",
    "CredentialNotFound",
    "CredentialStore",
    "DuplicateName",
    "IndexOutOfRange",
    "MalformedEnvelope",
    "MalformedStore",
    "StoreIOError",
    "VaultError",
]
