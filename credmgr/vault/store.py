"""
Credential store — PIN-gated CRUD over one encrypted file.

Every public operation is a full load → (mutate → persist) cycle: the file is
decrypted with the caller's PIN, the list is changed in memory, and the whole
list is re-encrypted and written back. Nothing survives between calls; the
PIN and derived key only ever live in local variables.

There is no file locking. Two processes racing add/remove will silently lose
updates (last writer wins).
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from credmgr.vault import crypto
from credmgr.vault.errors import (
    CredentialNotFound,
    DuplicateName,
    IndexOutOfRange,
    MalformedEnvelope,
    StoreIOError,
)
from credmgr.vault.models import Credential, dump_credentials, load_credentials

logger = logging.getLogger(__name__)

FILE_MODE = stat.S_IRUSR | stat.S_IWUSR  # 600
DIR_MODE = stat.S_IRWXU  # 700


def _discard(tmp: str) -> None:
    try:
        os.unlink(tmp)
    except OSError:
        pass


class CredentialStore:
    """Encrypted credential list stored at a fixed path.

    Args:
        path: Location of the store file. Computing the platform default is
            the caller's job (see credmgr.config.default_store_path).
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def open(self, pin: str) -> list[Credential]:
        """Load and decrypt the store. A missing file is an empty store."""
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            logger.debug("No store at %s, treating as empty", self.path)
            return []
        except OSError as e:
            raise StoreIOError(f"Cannot read {self.path}: {e.strerror or e}") from e

        try:
            envelope = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedEnvelope("Stored data is not a valid envelope") from e

        credentials = load_credentials(crypto.open(envelope, pin))
        logger.debug("Loaded %d credential(s) from %s", len(credentials), self.path)
        return credentials

    def persist(self, credentials: list[Credential], pin: str) -> None:
        """Encrypt the full list and replace the store file.

        Writes to a temporary file in the same directory and renames it over
        the target, so readers see either the old or the new store.
        """
        envelope = crypto.seal(dump_credentials(credentials), pin)
        directory = self.path.parent

        try:
            directory.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=directory, prefix=f".{self.path.name}-", suffix=".tmp")
        except OSError as e:
            raise StoreIOError(f"Cannot prepare {directory}: {e.strerror or e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(envelope)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp, FILE_MODE)
            os.replace(tmp, self.path)
        except OSError as e:
            _discard(tmp)
            raise StoreIOError(f"Cannot write {self.path}: {e.strerror or e}") from e
        except BaseException:
            _discard(tmp)
            raise

        logger.debug("Persisted %d credential(s) to %s", len(credentials), self.path)

    def add(self, pin: str, candidate: Credential) -> None:
        """Append a credential unless its name is already taken."""
        credentials = self.open(pin)
        if any(c.name == candidate.name for c in credentials):
            raise DuplicateName(candidate.name)
        credentials.append(candidate)
        self.persist(credentials, pin)
        logger.info("Added credential %r (%s)", candidate.name, candidate.kind.value)

    def list(self, pin: str) -> list[Credential]:
        """All credentials in insertion order. Read-only."""
        return self.open(pin)

    def get(self, pin: str, name: str) -> Credential:
        for cred in self.open(pin):
            if cred.name == name:
                return cred
        raise CredentialNotFound(name)

    def remove_at(self, pin: str, index: int) -> Credential:
        """Remove the record at a 0-based position in the freshly loaded list."""
        credentials = self.open(pin)
        if not 0 <= index < len(credentials):
            raise IndexOutOfRange(
                f"Index {index} out of range for {len(credentials)} credential(s)"
            )
        removed = credentials.pop(index)
        self.persist(credentials, pin)
        logger.info("Removed credential %r", removed.name)
        return removed

    def remove(self, pin: str, name: str) -> Credential:
        """Remove the record with this exact name."""
        credentials = self.open(pin)
        for i, cred in enumerate(credentials):
            if cred.name == name:
                removed = credentials.pop(i)
                self.persist(credentials, pin)
                logger.info("Removed credential %r", removed.name)
                return removed
        raise CredentialNotFound(name)
