"""Vault data models."""

from __future__ import annotations

import json
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from credmgr.vault.errors import MalformedStore


class CredentialKind(StrEnum):
    """Which login integration a credential belongs to. Values are the stored tags."""

    CLOUD_ACCESS = "aws"
    VERSION_CONTROL = "git"


class Credential(BaseModel):
    """One named secret record.

    Attribute names describe the meaning; aliases are the keys used in the
    stored JSON (``type``, ``username``, ``password``, ``extra``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: CredentialKind = Field(alias="type")
    name: str = Field(min_length=1)
    principal: str = Field(default="", alias="username")  # access key ID or username
    secret: str = Field(default="", alias="password", repr=False)
    auxiliary: str = Field(default="", alias="extra")  # region for cloud-access

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name cannot be empty")
        return v

    @field_validator("principal", "secret", "auxiliary", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return "" if v is None else v

    @property
    def label(self) -> str:
        """Listing line without the position, e.g. ``proj1 (aws)``."""
        return f"{self.name} ({self.kind.value})"


_credential_list = TypeAdapter(list[Credential])


def dump_credentials(credentials: list[Credential]) -> bytes:
    """Serialize credentials in order as indented JSON with the stored field names."""
    payload = [c.model_dump(mode="json", by_alias=True) for c in credentials]
    return json.dumps(payload, indent=2).encode("utf-8")


def load_credentials(plaintext: bytes) -> list[Credential]:
    """Parse a decrypted payload. A JSON ``null`` is an empty store."""
    try:
        payload = json.loads(plaintext.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedStore("Decrypted payload is not valid JSON") from e
    if payload is None:
        return []
    try:
        return _credential_list.validate_python(payload)
    except ValidationError as e:
        # pydantic echoes input values, which may include secrets
        locations = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise MalformedStore(f"Invalid credential records: {locations}") from None
