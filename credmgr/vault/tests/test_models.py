"""Tests for vault data models and payload serialization."""

import json

import pytest
from pydantic import ValidationError

from credmgr.vault.errors import MalformedStore
from credmgr.vault.models import (
    Credential,
    CredentialKind,
    dump_credentials,
    load_credentials,
)


class TestCredential:
    def test_attribute_names(self):
        cred = Credential(
            kind=CredentialKind.CLOUD_ACCESS,
            name="proj1",
            principal="AKIA",
            secret="s",
            auxiliary="us-east-1",
        )
        assert cred.kind == "aws"
        assert cred.auxiliary == "us-east-1"

    def test_stored_names_accepted(self):
        cred = Credential.model_validate(
            {"type": "git", "name": "gh", "username": "me", "password": "tok", "extra": ""}
        )
        assert cred.kind is CredentialKind.VERSION_CONTROL
        assert cred.principal == "me"
        assert cred.secret == "tok"

    def test_kind_from_tag(self):
        assert CredentialKind("aws") is CredentialKind.CLOUD_ACCESS
        with pytest.raises(ValueError):
            CredentialKind("ftp")

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Credential(kind="aws", name="")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Credential(kind="git", name="   ")

    def test_optional_fields_default_empty(self):
        cred = Credential(kind="git", name="gh")
        assert cred.principal == ""
        assert cred.secret == ""
        assert cred.auxiliary == ""

    def test_null_fields_become_empty(self):
        cred = Credential.model_validate({"type": "aws", "name": "a", "extra": None})
        assert cred.auxiliary == ""

    def test_frozen(self):
        cred = Credential(kind="aws", name="a")
        with pytest.raises(ValidationError):
            cred.name = "b"  # type: ignore[misc]

    def test_secret_not_in_repr(self):
        cred = Credential(kind="aws", name="a", principal="AKIA", secret="hunter2")
        assert "hunter2" not in repr(cred)
        assert "AKIA" in repr(cred)

    def test_label(self):
        assert Credential(kind="git", name="github-self").label == "github-self (git)"


class TestPayload:
    def test_dump_preserves_order(self):
        creds = [Credential(kind="aws", name=n) for n in ["b", "a", "c"]]
        payload = json.loads(dump_credentials(creds))
        assert [r["name"] for r in payload] == ["b", "a", "c"]

    def test_dump_uses_stored_keys(self):
        payload = json.loads(dump_credentials([Credential(kind="aws", name="a")]))
        assert set(payload[0]) == {"type", "name", "username", "password", "extra"}

    def test_dump_empty(self):
        assert json.loads(dump_credentials([])) == []

    def test_load_dump(self):
        creds = [
            Credential(kind="aws", name="a", principal="p", secret="s", auxiliary="r"),
            Credential(kind="git", name="b", principal="u", secret="t"),
        ]
        assert load_credentials(dump_credentials(creds)) == creds

    def test_load_null(self):
        assert load_credentials(b"null") == []

    def test_load_invalid_utf8(self):
        with pytest.raises(MalformedStore):
            load_credentials(b"\xff\xfe")

    def test_load_not_a_list(self):
        with pytest.raises(MalformedStore):
            load_credentials(b'"hello"')

    def test_load_missing_name(self):
        with pytest.raises(MalformedStore, match="name"):
            load_credentials(b'[{"type": "aws"}]')
