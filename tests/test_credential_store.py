"""Tests for the host auth.json adapter and the strict decoders behind it."""

from __future__ import annotations

import json
import os
import stat

import pytest

from adapters.credential_store import LiveCredentialStore
from core.domain.decoding import Decoded, DecodeFailure, decode_live_entry, decode_vault
from core.domain.errors import NotFoundError, ShapeError
from core.domain.models import Credential

OAUTH_ENTRY = {
    "type": "oauth",
    "refresh": "r-live",
    "access": "a-live",
    "expires": 1_760_000_000_000,
    "accountId": "acct-live",
}


def test_reads_oauth_entry(live_store: LiveCredentialStore, write_auth):
    write_auth(OAUTH_ENTRY)

    credential = live_store.read_live_credential()

    assert credential.refresh == "r-live"
    assert credential.access == "a-live"
    assert credential.expires == 1_760_000_000_000
    assert credential.account_id == "acct-live"
    assert credential.enterprise_url is None
    assert "type" not in credential.model_dump(by_alias=True)


def test_missing_file_is_not_found(live_store: LiveCredentialStore):
    with pytest.raises(NotFoundError, match="/connect"):
        live_store.read_live_credential()


@pytest.mark.parametrize(
    "entry, match",
    [
        (None, "No auth entry"),
        ({"type": "api", "key": "sk-1"}, "not oauth"),
        ("oauth", "not an object"),
        ({"type": "oauth", "access": "a", "expires": 1}, "Invalid oauth payload"),
        ({"type": "oauth", "refresh": "r", "access": "a", "expires": "1"}, "Invalid oauth payload"),
        ({"type": "oauth", "refresh": "r", "access": "a", "expires": True}, "Invalid oauth payload"),
        ({"type": "oauth", "refresh": 1, "access": "a", "expires": 1}, "Invalid oauth payload"),
        ({"type": "oauth", "refresh": "r", "access": "a", "expires": 1, "enterpriseUrl": 5}, "Invalid oauth payload"),
    ],
)
def test_bad_entries_are_shape_errors(live_store: LiveCredentialStore, write_auth, entry, match):
    write_auth(entry)
    with pytest.raises(ShapeError, match=match):
        live_store.read_live_credential()


def test_non_object_file_is_shape_error(live_store: LiveCredentialStore, auth_path):
    auth_path.parent.mkdir(parents=True)
    auth_path.write_text("[1, 2, 3]\n", encoding="utf-8")
    with pytest.raises(ShapeError):
        live_store.read_live_credential()


def test_invalid_json_is_shape_error(live_store: LiveCredentialStore, auth_path):
    auth_path.parent.mkdir(parents=True)
    auth_path.write_text("{", encoding="utf-8")
    with pytest.raises(ShapeError, match="not valid JSON"):
        live_store.read_live_credential()


def test_non_utf8_auth_file_is_shape_error(live_store: LiveCredentialStore, auth_path):
    auth_path.parent.mkdir(parents=True)
    auth_path.write_bytes(b'{"openai": "\xff\xfe"}')
    with pytest.raises(ShapeError, match="not valid JSON"):
        live_store.read_live_credential()


def test_write_replaces_only_provider_entry(live_store: LiveCredentialStore, write_auth, auth_path):
    write_auth({"type": "oauth", "refresh": "old", "access": "old", "expires": 1, "extra": "drop"})
    credential = Credential(
        refresh="r2",
        access="a2",
        expires=2,
        enterpriseUrl="https://corp",
        accountId="acct-2",
    )

    live_store.write_live_credential(credential)

    data = json.loads(auth_path.read_text(encoding="utf-8"))
    assert data["anthropic"] == {"type": "api", "key": "sk-ant-keep-me"}
    assert data["openai"] == {
        "type": "oauth",
        "refresh": "r2",
        "access": "a2",
        "expires": 2,
        "enterpriseUrl": "https://corp",
    }


def test_write_keeps_file_mode(live_store: LiveCredentialStore, write_auth, auth_path):
    write_auth(OAUTH_ENTRY)
    os.chmod(auth_path, 0o640)

    live_store.write_live_credential(Credential(refresh="r", access="a", expires=1))

    assert stat.S_IMODE(auth_path.stat().st_mode) == 0o640


def test_write_never_creates_the_host_file(live_store: LiveCredentialStore, auth_path):
    with pytest.raises(NotFoundError):
        live_store.write_live_credential(Credential(refresh="r", access="a", expires=1))
    assert not auth_path.exists()


def test_write_can_add_provider_entry_to_existing_file(live_store: LiveCredentialStore, write_auth, auth_path):
    write_auth(None)
    live_store.write_live_credential(Credential(refresh="r", access="a", expires=1))

    data = json.loads(auth_path.read_text(encoding="utf-8"))
    assert set(data) == {"anthropic", "openai"}


def test_decoders_return_tagged_results():
    ok = decode_live_entry({"openai": OAUTH_ENTRY}, "openai")
    assert isinstance(ok, Decoded) and ok.ok
    assert ok.value.refresh == "r-live"

    failure = decode_live_entry({"openai": OAUTH_ENTRY}, "other")
    assert isinstance(failure, DecodeFailure) and not failure.ok
    assert "other" in failure.reason

    assert isinstance(decode_vault({"version": 1, "profiles": {}}), Decoded)
    assert isinstance(decode_vault({"version": 2, "profiles": {}}), DecodeFailure)


def test_null_optional_fields_are_ignored():
    result = decode_live_entry(
        {"openai": {**OAUTH_ENTRY, "enterpriseUrl": None, "accountId": None}},
        "openai",
    )
    assert isinstance(result, Decoded)
    assert result.value.account_id is None
