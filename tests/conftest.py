"""Shared test fixtures for oai-profiles."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from adapters.credential_store import LiveCredentialStore
from adapters.profile_vault import ProfileVault
from core.config import DEFAULT_CLAIM_KEY, AppSettings
from core.domain.models import Credential
from core.domain.severity import Severity
from core.services.dispatcher import CommandDispatcher
from tests.helpers import encode_jwt


class RecordingHost:
    """In-memory `HostClient` double."""

    def __init__(self) -> None:
        self.notifications: list[tuple[str, Severity]] = []
        self.live_writes: list[tuple[str, Credential]] = []

    async def notify(self, message: str, severity: Severity) -> None:
        self.notifications.append((message, severity))

    async def set_live_credential(self, provider_id: str, credential: Credential) -> None:
        self.live_writes.append((provider_id, credential))

    @property
    def last(self) -> tuple[str, Severity]:
        return self.notifications[-1]


@pytest.fixture
def make_token() -> Callable[[str], str]:
    def _make(email: str) -> str:
        return encode_jwt({DEFAULT_CLAIM_KEY: {"email": email}, "sub": "user"})

    return _make


@pytest.fixture
def vault_path(tmp_path: Path) -> Path:
    return tmp_path / "config" / "opencode" / "openai-accounts.json"


@pytest.fixture
def auth_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "opencode" / "auth.json"


@pytest.fixture
def write_auth(auth_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write the host auth.json with an `openai` entry plus an unrelated provider."""

    def _write(openai_entry: dict[str, Any] | None, **others: Any) -> Path:
        data: dict[str, Any] = {"anthropic": {"type": "api", "key": "sk-ant-keep-me"}}
        data.update(others)
        if openai_entry is not None:
            data["openai"] = openai_entry
        auth_path.parent.mkdir(parents=True, exist_ok=True)
        auth_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        return auth_path

    return _write


@pytest.fixture
def settings(vault_path: Path, auth_path: Path) -> AppSettings:
    return AppSettings(_env_file=None, vault_path=vault_path, auth_path=auth_path)


@pytest.fixture
def vault(vault_path: Path) -> ProfileVault:
    return ProfileVault(vault_path)


@pytest.fixture
def live_store(auth_path: Path) -> LiveCredentialStore:
    return LiveCredentialStore(auth_path, "openai")


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture
def dispatcher(
    settings: AppSettings,
    vault: ProfileVault,
    live_store: LiveCredentialStore,
    host: RecordingHost,
) -> CommandDispatcher:
    return CommandDispatcher(settings=settings, vault=vault, live_store=live_store, host=host)
