"""Tests for the Typer CLI surface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()


@pytest.fixture
def xdg_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> dict[str, Path]:
    monkeypatch.chdir(tmp_path)
    for var in ("OAI_PROFILES_VAULT_PATH", "OAI_PROFILES_AUTH_PATH", "OAI_PROFILES_COMMAND"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    auth_path = tmp_path / "data" / "opencode" / "auth.json"
    auth_path.parent.mkdir(parents=True)
    auth_path.write_text(
        json.dumps({"openai": {"type": "oauth", "refresh": "r", "access": "a", "expires": 5}}),
        encoding="utf-8",
    )
    return {
        "auth": auth_path,
        "vault": tmp_path / "cfg" / "opencode" / "openai-accounts.json",
    }


def test_exec_save_writes_vault(xdg_env):
    result = runner.invoke(app, ["exec", "/oai", "save", "work"])

    assert result.exit_code == 0
    data = json.loads(xdg_env["vault"].read_text(encoding="utf-8"))
    assert list(data["profiles"]) == ["work"]


def test_exec_error_exits_non_zero(xdg_env):
    assert runner.invoke(app, ["exec", "/oai", "save", "work"]).exit_code == 0

    result = runner.invoke(app, ["exec", "/oai", "save", "work"])

    assert result.exit_code == 1


def test_exec_ignores_foreign_commands(xdg_env):
    result = runner.invoke(app, ["exec", "/compact", "save", "work"])

    assert result.exit_code == 0
    assert not xdg_env["vault"].exists()


def test_exec_list_on_empty_vault(xdg_env):
    result = runner.invoke(app, ["exec", "/oai"])
    assert result.exit_code == 0


def test_exec_without_resolvable_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    for var in (
        "HOME",
        "USERPROFILE",
        "XDG_CONFIG_HOME",
        "XDG_DATA_HOME",
        "OAI_PROFILES_VAULT_PATH",
        "OAI_PROFILES_AUTH_PATH",
    ):
        monkeypatch.delenv(var, raising=False)

    result = runner.invoke(app, ["exec", "/oai", "list"])

    assert result.exit_code == 2


def test_doctor_runs(xdg_env):
    result = runner.invoke(app, ["doctor"])
    assert result.exit_code == 0
