"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console

from adapters.credential_store import LiveCredentialStore
from adapters.profile_vault import ProfileVault
from cli.ui_components import build_doctor_table
from core.config import AppSettings, resolve_paths
from core.domain.errors import ConfigError, ProfileSwitchError
from core.services.token_inspector import extract_display_id

_console = Console(stderr=True)


def _check_vault(vault: ProfileVault) -> tuple[str, str]:
    if not vault.exists():
        return "EMPTY", "No vault file yet (first save creates it)"
    try:
        loaded = vault.load()
    except ProfileSwitchError as exc:
        return "FAIL", str(exc)
    return "OK", f"{len(loaded.profiles)} profile(s)"


def _check_live(store: LiveCredentialStore, claim_key: str) -> tuple[str, str]:
    try:
        credential = store.read_live_credential()
    except ProfileSwitchError as exc:
        return "FAIL", str(exc)
    display = extract_display_id(credential.access, claim_key)
    return "OK", display or "OAuth entry present (no display id)"


def run() -> None:
    """Show resolved paths plus vault and live-slot health."""

    settings = AppSettings()
    try:
        paths = resolve_paths(settings)
    except ConfigError as exc:
        _console.print(f"[red]Config error:[/red] {exc}")
        raise typer.Exit(code=2) from exc

    vault = ProfileVault(paths.vault_path)
    store = LiveCredentialStore(paths.auth_path, settings.provider_id)

    table = build_doctor_table()
    table.add_row("Command", "OK", f"/{settings.command} (provider '{settings.provider_id}')")
    table.add_row("Vault path", "OK", str(paths.vault_path))
    table.add_row("Auth path", "OK" if paths.auth_path.exists() else "MISSING", str(paths.auth_path))

    status, detail = _check_vault(vault)
    table.add_row("Vault", status, detail)

    status, detail = _check_live(store, settings.display_claim_key)
    table.add_row("Live login", status, detail)

    _console.print(table)

    if status == "FAIL":
        _console.print("\n[yellow]Note:[/yellow] log in through the host (/connect) before saving profiles.")
