"""CLI (Typer) de oai-profiles.

Por qué una CLI delgada:
- Toda la lógica vive en `core.services.dispatcher`; aquí solo se construyen
  settings, rutas y adaptadores una vez y se inyectan.
- `exec` es la entrada del hook del host: recibe el comando tal cual lo tecleó
  el usuario (`/oai save work`) y deja stdout vacío.
"""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.credential_store import LiveCredentialStore
from adapters.host_client import LocalHostClient
from adapters.profile_vault import ProfileVault
from cli import doctor
from core.config import AppPaths, AppSettings, resolve_paths
from core.domain.errors import ConfigError
from core.domain.severity import Severity
from core.services.dispatcher import CommandDispatcher

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Save, list and switch between named OAuth profiles of one provider.",
)

_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Logging a stderr vía Rich; nunca se registran tokens."""

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def build_dispatcher(
    settings: AppSettings,
    paths: AppPaths,
    console: Console | None = None,
) -> CommandDispatcher:
    """Cablea vault, slot y host a partir de la configuración ya resuelta."""

    store = LiveCredentialStore(paths.auth_path, settings.provider_id)
    return CommandDispatcher(
        settings=settings,
        vault=ProfileVault(paths.vault_path),
        live_store=store,
        host=LocalHostClient(store, console=console or _console),
    )


@app.command(name="exec")
def exec_command(
    command: str = typer.Argument(..., help="Command keyword as typed in the host, e.g. '/oai'."),
    arguments: list[str] | None = typer.Argument(None, help="Verb and its optional argument."),
) -> None:
    """Run one host command line (e.g. `exec /oai load 2`)."""

    settings = AppSettings()
    configure_logging(settings.log_level)
    try:
        paths = resolve_paths(settings)
    except ConfigError as exc:
        _console.print(f"[red]Config error:[/red] {exc}")
        raise typer.Exit(code=2) from exc

    dispatcher = build_dispatcher(settings, paths)
    outcome = asyncio.run(dispatcher.handle(command, " ".join(arguments or [])))
    if outcome.severity is Severity.ERROR:
        raise typer.Exit(code=1)


app.command(name="doctor")(doctor.run)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
