"""Adaptador real del host para uso local (CLI / hook).

Por qué existe:
- Implementa `core.interfaces.host.HostClient` sin depender de un SDK: las
  notificaciones se pintan con Rich en stderr y la credencial activa se
  escribe directamente en el auth.json del host.
"""

from __future__ import annotations

import asyncio

from rich.console import Console
from rich.text import Text

from adapters.credential_store import LiveCredentialStore
from core.domain.models import Credential
from core.domain.severity import Severity
from core.interfaces.host import HostClient

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.SUCCESS: "green",
    Severity.INFO: "cyan",
    Severity.ERROR: "bold red",
}


def render_notification(console: Console, message: str, severity: Severity) -> None:
    """Pinta una notificación de una línea.

    La consola debe apuntar a stderr: la salida principal del comando queda
    vacía por contrato.
    """

    style = _SEVERITY_STYLES.get(severity, "white")
    text = Text()
    text.append(f"[{severity.label()}] ", style=style)
    text.append(message)
    console.print(text, soft_wrap=True, highlight=False)


class LocalHostClient(HostClient):
    """Host local: toasts en stderr y escritura del slot vía `LiveCredentialStore`."""

    def __init__(self, store: LiveCredentialStore, console: Console | None = None) -> None:
        self._store = store
        self._console = console or Console(stderr=True)

    async def notify(self, message: str, severity: Severity) -> None:
        render_notification(self._console, message, severity)

    async def set_live_credential(self, provider_id: str, credential: Credential) -> None:
        if provider_id != self._store.provider_id:
            raise ValueError(
                f"Host store is bound to provider '{self._store.provider_id}', not '{provider_id}'"
            )
        await asyncio.to_thread(self._store.write_live_credential, credential)
