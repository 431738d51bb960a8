"""Contrato del host (la aplicación dueña del slot de credenciales).

Por qué Protocol:
- El dispatcher solo necesita dos capacidades: avisar al usuario y fijar la
  credencial activa. Un doble en memoria lo sustituye en tests sin tocar disco.
- El adaptador real (`adapters.host_client.LocalHostClient`) escribe el archivo
  del host y pinta las notificaciones en stderr.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Credential
from core.domain.severity import Severity


@runtime_checkable
class HostClient(Protocol):
    """Capacidades del host que usa el dispatcher.

    Reglas de diseño:
    - Ambos métodos son asíncronos porque el host real puede hacer I/O.
    - `notify` es el único canal visible de un comando; la salida principal
      queda vacía siempre.
    """

    async def notify(self, message: str, severity: Severity) -> None:
        """Muestra un mensaje corto (toast) clasificado por severidad."""

        ...

    async def set_live_credential(self, provider_id: str, credential: Credential) -> None:
        """Reemplaza la credencial activa del proveedor en el host."""

        ...
