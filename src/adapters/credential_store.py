"""Adaptador del slot de credenciales del host (auth.json).

Responsabilidad:
- Leer la credencial activa del proveedor para guardarla como perfil.
- Reemplazar únicamente la entrada del proveedor al activar un perfil.

Importante:
- El archivo pertenece al host. Este adaptador nunca lo crea y nunca toca las
  entradas de otros proveedores.
"""

from __future__ import annotations

import logging
from pathlib import Path

from adapters.json_files import MalformedJSONError, read_json, write_json_atomic
from core.domain.decoding import DecodeFailure, decode_live_entry
from core.domain.errors import NotFoundError, ShapeError
from core.domain.models import Credential

logger = logging.getLogger(__name__)


class LiveCredentialStore:
    """Acceso al auth.json del host para un único proveedor."""

    def __init__(self, auth_path: Path, provider_id: str) -> None:
        self._auth_path = auth_path
        self._provider_id = provider_id

    @property
    def provider_id(self) -> str:
        return self._provider_id

    def _read_auth_file(self) -> dict[str, object]:
        try:
            raw = read_json(self._auth_path)
        except FileNotFoundError as exc:
            raise NotFoundError(
                f"Auth file not found: {self._auth_path}. Run /connect first."
            ) from exc
        except MalformedJSONError as exc:
            raise ShapeError(f"Auth file is not valid JSON: {self._auth_path} ({exc})") from exc

        if not isinstance(raw, dict):
            raise ShapeError(f"Auth file is not a JSON object: {self._auth_path}")
        return raw

    def read_live_credential(self) -> Credential:
        """Credencial activa del proveedor.

        Raises:
            NotFoundError: el archivo no existe (falta el login inicial).
            ShapeError: falta la entrada, no es OAuth o le faltan campos.
        """

        result = decode_live_entry(self._read_auth_file(), self._provider_id)
        if isinstance(result, DecodeFailure):
            raise ShapeError(f"{result.reason} ({self._auth_path})")
        return result.value

    def write_live_credential(self, credential: Credential) -> None:
        """Sobrescribe la entrada del proveedor con los campos que el host soporta.

        `accountId` y cualquier metadata del vault no se escriben.
        """

        auth_file = self._read_auth_file()
        auth_file[self._provider_id] = credential.slot_payload()
        write_json_atomic(self._auth_path, auth_file)
        logger.debug("Replaced '%s' entry in %s", self._provider_id, self._auth_path)
