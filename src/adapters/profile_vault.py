"""Vault local de perfiles (openai-accounts.json).

Por qué sin estado en memoria:
- Cada comando carga el vault desde disco, lo muta y lo persiste de inmediato.
  Dos invocaciones concurrentes ven siempre lo último escrito; un save/delete
  simultáneo se resuelve como "gana el último" (no hay locking).
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from adapters.json_files import MalformedJSONError, read_json, write_json_atomic
from core.domain.decoding import DecodeFailure, decode_vault
from core.domain.errors import CorruptError, NameTakenError, NotFoundError, UsageError
from core.domain.models import Credential, Profile, Vault, utc_timestamp

logger = logging.getLogger(__name__)


class ProfileVault:
    """Mapa persistente nombre -> `Profile`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> Vault:
        """Carga el vault; si el archivo no existe devuelve uno vacío (v1).

        Raises:
            CorruptError: JSON inválido, versión distinta o mapa de perfiles mal formado.
        """

        try:
            raw = read_json(self._path)
        except FileNotFoundError:
            logger.debug("Vault %s does not exist yet; starting empty", self._path)
            return Vault()
        except MalformedJSONError as exc:
            raise CorruptError(f"Invalid storage format in {self._path}: {exc}") from exc

        result = decode_vault(raw)
        if isinstance(result, DecodeFailure):
            raise CorruptError(f"Invalid storage format in {self._path}: {result.reason}")
        return result.value

    def save(self, vault: Vault) -> None:
        write_json_atomic(self._path, vault.to_json_payload())

    def save_profile(
        self,
        name: str,
        credential: Credential,
        *,
        now: datetime | None = None,
    ) -> Profile:
        """Inserta un perfil nuevo y persiste.

        Un nombre repetido es un error (`NameTakenError`), nunca un overwrite;
        el vault en disco queda intacto en ese caso.
        """

        if not name or not name.strip():
            raise UsageError("Profile name must be non-empty.")

        vault = self.load()
        if name in vault.profiles:
            raise NameTakenError(
                f"Profile '{name}' already exists. Delete it first to save under the same name."
            )

        profile = Profile(name=name, oauth=credential, saved_at=utc_timestamp(now))
        vault.profiles[name] = profile
        self.save(vault)
        logger.info("Saved profile '%s' to %s", name, self._path)
        return profile

    def delete_profile(self, name: str) -> Profile:
        """Elimina un perfil existente y persiste."""

        vault = self.load()
        profile = vault.profiles.pop(name, None)
        if profile is None:
            raise NotFoundError(f"Profile '{name}' not found.")
        self.save(vault)
        logger.info("Removed profile '%s' from %s", name, self._path)
        return profile
