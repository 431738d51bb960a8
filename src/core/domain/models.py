"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los alias camelCase reproducen exactamente el JSON que escribe el host, así
  que un perfil se guarda y se restaura sin traducciones manuales.

Nota:
- Las credenciales son material opaco: se copian, nunca se interpretan.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import (
    BaseModel,
    Field,
    SerializerFunctionWrapHandler,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_serializer,
)
from pydantic.config import ConfigDict

VAULT_VERSION = 1

# Campos opcionales conocidos que se omiten cuando no tienen valor.
_OPTIONAL_KEYS = ("enterpriseUrl", "accountId", "enterprise_url", "account_id")


def utc_timestamp(now: datetime | None = None) -> str:
    """Timestamp ISO-8601 en UTC con milisegundos y sufijo `Z`."""

    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Credential(BaseModel):
    """Bundle OAuth opaco de un proveedor.

    Por qué `extra="allow"`:
    - Si el vault trae campos que no conocemos, reescribirlo no debe perderlos.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    refresh: StrictStr = Field(
        ...,
        description="Refresh token (secreto).",
    )
    access: StrictStr = Field(
        ...,
        description="Access token; estructuralmente un JWT con claims sin verificar.",
    )
    expires: StrictInt | StrictFloat = Field(
        ...,
        description="Expiración absoluta (epoch en milisegundos).",
    )
    enterprise_url: StrictStr | None = Field(
        default=None,
        alias="enterpriseUrl",
        description="URL enterprise opcional del proveedor.",
    )
    account_id: StrictStr | None = Field(
        default=None,
        alias="accountId",
        description="Identificador estable de cuenta; metadata del vault, nunca se escribe al host.",
    )

    def has_tokens(self) -> bool:
        """True si refresh y access no están vacíos."""

        return bool(self.refresh.strip()) and bool(self.access.strip())

    def slot_payload(self) -> dict[str, Any]:
        """Entrada del slot del host: solo los campos que su esquema soporta."""

        payload: dict[str, Any] = {
            "type": "oauth",
            "refresh": self.refresh,
            "access": self.access,
            "expires": self.expires,
        }
        if self.enterprise_url:
            payload["enterpriseUrl"] = self.enterprise_url
        return payload

    @model_serializer(mode="wrap")
    def _omit_unset_optionals(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # Solo los opcionales propios; un extra con null se conserva tal cual.
        data = handler(self)
        for key in _OPTIONAL_KEYS:
            if key in data and data[key] is None:
                del data[key]
        return data


class Profile(BaseModel):
    """Snapshot con nombre de una `Credential`.

    Se crea con `save`, nunca se modifica y se destruye con `delete`.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: StrictStr = Field(
        ...,
        min_length=1,
        description="Nombre único del perfil (también es la clave en el vault).",
    )
    oauth: Credential = Field(
        ...,
        description="Credencial copiada del slot del host.",
    )
    saved_at: StrictStr = Field(
        ...,
        alias="savedAt",
        description="Momento de creación (ISO-8601 UTC); inmutable.",
    )


class Vault(BaseModel):
    """Colección versionada de perfiles persistida en disco."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    version: Literal[1] = Field(
        default=VAULT_VERSION,
        description="Versión del esquema; cualquier otro valor es corrupción.",
    )
    profiles: dict[str, Profile] = Field(
        default_factory=dict,
        description="Perfiles indexados por nombre.",
    )

    def ordered_names(self) -> list[str]:
        """Nombres en orden lexicográfico estable (sensible a mayúsculas)."""

        return sorted(self.profiles)

    def to_json_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def is_active(credential: Credential, live: Credential | None) -> bool:
    """Heurística de "perfil activo" para la UI.

    Si ambos lados traen `accountId` se comparan esos; si no, el refresh token.
    Nunca se usa para decidir una operación de escritura.
    """

    if live is None:
        return False
    if credential.account_id and live.account_id:
        return credential.account_id == live.account_id
    return credential.refresh == live.refresh
