"""Decodificación estricta de archivos externos.

Por qué un resultado etiquetado:
- El JSON del host y el del vault vienen de disco y no se confía en su forma.
- Los decodificadores nunca lanzan: devuelven `Decoded` o `DecodeFailure` y el
  adaptador decide qué error del dominio corresponde (ShapeError vs CorruptError).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar, Union

from pydantic import ValidationError

from core.domain.models import VAULT_VERSION, Credential, Vault

T = TypeVar("T")

_LIVE_FIELDS = ("refresh", "access", "expires", "enterpriseUrl", "accountId")


@dataclass(frozen=True)
class Decoded(Generic[T]):
    value: T
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class DecodeFailure:
    reason: str
    ok: ClassVar[bool] = False


DecodeResult = Union[Decoded[T], DecodeFailure]


def describe_validation_error(exc: ValidationError) -> str:
    """Primer error de Pydantic en una línea legible (`loc: msg`)."""

    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def decode_vault(raw: object) -> DecodeResult[Vault]:
    """Valida el contenido completo del archivo del vault."""

    if not isinstance(raw, dict):
        return DecodeFailure("expected a JSON object at the top level")

    version = raw.get("version")
    if isinstance(version, bool) or version != VAULT_VERSION:
        return DecodeFailure(f"unsupported version {version!r} (expected {VAULT_VERSION})")

    if not isinstance(raw.get("profiles"), dict):
        return DecodeFailure("'profiles' must be a JSON object")

    try:
        vault = Vault.model_validate(raw)
    except ValidationError as exc:
        return DecodeFailure(describe_validation_error(exc))
    return Decoded(vault)


def decode_live_entry(raw: object, provider_id: str) -> DecodeResult[Credential]:
    """Extrae la credencial OAuth del proveedor desde el archivo del host.

    Solo se copian los campos conocidos; `type` y cualquier otra clave del host
    se quedan fuera del snapshot.
    """

    if not isinstance(raw, dict):
        return DecodeFailure("auth file is not a JSON object")

    entry = raw.get(provider_id)
    if entry is None:
        return DecodeFailure(f"No auth entry for provider '{provider_id}'. Run /connect first.")
    if not isinstance(entry, dict):
        return DecodeFailure(f"Auth entry for provider '{provider_id}' is not an object.")

    kind = entry.get("type")
    if kind != "oauth":
        return DecodeFailure(
            f"Provider '{provider_id}' auth is not oauth (got '{kind}'). Only OAuth accounts are supported."
        )

    fields: dict[str, Any] = {
        key: entry[key] for key in _LIVE_FIELDS if entry.get(key) is not None
    }
    try:
        credential = Credential.model_validate(fields)
    except ValidationError as exc:
        return DecodeFailure(
            f"Invalid oauth payload for provider '{provider_id}': {describe_validation_error(exc)}"
        )
    return Decoded(credential)
