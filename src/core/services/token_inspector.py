"""Inspección best-effort de access tokens (JWT).

Solo para UX: se decodifica el payload sin verificar la firma para mostrar un
email junto al perfil. Nada de lo que salga de aquí decide una operación.
"""

from __future__ import annotations

import base64
import json

from core.config import DEFAULT_CLAIM_KEY


def _b64url_decode(segment: str) -> bytes:
    raw = segment.encode("ascii")
    pad = b"=" * ((4 - (len(raw) % 4)) % 4)
    return base64.urlsafe_b64decode(raw + pad)


def decode_jwt_payload(token: str) -> dict[str, object] | None:
    """Payload del JWT como dict, o None si el token no tiene esa forma."""

    if not isinstance(token, str):
        return None
    parts = token.split(".")
    if len(parts) < 2 or not parts[1]:
        return None
    try:
        data = json.loads(_b64url_decode(parts[1]).decode("utf-8"))
    except (ValueError, RecursionError):
        # binascii.Error, UnicodeError y JSONDecodeError heredan de ValueError;
        # un payload anidado sin fin agota la recursión del parser.
        return None
    return data if isinstance(data, dict) else None


def extract_display_id(
    access: str,
    claim_key: str = DEFAULT_CLAIM_KEY,
    field: str = "email",
) -> str | None:
    """Lee `payload[claim_key][field]` del access token.

    Nunca lanza: cualquier malformación devuelve None.
    """

    payload = decode_jwt_payload(access)
    if payload is None:
        return None
    claim = payload.get(claim_key)
    if not isinstance(claim, dict):
        return None
    value = claim.get(field)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
