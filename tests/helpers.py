"""Test helpers shared across modules."""

from __future__ import annotations

import base64
import json
from typing import Any


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def encode_jwt(payload: dict[str, Any]) -> str:
    """Unsigned JWT-shaped token; the signature segment is junk on purpose."""

    header = _b64url(json.dumps({"alg": "none", "typ": "JWT"}).encode("utf-8"))
    body = _b64url(json.dumps(payload).encode("utf-8"))
    return f"{header}.{body}.signature"
