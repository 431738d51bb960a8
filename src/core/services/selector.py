"""Resolución de selectores de perfil (nombre u ordinal 1-based)."""

from __future__ import annotations

from collections.abc import Sequence

from core.domain.errors import InvalidSelectionError, UsageError


def parse_ordinal(token: str) -> int | None:
    """Devuelve el ordinal si `token` es un entero positivo en forma canónica.

    `"2"` es ordinal; `"02"`, `"+2"`, `"0"` o `"-1"` se tratan como nombres.
    """

    try:
        value = int(token)
    except ValueError:
        return None
    if value <= 0 or str(value) != token:
        return None
    return value


def resolve(token: str, ordered_names: Sequence[str]) -> str:
    """Resuelve `token` contra los nombres del vault ya ordenados.

    Resolución y verificación de existencia van en un único paso: si el
    ordinal está fuera de rango o el nombre no existe, `InvalidSelectionError`.
    """

    if not token:
        raise UsageError("A profile name or number is required.")

    ordinal = parse_ordinal(token)
    if ordinal is not None:
        if ordinal > len(ordered_names):
            raise InvalidSelectionError(
                f"No profile #{ordinal} (there are {len(ordered_names)})."
            )
        return ordered_names[ordinal - 1]

    if token not in ordered_names:
        raise InvalidSelectionError(f"Profile '{token}' not found.")
    return token
