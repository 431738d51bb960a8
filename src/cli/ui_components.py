"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
"""

from __future__ import annotations

from rich.table import Table


def build_doctor_table() -> Table:
    """Crea la tabla Rich del comando `doctor`."""

    table = Table(title="oai-profiles doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
