"""Lectura/escritura JSON en disco.

Por qué un módulo aparte:
- El vault y el auth.json del host comparten formato (JSON UTF-8, indentado,
  con salto de línea final) y la misma regla: un lector concurrente nunca ve
  un archivo a medio escribir.
"""

from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path

SECRET_FILE_MODE = 0o600


class MalformedJSONError(ValueError):
    """El archivo existe pero no es JSON UTF-8 legible."""


def read_json(path: Path) -> object:
    """Parsea un archivo JSON.

    Propaga `FileNotFoundError` y `MalformedJSONError`; cada adaptador los
    traduce a su propio error del dominio.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedJSONError(f"not UTF-8 text (byte {exc.start})") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedJSONError(f"{exc.msg} at line {exc.lineno}") from exc
    except RecursionError as exc:
        raise MalformedJSONError("nesting too deep") from exc


def dump_json(payload: object) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def write_json_atomic(path: Path, payload: object, *, new_file_mode: int = SECRET_FILE_MODE) -> Path:
    """Escribe `payload` con reemplazo atómico (temp en el mismo dir + os.replace).

    Conserva los permisos del archivo existente; los archivos nuevos se crean
    con `new_file_mode`.
    """

    target = Path(os.path.realpath(path))
    target.parent.mkdir(parents=True, exist_ok=True)
    content = dump_json(payload)

    try:
        mode = stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        mode = new_file_mode

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return target
