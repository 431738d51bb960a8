"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Las rutas se resuelven una sola vez en el entrypoint (`resolve_paths`) y se
  inyectan en los adaptadores; ningún componente consulta el entorno por su
  cuenta, así los tests usan rutas fabricadas.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.errors import ConfigError

HOST_DIR_NAME = "opencode"
VAULT_FILENAME = "openai-accounts.json"
AUTH_FILENAME = "auth.json"

DEFAULT_CLAIM_KEY = "https://api.openai.com/profile"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _home_dir(environ: Mapping[str, str], platform: str) -> Path | None:
    home = (environ.get("HOME") or "").strip()
    if not home and platform.startswith("win"):
        home = (environ.get("USERPROFILE") or "").strip()
    return Path(home) if home else None


def get_config_base_dir(
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> Path | None:
    """Directorio base de configuración del usuario (XDG).

    Orden: `XDG_CONFIG_HOME`, luego `~/.config`. Devuelve None si no hay forma
    de determinarlo; quien lo necesite decide si es un error.
    """

    env = os.environ if environ is None else environ
    xdg = (env.get("XDG_CONFIG_HOME") or "").strip()
    if xdg:
        return Path(xdg)
    home = _home_dir(env, platform or sys.platform)
    return home / ".config" if home else None


def get_data_base_dir(
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> Path | None:
    """Directorio base de datos del usuario (XDG).

    Orden: `XDG_DATA_HOME`, luego `~/.local/share`.
    """

    env = os.environ if environ is None else environ
    xdg = (env.get("XDG_DATA_HOME") or "").strip()
    if xdg:
        return Path(xdg)
    home = _home_dir(env, platform or sys.platform)
    return home / ".local" / "share" if home else None


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="OAI_PROFILES_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    provider_id: str = Field(
        default="openai",
        min_length=1,
        description="Clave del proveedor dentro del archivo de auth del host.",
    )
    command: str = Field(
        default="oai",
        min_length=1,
        description="Palabra reservada del comando (sin '/').",
    )
    display_claim_key: str = Field(
        default=DEFAULT_CLAIM_KEY,
        min_length=1,
        description="Claim del JWT que contiene el email a mostrar (best-effort).",
    )
    vault_path: Path | None = Field(
        default=None,
        description="Ruta explícita del vault de perfiles (por defecto bajo XDG_CONFIG_HOME).",
    )
    auth_path: Path | None = Field(
        default=None,
        description="Ruta explícita del auth.json del host (por defecto bajo XDG_DATA_HOME).",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Nivel de logging (stderr).",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("command", mode="after")
    @classmethod
    def _normalize_command(cls, value: str) -> str:
        return value.strip().lstrip("/").lower()


@dataclass(frozen=True)
class AppPaths:
    """Rutas resueltas una vez al arrancar el proceso."""

    vault_path: Path
    auth_path: Path


def resolve_paths(
    settings: AppSettings,
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> AppPaths:
    """Construye `AppPaths` desde settings + entorno.

    Falla rápido con `ConfigError` si una ruta no está fijada explícitamente y
    su directorio base no se puede determinar.
    """

    vault_path = settings.vault_path
    if vault_path is None:
        base = get_config_base_dir(environ, platform)
        if base is None:
            raise ConfigError(
                "Cannot locate the config directory: set XDG_CONFIG_HOME or HOME "
                "(or OAI_PROFILES_VAULT_PATH)."
            )
        vault_path = base / HOST_DIR_NAME / VAULT_FILENAME

    auth_path = settings.auth_path
    if auth_path is None:
        base = get_data_base_dir(environ, platform)
        if base is None:
            raise ConfigError(
                "Cannot locate the data directory: set XDG_DATA_HOME or HOME "
                "(or OAI_PROFILES_AUTH_PATH)."
            )
        auth_path = base / HOST_DIR_NAME / AUTH_FILENAME

    return AppPaths(vault_path=vault_path.expanduser(), auth_path=auth_path.expanduser())
