"""Errores del dominio.

Por qué una jerarquía propia:
- Cada fallo es terminal para el comando actual y nunca se reintenta.
- El dispatcher captura `ProfileSwitchError` y lo convierte en notificación;
  todo lo demás sigue siendo un bug y se propaga.
"""

from __future__ import annotations


class ProfileSwitchError(Exception):
    """Base de todos los errores esperados de un comando."""


class ConfigError(ProfileSwitchError):
    """No se pudo resolver la configuración (directorios base, rutas)."""


class NotFoundError(ProfileSwitchError):
    """Falta un archivo o perfil cuya presencia era obligatoria."""


class ShapeError(ProfileSwitchError):
    """El slot de credenciales del host existe pero no tiene la forma esperada."""


class CorruptError(ProfileSwitchError):
    """El archivo del vault existe pero está mal formado o tiene otra versión."""


class NameTakenError(ProfileSwitchError):
    """Ya existe un perfil con ese nombre; nunca se sobrescribe."""


class InvalidSelectionError(ProfileSwitchError):
    """El nombre u ordinal indicado no corresponde a ningún perfil."""


class UsageError(ProfileSwitchError):
    """Falta un argumento obligatorio o sobran argumentos."""


class UnknownVerbError(ProfileSwitchError):
    """El sub-comando no es ninguno de los reconocidos."""
