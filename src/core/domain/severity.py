"""Severity levels for host notifications.

Notifications are the only user-facing channel of a command, so the
classification lives in the domain layer where both the dispatcher and the
CLI/host adapters can share it without circular imports.
"""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Classification of a notification shown by the host."""

    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"

    def label(self) -> str:
        """Human readable label for toasts and logging."""

        return self.value.capitalize()
