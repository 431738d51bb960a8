"""Command dispatcher for the reserved `/oai` command.

This is the only entry-point the host (or the CLI) talks to. It parses one
command line, maps the verb to vault/slot operations and reports the outcome
through `HostClient.notify`. Primary output is always empty so the host's
conversation log is never polluted, on success and on failure alike.

Every blocking file step is awaited in sequence through `asyncio.to_thread`;
state is loaded fresh from disk on each call.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable

from adapters.credential_store import LiveCredentialStore
from adapters.profile_vault import ProfileVault
from core.config import AppSettings
from core.domain.errors import (
    NotFoundError,
    ProfileSwitchError,
    ShapeError,
    UnknownVerbError,
    UsageError,
)
from core.domain.models import Credential, is_active
from core.domain.severity import Severity
from core.interfaces.host import HostClient
from core.services.selector import resolve
from core.services.token_inspector import extract_display_id

logger = logging.getLogger(__name__)


class Verb(str, Enum):
    LIST = "list"
    SAVE = "save"
    LOAD = "load"
    DELETE = "delete"
    CURRENT = "current"


VERB_ALIASES: dict[str, Verb] = {
    "": Verb.LIST,
    "list": Verb.LIST,
    "ls": Verb.LIST,
    "help": Verb.LIST,
    "save": Verb.SAVE,
    "load": Verb.LOAD,
    "use": Verb.LOAD,
    "switch": Verb.LOAD,
    "delete": Verb.DELETE,
    "d": Verb.DELETE,
    "rm": Verb.DELETE,
    "remove": Verb.DELETE,
    "current": Verb.CURRENT,
}

_TAKES_ARGUMENT = {Verb.SAVE, Verb.LOAD, Verb.DELETE}

_USAGE = {
    Verb.LIST: "{cmd}",
    Verb.SAVE: "{cmd} save <profile_name>",
    Verb.LOAD: "{cmd} load <name|number>",
    Verb.DELETE: "{cmd} delete <name|number>",
    Verb.CURRENT: "{cmd} current",
}


@dataclass(frozen=True)
class CommandOutcome:
    """Result of one `handle` call.

    `handled=False` means the command belonged to somebody else and nothing
    was touched. `parts` is the primary output and stays empty by contract.
    """

    handled: bool
    severity: Severity | None = None
    message: str | None = None
    parts: list[str] = field(default_factory=list)


def normalize_command(command: str) -> str:
    """Trim, drop one leading slash and lowercase."""

    text = command.strip()
    if text.startswith("/"):
        text = text[1:]
    return text.lower()


def parse_arguments(raw: str) -> list[str]:
    return raw.split()


def resolve_verb(token: str) -> Verb:
    verb = VERB_ALIASES.get(token.lower())
    if verb is None:
        raise UnknownVerbError(f"Unknown subcommand '{token}'. Try list, save, load or delete.")
    return verb


class CommandDispatcher:
    """Maps `/oai <verb> [argument]` onto the vault and the host slot."""

    def __init__(
        self,
        *,
        settings: AppSettings,
        vault: ProfileVault,
        live_store: LiveCredentialStore,
        host: HostClient,
    ) -> None:
        self._settings = settings
        self._vault = vault
        self._live = live_store
        self._host = host
        self._handlers: dict[Verb, Callable[[list[str]], Awaitable[tuple[str, Severity]]]] = {
            Verb.LIST: self._list,
            Verb.SAVE: self._save,
            Verb.LOAD: self._load,
            Verb.DELETE: self._delete,
            Verb.CURRENT: self._current,
        }

    @property
    def command(self) -> str:
        return self._settings.command

    def _usage(self, verb: Verb) -> str:
        return "Usage: " + _USAGE[verb].format(cmd=f"/{self.command}")

    def _display_suffix(self, credential: Credential) -> str:
        display = extract_display_id(credential.access, self._settings.display_claim_key)
        return f" ({display})" if display else ""

    async def handle(self, command: str, arguments: str = "") -> CommandOutcome:
        """Run one command line; unrelated commands pass through untouched."""

        if normalize_command(command) != self.command:
            return CommandOutcome(handled=False)

        argv = parse_arguments(arguments)
        try:
            verb = resolve_verb(argv[0] if argv else "")
            args = argv[1:]
            if verb in _TAKES_ARGUMENT and len(args) != 1:
                raise UsageError(self._usage(verb))
            if verb not in _TAKES_ARGUMENT and args:
                raise UsageError(self._usage(verb))
            logger.info("Running /%s %s", self.command, verb.value)
            message, severity = await self._handlers[verb](args)
        except (ProfileSwitchError, OSError) as exc:
            logger.info("/%s failed: %s", self.command, exc)
            message, severity = f"Error: {exc}", Severity.ERROR

        await self._host.notify(message, severity)
        return CommandOutcome(handled=True, severity=severity, message=message)

    async def _read_live_best_effort(self) -> Credential | None:
        try:
            return await asyncio.to_thread(self._live.read_live_credential)
        except (NotFoundError, ShapeError) as exc:
            logger.debug("No usable live credential: %s", exc)
            return None

    async def _list(self, args: list[str]) -> tuple[str, Severity]:
        vault = await asyncio.to_thread(self._vault.load)
        names = vault.ordered_names()
        if not names:
            return f"No profiles. Use '/{self.command} save <name>' to add one.", Severity.INFO

        live = await self._read_live_best_effort()
        entries: list[str] = []
        for idx, name in enumerate(names, start=1):
            credential = vault.profiles[name].oauth
            label = f"[{name}]" if is_active(credential, live) else name
            entries.append(f"{idx}) {label}{self._display_suffix(credential)}")

        return (
            f"Profiles: {', '.join(entries)}. Use '/{self.command} load <name|number>' to switch.",
            Severity.INFO,
        )

    async def _save(self, args: list[str]) -> tuple[str, Severity]:
        name = args[0]
        credential = await asyncio.to_thread(self._live.read_live_credential)
        if not credential.has_tokens():
            raise ShapeError("Active login seems invalid (missing tokens). Try /connect again.")

        await asyncio.to_thread(self._vault.save_profile, name, credential)
        return f"Saved profile '{name}'{self._display_suffix(credential)}", Severity.SUCCESS

    async def _load(self, args: list[str]) -> tuple[str, Severity]:
        vault = await asyncio.to_thread(self._vault.load)
        name = resolve(args[0], vault.ordered_names())
        credential = vault.profiles[name].oauth

        await self._host.set_live_credential(self._settings.provider_id, credential)
        return f"Active: {name}{self._display_suffix(credential)}", Severity.SUCCESS

    async def _delete(self, args: list[str]) -> tuple[str, Severity]:
        vault = await asyncio.to_thread(self._vault.load)
        name = resolve(args[0], vault.ordered_names())

        await asyncio.to_thread(self._vault.delete_profile, name)
        return f"Removed profile '{name}'", Severity.SUCCESS

    async def _current(self, args: list[str]) -> tuple[str, Severity]:
        live = await asyncio.to_thread(self._live.read_live_credential)
        vault = await asyncio.to_thread(self._vault.load)
        matches = [name for name in vault.ordered_names() if is_active(vault.profiles[name].oauth, live)]

        suffix = self._display_suffix(live)
        if matches:
            return f"Active: {', '.join(matches)}{suffix}", Severity.INFO
        return (
            f"Active login{suffix} is not saved as a profile. "
            f"Use '/{self.command} save <name>' to keep it.",
            Severity.INFO,
        )
