"""Command registry for loggo.

The registry is the closed set of plugin commands the host sanctions.
A plugin found on disk only becomes a subcommand when a descriptor with
the same logical name is registered here; the descriptor supplies the
help text and the flag-parsing policy the host attaches to it.

Example
-------
Build a registry and look a command up::

    from loggo.plugins.registry import CommandDescriptor, CommandRegistry

    registry = CommandRegistry(
        [CommandDescriptor("tail", short_help="Follow a log file")]
    )

    registry.lookup("tail")     # -> CommandDescriptor(name='tail', ...)
    registry.lookup("missing")  # -> None
    registry.get("missing")     # raises CommandNotFoundError
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

logger = logging.getLogger(__name__)

CMD_GCP_STREAM = "gcp-stream"


class FlagPolicy(Enum):
    """How the host treats arguments that follow a plugin command.

    HOST_PARSES
        The host recognises its own ``-h/--help`` for the command and
        forwards every other token.
    PASSTHROUGH
        The host forwards every token verbatim, ``--help`` and ``--``
        included.
    """

    HOST_PARSES = "host-parses"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class CommandDescriptor:
    """Metadata the host attaches to a plugin-backed command.

    Parameters
    ----------
    name:
        Logical command name; must match the plugin filename minus prefix.
    short_help:
        One-line summary shown in the host's command list.
    help:
        Full help text shown by ``loggo <name> --help`` when the host
        parses flags. Falls back to ``short_help`` when empty.
    flag_policy:
        Whether the host may interpret any argument for this command.
    """

    name: str
    short_help: str = ""
    help: str = ""
    flag_policy: FlagPolicy = FlagPolicy.PASSTHROUGH

    @property
    def passthrough(self) -> bool:
        return self.flag_policy is FlagPolicy.PASSTHROUGH


class CommandNotFoundError(KeyError):
    """Raised when a requested command name is not in the registry."""

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        self.command_name = name
        self.available = sorted(available)
        listing = ", ".join(self.available) or "none"
        super().__init__(
            f"Command {name!r} is not registered. Registered commands: {listing}."
        )


class DuplicateCommandError(ValueError):
    """Raised when two descriptors share the same logical name."""

    def __init__(self, name: str) -> None:
        self.command_name = name
        super().__init__(
            f"Command {name!r} is defined more than once. "
            "Logical names must be unique across the registry."
        )


class CommandRegistry:
    """Immutable lookup table of command descriptors.

    Parameters
    ----------
    descriptors:
        The descriptors to register. The table is fixed at construction.

    Raises
    ------
    DuplicateCommandError
        If two descriptors carry the same name.
    """

    def __init__(self, descriptors: Iterable[CommandDescriptor] = ()) -> None:
        table: dict[str, CommandDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in table:
                raise DuplicateCommandError(descriptor.name)
            table[descriptor.name] = descriptor
            logger.debug(
                "Registered command %r (%s)", descriptor.name, descriptor.flag_policy.value
            )
        self._descriptors = MappingProxyType(table)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, name: str) -> CommandDescriptor | None:
        """Return the descriptor registered under ``name``, or ``None``."""
        return self._descriptors.get(name)

    def get(self, name: str) -> CommandDescriptor:
        """Return the descriptor registered under ``name``.

        Raises
        ------
        CommandNotFoundError
            If no descriptor is registered under ``name``.
        """
        try:
            return self._descriptors[name]
        except KeyError:
            raise CommandNotFoundError(name, self._descriptors) from None

    def names(self) -> list[str]:
        """Return the registered command names in alphabetical order."""
        return sorted(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return (self._descriptors[name] for name in self.names())

    def __repr__(self) -> str:
        return f"CommandRegistry(commands={self.names()})"


_GCP_STREAM_HELP = """\
Continuously stream Google Cloud Platform log entries
from a given selected project and GCP logging filters:

\b
    loggo gcp-stream \\
        --project myGCPProject123 \\
        --from 1m \\
        --filter 'resource.labels.namespace_name="awesome-sit" AND resource.labels.container_name="some"'
"""

BUILTIN_COMMANDS: tuple[CommandDescriptor, ...] = (
    CommandDescriptor(
        name=CMD_GCP_STREAM,
        short_help="Continuously stream GCP stack driver logs",
        help=_GCP_STREAM_HELP,
        flag_policy=FlagPolicy.PASSTHROUGH,
    ),
)


def default_registry() -> CommandRegistry:
    """Return the registry of commands shipped with loggo."""
    return CommandRegistry(BUILTIN_COMMANDS)
