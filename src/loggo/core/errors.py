"""Error types raised by the loggo host.

Startup errors are fatal: the command surface cannot be built without
them resolved, so ``loggo.cli.main.main`` reports them and exits non-zero
before any argument of the actual invocation is parsed.
"""
from __future__ import annotations

import signal
from pathlib import Path


class LoggoError(Exception):
    """Base class for all errors raised by the loggo host."""


class StartupError(LoggoError):
    """A fatal condition detected while building the command tree."""


class SelfPathError(StartupError):
    """The location of the running executable could not be determined."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Cannot resolve the path of the running executable: {reason}")


class DiscoveryError(StartupError):
    """The plugin directory could not be listed."""

    def __init__(self, directory: Path, cause: OSError) -> None:
        self.directory = directory
        self.cause = cause
        super().__init__(f"Cannot read plugin directory {directory}: {cause}")


class UnregisteredPluginError(StartupError):
    """A plugin was found on disk but has no command descriptor."""

    def __init__(self, name: str, path: Path | None = None) -> None:
        self.plugin_name = name
        self.path = path
        location = f" ({path})" if path is not None else ""
        super().__init__(f"No implementation found for command {name}{location}")


class SettingsError(StartupError):
    """An environment setting holds a value that cannot be used."""

    def __init__(self, variable: str, value: str, reason: str) -> None:
        self.variable = variable
        self.value = value
        super().__init__(f"Invalid value {value!r} for {variable}: {reason}")


class DispatchCancelled(LoggoError):
    """The invocation was cancelled while a plugin was running.

    ``signum`` is the signal delivered to the host, or ``None`` when the
    caller's cancel event was set.
    """

    def __init__(self, signum: int | None = None) -> None:
        self.signum = signum
        if signum is None:
            super().__init__("Dispatch cancelled by caller")
        else:
            super().__init__(f"Dispatch cancelled by signal {signum}")

    @property
    def exit_code(self) -> int:
        """Shell-style status: ``128 + signum``, SIGTERM when no signal was involved."""
        return 128 + (self.signum if self.signum is not None else signal.SIGTERM)
