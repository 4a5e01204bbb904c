"""Execution context: where the host lives and how it starts processes.

The locator and the dispatcher only talk to the filesystem location of
the running executable and to the process spawner through an
``ExecutionContext``, so tests can substitute a fake for either.
"""
from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from loggo.core.errors import SelfPathError
from loggo.core.settings import HostSettings

logger = logging.getLogger(__name__)


class ChildProcess(Protocol):
    """The subset of ``subprocess.Popen`` the dispatcher relies on."""

    pid: int
    returncode: int | None

    def wait(self, timeout: float | None = None) -> int: ...

    def terminate(self) -> None: ...

    def kill(self) -> None: ...


class ExecutionContext(Protocol):
    """Capabilities the host needs from its environment."""

    def self_directory(self) -> Path: ...

    def spawn(self, argv: Sequence[str]) -> ChildProcess: ...


class SystemContext:
    """``ExecutionContext`` backed by the real interpreter and OS.

    Parameters
    ----------
    settings:
        Host settings; ``settings.plugin_dir`` overrides the directory
        derived from the running executable.
    argv0:
        Path used to locate the running executable. Defaults to
        ``sys.argv[0]``, which is the console-script path when loggo is
        started through its installed entry point.
    """

    def __init__(
        self,
        settings: HostSettings | None = None,
        argv0: str | None = None,
    ) -> None:
        self._settings = settings or HostSettings()
        self._argv0 = argv0

    def self_directory(self) -> Path:
        """Return the directory holding the running executable.

        Raises
        ------
        SelfPathError
            If the executable path is empty, synthetic (``-c``) or does
            not exist.
        """
        if self._settings.plugin_dir is not None:
            return self._settings.plugin_dir

        argv0 = self._argv0 if self._argv0 is not None else (sys.argv[0] if sys.argv else "")
        if not argv0 or argv0 in ("-c", "-m", "-"):
            raise SelfPathError(f"no executable path available (argv[0]={argv0!r})")

        candidate = Path(argv0)
        if candidate.parent == Path(".") and not candidate.exists():
            # Bare command name: the shell found it on PATH.
            found = shutil.which(argv0)
            if found is None:
                raise SelfPathError(f"{argv0!r} is not a file and was not found on PATH")
            candidate = Path(found)

        try:
            resolved = candidate.resolve(strict=True)
        except OSError as exc:
            raise SelfPathError(str(exc)) from exc

        logger.debug("Resolved executable %s -> %s", argv0, resolved)
        return resolved.parent

    def spawn(self, argv: Sequence[str]) -> ChildProcess:
        """Start ``argv`` with the host's stdin, stdout and stderr."""
        return subprocess.Popen(list(argv), stdin=None, stdout=None, stderr=None)
