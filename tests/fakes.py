"""Test doubles for the execution context.

``FakeContext`` stands in for the real executable location and process
spawner so discovery and dispatch can be exercised without real plugins
on disk. ``FakeProcess`` records how the dispatcher drives the child.
"""
from __future__ import annotations

import signal
import subprocess
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path


class FakeProcess:
    """Scripted ``ChildProcess``.

    Parameters
    ----------
    exit_code:
        Return code reported once the process is allowed to finish.
    wait_errors:
        Exceptions raised by successive ``wait`` calls, one per call,
        before normal behaviour resumes.
    running:
        While true, a ``wait`` with a timeout raises ``TimeoutExpired``
        as a live child would.
    ignores_terminate:
        ``terminate`` is recorded but the process keeps running until
        ``kill``.
    on_wait:
        Called as ``on_wait(process, timeout)`` at the start of every
        ``wait``.
    """

    def __init__(
        self,
        exit_code: int = 0,
        wait_errors: Iterable[BaseException] = (),
        running: bool = False,
        ignores_terminate: bool = False,
        on_wait: Callable[[FakeProcess, float | None], None] | None = None,
    ) -> None:
        self.pid = 4242
        self.returncode: int | None = None
        self.exit_code = exit_code
        self.wait_errors = list(wait_errors)
        self.running = running
        self.ignores_terminate = ignores_terminate
        self.on_wait = on_wait
        self.terminated = False
        self.killed = False
        self.wait_timeouts: list[float | None] = []

    def wait(self, timeout: float | None = None) -> int:
        self.wait_timeouts.append(timeout)
        if self.on_wait is not None:
            self.on_wait(self, timeout)
        if self.wait_errors:
            raise self.wait_errors.pop(0)
        if self.killed or (self.terminated and not self.ignores_terminate):
            return self.returncode  # type: ignore[return-value]
        if timeout is not None and (self.running or self.terminated):
            raise subprocess.TimeoutExpired(cmd="loggo-fake", timeout=timeout)
        if self.returncode is None:
            self.returncode = self.exit_code
        return self.returncode

    def terminate(self) -> None:
        self.terminated = True
        if not self.ignores_terminate:
            self.returncode = -signal.SIGTERM

    def kill(self) -> None:
        self.killed = True
        self.returncode = -signal.SIGKILL


class FakeContext:
    """``ExecutionContext`` with a fixed directory and a scripted spawner."""

    def __init__(
        self,
        directory: Path,
        process: FakeProcess | None = None,
        spawn_error: OSError | None = None,
    ) -> None:
        self.directory = directory
        self.process = process or FakeProcess()
        self.spawn_error = spawn_error
        self.spawned: list[list[str]] = []

    def self_directory(self) -> Path:
        return self.directory

    def spawn(self, argv: Sequence[str]) -> FakeProcess:
        self.spawned.append(list(argv))
        if self.spawn_error is not None:
            raise self.spawn_error
        return self.process


def make_files(directory: Path, *names: str) -> None:
    """Create empty files named ``names`` inside ``directory``."""
    for name in names:
        (directory / name).write_text("", encoding="utf-8")
