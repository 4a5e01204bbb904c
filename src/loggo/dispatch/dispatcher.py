"""Dispatcher: run a plugin in place of the host.

The plugin inherits the host's standard streams, so interactive
plugins behave exactly as if they had been started directly. The host
blocks until the plugin exits and then exits with the plugin's code.
"""
from __future__ import annotations

import logging
import shlex
import signal
import subprocess
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from loggo.core.context import ChildProcess, ExecutionContext
from loggo.core.errors import DispatchCancelled
from loggo.plugins.locator import PLUGIN_PREFIX

logger = logging.getLogger(__name__)

# Reported when the plugin could not be started at all.
DISPATCH_FAILURE_EXIT_CODE = 3

# Seconds between checks of a request's cancel event.
CANCEL_POLL_INTERVAL = 0.1


@dataclass(frozen=True)
class DispatchRequest:
    """One invocation of a plugin command.

    Parameters
    ----------
    name:
        Logical command name.
    args:
        Arguments that followed the command name on the host's command
        line, in order and unmodified.
    cancel:
        Cancellation signal of the invocation. Setting it terminates the
        running plugin and makes ``Dispatcher.run`` raise
        ``DispatchCancelled``. Works from any thread, unlike SIGTERM
        forwarding, which only the main thread can install.
    """

    name: str
    args: tuple[str, ...] = ()
    cancel: threading.Event | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of a dispatch.

    ``launch_error`` is set when the plugin process could not be
    started; ``exit_code`` is then ``DISPATCH_FAILURE_EXIT_CODE``.
    """

    exit_code: int
    launch_error: OSError | None = None

    @property
    def ok(self) -> bool:
        return self.launch_error is None


def exit_code_from_returncode(returncode: int) -> int:
    """Map a ``Popen.returncode`` to a shell-style exit status.

    A child killed by signal N reports ``-N``; shells report that as
    ``128 + N``.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


@contextmanager
def _sigterm_raises() -> Iterator[None]:
    """Turn SIGTERM into ``DispatchCancelled`` for the duration of the block."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _handler(signum: int, frame: object) -> None:
        raise DispatchCancelled(signum)

    previous = signal.signal(signal.SIGTERM, _handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)


class Dispatcher:
    """Spawn plugins found next to the host executable.

    Parameters
    ----------
    context:
        Provides the plugin directory and the process spawner.
    prefix:
        Filename prefix shared by all plugins.
    terminate_timeout:
        Seconds a cancelled plugin gets to exit after ``terminate``
        before it is killed.
    """

    def __init__(
        self,
        context: ExecutionContext,
        prefix: str = PLUGIN_PREFIX,
        terminate_timeout: float = 5.0,
    ) -> None:
        self._context = context
        self._prefix = prefix
        self._terminate_timeout = terminate_timeout

    def plugin_path(self, name: str) -> Path:
        """Return the absolute path of the plugin backing ``name``."""
        return self._context.self_directory() / f"{self._prefix}{name}"

    def run(self, request: DispatchRequest) -> DispatchResult:
        """Run the plugin for ``request`` and wait for it to exit.

        If the wait is interrupted (``KeyboardInterrupt``, SIGTERM
        delivered to the host, or ``request.cancel`` being set), the
        plugin is terminated and reaped before the interruption is
        re-raised.

        Raises
        ------
        DispatchCancelled
            If ``request.cancel`` is set, or the host receives SIGTERM
            while the plugin runs.
        """
        if request.cancel is not None and request.cancel.is_set():
            raise DispatchCancelled()

        argv = [str(self.plugin_path(request.name)), *request.args]
        logger.info("Executing subcommand %s", request.name)
        logger.debug("RUN %s", shlex.join(argv))

        try:
            process = self._context.spawn(argv)
        except OSError as exc:
            logger.debug("Spawn of %s failed", argv[0], exc_info=True)
            return DispatchResult(exit_code=DISPATCH_FAILURE_EXIT_CODE, launch_error=exc)

        # SIGTERM stays an exception until the plugin is reaped, so a repeated
        # signal during _cancel cannot end the host before the kill.
        with _sigterm_raises():
            try:
                returncode = self._wait(process, request.cancel)
            except BaseException:
                self._cancel(process)
                raise

        exit_code = exit_code_from_returncode(returncode)
        logger.debug("Subcommand %s exited with %d", request.name, exit_code)
        return DispatchResult(exit_code=exit_code)

    def _wait(self, process: ChildProcess, cancel: threading.Event | None) -> int:
        if cancel is None:
            return process.wait()
        while True:
            try:
                return process.wait(timeout=CANCEL_POLL_INTERVAL)
            except subprocess.TimeoutExpired:
                if cancel.is_set():
                    raise DispatchCancelled() from None

    def _cancel(self, process: ChildProcess) -> None:
        logger.warning("Terminating subcommand (pid %s)", process.pid)
        exited = False
        try:
            process.terminate()
            process.wait(timeout=self._terminate_timeout)
            exited = True
        except subprocess.TimeoutExpired:
            logger.warning("Subcommand (pid %s) ignored SIGTERM; killing it", process.pid)
        finally:
            if not exited:
                process.kill()
                process.wait()
