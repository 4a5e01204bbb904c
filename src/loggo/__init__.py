"""loggo — host CLI that exposes ``loggo-*`` executables as subcommands.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import loggo

    # Logical names of the plugins sitting next to the running executable
    names = loggo.discover("/usr/local/bin")

    # Forward an invocation to ``loggo-gcp-stream``
    result = loggo.run_plugin("gcp-stream", ["--project", "p"])
    result.exit_code
"""
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    import threading

    from loggo.dispatch.dispatcher import DispatchResult


def discover(directory: str | Path) -> list[str]:
    """Return the logical names of the plugins found in ``directory``.

    Raises
    ------
    loggo.core.errors.DiscoveryError
        If ``directory`` cannot be listed.
    """
    from loggo.plugins.locator import discover as _discover

    return _discover(Path(directory))


def run_plugin(
    name: str,
    args: Sequence[str] = (),
    cancel: "threading.Event | None" = None,
) -> "DispatchResult":
    """Run the plugin ``name`` with ``args`` and return its outcome.

    The plugin is resolved next to the running executable (or in
    ``LOGGO_PLUGIN_DIR``) and inherits the current process's standard
    streams. Setting ``cancel`` from another thread terminates the
    plugin and raises ``loggo.core.errors.DispatchCancelled``.
    """
    from loggo.core.context import SystemContext
    from loggo.core.settings import HostSettings
    from loggo.dispatch.dispatcher import Dispatcher, DispatchRequest

    settings = HostSettings.from_env()
    dispatcher = Dispatcher(SystemContext(settings), terminate_timeout=settings.terminate_timeout)
    return dispatcher.run(DispatchRequest(name=name, args=tuple(args), cancel=cancel))


__all__ = [
    "__version__",
    "discover",
    "run_plugin",
]
