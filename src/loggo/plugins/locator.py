"""Plugin locator.

A plugin is any non-directory entry next to the host executable whose
filename starts with ``PLUGIN_PREFIX``. Its logical name, the word an
operator types after ``loggo``, is the filename with the prefix removed.

Executability is deliberately not checked here; a file that cannot be
executed is reported by the dispatcher when the command is invoked.
"""
from __future__ import annotations

import logging
import os
import unicodedata
from dataclasses import dataclass
from pathlib import Path

from loggo.core.errors import DiscoveryError

logger = logging.getLogger(__name__)

PLUGIN_PREFIX = "loggo-"


@dataclass(frozen=True)
class PluginFile:
    """A plugin executable found on disk.

    Parameters
    ----------
    directory:
        Absolute path of the directory holding the file.
    filename:
        Raw filename, prefix included.
    name:
        Logical command name derived from ``filename``.
    """

    directory: Path
    filename: str
    name: str

    @property
    def path(self) -> Path:
        return self.directory / self.filename

    def is_executable(self) -> bool:
        return os.access(self.path, os.X_OK)


def logical_name(filename: str, prefix: str = PLUGIN_PREFIX) -> str | None:
    """Return the logical name for ``filename`` or ``None`` if it is not a plugin."""
    if not filename.startswith(prefix):
        return None
    name = filename[len(prefix):]
    return name or None


def scan(directory: Path, prefix: str = PLUGIN_PREFIX) -> list[PluginFile]:
    """List the plugins in ``directory``, sorted by filename.

    When two entries map to the same logical name (possible with
    filenames that only differ in Unicode normalisation), the first one
    in sorted order is kept and the others are logged and dropped.

    Raises
    ------
    DiscoveryError
        If ``directory`` does not exist or cannot be listed.
    """
    directory = Path(directory).absolute()
    try:
        with os.scandir(directory) as it:
            entries = sorted((entry.name, entry.is_dir()) for entry in it)
    except OSError as exc:
        raise DiscoveryError(directory, exc) from exc

    plugins: list[PluginFile] = []
    seen: dict[str, str] = {}  # NFC-normalised name -> filename
    for filename, is_dir in entries:
        if is_dir:
            continue
        name = logical_name(filename, prefix)
        if name is None:
            continue
        key = unicodedata.normalize("NFC", name)
        if key in seen:
            logger.warning(
                "Ignoring %s: logical name %r already provided by %s",
                filename,
                name,
                seen[key],
            )
            continue
        seen[key] = filename
        plugins.append(PluginFile(directory=directory, filename=filename, name=name))

    logger.debug("Found %d plugin(s) in %s", len(plugins), directory)
    return plugins


def discover(directory: Path, prefix: str = PLUGIN_PREFIX) -> list[str]:
    """Return the logical names of the plugins in ``directory``."""
    return [plugin.name for plugin in scan(directory, prefix)]
