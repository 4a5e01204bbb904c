"""Plugin subsystem for loggo.

Plugins are standalone executables named ``loggo-<name>`` installed next
to the ``loggo`` executable. The locator finds them on disk; the
registry decides which of them the host exposes and how.
"""
from __future__ import annotations

from loggo.plugins.locator import PLUGIN_PREFIX, PluginFile, discover, scan
from loggo.plugins.registry import (
    CommandDescriptor,
    CommandNotFoundError,
    CommandRegistry,
    DuplicateCommandError,
    FlagPolicy,
    default_registry,
)

__all__ = [
    "PLUGIN_PREFIX",
    "CommandDescriptor",
    "CommandNotFoundError",
    "CommandRegistry",
    "DuplicateCommandError",
    "FlagPolicy",
    "PluginFile",
    "default_registry",
    "discover",
    "scan",
]
