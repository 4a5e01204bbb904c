"""Core building blocks shared by the locator, dispatcher and CLI.

Submodules in core/ should not import from plugins/, dispatch/ or cli/.
"""
from __future__ import annotations

from loggo.core.context import ChildProcess, ExecutionContext, SystemContext
from loggo.core.errors import (
    DiscoveryError,
    DispatchCancelled,
    LoggoError,
    SelfPathError,
    SettingsError,
    StartupError,
    UnregisteredPluginError,
)
from loggo.core.settings import HostSettings

__all__ = [
    "ChildProcess",
    "DiscoveryError",
    "DispatchCancelled",
    "ExecutionContext",
    "HostSettings",
    "LoggoError",
    "SelfPathError",
    "SettingsError",
    "StartupError",
    "SystemContext",
    "UnregisteredPluginError",
]
