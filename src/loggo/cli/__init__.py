"""CLI package.

The ``cli`` sub-package contains the Click application that composes
the plugin locator, the command registry and the dispatcher.
"""
from __future__ import annotations
