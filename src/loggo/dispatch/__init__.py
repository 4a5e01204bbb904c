"""Forwarding of an invocation to a plugin process."""
from __future__ import annotations

from loggo.dispatch.dispatcher import (
    DISPATCH_FAILURE_EXIT_CODE,
    DispatchRequest,
    DispatchResult,
    Dispatcher,
    exit_code_from_returncode,
)

__all__ = [
    "DISPATCH_FAILURE_EXIT_CODE",
    "DispatchRequest",
    "DispatchResult",
    "Dispatcher",
    "exit_code_from_returncode",
]
