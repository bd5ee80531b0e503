"""Utility functions for DualKit package."""

from .concurrency import (
    parallel_execute,
    resolve_workers,
    set_default_workers,
    set_workers,
)
from .numerics import central_difference, forward_difference, relative_error

__all__ = [
    "central_difference",
    "forward_difference",
    "parallel_execute",
    "relative_error",
    "resolve_workers",
    "set_default_workers",
    "set_workers",
]
