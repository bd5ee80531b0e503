"""Concurrency management for forward passes.

Forward passes with different seeds are independent, so gradients and
Jacobians can evaluate them on several threads. The number of workers is
resolved in the following order:

1. an explicit ``n_workers`` argument,
2. the value set with the :func:`set_workers` context manager,
3. the module-wide default set with :func:`set_default_workers`,
4. the ``DUALKIT_NUM_WORKERS`` environment variable,
5. ``1`` (sequential).
"""

from __future__ import annotations

import contextvars
import os
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Sequence, Tuple

__all__ = [
    "ENV_WORKERS",
    "set_default_workers",
    "set_workers",
    "normalize_workers",
    "resolve_workers",
    "parallel_execute",
]

ENV_WORKERS = "DUALKIT_NUM_WORKERS"

# Context-var and default
_workers_var: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "dualkit_workers", default=None
)
_DEFAULT_WORKERS: int | None = None


def set_default_workers(n: int | None) -> None:
    """Sets the module-wide default number of workers.

    Args:
        n: Number of workers, or None to fall back to the environment.

    Returns:
        None
    """
    global _DEFAULT_WORKERS
    _DEFAULT_WORKERS = None if n is None else normalize_workers(n)


@contextmanager
def set_workers(n: int | None) -> Iterator[int | None]:
    """Temporarily sets the number of workers.

    Args:
        n: Number of workers, or ``None`` to defer to the defaults.

    Yields:
        int | None: The previous worker setting (restored on exit).
    """
    prev = _workers_var.get()
    token = _workers_var.set(None if n is None else normalize_workers(n))
    try:
        yield prev
    finally:
        _workers_var.reset(token)


def _int_env(name: str) -> int | None:
    """Reads a positive integer from an environment variable, or None if unset/invalid.

    Args:
        name: Environment variable name.

    Returns:
        Positive integer value, or None.
    """
    v = os.getenv(name)
    if not v:
        return None
    try:
        i = int(v)
        return i if i > 0 else None
    except ValueError:
        return None


def normalize_workers(
    n_workers: Any
) -> int:
    """Ensures n_workers is a positive integer, defaulting to 1.

    Args:
        n_workers: Input number of workers (can be None, float, negative, etc.)

    Returns:
        int: A positive integer number of workers (at least 1).
    """
    try:
        n = int(n_workers)
    except (TypeError, ValueError):
        n = 1
    return 1 if n < 1 else n


def resolve_workers(n_workers: Any = None) -> int:
    """Resolves the number of workers for a batch of forward passes.

    Args:
        n_workers: Explicit number of workers, or None to use the
            configured defaults.

    Returns:
        A positive number of workers.
    """
    if n_workers is not None:
        return normalize_workers(n_workers)
    w = _workers_var.get()
    if w is not None:
        return w
    if _DEFAULT_WORKERS is not None:
        return _DEFAULT_WORKERS
    env = _int_env(ENV_WORKERS)
    if env is not None:
        return env
    return 1


def parallel_execute(
    worker: Callable[..., Any],
    arg_tuples: Sequence[Tuple[Any, ...]],
    *,
    n_workers: int = 1,
) -> list[Any]:
    """Runs ``worker(*args)`` for each tuple in arg_tuples.

    With more than one worker the tasks run on a thread pool; results keep
    the order of ``arg_tuples`` and the first exception raised by a task
    propagates to the caller.

    Args:
        worker: Callable evaluated for every task.
        arg_tuples: Positional arguments of each task.
        n_workers: Number of threads.

    Returns:
        List of results, one per task.
    """
    if n_workers > 1 and len(arg_tuples) > 1:
        with ThreadPoolExecutor(max_workers=n_workers) as ex:
            futures = []
            for args in arg_tuples:
                # Each task gets its own copy of the current context
                ctx = contextvars.copy_context()
                futures.append(ex.submit(ctx.run, worker, *args))
            return [f.result() for f in futures]
    return [worker(*args) for args in arg_tuples]
