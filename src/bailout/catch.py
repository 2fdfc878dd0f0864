"""Catch family: run work under a fresh boundary and return values plus error.

Each catchN returns the values produced by work followed by the error. When
work fails the values are None. When a transform suppresses the failure the
error is None too, which callers cannot tell apart from work that returned
None values without failing.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from bailout.failure import Failure
from bailout.handle import Slot, Transform, handle

__all__ = ['catch', 'catch1', 'catch2', 'catch3', 'catch4', 'pass_']


def catch(work: Callable[[], object], *transforms: Transform) -> Any:
    """Return the cause if work raises Failure, otherwise None.

    Example:
        ```python
        err = catch(lambda: (
            must1(*write_line('Hello, World!')),
            must1(*write_line('¡Hola, Mundo!')),
        ))
        ```
    """
    out = Slot()
    with handle(out, *transforms):
        work()
    return out.error


def catch1[T](work: Callable[[], T], *transforms: Transform) -> tuple[T | None, Any]:
    """Return (None, err) if work raises Failure(err), otherwise (t, None).

    Example:
        ```python
        def total_weight(weight: str, qty: str) -> tuple[float | None, Any]:
            return catch1(lambda: must1(*parse_float(weight)) * must1(*parse_int(qty)))
        ```
    """
    out = Slot()
    t = None
    with handle(out, *transforms):
        t = work()
    return t, out.error


def catch2[T1, T2](
    work: Callable[[], tuple[T1, T2]],
    *transforms: Transform,
) -> tuple[T1 | None, T2 | None, Any]:
    """Return (None, None, err) if work raises Failure(err), otherwise (t1, t2, None).

    See catch1 for a related example.
    """
    out = Slot()
    t1 = t2 = None
    with handle(out, *transforms):
        t1, t2 = work()
    return t1, t2, out.error


def catch3[T1, T2, T3](
    work: Callable[[], tuple[T1, T2, T3]],
    *transforms: Transform,
) -> tuple[T1 | None, T2 | None, T3 | None, Any]:
    """Return (None, None, None, err) if work raises Failure(err), otherwise (t1, t2, t3, None)."""
    out = Slot()
    t1 = t2 = t3 = None
    with handle(out, *transforms):
        t1, t2, t3 = work()
    return t1, t2, t3, out.error


def catch4[T1, T2, T3, T4](
    work: Callable[[], tuple[T1, T2, T3, T4]],
    *transforms: Transform,
) -> tuple[T1 | None, T2 | None, T3 | None, T4 | None, Any]:
    """Return (None, None, None, None, err) if work raises Failure(err), otherwise (t1, t2, t3, t4, None)."""
    out = Slot()
    t1 = t2 = t3 = t4 = None
    with handle(out, *transforms):
        t1, t2, t3, t4 = work()
    return t1, t2, t3, t4, out.error


def pass_[T](exc: T) -> T:
    """Return exc unless it is a Failure, in which case re-raise it.

    Guards generic `except` clauses so they don't swallow a Failure meant
    for an outer boundary.

    Example:
        ```python
        try:
            step()
        except Exception as exc:
            pass_(exc)
            # We only get here for exceptions other than Failure.
            log.error('step crashed', error=str(exc))
            raise
        ```
    """
    if isinstance(exc, Failure):
        raise exc
    return exc
