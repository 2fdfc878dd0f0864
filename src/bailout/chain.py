"""Cause-chain introspection across Failure, StackError and plain exceptions."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

__all__ = ['find_cause', 'is_caused_by', 'iter_causes', 'unwrap']


def unwrap(err: Any) -> Any:
    """Return the next cause in err's chain, or None.

    Prefers an unwrap() method (Failure, StackError, AnnotatedError), then
    falls back to Python's explicit __cause__.
    """
    method = getattr(err, 'unwrap', None)
    if callable(method):
        return method()
    return getattr(err, '__cause__', None)


def iter_causes(err: Any) -> Iterator[Any]:
    """Yield err and then each cause reached by unwrap(), stopping on cycles."""
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = unwrap(err)


def is_caused_by(err: Any, target: Any) -> bool:
    """Return True if target appears anywhere in err's chain.

    A type target matches by isinstance, anything else by identity or
    equality.

    Example:
        ```python
        err = catch(lambda: fail(KeyError('sym')), annotate('loading prices'))
        is_caused_by(err, KeyError)  # True
        ```
    """
    for cause in iter_causes(err):
        if isinstance(target, type):
            if isinstance(cause, target):
                return True
        elif cause is target or cause == target:
            return True
    return False


def find_cause[E](err: Any, kind: type[E]) -> E | None:
    """Return the first cause in err's chain that is an instance of kind."""
    for cause in iter_causes(err):
        if isinstance(cause, kind):
            return cause
    return None
