"""Recovery boundaries: handle() and wrap(), and the Slot they write to."""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType
from typing import Any

import msgspec

from bailout._config import get_config
from bailout._logging import trace
from bailout.failure import Failure
from bailout.stack import StackError, capture_stack

__all__ = ['Boundary', 'Slot', 'Transform', 'handle', 'wrap']

type Transform = Callable[[Any], Any]
"""Maps a cause to a new cause, or to None to suppress the failure."""


class Slot(msgspec.Struct):
    """Output slot a boundary writes the recovered cause into.

    Examples:
        >>> out = Slot()
        >>> with handle(out):
        ...     fail(ValueError('oops'))
        >>> out.error
        ValueError('oops')
    """

    error: Any = None

    def __bool__(self) -> bool:
        return self.error is not None


class Boundary:
    """Context manager intercepting Failure on exit.

    Anything that isn't a Failure passes through untouched: __exit__ returns
    False and Python re-raises the original exception object.
    """

    __slots__ = ('_out', '_skip', '_transforms')

    def __init__(
        self,
        out: Slot | None,
        transforms: tuple[Transform, ...],
        skip: int | None = None,
    ) -> None:
        if out is not None and not isinstance(out, Slot):
            msg = f'out must be a Slot or None, got {type(out).__name__}'
            raise TypeError(msg)
        for transform in transforms:
            if not callable(transform):
                msg = f'transform must be callable, got {type(transform).__name__}'
                raise TypeError(msg)
        if skip is not None and skip < 0:
            msg = f'skip must be non-negative, got {skip}'
            raise ValueError(msg)
        self._out = out
        self._transforms = transforms
        self._skip = skip

    def __enter__(self) -> Slot | None:
        return self._out

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if not isinstance(exc, Failure):
            return False

        cause = exc.cause
        for transform in self._transforms:
            cause = transform(cause)
            if cause is None:
                trace('failure.suppressed', cause=exc.cause)
                return True

        if self._out is None:
            trace('failure.propagated', cause=cause)
            failure = Failure(cause)
            failure.__suppress_context__ = True
            raise failure.with_traceback(tb)

        if self._skip is not None:
            cause = StackError(cause, capture_stack(tb, self._skip, get_config().stack_limit))
        self._out.error = cause
        trace('failure.recovered', cause=cause)
        return True


def handle(out: Slot | None = None, *transforms: Transform) -> Boundary:
    """Recover a Failure raised inside the with block.

    If any transforms are given, the cause is passed through each in turn. A
    transform returning None suppresses the failure and skips the rest.
    Finally the cause is written to out.error, unless out is None, in which
    case a new Failure carrying the final cause is raised.

    Args:
        out: Slot receiving the cause, or None to keep propagating.
        *transforms: Steps applied to the cause in order.

    Returns:
        A context manager; `with handle(out) as slot` binds out.

    Example:
        ```python
        def total_weight(weight: str, qty: str) -> tuple[float | None, Exception | None]:
            out = Slot()
            with handle(out, annotate('computing total weight')):
                return must1(*parse_float(weight)) * must1(*parse_int(qty)), None
            return None, out.error
        ```
    """
    return Boundary(out, transforms)


def wrap(out: Slot | None = None, skip: int = 0, *transforms: Transform) -> Boundary:
    """Behave like handle(), but decorate the deposited cause with a stack trace.

    The cause written to out.error is a StackError whose frames run from
    the raise site outwards. Frames inside bailout itself are never
    recorded; skip drops that many further frames from the innermost end.

    Args:
        out: Slot receiving the decorated cause, or None to keep propagating.
        skip: Uninteresting innermost frames to drop.
        *transforms: Steps applied to the cause before decoration.

    Returns:
        A context manager.
    """
    return Boundary(out, transforms, skip)
