"""@checked decorator: install a recovery boundary around a whole function."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, overload

import wrapt

from bailout.handle import Slot, Transform, handle
from bailout.transforms import is_step

__all__ = ['checked']


@overload
def checked[**P, T](
    func: Callable[P, T],
    /,
) -> Callable[P, tuple[T | None, Any]]: ...


@overload
def checked[**P, T](
    func: None = None,
    /,
    *,
    transforms: Sequence[Transform] = (),
) -> Callable[[Callable[P, T]], Callable[P, tuple[T | None, Any]]]: ...


def checked[**P, T](
    func: Callable[P, T] | None = None,
    /,
    *extra: Any,
    transforms: Sequence[Transform] = (),
) -> Any:
    """Decorator that recovers Failure and returns (result, error).

    The wrapped function may use must/fail freely; callers get
    (result, None) on success and (None, cause) when a Failure escapes it.
    A transform returning None yields (None, None). Exceptions other than
    Failure propagate unchanged.

    Automatically detects async functions and handles them appropriately.

    Can be used with or without arguments:
        @checked
        def load(path): ...

        @checked(transforms=[annotate('loading config')])
        def load_config(path): ...

    Transform steps are keyword-only. Passing them positionally, as in
    @checked(annotate('ctx')), would make the step the decorated function,
    so it is rejected with TypeError.

    Args:
        func: The function to wrap (when used without parentheses).
        transforms: Steps applied to the cause, as for handle().

    Raises:
        TypeError: If transform steps are passed positionally.

    Returns:
        A wrapped function returning (result, error).

    Example:
        ```python
        @checked
        def ratio(a: str, b: str) -> float:
            return must1(*parse_float(a)) / must1(*parse_float(b))

        ratio('1', '4')
        # (0.25, None)
        ratio('1', 'x')
        # (None, ValueError("could not convert string to float: 'x'"))
        ```
    """
    if extra or is_step(func):
        msg = 'checked() takes transform steps as keywords: @checked(transforms=[...])'
        raise TypeError(msg)
    steps = tuple(transforms)

    @wrapt.decorator
    def sync_wrapper(
        wrapped: Callable[P, T],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> tuple[T | None, Any]:
        out = Slot()
        value = None
        with handle(out, *steps):
            value = wrapped(*args, **kwargs)
        return value, out.error

    @wrapt.decorator
    async def async_wrapper(
        wrapped: Callable[P, Awaitable[T]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> tuple[T | None, Any]:
        out = Slot()
        value = None
        with handle(out, *steps):
            value = await wrapped(*args, **kwargs)
        return value, out.error

    def decorate(f: Callable[P, T]) -> Any:
        if inspect.iscoroutinefunction(f):
            return async_wrapper(f)
        return sync_wrapper(f)

    if func is not None:
        return decorate(func)
    return decorate
