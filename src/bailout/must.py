"""Raise primitives: must, must1..must4, fail and failf."""

from __future__ import annotations

from itertools import chain
from typing import NoReturn

from bailout.failure import Failure, NilCauseError

__all__ = ['fail', 'failf', 'must', 'must1', 'must2', 'must3', 'must4']


def must(err: object | None) -> None:
    """Raise Failure(err) if err is not None.

    Args:
        err: A cause, or None for success.

    Raises:
        Failure: If err is not None.

    Example:
        ```python
        must(validate(config))  # raises Failure if validate returned an error
        ```
    """
    if err is not None:
        raise Failure(err)


def must1[T](t: T, err: object | None) -> T:
    """Return t if err is None, otherwise raise Failure(err).

    Example:
        ```python
        price = must1(*parse_float(unit_price)) * must1(*parse_float(qty))
        ```
    """
    if err is not None:
        raise Failure(err)
    return t


def must2[T1, T2](t1: T1, t2: T2, err: object | None) -> tuple[T1, T2]:
    """Return (t1, t2) if err is None, otherwise raise Failure(err).

    Example:
        ```python
        # divmod_checked's third return value is an error if b == 0.
        quo, rem = must2(*divmod_checked(a, b))
        ```
    """
    if err is not None:
        raise Failure(err)
    return t1, t2


def must3[T1, T2, T3](t1: T1, t2: T2, t3: T3, err: object | None) -> tuple[T1, T2, T3]:
    """Return (t1, t2, t3) if err is None, otherwise raise Failure(err)."""
    if err is not None:
        raise Failure(err)
    return t1, t2, t3


def must4[T1, T2, T3, T4](
    t1: T1, t2: T2, t3: T3, t4: T4, err: object | None
) -> tuple[T1, T2, T3, T4]:
    """Return (t1, t2, t3, t4) if err is None, otherwise raise Failure(err).

    Functions returning more than four values plus an error should bundle
    them into a single tuple or struct and go through must1 instead.

    Example:
        ```python
        # analyze_trades's fifth return value is an error if prices is empty.
        open_, high, low, close = must4(*analyze_trades(prices))
        ```
    """
    if err is not None:
        raise Failure(err)
    return t1, t2, t3, t4


def fail(err: object | None) -> NoReturn:
    """Raise Failure(err) unconditionally.

    Raises:
        Failure: If err is not None.
        NilCauseError: If err is None. This signals misuse and is never
            intercepted by a recovery boundary.
    """
    if err is None:
        raise NilCauseError
    raise Failure(err)


def failf(template: str, /, *args: object, **kwargs: object) -> NoReturn:
    """Raise Failure wrapping a freshly formatted Exception.

    The template is formatted with str.format. If any argument is itself an
    exception, the first one becomes the new cause's __cause__, so
    is_caused_by() still finds it.

    Example:
        ```python
        if rows > 1:
            failf('> 1 result: {!r}', sym)
        ```
    """
    cause = Exception(template.format(*args, **kwargs))
    for arg in chain(args, kwargs.values()):
        if isinstance(arg, BaseException):
            cause.__cause__ = arg
            break
    raise Failure(cause)
