"""Failure exception: the only payload recovery boundaries intercept."""

from __future__ import annotations

from typing import Any

__all__ = ['Failure', 'NilCauseError']


class NilCauseError(Exception):
    """Raised by fail(None).

    This is a programming error, not a cause. It is deliberately not a
    Failure, so boundaries and transforms never see it and it keeps
    propagating like any other foreign exception.
    """

    def __init__(self, message: str = 'called fail(None)') -> None:
        super().__init__(message)


class Failure(Exception):  # noqa: N818
    """Exception carrying a cause up to the nearest recovery boundary.

    Raised by must/must1..must4, fail and failf. Caught only by handle, wrap,
    the catch family and @checked, which hand the cause back as a returned
    value. The name intentionally doesn't end with "Error": a Failure is a
    transport for an error, not an error kind of its own.

    Examples:
        >>> f = Failure(ValueError('oops'))
        >>> str(f)
        'oops'
        >>> f.unwrap()
        ValueError('oops')
    """

    __slots__ = ('_cause',)

    def __init__(self, cause: Any) -> None:
        """Initialize Failure with the cause to propagate.

        Args:
            cause: Any non-None value, normally an exception.

        Raises:
            NilCauseError: If cause is None.
        """
        if cause is None:
            raise NilCauseError('Failure requires a cause')
        self._cause = cause
        super().__init__(cause)
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    @property
    def cause(self) -> Any:
        """The cause being propagated."""
        return self._cause

    def unwrap(self) -> Any:
        """Return the wrapped cause."""
        return self._cause

    def __str__(self) -> str:
        return str(self._cause)

    def __repr__(self) -> str:
        return f'Failure({self._cause!r})'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Failure):
            return NotImplemented
        return self._cause is other._cause or self._cause == other._cause

    def __hash__(self) -> int:
        try:
            return hash(self._cause)
        except TypeError:
            return hash(type(self._cause))
