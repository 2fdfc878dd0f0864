"""Ready-made transform steps for handle(), wrap(), catch*() and @checked."""

from __future__ import annotations

from typing import Any

from bailout.handle import Transform

__all__ = ['AnnotatedError', 'annotate', 'is_step', 'replace', 'suppress']

_STEP_MARKER = '__bailout_step__'


class AnnotatedError(Exception):
    """A cause prefixed with context, keeping the original reachable."""

    def __init__(self, message: str, cause: Any) -> None:
        self.message = message
        self.cause = cause
        super().__init__(f'{message}: {cause}')
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    def unwrap(self) -> Any:
        """Return the annotated cause."""
        return self.cause


def annotate(message: str) -> Transform:
    """Return a step that prefixes the cause with message.

    Example:
        ```python
        with handle(out, annotate('computing total weight')):
            ...
        str(out.error)
        # 'computing total weight: invalid literal for int() ...'
        ```
    """

    def step(cause: Any) -> AnnotatedError:
        return AnnotatedError(message, cause)

    return _mark(step)


def suppress(*kinds: type[BaseException]) -> Transform:
    """Return a step that swallows causes of the given types.

    With no types every cause is suppressed. Other causes pass through.
    """

    def step(cause: Any) -> Any:
        if not kinds or isinstance(cause, kinds):
            return None
        return cause

    return _mark(step)


def replace(cause: Any) -> Transform:
    """Return a step that substitutes a fixed cause for whatever was raised."""
    if cause is None:
        msg = 'replace() needs a cause; use suppress() to drop failures'
        raise ValueError(msg)

    def step(_cause: Any) -> Any:
        return cause

    return _mark(step)


def _mark(step: Transform) -> Transform:
    setattr(step, _STEP_MARKER, True)
    return step


def is_step(obj: object) -> bool:
    """Return True if obj was built by annotate(), suppress() or replace()."""
    return getattr(obj, _STEP_MARKER, False) is True
