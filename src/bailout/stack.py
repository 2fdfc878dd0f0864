"""Stack capture for wrap(): Frame struct and the StackError decorator."""

from __future__ import annotations

import traceback
from collections.abc import Iterator
from types import FrameType, TracebackType
from typing import Any

import msgspec

__all__ = ['Frame', 'StackError', 'capture_stack']

_PACKAGE = __name__.partition('.')[0]


class Frame(msgspec.Struct, frozen=True, gc=False):
    """A single captured call frame - struct variant, safe to encode."""

    filename: str
    lineno: int
    name: str
    line: str = ''

    def __str__(self) -> str:
        text = f'  File "{self.filename}", line {self.lineno}, in {self.name}'
        if self.line:
            text = f'{text}\n    {self.line}'
        return text


class StackError(Exception):
    """Cause decorated with the call stack captured at interception time.

    Produced by wrap() when it deposits a cause into its slot. str() and
    unwrap() give access to the original cause; frames are innermost first.
    """

    def __init__(self, cause: Any, frames: tuple[Frame, ...]) -> None:
        self.cause = cause
        self.frames = frames
        super().__init__(cause)
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    def __str__(self) -> str:
        return str(self.cause)

    def __repr__(self) -> str:
        return f'StackError({self.cause!r}, frames={len(self.frames)})'

    def unwrap(self) -> Any:
        """Return the decorated cause."""
        return self.cause

    def stack_frames(self) -> tuple[Frame, ...]:
        """Return the captured frames, innermost first."""
        return self.frames

    def error_stack(self) -> str:
        """Render the cause followed by the captured frames."""
        header = f'{type(self.cause).__name__}: {self.cause}'
        return '\n'.join([header, *(str(f) for f in self.frames)])

    def to_dict(self) -> dict[str, Any]:
        """Convert to builtins for structured logging or transport."""
        return {
            'type': type(self.cause).__name__,
            'error': str(self.cause),
            'frames': msgspec.to_builtins(self.frames),
        }

    def to_json(self) -> bytes:
        """Encode to_dict() as JSON."""
        return msgspec.json.encode(self.to_dict())


def _is_internal(frame: FrameType) -> bool:
    module = frame.f_globals.get('__name__', '')
    return module == _PACKAGE or module.startswith(f'{_PACKAGE}.')


def _walk(tb: TracebackType) -> Iterator[tuple[FrameType, int]]:
    # Traceback entries run from the boundary's frame down to the raise;
    # the frames enclosing the boundary continue outward from there.
    yield from reversed(list(traceback.walk_tb(tb)))
    if tb.tb_frame.f_back is not None:
        yield from traceback.walk_stack(tb.tb_frame.f_back)


def capture_stack(tb: TracebackType | None, skip: int = 0, limit: int = 64) -> tuple[Frame, ...]:
    """Capture frames for an exception intercepted at a boundary.

    Frames belonging to this package are dropped before skip is applied, so
    skip=0 starts at the frame that called the raise primitive.

    Args:
        tb: Traceback of the intercepted exception.
        skip: Number of leading (innermost) frames to drop.
        limit: Maximum number of frames to keep.

    Returns:
        Captured frames, innermost first.
    """
    if tb is None:
        return ()
    frames = [(f, lineno) for f, lineno in _walk(tb) if not _is_internal(f)]
    selected = frames[skip : skip + limit]
    summary = traceback.StackSummary.extract(iter(selected), limit=len(selected) or None)
    return tuple(
        Frame(
            filename=fs.filename,
            lineno=fs.lineno or 0,
            name=fs.name,
            line=fs.line or '',
        )
        for fs in summary
    )
