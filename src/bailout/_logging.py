"""Structured logging for boundary events.

trace() writes through a stdlib-backed structlog logger named 'bailout'.
Every event passes render_cause and the registered hooks before it reaches
the stdlib logging tree, so where the output goes (if anywhere) is up to the
host's logging setup. configure_logging() is a ready-made setup for
applications that don't have one.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from collections.abc import Callable
from typing import Any

import structlog

__all__ = [
    'LOGGER_NAME',
    'LogHook',
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
    'render_cause',
    'trace',
]

LOGGER_NAME = 'bailout'

type LogHook = Callable[[dict[str, Any]], None]
"""Receives a copy of each event dict."""

_hooks: list[LogHook] = []
_tracer: Any = None


def render_cause(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Replace a 'cause' entry with an encodable form.

    Causes are arbitrary objects; a StackError also contributes its frames.
    """
    cause = event_dict.get('cause')
    if cause is None or isinstance(cause, str | int | float | bool):
        return event_dict
    to_dict = getattr(cause, 'to_dict', None)
    if callable(to_dict):
        event_dict['stack'] = to_dict()['frames']
    event_dict['cause_type'] = type(cause).__name__
    event_dict['cause'] = str(cause)
    return event_dict


def _run_hooks(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    # A failing hook must not turn a log call into an error.
    for hook in tuple(_hooks):
        with contextlib.suppress(Exception):
            hook(dict(event_dict))
    return event_dict


def _chain(*tail: Any) -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        render_cause,
        _run_hooks,
        *tail,
    ]


def trace(event: str, **fields: Any) -> None:
    """Emit a boundary event at DEBUG if tracing is enabled.

    Hooks see the event whether or not the 'bailout' logger lets DEBUG
    through; stdlib level filtering only decides what gets written.

    Args:
        event: Event name, e.g. "failure.recovered".
        **fields: Extra fields; a 'cause' field is rendered by render_cause.
    """
    from bailout._config import get_config

    if not get_config().trace:
        return
    global _tracer  # noqa: PLW0603
    if _tracer is None:
        _tracer = structlog.wrap_logger(
            logging.getLogger(LOGGER_NAME),
            processors=_chain(structlog.stdlib.ProcessorFormatter.wrap_for_formatter),
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            cache_logger_on_first_use=True,
        )
    _tracer.debug(event, **fields)


def configure_logging(level: str = 'INFO', *, json_output: bool = True) -> None:
    """Send structlog and stdlib logs to stderr through one formatter.

    Replaces the root logger's handlers. Host records get the same
    processing as bailout's own events, hooks included.

    Args:
        level: Root logging level ("DEBUG", "INFO", "WARNING", ...).
        json_output: Emit JSON lines, or colored console output if False.
    """
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_chain(structlog.stdlib.ExtraAdder()),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer()
            if json_output
            else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    structlog.configure(
        processors=_chain(
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger, stdlib-backed once configure_logging() ran."""
    return structlog.get_logger(name)


def add_log_hook(hook: LogHook) -> None:
    """Call hook with every event, e.g. to count recovered failures."""
    _hooks.append(hook)


def remove_log_hook(hook: LogHook) -> None:
    with contextlib.suppress(ValueError):
        _hooks.remove(hook)


def clear_log_hooks() -> None:
    _hooks.clear()
