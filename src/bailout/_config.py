"""Library configuration: BailoutConfig, environment detection and init()."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from bailout._logging import configure_logging

__all__ = [
    'BailoutConfig',
    'get_config',
    'init',
]

DEFAULT_STACK_LIMIT = 64
MAX_STACK_LIMIT = 1024


@dataclass(frozen=True)
class BailoutConfig:
    """Configuration for bailout.

    Attributes:
        stack_limit: Maximum number of frames wrap() captures.
        trace: If True, boundaries log each intercepted failure at DEBUG.
        log_level: Logging level configured by init(). None = leave logging alone.
    """

    stack_limit: int = DEFAULT_STACK_LIMIT
    trace: bool = False
    log_level: str | None = None


# Global configuration (set by init() or resolved on first use)
_config: BailoutConfig | None = None


def _detect_stack_limit() -> int:
    """Read BAILOUT_STACK_LIMIT, clamped to 1..MAX_STACK_LIMIT."""
    raw = os.environ.get('BAILOUT_STACK_LIMIT', '').strip()
    if not raw:
        return DEFAULT_STACK_LIMIT
    try:
        value = int(raw)
    except ValueError:
        logging.warning("Invalid BAILOUT_STACK_LIMIT value '%s', defaulting to %d", raw, DEFAULT_STACK_LIMIT)
        return DEFAULT_STACK_LIMIT
    return max(1, min(MAX_STACK_LIMIT, value))


def _detect_trace() -> bool:
    """Read BAILOUT_TRACE ("1", "true", "yes", "on" enable tracing)."""
    raw = os.environ.get('BAILOUT_TRACE', '').strip().lower()
    if raw in ('1', 'true', 'yes', 'on'):
        return True
    if raw and raw not in ('0', 'false', 'no', 'off'):
        logging.warning("Unknown BAILOUT_TRACE value '%s', tracing disabled", raw)
    return False


def _detect_log_level() -> str | None:
    raw = os.environ.get('BAILOUT_LOG_LEVEL', '').strip()
    return raw.upper() or None


def init(
    stack_limit: int | None = None,
    trace: bool | None = None,
    log_level: str | None = None,
) -> BailoutConfig:
    """Initialize bailout with the specified configuration.

    Anything left as None is resolved from the environment.

    Args:
        stack_limit: Max frames captured by wrap(). Clamped to 1..1024.
        trace: Log boundary events at DEBUG.
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.

    Returns:
        The BailoutConfig that was set.

    Example:
        ```python
        import bailout

        # Trace every recovered failure as JSON on stderr
        bailout.init(trace=True, log_level="DEBUG")
        ```
    """
    global _config  # noqa: PLW0603

    resolved_limit = _detect_stack_limit() if stack_limit is None else max(1, min(MAX_STACK_LIMIT, stack_limit))
    resolved_trace = _detect_trace() if trace is None else trace
    resolved_level = _detect_log_level() if log_level is None else log_level

    _config = BailoutConfig(
        stack_limit=resolved_limit,
        trace=resolved_trace,
        log_level=resolved_level,
    )

    if resolved_level is not None:
        configure_logging(resolved_level)

    return _config


def get_config() -> BailoutConfig:
    """Get the current configuration.

    Unlike init(), resolving on first use never touches logging setup, so
    importing and using bailout doesn't reconfigure the host application.

    Returns:
        The current BailoutConfig.
    """
    global _config  # noqa: PLW0603

    if _config is None:
        _config = BailoutConfig(
            stack_limit=_detect_stack_limit(),
            trace=_detect_trace(),
            log_level=_detect_log_level(),
        )
    return _config


def reset() -> None:
    """Forget the current configuration so the next get_config() re-reads the environment."""
    global _config  # noqa: PLW0603

    _config = None
