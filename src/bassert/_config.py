"""Configuration: debug gate and logging level."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from bassert._logging import configure_logging

__all__ = [
    'Config',
    'debug_enabled',
    'get_config',
    'init',
    'reset_config',
]

_TRUE = frozenset({'1', 'true', 'yes', 'on'})
_FALSE = frozenset({'0', 'false', 'no', 'off'})


@dataclass(frozen=True)
class Config:
    """Configuration for bassert.

    Attributes:
        debug: Whether ``debug_bassert`` checks run. They never run under
            ``python -O`` regardless of this flag.
        log_level: Logging level (e.g., "DEBUG", "ERROR"). None = silent.
    """

    debug: bool = True
    log_level: str | None = None


# Set by init(), or lazily from the environment by get_config()
_config: Config | None = None


def _detect_debug() -> bool:
    """Read the debug gate from the BASSERT_DEBUG environment variable.

    Unset means enabled; unknown values are logged and treated as enabled.
    """
    env_debug = os.environ.get('BASSERT_DEBUG', '').strip().lower()
    if not env_debug or env_debug in _TRUE:
        return True
    if env_debug in _FALSE:
        return False
    logging.warning("Unknown BASSERT_DEBUG value '%s', defaulting to enabled", env_debug)
    return True


def init(
    debug: bool | None = None,
    log_level: str | None = None,
    *,
    json_output: bool = True,
) -> Config:
    """Set the bassert configuration.

    Args:
        debug: Enable ``debug_bassert``. Read from BASSERT_DEBUG if None.
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.
        json_output: Render logs as JSON rather than console text.

    Returns:
        The Config that was set.

    Example:
        ```python
        import bassert

        bassert.init(debug=False)  # debug_bassert becomes a no-op
        bassert.init(log_level='ERROR')  # log failed checks
        ```
    """
    global _config  # noqa: PLW0603

    _config = Config(
        debug=_detect_debug() if debug is None else debug,
        log_level=log_level,
    )

    if log_level is not None:
        configure_logging(log_level, json_output=json_output)

    return _config


def get_config() -> Config:
    """Get the current configuration, reading the environment on first use."""
    global _config  # noqa: PLW0603

    if _config is None:
        _config = Config(debug=_detect_debug())
    return _config


def reset_config() -> None:
    """Forget the current configuration; the next get_config() re-reads it."""
    global _config  # noqa: PLW0603

    _config = None


def debug_enabled() -> bool:
    """True when debug checks should run; always False under ``python -O``."""
    return __debug__ and get_config().debug
