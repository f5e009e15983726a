"""Structured logging for assertion failures.

Failures are logged as one ``assertion_failed`` event carrying the same
content as the report: the expression, the operator kind, every operand's
text and rendered value, and the custom message. The event goes through
structlog and a stdlib ``ProcessorFormatter``, so it lands next to the
application's own log records in one format.

Nothing is configured at import time. The engine only logs once
``init(log_level=...)`` ran.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import msgspec
import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

    from bassert.errors import AssertionFailure

__all__ = [
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'failure_event',
    'get_logger',
    'log_failure',
    'remove_log_hook',
]

LOGGER_NAME = 'bassert'
FAILURE_EVENT = 'assertion_failed'

_hooks: list[Callable[[dict[str, Any]], None]] = []


def _run_hooks(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for hook in _hooks:
        try:
            hook(event_dict.copy())
        except Exception:  # noqa: BLE001, S110
            pass  # a failing hook must not break logging
    return event_dict


def _pre_chain() -> list[Any]:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        _run_hooks,
    ]


def configure_logging(level: str = 'INFO', *, json_output: bool = True) -> None:
    """Route structlog events through the root stdlib logger on stderr.

    Args:
        level: Root logger level name, e.g. ``'ERROR'``.
        json_output: JSON lines if True, otherwise structlog's console format.
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str = LOGGER_NAME) -> Any:
    return structlog.get_logger(name)


def failure_event(failure: AssertionFailure) -> dict[str, Any]:
    """Flatten a failure into log fields.

    ``kind`` is the enum member name (``'EQ'``); operands become a list of
    ``{'text': ..., 'value': ...}`` dicts.
    """
    fields = msgspec.to_builtins(failure)
    fields['kind'] = failure.kind.name
    return fields


def log_failure(failure: AssertionFailure) -> None:
    """Emit ``assertion_failed`` at error level for ``failure``."""
    get_logger().error(FAILURE_EVENT, **failure_event(failure))


def add_log_hook(hook: Callable[[dict[str, Any]], None]) -> None:
    """Call ``hook`` with a copy of every event dict that gets logged."""
    _hooks.append(hook)


def remove_log_hook(hook: Callable[[dict[str, Any]], None]) -> None:
    if hook in _hooks:
        _hooks.remove(hook)


def clear_log_hooks() -> None:
    _hooks.clear()
