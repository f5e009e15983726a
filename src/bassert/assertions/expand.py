"""bassert and debug_bassert.

Both take the checked expression as source text and evaluate it in the
caller's frame:

    bassert('y < x')
    bassert('x > (x + 2)', 'note: {}', 'extra')
    bassert('x > (x + 2), "note: {}", extra')   # args evaluated on failure only
    bassert('None = cache.get(key)')             # pattern on the left
"""

from __future__ import annotations

import sys
from typing import Any

from bassert._config import debug_enabled
from bassert.engine import Assertion, Message

__all__ = ['bassert', 'debug_bassert']


def _run(source: str, depth: int, message: Message, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
    assertion = Assertion.parse(source)
    frame = sys._getframe(depth + 1)  # noqa: SLF001
    try:
        assertion.check(frame.f_globals, frame.f_locals, message, *args, **kwargs)
    finally:
        del frame


def bassert(expression: str, message: Message = None, /, *args: Any, **kwargs: Any) -> None:
    """Check an expression, reporting operand values when it fails.

    The expression's top-level operator selects the check: ``==``, ``!=``,
    ``>``, ``>=``, ``<``, ``<=``, a pattern match ``<pattern> = <subject>``,
    or, with none of those, a plain truth test. Each operand is evaluated
    exactly once.

    Args:
        expression: Python source text, evaluated in the caller's frame.
            May carry its own message: ``'a == b, "msg {}", arg'``.
        message: A ``str.format`` template or a zero-argument callable.
            Only formatted (or called) when the check fails.
        *args: Positional format arguments for ``message``.
        **kwargs: Keyword format arguments for ``message``.

    Raises:
        AssertionFailedError: If the check fails.
        ExpressionError: If the expression cannot be turned into a check.

    Example:
        ```python
        x, y = 10, 20
        bassert('x < y')  # passes
        bassert('y < x')
        # AssertionFailedError: assertion failed: `y < x`
        # y: `20`,
        # x: `10`
        ```
    """
    _run(expression, 1, message, args, kwargs)


def debug_bassert(expression: str, message: Message = None, /, *args: Any, **kwargs: Any) -> None:
    """``bassert`` that only runs while debug checks are enabled.

    Debug checks are disabled under ``python -O`` or by ``init(debug=False)``
    / ``BASSERT_DEBUG=0``. When disabled the expression is not parsed and
    none of its operands or message arguments are evaluated.
    """
    if debug_enabled():
        _run(expression, 1, message, args, kwargs)
