"""Checks on values the caller has already evaluated.

For code that cannot or should not hand over source text: the caller
supplies both operands, the operator and optional display texts.
Capability requirements are expressed as protocol bounds, so a type
checker rejects ``check(object(), '<', object())``.
"""

from __future__ import annotations

import functools
import sys
from collections.abc import Mapping
from types import CodeType
from typing import Any, Literal, Protocol, overload

from bassert.classify import MATCHED_NAME, SUBJECT_NAME, match_source, validate_pattern
from bassert.engine import Message, fail_comparison, fail_match, format_message
from bassert.kinds import OperatorKind

__all__ = ['SupportsOrdering', 'check', 'check_match']

EqualityKind = Literal[OperatorKind.EQ, OperatorKind.NE, '==', '!=']
OrderingKind = Literal[
    OperatorKind.GT, OperatorKind.GE, OperatorKind.LT, OperatorKind.LE, '>', '>=', '<', '<='
]


class SupportsOrdering(Protocol):
    """Values usable with the four ordering kinds."""

    def __lt__(self, other: Any, /) -> bool: ...
    def __le__(self, other: Any, /) -> bool: ...
    def __gt__(self, other: Any, /) -> bool: ...
    def __ge__(self, other: Any, /) -> bool: ...


@overload
def check(
    lhs: object,
    kind: EqualityKind,
    rhs: object,
    message: Message = None,
    /,
    *args: Any,
    lhs_expr: str = 'lhs',
    rhs_expr: str = 'rhs',
    **kwargs: Any,
) -> None: ...


@overload
def check(
    lhs: SupportsOrdering,
    kind: OrderingKind,
    rhs: SupportsOrdering,
    message: Message = None,
    /,
    *args: Any,
    lhs_expr: str = 'lhs',
    rhs_expr: str = 'rhs',
    **kwargs: Any,
) -> None: ...


def check(
    lhs: Any,
    kind: OperatorKind | str,
    rhs: Any,
    message: Message = None,
    /,
    *args: Any,
    lhs_expr: str = 'lhs',
    rhs_expr: str = 'rhs',
    **kwargs: Any,
) -> None:
    """Compare two values and report them on failure.

    Args:
        lhs: Left value.
        kind: A comparison OperatorKind or its symbol (``'<='``).
        rhs: Right value.
        message: Custom message template or callable, used on failure.
        *args: Format arguments for ``message``.
        lhs_expr: Text shown for the left operand.
        rhs_expr: Text shown for the right operand.
        **kwargs: Keyword format arguments for ``message``.

    Raises:
        AssertionFailedError: If the comparison does not hold.
        ValueError: If ``kind`` is not one of the six comparisons.

    Example:
        ```python
        check(response.status, '==', 200, lhs_expr='response.status')
        ```
    """
    op = kind if isinstance(kind, OperatorKind) else OperatorKind.from_symbol(kind)
    if not op.is_comparison:
        msg = f'{op.name} is not a comparison; use check_match or bassert'
        raise ValueError(msg)
    if not op.compare(lhs, rhs):
        fail_comparison(op, lhs_expr, rhs_expr, lhs, rhs, format_message(message, args, kwargs))


@functools.lru_cache(maxsize=256)
def _compile_pattern(pattern: str) -> CodeType:
    validate_pattern(pattern)
    return compile(match_source(pattern), '<bassert>', 'exec')


def check_match(
    pattern: str,
    subject: Any,
    message: Message = None,
    /,
    *args: Any,
    subject_expr: str = 'subject',
    namespace: Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> None:
    """Match ``subject`` against a structural pattern given as source text.

    Names in value patterns (``Color.RED``) resolve in ``namespace``, or in
    the caller's frame when it is None.

    Raises:
        AssertionFailedError: If the subject does not match.
        UnsupportedExpressionError: If the pattern is invalid or irrefutable.

    Example:
        ```python
        check_match('[_, _]', pair, subject_expr='pair')
        ```
    """
    code = _compile_pattern(pattern)
    if namespace is None:
        frame = sys._getframe(1)  # noqa: SLF001
        try:
            scratch = {**frame.f_globals, **frame.f_locals}
        finally:
            del frame
    else:
        scratch = dict(namespace)
    scratch[SUBJECT_NAME] = subject
    exec(code, scratch)  # noqa: S102
    if not scratch.get(MATCHED_NAME, False):
        fail_match(pattern, subject_expr, subject, format_message(message, args, kwargs))
