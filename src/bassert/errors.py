"""Assertion error types.

Construction-time problems with an expression are ``ExpressionError``
subclasses (a ``SyntaxError``), raised before any operand is evaluated.
A failed check raises ``AssertionFailedError``; its struct twin
``AssertionFailure`` carries the same report for code that prefers data.
"""

from __future__ import annotations

import msgspec

from bassert.kinds import OperatorKind
from bassert.message import render_failure

__all__ = [
    'AmbiguousExpressionError',
    'AssertionFailedError',
    'AssertionFailure',
    'ChainedComparisonError',
    'ExpressionError',
    'OperandReport',
    'UnsupportedExpressionError',
]


# --- Runtime failure ---


class OperandReport(msgspec.Struct, frozen=True, gc=False):
    """One operand as it appears in a failure report."""

    text: str
    value: str


class AssertionFailure(msgspec.Struct, frozen=True):
    """A failed check - struct variant.

    Attributes:
        expression: Source text of the whole checked expression.
        kind: Operator form the expression was classified as.
        operands: Operand lines, empty for BOOLEAN.
        message: Custom message, already formatted, or None.
    """

    expression: str
    kind: OperatorKind
    operands: tuple[OperandReport, ...] = ()
    message: str | None = None

    def render(self) -> str:
        """Render the diagnostic text."""
        return render_failure(self)

    def to_exception(self) -> AssertionFailedError:
        """Convert to exception for raise-based code."""
        return AssertionFailedError(self)


class AssertionFailedError(AssertionError):
    """A failed check - exception variant. ``str()`` is the full diagnostic."""

    def __init__(self, failure: AssertionFailure) -> None:
        self.failure = failure
        super().__init__(failure.render())

    def to_struct(self) -> AssertionFailure:
        """Convert to struct for data-oriented code."""
        return self.failure


# --- Construction-time errors ---


class ExpressionError(SyntaxError):
    """An assertion expression that cannot be turned into a check."""

    def __init__(self, reason: str, source: str, offset: int | None = None) -> None:
        self.reason = reason
        self.source = source
        super().__init__(
            f'{reason}: `{source}`',
            ('<bassert>', 1, None if offset is None else offset + 1, source),
        )


class ChainedComparisonError(ExpressionError):
    """``a < b < c`` at top level."""

    def __init__(self, source: str) -> None:
        super().__init__('chained comparisons are not supported', source)


class AmbiguousExpressionError(ExpressionError):
    """A comparison operator is at top level but not the top-level node."""

    def __init__(self, source: str, symbol: str, offset: int) -> None:
        self.symbol = symbol
        super().__init__(
            f'ambiguous use of `{symbol}`; wrap the comparison or its operands in parentheses',
            source,
            offset,
        )


class UnsupportedExpressionError(ExpressionError):
    """Invalid Python, an invalid pattern, or a malformed message part."""
