"""Diagnostic message builder."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bassert.errors import AssertionFailure

__all__ = ['HEADER', 'render_failure']

HEADER = 'assertion failed'


def render_failure(failure: AssertionFailure) -> str:
    """Build the failure report.

    Layout::

        assertion failed: `<expression>`
        <lhs>: `<lhs value>`,
        <rhs>: `<rhs value>`: <custom message>

    Every operand line but the last ends with a comma. BOOLEAN checks have
    no operand lines. The custom message, when present, is appended to the
    last line after ``': '``.
    """
    lines = [f'{HEADER}: `{failure.expression}`']
    lines.extend(f'{op.text}: `{op.value}`' for op in failure.operands)
    text = ',\n'.join(lines[1:])
    report = f'{lines[0]}\n{text}' if text else lines[0]
    if failure.message is not None:
        report = f'{report}: {failure.message}'
    return report
