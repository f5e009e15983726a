"""OperatorKind: the closed set of assertion forms."""

from __future__ import annotations

import operator
from collections.abc import Callable
from enum import Enum
from typing import Any

__all__ = ['COMPARISONS', 'OperatorKind']


class OperatorKind(Enum):
    """Form selected for one assertion, decided from the expression's shape."""

    EQ = '=='
    NE = '!='
    GT = '>'
    GE = '>='
    LT = '<'
    LE = '<='
    MATCH = '='
    BOOLEAN = ''

    @property
    def symbol(self) -> str:
        """Operator text as written in source."""
        return self.value

    @property
    def is_comparison(self) -> bool:
        return self in COMPARISONS

    def compare(self, lhs: Any, rhs: Any) -> bool:
        """Apply the comparison to two captured values.

        Raises:
            TypeError: If the kind is MATCH or BOOLEAN.
        """
        try:
            op = COMPARISONS[self]
        except KeyError:
            msg = f'{self.name} is not a comparison'
            raise TypeError(msg) from None
        return bool(op(lhs, rhs))

    @classmethod
    def from_symbol(cls, symbol: str) -> OperatorKind:
        """Look up a kind by its operator text (``'<='`` -> ``LE``)."""
        return cls(symbol)


COMPARISONS: dict[OperatorKind, Callable[[Any, Any], Any]] = {
    OperatorKind.EQ: operator.eq,
    OperatorKind.NE: operator.ne,
    OperatorKind.GT: operator.gt,
    OperatorKind.GE: operator.ge,
    OperatorKind.LT: operator.lt,
    OperatorKind.LE: operator.le,
}
