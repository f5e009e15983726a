"""Tests for OperatorKind."""

import pytest
from bassert import OperatorKind


class TestOperatorKind:
    def test_symbols(self):
        assert [k.symbol for k in OperatorKind] == ['==', '!=', '>', '>=', '<', '<=', '=', '']

    def test_from_symbol(self):
        assert OperatorKind.from_symbol('>=') is OperatorKind.GE
        assert OperatorKind.from_symbol('=') is OperatorKind.MATCH

    def test_from_unknown_symbol_raises(self):
        with pytest.raises(ValueError):
            OperatorKind.from_symbol('=~')

    def test_is_comparison(self):
        assert OperatorKind.LT.is_comparison
        assert not OperatorKind.MATCH.is_comparison
        assert not OperatorKind.BOOLEAN.is_comparison

    @pytest.mark.parametrize(
        ('kind', 'lhs', 'rhs', 'expected'),
        [
            (OperatorKind.EQ, 1, 1, True),
            (OperatorKind.NE, 1, 1, False),
            (OperatorKind.GT, 2, 1, True),
            (OperatorKind.GE, 1, 1, True),
            (OperatorKind.LT, 2, 1, False),
            (OperatorKind.LE, 1, 2, True),
        ],
    )
    def test_compare(self, kind, lhs, rhs, expected):
        assert kind.compare(lhs, rhs) is expected

    def test_compare_on_non_comparison_raises(self):
        with pytest.raises(TypeError):
            OperatorKind.MATCH.compare(1, 1)
