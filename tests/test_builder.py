"""Tests for check and check_match."""

import enum

import pytest
from bassert import AssertionFailedError, OperatorKind, UnsupportedExpressionError, check, check_match


class Color(enum.Enum):
    RED = 1
    BLUE = 2


class TestCheck:
    def test_pass(self):
        check(1, '<', 2)
        check(2, OperatorKind.GE, 2)
        check('a', '==', 'a')

    def test_failure_uses_display_texts(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            check(3, OperatorKind.LT, 2, lhs_expr='larger', rhs_expr='smaller')
        assert str(exc_info.value) == 'assertion failed: `larger < smaller`\nlarger: `3`,\nsmaller: `2`'

    def test_default_texts(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            check(1, '!=', 1)
        assert str(exc_info.value) == 'assertion failed: `lhs != rhs`\nlhs: `1`,\nrhs: `1`'

    def test_message(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            check(1, '>', 2, 'it is broken, because {}', 'foo')
        assert str(exc_info.value).endswith('rhs: `2`: it is broken, because foo')

    def test_message_not_formatted_on_pass(self):
        check(1, '==', 1, lambda: pytest.fail('message built on success'))

    @pytest.mark.parametrize('kind', [OperatorKind.MATCH, OperatorKind.BOOLEAN, '='])
    def test_non_comparison_kind_rejected(self, kind):
        with pytest.raises(ValueError, match='not a comparison'):
            check(1, kind, 1)

    def test_unknown_symbol_rejected(self):
        with pytest.raises(ValueError):
            check(1, '<>', 1)


class TestCheckMatch:
    def test_pass(self):
        check_match('[_, _]', (1, 2))
        check_match('int()', 5)

    def test_failure(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            check_match('None', 100, subject_expr='val')
        assert str(exc_info.value) == 'assertion failed: `None = val`\nval: `100`'

    def test_failure_with_message(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            check_match('None', 100, 'That was unexpected! {} {}', 'xyzzy', 'plugh', subject_expr='val')
        assert str(exc_info.value) == 'assertion failed: `None = val`\nval: `100`: That was unexpected! xyzzy plugh'

    def test_value_pattern_from_caller(self):
        check_match('Color.BLUE', Color.BLUE)
        with pytest.raises(AssertionFailedError):
            check_match('Color.RED', Color.BLUE)

    def test_value_pattern_from_namespace(self):
        with pytest.raises(AssertionFailedError):
            check_match('C.RED', Color.BLUE, namespace={'C': Color})

    @pytest.mark.parametrize('pattern', ['_', 'anything', '1 +'])
    def test_bad_pattern(self, pattern):
        with pytest.raises(UnsupportedExpressionError):
            check_match(pattern, 1)
