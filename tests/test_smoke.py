"""Smoke tests to verify package structure and imports work."""


def test_import_entry_points():
    """Entry points can be imported from the package root."""
    from bassert import bassert, check, check_match, debug_bassert

    assert bassert is not None
    assert debug_bassert is not None
    assert check is not None
    assert check_match is not None


def test_import_errors():
    """Error types can be imported."""
    from bassert import (
        AmbiguousExpressionError,
        AssertionFailedError,
        ChainedComparisonError,
        ExpressionError,
        UnsupportedExpressionError,
    )

    assert issubclass(AssertionFailedError, AssertionError)
    assert issubclass(ExpressionError, SyntaxError)
    for cls in (AmbiguousExpressionError, ChainedComparisonError, UnsupportedExpressionError):
        assert issubclass(cls, ExpressionError)


def test_submodule_imports():
    """Submodule imports work."""
    from bassert.assertions import bassert, debug_bassert  # noqa: F401
    from bassert.classify import classify  # noqa: F401
    from bassert.engine import Assertion  # noqa: F401
    from bassert.kinds import OperatorKind  # noqa: F401
    from bassert.render import debug_repr  # noqa: F401

    assert True
