"""bassert: one assertion for equality, ordering and pattern checks.

The checked expression is written as source text; its top-level operator
decides what is compared, and a failure reports the expression together
with the value of each operand:

    from bassert import bassert

    bassert('y < x')
    # AssertionFailedError: assertion failed: `y < x`
    # y: `20`,
    # x: `10`

Flat imports (preferred):
    from bassert import bassert, debug_bassert, check, check_match

Submodule imports:
    from bassert.assertions import bassert
    from bassert.engine import Assertion
    from bassert.render import debug_repr
"""

from bassert._config import Config, get_config, init
from bassert._logging import configure_logging, get_logger

# Entry points
from bassert.assertions import bassert, check, check_match, debug_bassert
from bassert.engine import Assertion

# Errors
from bassert.errors import (
    AmbiguousExpressionError,
    AssertionFailedError,
    AssertionFailure,
    ChainedComparisonError,
    ExpressionError,
    OperandReport,
    UnsupportedExpressionError,
)
from bassert.kinds import OperatorKind
from bassert.render import debug_repr

__all__ = [
    # Errors
    'AmbiguousExpressionError',
    # Engine
    'Assertion',
    'AssertionFailedError',
    'AssertionFailure',
    'ChainedComparisonError',
    # Configuration
    'Config',
    'ExpressionError',
    'OperandReport',
    'OperatorKind',
    'UnsupportedExpressionError',
    # Entry points
    'bassert',
    'check',
    'check_match',
    'configure_logging',
    'debug_bassert',
    # Rendering
    'debug_repr',
    'get_config',
    'get_logger',
    'init',
]
