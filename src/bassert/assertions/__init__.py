"""Assertion entry points: bassert, debug_bassert, check and check_match."""

from bassert.assertions.builder import check, check_match
from bassert.assertions.expand import bassert, debug_bassert

__all__ = [
    'bassert',
    'check',
    'check_match',
    'debug_bassert',
]
