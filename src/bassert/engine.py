"""Evaluator and failure reporting.

An ``Assertion`` is the compiled form of one assertion source. Parsing
happens once per distinct source string; every check then evaluates each
operand exactly once, left to right, and reuses the captured values both
for the comparison and for the report.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import CodeType
from typing import Any, NoReturn

from bassert._config import get_config
from bassert._logging import log_failure
from bassert.classify import MATCHED_NAME, SUBJECT_NAME, Classification, classify, match_source
from bassert.errors import AssertionFailure, OperandReport
from bassert.kinds import OperatorKind
from bassert.render import debug_repr

__all__ = [
    'Assertion',
    'Message',
    'fail_comparison',
    'fail_condition',
    'fail_match',
    'format_message',
]

_FILENAME = '<bassert>'

Message = str | Callable[[], object] | None


def format_message(message: Message, args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> str | None:
    """Resolve a caller-supplied message. Only called on failure.

    A callable message is invoked with no arguments; a string is used as a
    ``str.format`` template when arguments are given, verbatim otherwise.
    """
    if message is None:
        if args or kwargs:
            msg = 'format arguments given without a message'
            raise TypeError(msg)
        return None
    if callable(message):
        if args or kwargs:
            msg = 'format arguments cannot be combined with a callable message'
            raise TypeError(msg)
        return str(message())
    if args or kwargs:
        return message.format(*args, **kwargs)
    return message


def _raise(failure: AssertionFailure) -> NoReturn:
    if get_config().log_level is not None:
        log_failure(failure)
    raise failure.to_exception()


def fail_comparison(
    kind: OperatorKind,
    lhs_expr: str,
    rhs_expr: str,
    lhs: Any,
    rhs: Any,
    message: str | None = None,
    *,
    expression: str | None = None,
) -> NoReturn:
    """Report a failed comparison.

    Args:
        kind: One of the six comparison kinds.
        lhs_expr: Left operand source text.
        rhs_expr: Right operand source text.
        lhs: Captured left value.
        rhs: Captured right value.
        message: Formatted custom message, if any.
        expression: Header text. Defaults to ``'<lhs> <op> <rhs>'``.

    Raises:
        AssertionFailedError: Always.
    """
    failure = AssertionFailure(
        expression=expression or f'{lhs_expr} {kind.symbol} {rhs_expr}',
        kind=kind,
        operands=(
            OperandReport(lhs_expr, debug_repr(lhs)),
            OperandReport(rhs_expr, debug_repr(rhs)),
        ),
        message=message,
    )
    _raise(failure)


def fail_match(
    pattern: str,
    subject_expr: str,
    subject: Any,
    message: str | None = None,
) -> NoReturn:
    """Report a subject that did not match its pattern.

    The pattern has no value of its own; it only appears in the header.
    """
    failure = AssertionFailure(
        expression=f'{pattern} = {subject_expr}',
        kind=OperatorKind.MATCH,
        operands=(OperandReport(subject_expr, debug_repr(subject)),),
        message=message,
    )
    _raise(failure)


def fail_condition(expression: str, message: str | None = None) -> NoReturn:
    """Report a false condition."""
    _raise(AssertionFailure(expression=expression, kind=OperatorKind.BOOLEAN, message=message))


def _compile(text: str, mode: str = 'eval') -> CodeType:
    return compile(text, _FILENAME, mode)


@dataclass(frozen=True)
class Assertion:
    """A parsed and compiled assertion source.

    Attributes:
        classification: Operator kind and operand texts.
        lhs_code: Left operand, or the whole condition for BOOLEAN.
        rhs_code: Right operand, or the subject for MATCH.
        pattern_code: The match statement, for MATCH.
        arg_codes: Positional message arguments from the source.
        kwarg_codes: Keyword message arguments from the source.
    """

    classification: Classification
    lhs_code: CodeType | None = None
    rhs_code: CodeType | None = None
    pattern_code: CodeType | None = None
    arg_codes: tuple[CodeType, ...] = ()
    kwarg_codes: tuple[tuple[str, CodeType], ...] = ()

    @property
    def kind(self) -> OperatorKind:
        return self.classification.kind

    @property
    def expression(self) -> str:
        return self.classification.expression

    @classmethod
    def parse(cls, source: str) -> Assertion:
        """Classify and compile ``source``; results are cached per string.

        Raises:
            ExpressionError: If the source cannot be turned into a check.
        """
        return _parse(source)

    def check(
        self,
        globals_: dict[str, Any],
        locals_: Mapping[str, Any] | None = None,
        message: Message = None,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Run the check against a namespace.

        Returns normally when the check holds.

        Raises:
            AssertionFailedError: When it does not.
        """
        if message is not None and self.classification.template is not None:
            msg = 'custom message given both in the expression and as an argument'
            raise TypeError(msg)

        # Single mapping so nested scopes in an operand see the caller's locals
        ns = {**globals_, **locals_} if locals_ is not None else dict(globals_)

        c = self.classification
        if c.kind is OperatorKind.BOOLEAN:
            if not eval(self.lhs_code, ns):  # noqa: S307
                fail_condition(c.expression, self._message(ns, message, args, kwargs))
            return

        if c.kind is OperatorKind.MATCH:
            subject = eval(self.rhs_code, ns)  # noqa: S307
            if not self._matches(subject, ns):
                fail_match(c.lhs, c.rhs, subject, self._message(ns, message, args, kwargs))
            return

        lhs = eval(self.lhs_code, ns)  # noqa: S307
        rhs = eval(self.rhs_code, ns)  # noqa: S307
        if not c.kind.compare(lhs, rhs):
            fail_comparison(
                c.kind,
                c.lhs,
                c.rhs,
                lhs,
                rhs,
                self._message(ns, message, args, kwargs),
                expression=c.expression,
            )

    def _matches(self, subject: Any, ns: dict[str, Any]) -> bool:
        # Captures land in a scratch copy, never in the caller's namespace
        scratch = dict(ns)
        scratch[SUBJECT_NAME] = subject
        exec(self.pattern_code, scratch)  # noqa: S102
        return scratch.get(MATCHED_NAME, False)

    def _message(
        self,
        ns: dict[str, Any],
        message: Message,
        args: tuple[Any, ...],
        kwargs: Mapping[str, Any],
    ) -> str | None:
        template = self.classification.template
        if template is None:
            return format_message(message, args, kwargs)
        if args or kwargs:
            msg = 'format arguments given for a message already in the expression'
            raise TypeError(msg)
        if not self.arg_codes and not self.kwarg_codes:
            return template
        values = [eval(code, ns) for code in self.arg_codes]  # noqa: S307
        named = {name: eval(code, ns) for name, code in self.kwarg_codes}  # noqa: S307
        return template.format(*values, **named)


@functools.lru_cache(maxsize=1024)
def _parse(source: str) -> Assertion:
    c = classify(source)
    arg_codes = tuple(_compile(arg) for arg in c.args)
    kwarg_codes = tuple((name, _compile(arg)) for name, arg in c.kwargs)

    if c.kind is OperatorKind.BOOLEAN:
        return Assertion(c, lhs_code=_compile(c.expression), arg_codes=arg_codes, kwarg_codes=kwarg_codes)
    if c.kind is OperatorKind.MATCH:
        return Assertion(
            c,
            rhs_code=_compile(c.rhs),
            pattern_code=_compile(match_source(c.lhs), 'exec'),
            arg_codes=arg_codes,
            kwarg_codes=kwarg_codes,
        )
    return Assertion(
        c,
        lhs_code=_compile(c.lhs),
        rhs_code=_compile(c.rhs),
        arg_codes=arg_codes,
        kwarg_codes=kwarg_codes,
    )
