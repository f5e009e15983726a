"""Operator classifier and operand splitter.

Works on the source text of an assertion. The text is tokenized and only
the top paren level is inspected: anything inside ``()``, ``[]`` or ``{}``
is hidden from classification, as is a top-level ``lambda`` up to the
comma that ends its body. ``ast`` then confirms that the operator found
at top level is really the node Python would evaluate last; if it is
not, the expression is rejected as ambiguous instead of guessing.

A source string may carry a custom message after a top-level comma, in
call-argument style::

    'len(items) == 3, "got {}", items'
"""

from __future__ import annotations

import ast
import io
import keyword
import string
import tokenize
from typing import NamedTuple

import msgspec

from bassert.errors import (
    AmbiguousExpressionError,
    ChainedComparisonError,
    UnsupportedExpressionError,
)
from bassert.kinds import OperatorKind

__all__ = [
    'Classification',
    'MATCHED_NAME',
    'SUBJECT_NAME',
    'classify',
    'match_source',
    'validate_pattern',
]

SUBJECT_NAME = '__bassert_subject__'
MATCHED_NAME = '__bassert_matched__'

_COMPARISON_SYMBOLS = frozenset({'==', '!=', '>', '>=', '<', '<='})
_OPENERS = frozenset('([{')
_CLOSERS = frozenset(')]}')

_AST_KINDS: dict[type[ast.cmpop], OperatorKind] = {
    ast.Eq: OperatorKind.EQ,
    ast.NotEq: OperatorKind.NE,
    ast.Gt: OperatorKind.GT,
    ast.GtE: OperatorKind.GE,
    ast.Lt: OperatorKind.LT,
    ast.LtE: OperatorKind.LE,
}


class Classification(msgspec.Struct, frozen=True):
    """Text-level result of classifying one assertion source.

    Attributes:
        kind: Selected operator form.
        expression: The whole checked expression, trimmed.
        lhs: Left operand text (the pattern, for MATCH). Empty for BOOLEAN.
        rhs: Right operand text (the subject, for MATCH). Empty for BOOLEAN.
        template: Custom message template, if the source carries one.
        args: Positional format argument expressions.
        kwargs: Keyword format arguments as (name, expression) pairs.
    """

    kind: OperatorKind
    expression: str
    lhs: str = ''
    rhs: str = ''
    template: str | None = None
    args: tuple[str, ...] = ()
    kwargs: tuple[tuple[str, str], ...] = ()


class _TopToken(NamedTuple):
    string: str
    start: int
    end: int


class _Scan(NamedTuple):
    commas: list[_TopToken]
    comparisons: list[_TopToken]
    assigns: list[_TopToken]


def _line_offsets(source: str) -> list[int]:
    offsets = [0, 0]  # tokenize rows are 1-based
    for line in source.splitlines(keepends=True):
        offsets.append(offsets[-1] + len(line))
    return offsets


def _scan(source: str) -> _Scan:
    """Collect the operator tokens that sit at the top paren level."""
    offsets = _line_offsets(source)
    commas: list[_TopToken] = []
    comparisons: list[_TopToken] = []
    assigns: list[_TopToken] = []
    depth = 0
    in_lambda = in_params = False

    try:
        tokens = list(tokenize.generate_tokens(io.StringIO(source).readline))
    except (tokenize.TokenError, SyntaxError) as e:
        raise UnsupportedExpressionError(f'cannot tokenize expression ({e})', source) from e

    for tok in tokens:
        if tok.type in (tokenize.NL, tokenize.NEWLINE, tokenize.INDENT, tokenize.DEDENT, tokenize.ENDMARKER):
            continue
        if tok.type != tokenize.OP and not (tok.type == tokenize.NAME and tok.string == 'lambda'):
            continue
        if tok.string in _OPENERS:
            depth += 1
        elif tok.string in _CLOSERS:
            depth -= 1
        if depth != 0:
            continue

        start = offsets[tok.start[0]] + tok.start[1]
        end = offsets[tok.end[0]] + tok.end[1]
        top = _TopToken(tok.string, start, end)
        if tok.string == 'lambda':
            in_lambda = in_params = True
        elif in_params:
            # parameter commas and defaults run up to the lambda's colon
            in_params = tok.string != ':'
        elif tok.string == ',':
            commas.append(top)
            in_lambda = False
        elif in_lambda:
            continue
        elif tok.string in _COMPARISON_SYMBOLS:
            comparisons.append(top)
        elif tok.string == '=':
            assigns.append(top)

    return _Scan(commas, comparisons, assigns)


def _segments(source: str, commas: list[_TopToken]) -> list[str]:
    bounds = [0, *(c.end for c in commas)]
    ends = [*(c.start for c in commas), len(source)]
    return [source[b:e].strip() for b, e in zip(bounds, ends, strict=True)]


def _parse_expression(text: str, source: str) -> ast.expr:
    try:
        return ast.parse(text, mode='eval').body
    except SyntaxError as e:
        raise UnsupportedExpressionError(f'invalid expression ({e.msg})', source) from e


def match_source(pattern: str) -> str:
    """Statement text that matches ``SUBJECT_NAME`` against ``pattern``."""
    return (
        f'match {SUBJECT_NAME}:\n'
        f'    case (\n{pattern}\n):\n'
        f'        {MATCHED_NAME} = True\n'
    )


def validate_pattern(pattern: str, source: str | None = None) -> None:
    """Reject invalid and irrefutable patterns (``_``, bare capture names)."""
    source = pattern if source is None else source
    try:
        tree = ast.parse(match_source(pattern))
    except SyntaxError as e:
        raise UnsupportedExpressionError(f'invalid pattern ({e.msg})', source) from e
    case = tree.body[0].cases[0]  # type: ignore[attr-defined]
    if isinstance(case.pattern, ast.MatchAs) and case.pattern.pattern is None:
        msg = f'pattern `{pattern}` matches anything; did you mean `==`?'
        raise UnsupportedExpressionError(msg, source)


def _classify_match(text: str, assigns: list[_TopToken], comparisons: list[_TopToken]) -> Classification:
    if len(assigns) > 1:
        msg = 'more than one top-level `=`'
        raise UnsupportedExpressionError(msg, text)
    eq = assigns[0]
    pattern = text[: eq.start].strip()
    subject = text[eq.end :].strip()
    if not pattern or not subject:
        msg = 'pattern match needs both a pattern and a subject'
        raise UnsupportedExpressionError(msg, text)
    for op in comparisons:
        if op.start > eq.start:
            raise AmbiguousExpressionError(text, op.string, op.start)
    validate_pattern(pattern, text)
    _parse_expression(subject, text)
    return Classification(OperatorKind.MATCH, text, pattern, subject)


def _classify_expression(text: str) -> Classification:
    scan = _scan(text)
    if scan.assigns:
        return _classify_match(text, scan.assigns, scan.comparisons)

    body = _parse_expression(text, text)
    if isinstance(body, ast.Compare):
        if len(body.ops) > 1:
            raise ChainedComparisonError(text)
        kind = _AST_KINDS.get(type(body.ops[0]))
        if kind is None:
            # `in`, `is` and friends are plain conditions
            return Classification(OperatorKind.BOOLEAN, text)
        op = scan.comparisons[0]
        return Classification(kind, text, text[: op.start].strip(), text[op.end :].strip())

    if scan.comparisons:
        op = scan.comparisons[0]
        raise AmbiguousExpressionError(text, op.string, op.start)
    return Classification(OperatorKind.BOOLEAN, text)


def _classify_message(parts: list[str], source: str) -> tuple[str, tuple[str, ...], tuple[tuple[str, str], ...]]:
    """Split ``"template", arg, name=arg`` into its pieces."""
    try:
        template = ast.literal_eval(parts[0])
    except (ValueError, SyntaxError) as e:
        msg = 'custom message must start with a string literal'
        raise UnsupportedExpressionError(msg, source) from e
    if not isinstance(template, str):
        msg = 'custom message must start with a string literal'
        raise UnsupportedExpressionError(msg, source)

    args: list[str] = []
    kwargs: list[tuple[str, str]] = []
    for part in parts[1:]:
        scan = _scan(part)
        if scan.assigns:
            eq = scan.assigns[0]
            name = part[: eq.start].strip()
            if len(scan.assigns) > 1 or not name.isidentifier() or keyword.iskeyword(name):
                msg = f'invalid keyword argument `{part}`'
                raise UnsupportedExpressionError(msg, source)
            value = part[eq.end :].strip()
            _parse_expression(value, source)
            kwargs.append((name, value))
        else:
            if kwargs:
                msg = 'positional argument follows keyword argument'
                raise UnsupportedExpressionError(msg, source)
            _parse_expression(part, source)
            args.append(part)
    if args or kwargs:
        _check_fields(template, len(args), {name for name, _ in kwargs}, source)
    return template, tuple(args), tuple(kwargs)


def _template_fields(template: str) -> list[str]:
    """Field names of a format template, nested format specs included."""
    fields: list[str] = []
    for _, field, spec, _ in string.Formatter().parse(template):
        if field is None:
            continue
        fields.append(field.partition('.')[0].partition('[')[0])
        if spec:
            fields.extend(_template_fields(spec))
    return fields


def _check_fields(template: str, nargs: int, names: set[str], source: str) -> None:
    """Every argument is used and every field has an argument."""
    try:
        fields = _template_fields(template)
    except ValueError as e:
        raise UnsupportedExpressionError(f'invalid message template ({e})', source) from e

    auto = fields.count('')
    indices = {int(f) for f in fields if f.isdigit()}
    used_names = {f for f in fields if f and not f.isdigit()}
    if auto and indices:
        msg = 'message template mixes automatic and manual field numbering'
        raise UnsupportedExpressionError(msg, source)

    expected = auto if auto else len(indices)
    if expected != nargs or (indices and indices != set(range(nargs))):
        msg = f'message template expects {expected} positional argument(s), got {nargs}'
        raise UnsupportedExpressionError(msg, source)
    if used_names != names:
        missing = sorted(used_names - names)
        unused = sorted(names - used_names)
        msg = f'message template keyword mismatch (missing {missing}, unused {unused})'
        raise UnsupportedExpressionError(msg, source)


def classify(source: str) -> Classification:
    """Classify an assertion source and split it into operand texts.

    Args:
        source: Python expression text, optionally followed by a custom
            message in call-argument form and/or a trailing comma.

    Returns:
        The Classification for the source.

    Raises:
        ChainedComparisonError: For ``a < b < c``.
        AmbiguousExpressionError: If a comparison operator sits at top level
            without being the top-level node.
        UnsupportedExpressionError: For anything else that cannot be checked.
    """
    source = source.strip()
    parts = _segments(source, _scan(source).commas)
    if len(parts) > 1 and not parts[-1]:
        parts.pop()  # trailing comma
    if any(not part for part in parts):
        msg = 'empty argument'
        raise UnsupportedExpressionError(msg, source)

    result = _classify_expression(parts[0])
    if len(parts) == 1:
        return result
    template, args, kwargs = _classify_message(parts[1:], source)
    return msgspec.structs.replace(result, template=template, args=args, kwargs=kwargs)
