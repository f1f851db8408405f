"""Filtering of tokens into allowed, de-duplicated expressions."""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable
from typing import NamedTuple


class ParsedExpression(NamedTuple):
    """A validated SQL fragment and the field it references."""

    field: str
    expression: str


TokenMapper = Callable[[str], ParsedExpression | None]
"""Maps a token to an expression, or None to drop the token."""


def field_reference(token: str) -> ParsedExpression:
    return ParsedExpression(token, token)


def process_tokens(
    tokens: Iterable[str],
    allowed_fields: Collection[str],
    mapper: TokenMapper = field_reference,
    allow_field_multiples: bool = False,
) -> list[str]:
    """Turn tokens into expressions on allowed fields, preserving order.

    Unknown and disallowed fields are ignored rather than rejected. Unless
    ``allow_field_multiples`` is set, only the first token for each field is
    considered.
    """
    expressions: list[str] = []
    seen: set[str] = set()

    for token in tokens:
        token = token.strip()
        if not token:
            continue
        parsed = mapper(token)
        if not parsed:
            continue
        if not allow_field_multiples and parsed.field in seen:
            continue
        if parsed.field in allowed_fields:
            expressions.append(parsed.expression)
        seen.add(parsed.field)

    return expressions
