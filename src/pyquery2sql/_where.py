"""WHERE clause builder: ``field<op>value`` tokens to parameterized SQL."""

from __future__ import annotations

import logging
from typing import Any, NamedTuple

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput

from pyquery2sql._coercion import convert_value
from pyquery2sql._constants import NULL_VALUE, TOKEN_SEPARATOR
from pyquery2sql._errors import ValidationErrors
from pyquery2sql._expressions import ParsedExpression, process_tokens
from pyquery2sql._operators import NULL_OPERATORS, WHERE_OPERATORS, WhereJoin
from pyquery2sql.registry import FieldRegistry

logger = logging.getLogger(__name__)

PLACEHOLDER = "?"

_COMPARISON_GRAMMAR = r"""
comparison: TEXT OPERATOR TEXT?

OPERATOR: /%s/
TEXT: /[^<>=]+/
""" % "|".join(WHERE_OPERATORS)


class Comparison(NamedTuple):
    field: str
    operator: str
    value: str


class _ComparisonTransformer(Transformer):
    def comparison(self, children: list[Token]) -> Comparison:
        field, operator = children[0], children[1]
        value = children[2] if len(children) > 2 else ""
        return Comparison(str(field).strip(), str(operator), str(value).strip())


_parser = Lark(
    _COMPARISON_GRAMMAR,
    start="comparison",
    parser="lalr",
    transformer=_ComparisonTransformer(),
)


def parse_comparison(token: str) -> Comparison | None:
    """Split a token into field, operator and value, or None if malformed."""
    try:
        return _parser.parse(token)
    except UnexpectedInput:
        return None


class WhereBuilder:
    """Accumulates WHERE expressions and their bound values for one request."""

    def __init__(self, registry: FieldRegistry, errors: ValidationErrors) -> None:
        self._registry = registry
        self._errors = errors
        self._where_fields = registry.where_fields
        self.expressions: list[str] = []
        self.values: list[Any] = []

    def add_groups(self, groups: list[str], join: WhereJoin) -> None:
        """Add one expression per group, joining each group's triples with ``join``."""
        for group in groups:
            parsed = process_tokens(
                group.split(TOKEN_SEPARATOR),
                self._where_fields,
                self._map_token,
                allow_field_multiples=True,
            )
            if not parsed:
                continue
            joined = f" {join} ".join(parsed)
            self.expressions.append(joined if len(parsed) == 1 else f"({joined})")

    def _map_token(self, token: str) -> ParsedExpression | None:
        comparison = parse_comparison(token)
        if comparison is None:
            logger.debug("dropping malformed WHERE token %r", token)
            return None

        field, operator, raw_value = comparison
        if field not in self._where_fields:
            logger.debug("dropping WHERE token on disallowed field %r", field)
            return None

        value: Any = raw_value
        if raw_value.upper() == NULL_VALUE:
            value = None
            operator = self._null_operator(field, operator)
        else:
            data_type = self._registry.data_type(field)
            if data_type is not None:
                value = convert_value(data_type, field, raw_value, self._errors)

        self.values.append(value)
        return ParsedExpression(field, f"({field} {operator} {PLACEHOLDER})")

    def _null_operator(self, field: str, operator: str) -> str:
        if not self._registry.is_nullable(field):
            self._errors.add(
                f"Field '{field}' cannot be compared with NULL", {"field": field}
            )
            return operator
        null_operator = NULL_OPERATORS.get(operator)
        if null_operator is None:
            self._errors.add(
                f"Invalid WHERE operator '{operator}' when comparing with NULL.  "
                "Must be '=' or '<>'.",
                {"field": field, "operator": operator},
            )
            return operator
        return null_operator
