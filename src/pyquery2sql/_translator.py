"""Core translation pipeline from query parameters to a ``Result``."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pyquery2sql._coercion import parse_leading_int
from pyquery2sql._constants import DEFAULT_LIMIT, MIN_LIMIT, MIN_OFFSET
from pyquery2sql._errors import ValidationErrors
from pyquery2sql._expressions import ParsedExpression, process_tokens
from pyquery2sql._operators import DEFAULT_WHERE_JOIN, WhereJoin
from pyquery2sql._tokens import tokenize
from pyquery2sql._where import WhereBuilder
from pyquery2sql.registry import FieldRegistry
from pyquery2sql.result import Result

logger = logging.getLogger(__name__)

DESCENDING_PREFIX = "-"


def _bounded_int(value: Any, default: int, minimum: int, maximum: int | None = None) -> int:
    """Parse ``value`` leniently and clamp it, falling back to ``default``."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return default
    num = value if isinstance(value, int) else parse_leading_int(value)
    if num is None:
        num = default
    num = max(minimum, num)
    if maximum is not None:
        num = min(num, maximum)
    return num


def _order_by_expression(token: str) -> ParsedExpression:
    if token.startswith(DESCENDING_PREFIX):
        field = token[len(DESCENDING_PREFIX):].strip()
        return ParsedExpression(field, f"{field} DESC")
    return ParsedExpression(token, token)


class Translator:
    """Translates one parameter mapping against a field registry.

    All mutable state (bound values, validation issues) lives on the
    instance, so a translator is used for a single request only.
    """

    def __init__(
        self,
        registry: FieldRegistry,
        *,
        max_limit: int | None = None,
        default_limit: int | None = None,
    ) -> None:
        self._registry = registry
        self.max_limit = max(MIN_LIMIT, max_limit or DEFAULT_LIMIT)
        self.default_limit = _bounded_int(
            default_limit, self.max_limit, MIN_LIMIT, self.max_limit
        )
        self.errors = ValidationErrors()

    def translate(self, params: Mapping[str, Any]) -> Result:
        fields = tokenize(params.get("fields"))
        where_and = tokenize(params.get("whereAnd"), preserve_groups=True)
        where_and += tokenize(params.get("where"), preserve_groups=True)
        where_or = tokenize(params.get("whereOr"), preserve_groups=True)
        where_join = self._where_join(tokenize(params.get("whereJoin")))
        order_by = tokenize(params.get("orderBy"))
        offset = _bounded_int(params.get("offset"), MIN_OFFSET, MIN_OFFSET)
        limit = _bounded_int(
            params.get("limit"), self.default_limit, MIN_LIMIT, self.max_limit
        )

        select_fields = process_tokens(fields, self._registry.select_fields)
        if not select_fields:
            select_fields = list(self._registry.default_select_fields)

        where = WhereBuilder(self._registry, self.errors)
        where.add_groups(where_and, WhereJoin.AND)
        where.add_groups(where_or, WhereJoin.OR)

        if self.errors:
            logger.debug("query validation failed with %d issue(s)", len(self.errors))
        self.errors.raise_if_any()

        order_by_fields = process_tokens(
            order_by, self._registry.order_by_fields, _order_by_expression
        )

        logger.debug(
            "translated %d WHERE expression(s) with %d bound value(s)",
            len(where.expressions),
            len(where.values),
        )

        select = ",".join(select_fields)
        where_sql = f" {where_join} ".join(where.expressions)
        order_by_sql = ",".join(order_by_fields)

        return Result(
            select=select,
            select_clause=f"SELECT {select}",
            select_fields=tuple(select_fields),
            where=where_sql,
            where_clause=f"WHERE {where_sql}" if where.values else "",
            where_expressions=tuple(where.expressions),
            where_values=tuple(where.values),
            where_join=where_join,
            order_by=order_by_sql,
            order_by_clause=f"ORDER BY {order_by_sql}" if order_by_fields else "",
            order_by_fields=tuple(order_by_fields),
            offset=offset,
            limit=limit,
        )

    def _where_join(self, tokens: list[str]) -> str:
        if not tokens:
            return DEFAULT_WHERE_JOIN.value
        where_join = tokens[0].upper()
        if where_join not in WhereJoin.__members__:
            self.errors.add(
                f"Invalid whereJoin value '{where_join}'.  "
                f"Must be one of: {','.join(WhereJoin)}",
                {"whereJoin": where_join},
            )
        return where_join
