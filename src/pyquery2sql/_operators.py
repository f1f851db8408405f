"""WHERE operator and join tables."""

import enum

# Ordered longest-first so "<=" is never read as "<" followed by "="
WHERE_OPERATORS: tuple[str, ...] = ("<>", "<=", ">=", "<", ">", "=")

# Operator -> SQL operator when the value is NULL
NULL_OPERATORS: dict[str, str] = {
    "=": "IS",
    "<>": "IS NOT",
}


class WhereJoin(enum.StrEnum):
    AND = "AND"
    OR = "OR"


DEFAULT_WHERE_JOIN = WhereJoin.AND
