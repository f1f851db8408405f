"""Translation result value object."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Result:
    """Validated SELECT, WHERE, ORDER BY and LIMIT parts of a query.

    ``where_values`` are positionally bound to the ``?`` placeholders in
    ``where`` and are meant for a parameterized query API.
    """

    select: str
    select_clause: str
    select_fields: tuple[str, ...]

    where: str
    where_clause: str
    where_expressions: tuple[str, ...]
    where_values: tuple[Any, ...]
    where_join: str

    order_by: str
    order_by_clause: str
    order_by_fields: tuple[str, ...]

    offset: int
    limit: int
    limit_clause: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "limit_clause", f"LIMIT {self.offset},{self.limit}")

    def sql(self, table_name: str, exclude_offset_and_limit: bool = False) -> str:
        """Assemble the full statement for ``table_name``.

        Args:
            table_name: Table to select from. Inserted verbatim.
            exclude_offset_and_limit: Omit the LIMIT clause, e.g. when the
                same WHERE clause feeds a COUNT query.
        """
        parts = [
            self.select_clause,
            f"FROM {table_name}",
            self.where_clause,
            self.order_by_clause,
        ]
        if not exclude_offset_and_limit:
            parts.append(self.limit_clause)
        return " ".join(part for part in parts if part)
