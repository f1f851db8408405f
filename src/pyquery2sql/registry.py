"""Field registry: the allow-list of fields a query may reference."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

from pyquery2sql._errors import ERR_MSG_INVALID_DATA_TYPE, InvalidDataTypeError


class DataType(enum.StrEnum):
    """Declared data type of a field's WHERE values."""

    INTEGER = "INTEGER"
    NUMBER = "NUMBER"
    STRING = "STRING"
    DATETIME = "DATETIME"
    BOOLEAN = "BOOLEAN"


@dataclass(frozen=True)
class FieldSpec:
    """Registration arguments for a single field."""

    name: str
    allow_where: bool = False
    allow_order_by: bool = False
    nullable: bool = False
    data_type: DataType | str | None = None


def _normalize_data_type(data_type: DataType | str) -> DataType:
    normalized = str(data_type).strip().upper()
    try:
        return DataType(normalized)
    except ValueError as e:
        raise InvalidDataTypeError(
            ERR_MSG_INVALID_DATA_TYPE,
            f"invalid field data type: {normalized!r}. "
            f"Available: {', '.join(t.value for t in DataType)}",
            wrapped=e,
        ) from e


class FieldRegistry:
    """Which fields may be selected, filtered and sorted on.

    Every registered field is selectable. Registration only ever widens
    permissions; the first registration of a name fixes its nullability
    and data type.
    """

    def __init__(self, fields: Iterable[FieldSpec] = ()) -> None:
        self._select_fields: list[str] = []
        self._where_fields: set[str] = set()
        self._order_by_fields: set[str] = set()
        self._nullable: dict[str, bool] = {}
        # STRING fields are never stored: query values already are strings
        self._data_types: dict[str, DataType] = {}
        for spec in fields:
            self.add_field(
                spec.name,
                allow_where=spec.allow_where,
                allow_order_by=spec.allow_order_by,
                nullable=spec.nullable,
                data_type=spec.data_type,
            )

    def add_field(
        self,
        name: str | None,
        *,
        allow_where: bool = False,
        allow_order_by: bool = False,
        nullable: bool = False,
        data_type: DataType | str | None = None,
    ) -> FieldRegistry:
        """Register a field, or widen the permissions of a registered one.

        Args:
            name: Field name. ``None`` is ignored.
            allow_where: Whether the field may appear in WHERE expressions.
            allow_order_by: Whether the field may appear in ORDER BY.
            nullable: Whether the field may be compared with NULL.
            data_type: Optional ``DataType`` or its case-insensitive name.

        Returns:
            The registry, for chaining.

        Raises:
            InvalidDataTypeError: If ``data_type`` is not a known type.
        """
        if name is None:
            return self

        resolved = _normalize_data_type(data_type) if data_type is not None else None

        if name not in self._nullable:
            self._select_fields.append(name)
            self._nullable[name] = bool(nullable)
            if resolved is not None and resolved is not DataType.STRING:
                self._data_types[name] = resolved
        if allow_where:
            self._where_fields.add(name)
        if allow_order_by:
            self._order_by_fields.add(name)
        return self

    @property
    def default_select_fields(self) -> tuple[str, ...]:
        """All registered fields, in registration order."""
        return tuple(self._select_fields)

    @property
    def select_fields(self) -> frozenset[str]:
        return frozenset(self._select_fields)

    @property
    def where_fields(self) -> frozenset[str]:
        return frozenset(self._where_fields)

    @property
    def order_by_fields(self) -> frozenset[str]:
        return frozenset(self._order_by_fields)

    def is_selectable(self, name: str) -> bool:
        return name in self._nullable

    def is_whereable(self, name: str) -> bool:
        return name in self._where_fields

    def is_orderable(self, name: str) -> bool:
        return name in self._order_by_fields

    def is_nullable(self, name: str) -> bool:
        return self._nullable.get(name, False)

    def data_type(self, name: str) -> DataType | None:
        """Declared non-string type of a field, or None if no conversion applies."""
        return self._data_types.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._nullable

    def __len__(self) -> int:
        return len(self._select_fields)
