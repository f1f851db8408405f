"""Shared test fixtures."""

import pytest

from pyquery2sql.registry import DataType, FieldRegistry, FieldSpec


@pytest.fixture
def people():
    return FieldRegistry([
        FieldSpec("name", allow_where=True, allow_order_by=True),
        FieldSpec("age", allow_where=True, allow_order_by=True, data_type=DataType.INTEGER),
        FieldSpec("id"),
        FieldSpec("nickname", allow_where=True, nullable=True),
    ])


@pytest.fixture
def typed():
    return (
        FieldRegistry()
        .add_field("score", allow_where=True, data_type="number")
        .add_field("active", allow_where=True, data_type="boolean")
        .add_field("created", allow_where=True, allow_order_by=True,
                   nullable=True, data_type="datetime")
    )
