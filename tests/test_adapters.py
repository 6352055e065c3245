"""Tests for pi.table.adapters -- turning values into rows."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

import pytest
from pydantic import BaseModel

from pi.table.adapters import (
    IntoRow,
    field_names,
    headers_of,
    into_row,
    row_adapter,
    serialize_row,
    tuple_headers,
    tuple_row,
)
from pi.table.row import Row


def _texts(row: Row) -> list[str]:
    return [cell.content for cell in row.cells]


class Color(Enum):
    RED = 1
    GREEN = 2


@dataclass
class Address:
    street: str
    state: str


@dataclass
class Person:
    name: str
    address: list[str]
    age: int


class Point(NamedTuple):
    x: int
    y: int


class Item(BaseModel):
    name: str
    tags: list[str]


# ---------------------------------------------------------------------------
# IntoRow
# ---------------------------------------------------------------------------


class TestRowAdapter:
    """Headers and rows derived from dataclass fields."""

    def test_derives_headers_and_cells(self) -> None:
        @row_adapter
        @dataclass
        class User:
            name: str
            age: int

        user = User("Jane", 31)
        assert isinstance(user, IntoRow)
        assert _texts(user.headers()) == ["name", "age"]  # type: ignore[attr-defined]
        assert _texts(user.into_row()) == ["Jane", "31"]  # type: ignore[attr-defined]

    def test_rejects_non_dataclass(self) -> None:
        with pytest.raises(TypeError):

            @row_adapter
            class NotData:
                pass

    def test_rejects_dataclass_without_fields(self) -> None:
        with pytest.raises(TypeError):

            @row_adapter
            @dataclass
            class Empty:
                pass


class TestTupleRows:
    """Tuples as rows."""

    def test_headers_are_type_names(self) -> None:
        assert _texts(tuple_headers((1, "a", 2.5))) == ["int", "str", "float"]

    def test_namedtuple_headers_are_fields(self) -> None:
        assert _texts(tuple_headers(Point(1, 2))) == ["x", "y"]

    def test_cells(self) -> None:
        assert _texts(tuple_row((1, "a", 2.5))) == ["1", "a", "2.5"]


class TestIntoRow:
    """Dispatch on the kind of item."""

    def test_plain_dataclass(self) -> None:
        item = Address("3 the close", "CA")
        assert _texts(headers_of(item)) == ["street", "state"]
        assert _texts(into_row(item)) == ["3 the close", "CA"]

    def test_pydantic_model(self) -> None:
        item = Item(name="x", tags=["a"])
        assert _texts(headers_of(item)) == ["name", "tags"]
        assert _texts(into_row(item)) == ["x", "['a']"]

    def test_unsupported(self) -> None:
        with pytest.raises(TypeError):
            into_row(3.5)


# ---------------------------------------------------------------------------
# field_names
# ---------------------------------------------------------------------------


class TestFieldNames:
    """Names of a value's first-level fields."""

    def test_dataclass(self) -> None:
        assert field_names(Address("a", "b")) == ["street", "state"]

    def test_mapping(self) -> None:
        assert field_names({"a": 1, 2: "b"}) == ["a", "2"]

    def test_namedtuple(self) -> None:
        assert field_names(Point(1, 2)) == ["x", "y"]

    def test_scalar_has_none(self) -> None:
        assert field_names(5) is None

    def test_dataclass_type_is_not_an_instance(self) -> None:
        assert field_names(Address) is None


# ---------------------------------------------------------------------------
# serialize_row
# ---------------------------------------------------------------------------


class TestSerializeRow:
    """One cell per first-level field, nested values flattened."""

    def test_dataclass_with_list_field(self) -> None:
        row = serialize_row(Person("john doe", ["3 the close", "CA"], 15))
        assert _texts(row) == ["john doe", '["3 the close", "CA"]', "15"]

    def test_nested_dataclass(self) -> None:
        @dataclass
        class Customer:
            name: str
            address: Address

        row = serialize_row(Customer("ann", Address("3 the close", "CA")))
        assert _texts(row) == [
            "ann",
            'Address {"street": "3 the close", "state": "CA"}',
        ]

    def test_mapping_value(self) -> None:
        row = serialize_row({"a": 1, "b": {"k": [1, 2]}})
        assert _texts(row) == ["1", '{"k": [1, 2]}']

    def test_tuples(self) -> None:
        row = serialize_row([(1, "a"), Point(3, 4)])
        assert _texts(row) == ['(1, "a")', "Point (3, 4)"]

    def test_scalars(self) -> None:
        row = serialize_row([None, True, False, Color.GREEN, b"\x01\x02", 1.5])
        assert _texts(row) == ["", "true", "false", "GREEN", "[1, 2]", "1.5"]

    def test_top_level_scalar(self) -> None:
        assert _texts(serialize_row("hello")) == ["hello"]

    def test_pydantic_model(self) -> None:
        row = serialize_row(Item(name="x", tags=["a", "b"]))
        assert _texts(row) == ["x", '["a", "b"]']

    def test_nested_model_and_enum(self) -> None:
        row = serialize_row([{"c": Color.RED}, Item(name="y", tags=[])])
        assert _texts(row) == ['{"c": "RED"}', 'Item {"name": "y", "tags": []}']

    def test_non_ascii_kept(self) -> None:
        assert _texts(serialize_row([["caf\u00e9"]])) == ['["caf\u00e9"]']
