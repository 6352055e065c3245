"""Turning application values into table rows.

Two routes in:

* :class:`IntoRow` - a type supplies ``headers()`` and ``into_row()``
  itself. :func:`row_adapter` derives both for a dataclass; tuples,
  dataclass instances and pydantic models are handled without it.
* :func:`serialize_row` - walks any value and emits one cell per
  first-level field, flattening anything nested deeper into a single cell
  of JSON-like text.
"""

from __future__ import annotations

import dataclasses
import json
from enum import Enum
from typing import Any, Callable, Mapping, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

from pi.table.row import Row

T = TypeVar("T")


@runtime_checkable
class IntoRow(Protocol):
    """A type that knows how to turn itself into a table row."""

    def headers(self) -> Row: ...

    def into_row(self) -> Row: ...


# ---------------------------------------------------------------------------
# Reflection helpers
# ---------------------------------------------------------------------------


def _is_dataclass_instance(value: object) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _is_namedtuple(value: object) -> bool:
    return isinstance(value, tuple) and hasattr(value, "_fields")


def field_names(value: object) -> list[str] | None:
    """Names of *value*'s fields, or ``None`` if it has no named fields."""
    if _is_dataclass_instance(value):
        return [f.name for f in dataclasses.fields(value)]
    if isinstance(value, BaseModel):
        return list(type(value).model_fields)
    if _is_namedtuple(value):
        return list(value._fields)
    if isinstance(value, Mapping):
        return [str(key) for key in value]
    return None


def _field_values(value: object) -> list[Any]:
    if _is_dataclass_instance(value):
        return [getattr(value, f.name) for f in dataclasses.fields(value)]
    if isinstance(value, BaseModel):
        return [getattr(value, name) for name in type(value).model_fields]
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


# ---------------------------------------------------------------------------
# IntoRow adapters
# ---------------------------------------------------------------------------


def row_adapter(cls: type[T]) -> type[T]:
    """Class decorator giving a dataclass ``headers()`` and ``into_row()``.

    Headers are the field names; cells are ``str()`` of each field.
    """
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls.__name__} is not a dataclass")
    names = [f.name for f in dataclasses.fields(cls)]
    if not names:
        raise TypeError(f"{cls.__name__} has no fields to display")

    def headers(self: T) -> Row:
        return Row(names)

    def into_row(self: T) -> Row:
        return Row(str(getattr(self, name)) for name in names)

    cls.headers = headers  # type: ignore[attr-defined]
    cls.into_row = into_row  # type: ignore[attr-defined]
    return cls


def tuple_headers(value: tuple) -> Row:
    """Header row for a tuple: field names of a namedtuple, else type names."""
    if _is_namedtuple(value):
        return Row(value._fields)
    return Row(type(item).__name__ for item in value)


def tuple_row(value: tuple) -> Row:
    return Row(str(item) for item in value)


def _adapter_for(item: object) -> tuple[Callable[[], Row], Callable[[], Row]]:
    if isinstance(item, IntoRow):
        return item.headers, item.into_row
    if _is_dataclass_instance(item) or isinstance(item, BaseModel):
        names = field_names(item) or []
        return (
            lambda: Row(names),
            lambda: Row(str(getattr(item, name)) for name in names),
        )
    if isinstance(item, tuple):
        return (lambda: tuple_headers(item), lambda: tuple_row(item))
    raise TypeError(f"cannot turn {type(item).__name__} into a table row")


def headers_of(item: object) -> Row:
    return _adapter_for(item)[0]()


def into_row(item: object) -> Row:
    return _adapter_for(item)[1]()


# ---------------------------------------------------------------------------
# Generic value serializer
# ---------------------------------------------------------------------------


def serialize_row(value: object) -> Row:
    """Build a row with one cell per first-level field of *value*.

    A scalar becomes a single cell. Composite fields are flattened into one
    cell of JSON-like text.
    """
    row = Row()
    for item in _field_values(value):
        row.add_cell(_cell_text(item))
    return row


def _cell_text(item: object) -> str:
    if _is_dataclass_instance(item) or isinstance(item, BaseModel):
        return _bracketed(type(item).__name__, "{}", _keyed(item))
    if isinstance(item, Mapping):
        return _bracketed("", "{}", _keyed(item))
    if _is_namedtuple(item):
        return _bracketed(type(item).__name__, "()", [_to_json(v) for v in item])
    if isinstance(item, tuple):
        return _bracketed("", "()", [_to_json(v) for v in item])
    if isinstance(item, (list, set, frozenset)):
        return _bracketed("", "[]", [_to_json(v) for v in item])
    return _scalar_text(item)


def _bracketed(prefix: str, brackets: str, parts: list[str]) -> str:
    body = f"{brackets[0]}{', '.join(parts)}{brackets[1]}"
    return f"{prefix} {body}" if prefix else body


def _keyed(value: object) -> list[str]:
    if isinstance(value, Mapping):
        pairs = value.items()
    else:
        pairs = zip(field_names(value) or [], _field_values(value))
    return [f"{_to_json(str(key))}: {_to_json(item)}" for key, item in pairs]


def _scalar_text(item: object) -> str:
    if item is None:
        return ""
    if isinstance(item, bool):
        return "true" if item else "false"
    if isinstance(item, Enum):
        return item.name
    if isinstance(item, (bytes, bytearray)):
        return str(list(item))
    return str(item)


def _plain(value: object) -> Any:
    """Convert *value* into something :func:`json.dumps` accepts."""
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if _is_dataclass_instance(value):
        return {f.name: _plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_plain(v) for v in value]
    return value


def _to_json(value: object) -> str:
    return json.dumps(_plain(value), default=str, ensure_ascii=False)
