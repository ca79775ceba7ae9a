"""
Converter pairs that project application types onto a storage-native kind.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")
S = TypeVar("S")
E = TypeVar("E", bound=Enum)
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class Converter(Generic[T, S]):
    """
    A pair of pure functions mapping an application type to and from one of
    the storage-native types.

    ``storage_type`` is the type tag of S and must be bool, int, float, str
    or list[str]. Callers are responsible for ``from_storage(to_storage(x))
    == x`` on the values they use: a cell whose key is absent from storage
    round-trips its current value through both functions on load.
    """

    to_storage: Callable[[T], S]
    from_storage: Callable[[S], T]
    storage_type: Any


def enum_converter(enum_cls: type[E], by: str = "value") -> Converter[E, Any]:
    """
    Stores enum members by value or by name.

    By value, the storage type follows the member values, which must all be
    ints or all be strings.
    """
    if by == "name":
        return Converter(
            to_storage=lambda member: member.name,
            from_storage=lambda name: enum_cls[name],
            storage_type=str,
        )
    if by != "value":
        raise ValueError(f"Enum converter must store by 'value' or 'name', not {by!r}")

    value_types = {type(member.value) for member in enum_cls}
    if value_types <= {int}:
        storage_type: type = int
    elif value_types <= {str}:
        storage_type = str
    else:
        raise ValueError(
            f"Enum {enum_cls.__name__} mixes value types; store it by name instead."
        )
    return Converter(
        to_storage=lambda member: member.value,
        from_storage=enum_cls,
        storage_type=storage_type,
    )


def datetime_converter() -> Converter[datetime, str]:
    """Stores datetimes as ISO-8601 strings, keeping any timezone offset."""
    return Converter(
        to_storage=datetime.isoformat,
        from_storage=datetime.fromisoformat,
        storage_type=str,
    )


def date_converter() -> Converter[date, str]:
    """Stores dates as ``YYYY-MM-DD`` strings."""
    return Converter(
        to_storage=date.isoformat,
        from_storage=date.fromisoformat,
        storage_type=str,
    )


def path_converter() -> Converter[Path, str]:
    return Converter(to_storage=str, from_storage=Path, storage_type=str)


def json_converter() -> Converter[Any, str]:
    """Stores JSON-compatible objects (dicts, lists, scalars) as JSON text."""
    return Converter(
        to_storage=lambda obj: json.dumps(obj, sort_keys=True),
        from_storage=json.loads,
        storage_type=str,
    )


def model_converter(model_cls: type[M]) -> Converter[M, str]:
    """Stores a Pydantic model as its JSON representation."""
    return Converter(
        to_storage=lambda model: model.model_dump_json(),
        from_storage=model_cls.model_validate_json,
        storage_type=str,
    )
