"""
The closed set of storage-native kinds and the dispatch from Python type tags
to the storage adapter accessors that read and write each kind.
"""

import typing
from collections.abc import Awaitable
from enum import Enum
from typing import Any

from app_prefs.exceptions import TypeMismatchError, UnsupportedTypeError
from app_prefs.storage.base import StorageAdapter


class StorageKind(Enum):
    """A value shape the persistent store can hold directly."""

    BOOL = ("bool", "get_bool", "set_bool")
    INT = ("int", "get_int", "set_int")
    FLOAT = ("double", "get_double", "set_double")
    STRING = ("string", "get_string", "set_string")
    STRING_LIST = ("string_list", "get_string_list", "set_string_list")

    def __init__(self, label: str, getter: str, setter: str):
        self.label = label
        self.getter = getter
        self.setter = setter

    def accepts(self, value: Any) -> bool:
        """Checks whether a value has this kind's shape."""
        if self is StorageKind.BOOL:
            return isinstance(value, bool)
        if self is StorageKind.INT:
            return isinstance(value, int) and not isinstance(value, bool)
        if self is StorageKind.FLOAT:
            # Whole numbers written by other tools come back as ints.
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        if self is StorageKind.STRING:
            return isinstance(value, str)
        return isinstance(value, (list, tuple)) and all(
            isinstance(item, str) for item in value
        )

    def coerce(self, value: Any, key: str) -> Any:
        """
        Returns the value normalized to this kind.

        Raises:
            TypeMismatchError: If the value does not have this kind's shape.
        """
        if not self.accepts(value):
            raise TypeMismatchError(
                f"Value for key '{key}' is a {type(value).__name__}, "
                f"expected kind '{self.label}'."
            )
        if self is StorageKind.FLOAT:
            return float(value)
        if self is StorageKind.STRING_LIST:
            return list(value)
        return value

    def read(self, adapter: StorageAdapter, key: str) -> Any | None:
        """Reads a key through this kind's getter. Returns None if it is absent."""
        try:
            stored = getattr(adapter, self.getter)(key)
        except (TypeError, ValueError) as e:
            raise TypeMismatchError(
                f"Stored value for key '{key}' cannot be read as kind "
                f"'{self.label}': {e}"
            ) from e
        if stored is None:
            return None
        return self.coerce(stored, key)

    def write(self, adapter: StorageAdapter, key: str, value: Any) -> Awaitable[bool]:
        """Issues a write through this kind's setter."""
        return getattr(adapter, self.setter)(key, self.coerce(value, key))


_KIND_BY_TYPE: dict[Any, StorageKind] = {
    bool: StorageKind.BOOL,
    int: StorageKind.INT,
    float: StorageKind.FLOAT,
    str: StorageKind.STRING,
    list: StorageKind.STRING_LIST,
}


def resolve_kind(value_type: Any) -> StorageKind:
    """
    Maps a type tag to its storage-native kind.

    Matching is by type identity, so ``bool`` never resolves to INT. ``list``,
    ``list[str]`` and ``typing.List[str]`` all resolve to STRING_LIST.

    Raises:
        UnsupportedTypeError: If the type is not one of the five storage kinds.
    """
    kind = _KIND_BY_TYPE.get(value_type)
    if kind is not None:
        return kind

    if typing.get_origin(value_type) is list and typing.get_args(value_type) in (
        (str,),
        (),
    ):
        return StorageKind.STRING_LIST

    if typing.get_origin(value_type) is None and isinstance(value_type, type):
        name = value_type.__name__
    else:
        name = repr(value_type)
    raise UnsupportedTypeError(
        f"Unsupported preference type: {name}. Use bool, int, float, str or "
        "list[str], or supply a converter."
    )


def kind_of_value(value: Any) -> StorageKind | None:
    """Infers the kind of a raw stored value, or None if it has no kind."""
    for kind in (StorageKind.BOOL, StorageKind.INT, StorageKind.STRING):
        if kind.accepts(value):
            return kind
    if isinstance(value, float):
        return StorageKind.FLOAT
    if isinstance(value, list) and StorageKind.STRING_LIST.accepts(value):
        return StorageKind.STRING_LIST
    return None
