"""
The contract a key-value store must satisfy to back preference cells.
"""

from collections.abc import Awaitable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StorageAdapter(Protocol):
    """
    An opened, already-initialized handle to a key-value persistent store.

    Getters are synchronous and return whatever is stored under the key, or
    None when the key is absent. Setters return an awaitable resolving to
    True when the write was persisted and False when the store rejected it.
    """

    def get_bool(self, key: str) -> Any | None: ...

    def get_int(self, key: str) -> Any | None: ...

    def get_double(self, key: str) -> Any | None: ...

    def get_string(self, key: str) -> Any | None: ...

    def get_string_list(self, key: str) -> Any | None: ...

    def set_bool(self, key: str, value: bool) -> Awaitable[bool]: ...

    def set_int(self, key: str, value: int) -> Awaitable[bool]: ...

    def set_double(self, key: str, value: float) -> Awaitable[bool]: ...

    def set_string(self, key: str, value: str) -> Awaitable[bool]: ...

    def set_string_list(self, key: str, value: list[str]) -> Awaitable[bool]: ...
