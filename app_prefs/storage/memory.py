"""
An in-process storage adapter backed by a dictionary.
"""

import copy
import logging
from typing import Any

log = logging.getLogger(__name__)


class MemoryStorage:
    """
    Keeps preferences in a plain dict. Every write succeeds.

    Useful for tests and for sessions whose preferences should not outlive
    the process.
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = dict(initial or {})

    def _get(self, key: str) -> Any | None:
        value = self._data.get(key)
        return list(value) if isinstance(value, list) else value

    def get_bool(self, key: str) -> Any | None:
        return self._get(key)

    def get_int(self, key: str) -> Any | None:
        return self._get(key)

    def get_double(self, key: str) -> Any | None:
        return self._get(key)

    def get_string(self, key: str) -> Any | None:
        return self._get(key)

    def get_string_list(self, key: str) -> Any | None:
        return self._get(key)

    async def _set(self, key: str, value: Any) -> bool:
        self._data[key] = value
        return True

    async def set_bool(self, key: str, value: bool) -> bool:
        return await self._set(key, value)

    async def set_int(self, key: str, value: int) -> bool:
        return await self._set(key, value)

    async def set_double(self, key: str, value: float) -> bool:
        return await self._set(key, value)

    async def set_string(self, key: str, value: str) -> bool:
        return await self._set(key, value)

    async def set_string_list(self, key: str, value: list[str]) -> bool:
        return await self._set(key, list(value))

    def contains_key(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> set[str]:
        return set(self._data)

    async def remove(self, key: str) -> bool:
        self._data.pop(key, None)
        return True

    async def clear(self) -> bool:
        log.debug(f"Clearing {len(self._data)} in-memory preferences.")
        self._data.clear()
        return True

    def snapshot(self) -> dict[str, Any]:
        """Returns a deep copy of everything stored."""
        return copy.deepcopy(self._data)
