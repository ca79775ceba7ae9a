"""
A storage adapter that keeps preferences in memory and persists them to a
JSON file in the background.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from app_prefs.exceptions import StorageError
from app_prefs.models.config import StorageConfig, load_storage_config

log = logging.getLogger(__name__)


class JsonFileStorage:
    """
    Preference storage backed by a single JSON object on disk.

    The file is read once when the storage is opened; reads are then served
    from memory. Every write updates memory first and then rewrites the file,
    one write at a time, through a temporary file that replaces the original.

    When the configuration sets a key prefix, only keys carrying that prefix
    are visible and every key written is stored with it, so several
    components can share one file.
    """

    def __init__(self, config: StorageConfig, data: dict[str, Any] | None = None):
        self.config = config
        self._data: dict[str, Any] = data if data is not None else {}
        self._write_lock = asyncio.Lock()

    @classmethod
    async def open(cls, config: StorageConfig | Path | str) -> "JsonFileStorage":
        """
        Opens the preference file described by ``config``.

        A missing or empty file opens as an empty store.

        Raises:
            ConfigurationError: If ``config`` is a path that fails validation.
            StorageError: If the file cannot be read or is not a JSON object.
        """
        if not isinstance(config, StorageConfig):
            config = load_storage_config(path=config)
        data = await cls._read_file(config.path)
        log.debug(f"Opened preference file '{config.path}' with {len(data)} entries.")
        return cls(config, data)

    @staticmethod
    async def _read_file(path: Path) -> dict[str, Any]:
        if not path.is_file():
            return {}

        try:
            async with aiofiles.open(path, encoding="utf-8") as f:
                text = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Could not read preference file '{path}': {e}") from e

        if not text.strip():
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageError(f"Preference file '{path}' is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(
                f"Preference file '{path}' must contain a JSON object, "
                f"found {type(data).__name__}."
            )
        return data

    async def reload(self) -> None:
        """Discards the in-memory state and reads the file again."""
        self._data = await self._read_file(self.config.path)

    def _full_key(self, key: str) -> str:
        return f"{self.config.prefix}{key}"

    def get(self, key: str) -> Any | None:
        """Returns the raw value stored under ``key``, whatever its kind."""
        value = self._data.get(self._full_key(key))
        return list(value) if isinstance(value, list) else value

    def get_bool(self, key: str) -> Any | None:
        return self.get(key)

    def get_int(self, key: str) -> Any | None:
        return self.get(key)

    def get_double(self, key: str) -> Any | None:
        return self.get(key)

    def get_string(self, key: str) -> Any | None:
        return self.get(key)

    def get_string_list(self, key: str) -> Any | None:
        return self.get(key)

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

    async def _set(self, key: str, value: Any) -> bool:
        self._data[self._full_key(key)] = value
        return await self._flush()

    def contains_key(self, key: str) -> bool:
        return self._full_key(key) in self._data

    def keys(self) -> set[str]:
        """Returns the visible keys, without the prefix."""
        prefix = self.config.prefix
        return {k[len(prefix) :] for k in self._data if k.startswith(prefix)}

    def items(self) -> dict[str, Any]:
        """Returns the visible keys and their raw values."""
        return {key: self.get(key) for key in sorted(self.keys())}

    async def remove(self, key: str) -> bool:
        full_key = self._full_key(key)
        if full_key not in self._data:
            return True
        del self._data[full_key]
        return await self._flush()

    async def clear(self) -> bool:
        """Removes every visible key; keys under other prefixes are kept."""
        for key in self.keys():
            del self._data[self._full_key(key)]
        return await self._flush()

    async def _flush(self) -> bool:
        """Writes the current state to disk. Returns False if the write failed."""
        async with self._write_lock:
            path = self.config.path
            tmp_path = path.with_name(f"{path.name}.tmp")
            payload = json.dumps(
                self._data,
                indent=self.config.indent,
                sort_keys=True,
                ensure_ascii=False,
            )
            try:
                if self.config.create_parents:
                    await aiofiles.os.makedirs(path.parent, exist_ok=True)
                async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                    await f.write(payload)
                await aiofiles.os.replace(tmp_path, path)
            except OSError as e:
                log.warning(f"Failed to write preference file '{path}': {e}")
                return False
            return True
