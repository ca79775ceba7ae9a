"""
The preference cell: one named, typed setting cached in memory and
synchronized with a storage adapter on demand.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from app_prefs.core.converters import Converter
from app_prefs.core.kinds import StorageKind, resolve_kind
from app_prefs.exceptions import AppPrefsError
from app_prefs.storage.base import StorageAdapter

log = logging.getLogger(__name__)

T = TypeVar("T")

# Strong references to fire-and-forget saves so they are not collected mid-flight.
_background_saves: set[asyncio.Task] = set()


class AppPreference(Generic[T]):
    """
    An app preference of type T that can be loaded from and saved to a
    storage adapter.

    Without a converter, T must be one of the storage-native types (bool,
    int, float, str or list[str]). With a converter, T is unconstrained and
    the converter's storage type must be storage-native instead. The type is
    only checked when the preference first touches storage.

    The adapter used for saving is bound by ``load_value``. Saving before a
    load leaves storage untouched and resolves to None.
    """

    def __init__(
        self,
        default_value: T,
        key: str,
        save_on_set: bool = True,
        value_type: Any = None,
        converter: Converter[T, Any] | None = None,
    ):
        """
        Creates a preference. No I/O is performed.

        Args:
            default_value: The value used until a stored value is loaded.
            key: The key identifying the preference in storage.
            save_on_set: Whether assigning ``value`` starts a save.
            value_type: The type tag of T. Defaults to the type of
                ``default_value``. Ignored when a converter is given.
            converter: Maps T to and from a storage-native type.
        """
        self.key = key
        self.default_value = default_value
        self.save_on_set = save_on_set
        self.converter = converter

        if converter is not None:
            self._storage_type = converter.storage_type
        elif value_type is not None:
            self._storage_type = value_type
        else:
            self._storage_type = type(default_value)

        self._value = default_value
        self._adapter: StorageAdapter | None = None
        self._kind: StorageKind | None = None
        self._pending_save: asyncio.Task | None = None

    @classmethod
    def converted(
        cls,
        default_value: T,
        key: str,
        *,
        to_storage: Callable[[T], Any],
        from_storage: Callable[[Any], T],
        storage_type: Any,
        save_on_set: bool = True,
    ) -> "AppPreference[T]":
        """Creates a preference that stores its value through a converter pair."""
        return cls(
            default_value,
            key,
            save_on_set=save_on_set,
            converter=Converter(to_storage, from_storage, storage_type),
        )

    @property
    def value(self) -> T:
        """The cached value. Never touches storage."""
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self._value = new_value
        if self.save_on_set:
            self._start_save()

    @property
    def kind(self) -> StorageKind:
        """
        The storage-native kind this preference is stored as.

        Raises:
            UnsupportedTypeError: If the storage type has no kind.
        """
        if self._kind is None:
            self._kind = resolve_kind(self._storage_type)
        return self._kind

    @property
    def adapter(self) -> StorageAdapter | None:
        """The adapter bound by the last load, if any."""
        return self._adapter

    @property
    def pending_save(self) -> asyncio.Task | None:
        """The most recent save started by the ``value`` setter, if any."""
        return self._pending_save

    def load_value(self, adapter: StorageAdapter) -> None:
        """
        Binds the adapter and refreshes the cached value from it.

        If the key is absent, the cached value is kept. With a converter, the
        cached value is round-tripped through the converter instead.

        Raises:
            UnsupportedTypeError: If the storage type has no kind.
            TypeMismatchError: If the stored value is of a different kind.
        """
        self._adapter = adapter
        kind = self.kind
        stored = kind.read(adapter, self.key)
        found = stored is not None

        if self.converter is None:
            if stored is not None:
                self._value = stored
        else:
            if stored is None:
                stored = self.converter.to_storage(self._value)
            self._value = self.converter.from_storage(stored)

        log.debug(
            f"Loaded preference '{self.key}' ({kind.label}): "
            f"{'stored value' if found else 'default kept'}."
        )

    async def save_value(self) -> bool | None:
        """
        Writes the cached value to the bound adapter.

        Returns:
            True if the write was persisted, False if the adapter rejected it,
            or None if no adapter has been bound by ``load_value`` yet.

        Raises:
            UnsupportedTypeError: If the storage type has no kind.
            TypeMismatchError: If the value to store is not of that kind.
        """
        kind = self.kind
        stored = (
            self._value
            if self.converter is None
            else self.converter.to_storage(self._value)
        )

        if self._adapter is None:
            log.debug(f"Preference '{self.key}' has no adapter bound, not saved.")
            return None

        result = await kind.write(self._adapter, self.key, stored)
        if result:
            log.debug(f"Saved preference '{self.key}' ({kind.label}).")
        else:
            log.warning(f"Storage rejected the write for preference '{self.key}'.")
        return result

    def reset(self) -> None:
        """Restores the default value, saving it if ``save_on_set`` is enabled."""
        self.value = self.default_value

    def _start_save(self) -> None:
        """Starts a save without waiting for it to finish."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop to hand the save to; complete it before returning.
            try:
                asyncio.run(self.save_value())
            except AppPrefsError as e:
                log.error(f"Background save of preference '{self.key}' failed: {e}")
            return

        task = loop.create_task(self.save_value(), name=f"save-preference-{self.key}")
        self._pending_save = task
        _background_saves.add(task)
        task.add_done_callback(self._on_save_done)

    def _on_save_done(self, task: asyncio.Task) -> None:
        _background_saves.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            log.error(f"Background save of preference '{self.key}' failed: {error}")

    def __repr__(self) -> str:
        return f"AppPreference(key={self.key!r}, value={self._value!r})"
