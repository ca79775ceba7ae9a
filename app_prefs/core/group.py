"""
A named collection of preference cells that are loaded and saved together.
"""

import asyncio
import logging
from collections.abc import Iterable, Iterator
from typing import Any

from app_prefs.core.preference import AppPreference
from app_prefs.storage.base import StorageAdapter

log = logging.getLogger(__name__)


class PreferenceGroup:
    """Holds preferences with unique keys and synchronizes them as a batch."""

    def __init__(self, preferences: Iterable[AppPreference] = ()):
        self._preferences: dict[str, AppPreference] = {}
        for preference in preferences:
            self.add(preference)

    def add(self, preference: AppPreference) -> AppPreference:
        """Registers a preference and returns it, so it can be used inline."""
        if preference.key in self._preferences:
            raise ValueError(f"A preference with key '{preference.key}' already exists.")
        self._preferences[preference.key] = preference
        return preference

    def load_all(self, adapter: StorageAdapter) -> None:
        """Loads every preference from the adapter."""
        for preference in self._preferences.values():
            preference.load_value(adapter)
        log.debug(f"Loaded {len(self._preferences)} preferences.")

    async def save_all(self) -> dict[str, bool | None]:
        """
        Saves every preference concurrently.

        Returns:
            A mapping of each key to the result of its ``save_value`` call.
        """
        keys = list(self._preferences)
        results = await asyncio.gather(
            *(self._preferences[key].save_value() for key in keys)
        )
        failed = [key for key, result in zip(keys, results) if result is False]
        if failed:
            log.warning(f"Storage rejected writes for: {', '.join(failed)}")
        return dict(zip(keys, results))

    def as_dict(self) -> dict[str, Any]:
        """Returns a snapshot of the cached values keyed by preference key."""
        return {key: pref.value for key, pref in self._preferences.items()}

    def __getitem__(self, key: str) -> AppPreference:
        return self._preferences[key]

    def __contains__(self, key: object) -> bool:
        return key in self._preferences

    def __iter__(self) -> Iterator[str]:
        return iter(self._preferences)

    def __len__(self) -> int:
        return len(self._preferences)
