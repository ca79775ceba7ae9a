"""
Pytest configuration and shared fixtures for app-prefs tests.
"""

import pytest

from app_prefs.models.config import StorageConfig
from app_prefs.storage.memory import MemoryStorage


class RejectingStorage(MemoryStorage):
    """A memory store whose writes are always refused."""

    async def _set(self, key, value):
        return False


@pytest.fixture
def storage():
    """An empty in-memory adapter."""
    return MemoryStorage()


@pytest.fixture
def rejecting_storage():
    return RejectingStorage()


@pytest.fixture
def prefs_path(tmp_path):
    """Path of a preference file that does not exist yet."""
    return tmp_path / "prefs" / "preferences.json"


@pytest.fixture
def storage_config(prefs_path):
    return StorageConfig(path=prefs_path)
