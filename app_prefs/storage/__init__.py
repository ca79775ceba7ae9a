"""
Storage Layer.

This package defines the adapter contract preference cells consume, plus an
in-memory adapter and a JSON file adapter.
"""

from .base import StorageAdapter
from .json_file import JsonFileStorage
from .memory import MemoryStorage

__all__ = ["JsonFileStorage", "MemoryStorage", "StorageAdapter"]
