"""
app-prefs: typed, in-memory preference cells over a key-value storage adapter.
"""

from .core import (
    AppPreference,
    Converter,
    PreferenceGroup,
    StorageKind,
    resolve_kind,
)
from .exceptions import (
    AppPrefsError,
    ConfigurationError,
    StorageError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from .storage import JsonFileStorage, MemoryStorage, StorageAdapter

__version__ = "1.0.0"

__all__ = [
    "AppPreference",
    "AppPrefsError",
    "ConfigurationError",
    "Converter",
    "JsonFileStorage",
    "MemoryStorage",
    "PreferenceGroup",
    "StorageAdapter",
    "StorageError",
    "StorageKind",
    "TypeMismatchError",
    "UnsupportedTypeError",
    "__version__",
    "resolve_kind",
]
