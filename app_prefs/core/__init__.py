"""
Core preference engine.

This package contains the preference cell, the storage-kind dispatcher it
uses to pick adapter accessors, and the converter pairs that let
non-native types be stored.
"""

from .converters import Converter
from .group import PreferenceGroup
from .kinds import StorageKind, resolve_kind
from .preference import AppPreference

__all__ = [
    "AppPreference",
    "Converter",
    "PreferenceGroup",
    "StorageKind",
    "resolve_kind",
]
