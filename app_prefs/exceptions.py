"""
Defines custom exceptions for the library to allow for more specific error handling.
"""


class AppPrefsError(Exception):
    """Base exception for all library-specific errors."""


class UnsupportedTypeError(AppPrefsError):
    """
    Raised when a preference type has no storage-native kind and no converter
    narrows it to one.
    """


class TypeMismatchError(AppPrefsError):
    """Raised when a value cannot be read or written as the preference's kind."""


class ConfigurationError(AppPrefsError):
    """Raised for issues related to storage configuration loading or validation."""


class StorageError(AppPrefsError):
    """Raised when a preference file cannot be read or parsed."""
