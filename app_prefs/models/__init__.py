"""
Data Models Layer.

This package contains the Pydantic model that configures file-backed storage.
"""

from .config import StorageConfig

__all__ = ["StorageConfig"]
