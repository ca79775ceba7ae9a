"""
Pydantic model for storage configuration.
Provides validation for the settings of the JSON file adapter.
"""

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from app_prefs.exceptions import ConfigurationError

DEFAULT_FILE_NAME = "preferences.json"


def get_config_dir(app_name: str) -> Path:
    """Returns the per-user configuration directory for an application."""
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / app_name


def default_preferences_path(app_name: str) -> Path:
    """
    Returns the preference file to use when none is given, honouring the
    ``APP_PREFS_FILE`` environment variable.
    """
    override = os.getenv("APP_PREFS_FILE")
    if override:
        return Path(override).expanduser()
    return get_config_dir(app_name) / DEFAULT_FILE_NAME


class StorageConfig(BaseModel):
    """A validated configuration model for a JSON preference file."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    path: Path
    prefix: str = ""
    indent: int | None = 2
    create_parents: bool = True

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: Path) -> Path:
        """Ensures the path names a file, not a directory."""
        v = v.expanduser()
        if v.is_dir():
            raise ValueError(f"Preference path '{v}' is a directory.")
        if not v.name:
            raise ValueError("Preference path must include a file name.")
        return v

    @field_validator("prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Prefixes become part of every stored key, so they must be printable."""
        if any(ch.isspace() for ch in v):
            raise ValueError("Key prefix cannot contain whitespace.")
        return v

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v: int | None) -> int | None:
        if v is not None and not 0 <= v <= 8:
            raise ValueError("Indent must be between 0 and 8, or None for compact.")
        return v


def load_storage_config(**options: Any) -> StorageConfig:
    """
    Builds a StorageConfig from keyword options.

    Raises:
        ConfigurationError: If validation fails.
    """
    try:
        return StorageConfig(**options)
    except ValidationError as e:
        raise ConfigurationError(f"Storage configuration validation failed:\n{e}") from e
