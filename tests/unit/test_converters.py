"""
Unit tests for preferences stored through converter pairs.
"""

from datetime import date, datetime, timedelta, timezone
from enum import Enum, IntEnum
from pathlib import Path

import pytest
from pydantic import BaseModel

from app_prefs.core.converters import (
    Converter,
    date_converter,
    datetime_converter,
    enum_converter,
    json_converter,
    model_converter,
    path_converter,
)
from app_prefs.core.kinds import StorageKind
from app_prefs.core.preference import AppPreference
from app_prefs.exceptions import TypeMismatchError, UnsupportedTypeError
from app_prefs.storage.memory import MemoryStorage


class Theme(Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class Quality(IntEnum):
    LOW = 1
    HIGH = 3


class Mixed(Enum):
    A = 1
    B = "b"


class WindowGeometry(BaseModel):
    width: int = 900
    height: int = 600
    maximized: bool = False


async def _save_and_reload(storage, default, key, converter, new_value):
    pref = AppPreference(default, key, save_on_set=False, converter=converter)
    pref.load_value(storage)
    pref.value = new_value
    assert await pref.save_value() is True

    fresh = AppPreference(default, key, converter=converter)
    fresh.load_value(storage)
    return fresh.value


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "default, new_value, converter, stored",
    [
        (Theme.LIGHT, Theme.DARK, enum_converter(Theme), "dark"),
        (Theme.LIGHT, Theme.SYSTEM, enum_converter(Theme, by="name"), "SYSTEM"),
        (Quality.LOW, Quality.HIGH, enum_converter(Quality), 3),
        (date(2024, 1, 1), date(2024, 2, 29), date_converter(), "2024-02-29"),
        (Path("/tmp"), Path("/var/data"), path_converter(), "/var/data"),
        ({}, {"b": [1, 2], "a": None}, json_converter(), '{"a": null, "b": [1, 2]}'),
    ],
)
async def test_converted_round_trip(storage, default, new_value, converter, stored):
    assert await _save_and_reload(storage, default, "pref", converter, new_value) == new_value
    assert storage.snapshot()["pref"] == stored


@pytest.mark.asyncio
async def test_datetime_round_trip_keeps_offset(storage):
    moment = datetime(2024, 5, 17, 8, 30, tzinfo=timezone(timedelta(hours=2)))
    loaded = await _save_and_reload(
        storage, datetime(2000, 1, 1), "last_sync", datetime_converter(), moment
    )
    assert loaded == moment
    assert loaded.utcoffset() == timedelta(hours=2)


@pytest.mark.asyncio
async def test_model_round_trip(storage):
    geometry = WindowGeometry(width=1280, height=720, maximized=True)
    loaded = await _save_and_reload(
        storage, WindowGeometry(), "window", model_converter(WindowGeometry), geometry
    )
    assert loaded == geometry
    assert isinstance(storage.get_string("window"), str)


def test_enum_converter_storage_types():
    assert enum_converter(Theme).storage_type is str
    assert enum_converter(Quality).storage_type is int
    assert enum_converter(Theme, by="name").storage_type is str


def test_enum_converter_rejects_mixed_values():
    with pytest.raises(ValueError):
        enum_converter(Mixed)
    assert enum_converter(Mixed, by="name").storage_type is str


def test_enum_converter_rejects_unknown_mode():
    with pytest.raises(ValueError):
        enum_converter(Theme, by="ordinal")


def test_absent_key_round_trips_default_through_converter(storage):
    pref = AppPreference(Theme.DARK, "theme", converter=enum_converter(Theme))
    pref.load_value(storage)
    assert pref.value is Theme.DARK
    assert pref.kind is StorageKind.STRING


def test_absent_key_applies_converter_even_when_lossy(storage):
    pref = AppPreference.converted(
        "MixedCase",
        "label",
        to_storage=str.upper,
        from_storage=str.lower,
        storage_type=str,
    )
    pref.load_value(storage)
    assert pref.value == "mixedcase"


def test_converted_factory_builds_converter():
    pref = AppPreference.converted(
        Theme.LIGHT,
        "theme",
        to_storage=lambda t: t.value,
        from_storage=Theme,
        storage_type=str,
        save_on_set=False,
    )
    assert isinstance(pref.converter, Converter)
    assert pref.save_on_set is False


def test_converted_load_type_mismatch():
    pref = AppPreference(Quality.LOW, "quality", converter=enum_converter(Quality))
    with pytest.raises(TypeMismatchError):
        pref.load_value(MemoryStorage({"quality": "high"}))


def test_converter_with_unsupported_storage_type(storage):
    converter = Converter(to_storage=tuple, from_storage=list, storage_type=tuple)
    pref = AppPreference([1, 2], "pair", converter=converter)
    with pytest.raises(UnsupportedTypeError):
        pref.load_value(storage)


@pytest.mark.asyncio
async def test_converted_save_uses_storage_kind(storage):
    pref = AppPreference(Quality.LOW, "quality", converter=enum_converter(Quality))
    pref.load_value(storage)
    pref.value = Quality.HIGH
    await pref.pending_save
    assert storage.get_int("quality") == 3
    assert type(storage.get_int("quality")) is int
