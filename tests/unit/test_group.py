"""
Unit tests for loading and saving preferences as a group.
"""

import pytest

from app_prefs.core.converters import enum_converter
from app_prefs.core.group import PreferenceGroup
from app_prefs.core.preference import AppPreference
from app_prefs.storage.memory import MemoryStorage

from .test_converters import Theme


def _build_group():
    group = PreferenceGroup()
    group.add(AppPreference(False, "darkMode", save_on_set=False))
    group.add(AppPreference(5, "pollInterval", save_on_set=False))
    group.add(AppPreference(Theme.SYSTEM, "theme", converter=enum_converter(Theme)))
    return group


def test_duplicate_keys_rejected():
    group = PreferenceGroup([AppPreference(1, "a")])
    with pytest.raises(ValueError, match="'a'"):
        group.add(AppPreference(2, "a"))


def test_add_returns_preference():
    group = PreferenceGroup()
    pref = group.add(AppPreference("x", "name"))
    assert group["name"] is pref
    assert "name" in group
    assert len(group) == 1
    assert list(group) == ["name"]


def test_load_all_reads_each_key():
    group = _build_group()
    group.load_all(MemoryStorage({"darkMode": True, "theme": "light"}))
    assert group.as_dict() == {
        "darkMode": True,
        "pollInterval": 5,
        "theme": Theme.LIGHT,
    }


@pytest.mark.asyncio
async def test_save_all_reports_each_result(storage):
    group = _build_group()
    group.load_all(storage)
    group["darkMode"].value = True
    group["pollInterval"].value = 30

    results = await group.save_all()

    assert results == {"darkMode": True, "pollInterval": True, "theme": True}
    assert storage.snapshot() == {
        "darkMode": True,
        "pollInterval": 30,
        "theme": "system",
    }


@pytest.mark.asyncio
async def test_save_all_before_load_returns_none():
    group = _build_group()
    results = await group.save_all()
    assert set(results.values()) == {None}


@pytest.mark.asyncio
async def test_save_all_with_rejecting_storage(rejecting_storage):
    group = _build_group()
    group.load_all(rejecting_storage)
    results = await group.save_all()
    assert set(results.values()) == {False}
