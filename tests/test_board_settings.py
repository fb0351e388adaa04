"""Tests for runtime board settings and startup configuration."""

from datetime import date

import pytest
from pydantic import ValidationError

from pippin.core.board_settings import BoardSettings, SettingsStore, SettingsUpdate
from pippin.core.config import Settings, Theme, get_settings
from pippin.core.exceptions import ConfigError


@pytest.fixture
def store() -> SettingsStore:
    return SettingsStore(
        BoardSettings(sprint_length_days=7, sprint_epoch=date(2025, 1, 1), theme=Theme.warm)
    )


def test_partial_update_only_touches_given_fields(store):
    updated = store.update(SettingsUpdate(theme="forest"))

    assert updated.theme is Theme.forest
    assert updated.sprint_length_days == 7
    assert updated.sprint_epoch == date(2025, 1, 1)
    assert store.get() == updated


def test_zero_and_negative_length_ignored(store):
    store.update(SettingsUpdate(sprint_length_days=0))
    store.update(SettingsUpdate(sprint_length_days=-3))
    assert store.get().sprint_length_days == 7

    store.update(SettingsUpdate(sprint_length_days=14))
    assert store.get().sprint_length_days == 14


def test_empty_or_invalid_epoch_ignored(store):
    store.update(SettingsUpdate(sprint_epoch=""))
    store.update(SettingsUpdate(sprint_epoch="not-a-date"))
    assert store.get().sprint_epoch == date(2025, 1, 1)

    store.update(SettingsUpdate(sprint_epoch="2025-03-03"))
    assert store.get().sprint_epoch == date(2025, 3, 3)


def test_update_replaces_value_instead_of_mutating(store):
    before = store.get()
    store.update(SettingsUpdate(sprint_length_days=10))
    assert before.sprint_length_days == 7
    with pytest.raises(ValidationError):
        before.sprint_length_days = 3


def test_blank_theme_means_unchanged(store):
    updated = store.update(SettingsUpdate(theme="", sprint_length_days=10))

    assert updated.theme is Theme.warm
    assert updated.sprint_length_days == 10


def test_unknown_theme_rejected():
    with pytest.raises(ValidationError):
        SettingsUpdate(theme="neon")


def test_store_built_from_config():
    config = Settings(
        _env_file=None, SPRINT_LENGTH_DAYS=14, SPRINT_EPOCH="2025-02-03", COZY_THEME="forest"
    )
    current = SettingsStore.from_config(config).get()
    assert current == BoardSettings(
        sprint_length_days=14, sprint_epoch=date(2025, 2, 3), theme=Theme.forest
    )


@pytest.mark.parametrize(
    "name,value",
    [
        ("SPRINT_LENGTH_DAYS", "0"),
        ("SPRINT_LENGTH_DAYS", "-7"),
        ("SPRINT_EPOCH", "2025-02-30"),
        ("COZY_THEME", "neon"),
    ],
)
def test_invalid_startup_config_is_fatal(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    get_settings.cache_clear()
    try:
        with pytest.raises(ConfigError):
            get_settings()
    finally:
        get_settings.cache_clear()
