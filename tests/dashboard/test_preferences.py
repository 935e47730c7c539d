# tests/dashboard/test_preferences.py
from __future__ import annotations

import json
import logging
from pathlib import Path

from podcast_dashboard.dashboard.preferences import (
    SCHEMA_VERSION,
    PreferenceData,
    ThemePreferenceStore,
)
from podcast_dashboard.dashboard.theme import ThemeMode


def test_missing_file_uses_light_default(tmp_path: Path) -> None:
    store = ThemePreferenceStore.load(config_path=tmp_path / "prefs.json")
    assert store.get_theme() is ThemeMode.LIGHT
    assert not (tmp_path / "prefs.json").exists()


def test_set_theme_persists(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "prefs.json"
    store = ThemePreferenceStore.load(config_path=path)
    store.set_theme("dark")

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == {"schema_version": SCHEMA_VERSION, "theme": "dark"}
    assert ThemePreferenceStore.load(config_path=path).get_theme() is ThemeMode.DARK


def test_set_theme_without_save(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    store = ThemePreferenceStore.load(config_path=path)
    store.set_theme(ThemeMode.DARK, save=False)
    assert store.get_theme() is ThemeMode.DARK
    assert not path.exists()


def test_invalid_json_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")
    assert ThemePreferenceStore.load(config_path=path).get_theme() is ThemeMode.LIGHT


def test_non_dict_payload_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text('["dark"]', encoding="utf-8")
    assert ThemePreferenceStore.load(config_path=path).get_theme() is ThemeMode.LIGHT


def test_schema_mismatch_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({"schema_version": SCHEMA_VERSION + 1, "theme": "dark"}), encoding="utf-8")
    store = ThemePreferenceStore.load(config_path=path)
    assert store.get_theme() is ThemeMode.LIGHT
    assert store.data.schema_version == SCHEMA_VERSION


def test_unknown_keys_and_bad_theme_are_tolerated(tmp_path: Path, caplog) -> None:
    path = tmp_path / "prefs.json"
    path.write_text(
        json.dumps({"schema_version": SCHEMA_VERSION, "theme": "sepia", "font": "large"}),
        encoding="utf-8",
    )
    with caplog.at_level(logging.WARNING, logger="podcast_dashboard"):
        store = ThemePreferenceStore.load(config_path=path)
    assert store.get_theme() is ThemeMode.LIGHT
    messages = " ".join(r.getMessage() for r in caplog.records)
    assert "font" in messages
    assert "sepia" in messages


def test_preference_data_round_trip() -> None:
    data = PreferenceData(theme=ThemeMode.DARK)
    assert PreferenceData.from_json_dict(data.to_json_dict()) == data


def test_default_config_path_uses_app_dir() -> None:
    path = ThemePreferenceStore.default_config_path()
    assert path.name == "preferences.json"
    assert "podcast_dashboard" in str(path)
