"""
Theme preference persistence (platformdirs + JSON).

The theme is process-wide UI state that lives outside the computational core.
ThemePreferenceStore is its explicit collaborator: ``load()`` initializes it
from disk, ``get_theme()`` reads it and ``set_theme()`` writes it through.

Behavior:
- If the file is missing or unreadable -> defaults are used
- If schema_version mismatches -> defaults are used
- Unknown keys in loaded JSON are ignored with warnings
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_config_dir

from podcast_dashboard.dashboard.theme import ThemeMode, resolve_theme
from podcast_dashboard.utils.logging import get_logger

logger = get_logger(__name__)

# Increment when you make a breaking change to the on-disk JSON schema.
SCHEMA_VERSION: int = 1

APP_NAME = "podcast_dashboard"
PREFERENCES_FILENAME = "preferences.json"


@dataclass
class PreferenceData:
    """JSON-serializable preference payload."""

    schema_version: int = SCHEMA_VERSION
    theme: ThemeMode = ThemeMode.LIGHT

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "theme": self.theme.value,
        }

    @classmethod
    def from_json_dict(cls, d: Dict[str, Any]) -> "PreferenceData":
        """Tolerant loader: ignores unknown keys, falls back on bad values."""
        try:
            schema_version = int(d.get("schema_version", -1))
        except (TypeError, ValueError):
            schema_version = -1

        raw_theme = d.get("theme", ThemeMode.LIGHT.value)
        if raw_theme not in (ThemeMode.LIGHT.value, ThemeMode.DARK.value):
            logger.warning(f"Unknown theme {raw_theme!r} in preferences, using light")
        theme = resolve_theme(raw_theme)

        known_keys = {"schema_version", "theme"}
        for key in d.keys():
            if key not in known_keys:
                logger.warning(f"Unknown key '{key}' in preferences, ignoring")

        return cls(schema_version=schema_version, theme=theme)


class ThemePreferenceStore:
    """Manager for loading/saving PreferenceData to disk."""

    def __init__(self, *, path: Path, data: Optional[PreferenceData] = None):
        self.path = path
        self.data = data if data is not None else PreferenceData()

    @staticmethod
    def default_config_path(
        app_name: str = APP_NAME,
        filename: str = PREFERENCES_FILENAME,
        app_author: str | None = None,
    ) -> Path:
        """
        OS-appropriate per-user config path.

        macOS:   ~/Library/Application Support/podcast_dashboard/preferences.json
        Linux:   ~/.config/podcast_dashboard/preferences.json
        Windows: %APPDATA%\\podcast_dashboard\\preferences.json
        """
        return Path(user_config_dir(app_name, app_author)) / filename

    @classmethod
    def load(
        cls,
        *,
        config_path: Optional[Path] = None,
        app_name: str = APP_NAME,
        filename: str = PREFERENCES_FILENAME,
        schema_version: int = SCHEMA_VERSION,
    ) -> "ThemePreferenceStore":
        """Load preferences from disk, falling back to defaults on any problem."""
        path = config_path or cls.default_config_path(app_name=app_name, filename=filename)
        default_data = PreferenceData(schema_version=schema_version)

        try:
            parsed = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.debug(f"Preferences file not found at {path}, using defaults")
            return cls(path=path, data=default_data)
        except json.JSONDecodeError as e:
            logger.warning(f"Preferences file at {path} is not valid JSON: {e}, using defaults")
            return cls(path=path, data=default_data)
        except OSError as e:
            logger.warning(f"Error reading preferences from {path}: {e}, using defaults")
            return cls(path=path, data=default_data)

        if not isinstance(parsed, dict):
            logger.warning(f"Preferences file at {path} does not contain a dict, using defaults")
            return cls(path=path, data=default_data)

        loaded = PreferenceData.from_json_dict(parsed)
        if loaded.schema_version != schema_version:
            logger.warning(
                f"Preferences schema version mismatch: loaded={loaded.schema_version}, "
                f"expected={schema_version}, resetting to defaults"
            )
            return cls(path=path, data=default_data)
        return cls(path=path, data=loaded)

    def save(self) -> None:
        """Write preferences to disk."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.data.to_json_dict(), indent=2), encoding="utf-8")
            logger.info(f"Saved preferences to {self.path}")
        except OSError as e:
            logger.error(f"Error saving preferences to {self.path}: {e}")
            raise

    def get_theme(self) -> ThemeMode:
        return self.data.theme

    def set_theme(self, theme: ThemeMode | str, *, save: bool = True) -> None:
        """Set the theme and (by default) persist it immediately."""
        self.data.theme = resolve_theme(theme)
        if save:
            self.save()
