"""
Application settings management for user preferences.

Tracks the preferred calendar provider (Apple or Google), the Apple Calendar
to create events in, the date parser languages and whether inverted intervals
are rejected. Settings are persisted to the user's Application Support
directory so they survive across app restarts.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import List, Literal, TypedDict

from phrasecal.logging_helper import Log

CalendarPreference = Literal["apple", "google"]
CALENDAR_CHOICES = ("apple", "google")


class SettingsSchema(TypedDict, total=False):
    preferred_calendar: CalendarPreference
    calendar_name: str
    languages: List[str]
    reject_inverted_intervals: bool


def _default_settings_dir() -> Path:
    override = os.environ.get("PHRASECAL_SETTINGS_DIR")
    if override:
        return Path(override)
    return Path.home() / "Library" / "Application Support" / "PhraseCal"


SETTINGS_DIR = _default_settings_dir()
SETTINGS_FILE = SETTINGS_DIR / "settings.json"

DEFAULT_SETTINGS: SettingsSchema = {
    "preferred_calendar": "apple",
    "calendar_name": "",
    "languages": ["en"],
    "reject_inverted_intervals": False,
}


def _ensure_settings_dir() -> None:
    try:
        SETTINGS_DIR.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        Log.warn(f"Unable to create settings directory {SETTINGS_DIR}: {err}")


def _defaults() -> SettingsSchema:
    merged: SettingsSchema = DEFAULT_SETTINGS.copy()
    merged["languages"] = list(DEFAULT_SETTINGS["languages"])
    return merged


def load_settings() -> SettingsSchema:
    """
    Load settings from disk, falling back to defaults if anything fails.
    """
    _ensure_settings_dir()
    if not SETTINGS_FILE.exists():
        Log.info(f"Settings file not found, using defaults: {SETTINGS_FILE}")
        return _defaults()

    try:
        data = json.loads(SETTINGS_FILE.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Settings data is not a JSON object")
    except (OSError, ValueError) as err:
        Log.warn(f"Failed to read settings file ({SETTINGS_FILE}): {err}")
        return _defaults()

    merged = _defaults()
    # Merge only known keys
    for key in DEFAULT_SETTINGS:
        if key in data:
            merged[key] = data[key]  # type: ignore[literal-required]
    return merged


def save_settings(settings: SettingsSchema) -> None:
    """
    Persist settings to disk.
    """
    _ensure_settings_dir()
    try:
        SETTINGS_FILE.write_text(
            json.dumps(settings, indent=2, sort_keys=True),
            encoding="utf-8",
        )
    except OSError as err:
        Log.warn(f"Failed to write settings file ({SETTINGS_FILE}): {err}")


def get_preferred_calendar() -> CalendarPreference:
    settings = load_settings()
    preferred = settings.get("preferred_calendar", DEFAULT_SETTINGS["preferred_calendar"])
    if preferred not in CALENDAR_CHOICES:
        Log.warn(f"Invalid preferred_calendar value '{preferred}', defaulting to apple")
        preferred = "apple"
    return preferred


def set_preferred_calendar(value: CalendarPreference) -> None:
    if value not in CALENDAR_CHOICES:
        raise ValueError(f"Invalid calendar preference: {value}")
    settings = load_settings()
    settings["preferred_calendar"] = value
    save_settings(settings)
    Log.info(f"Saved preferred calendar setting: {value}")


def get_calendar_name() -> str:
    name = load_settings().get("calendar_name", "")
    if not isinstance(name, str):
        Log.warn(f"Invalid calendar_name value '{name}', using first calendar")
        return ""
    return name


def get_languages() -> List[str]:
    languages = load_settings().get("languages")
    if not isinstance(languages, list) or not languages or not all(isinstance(lang, str) for lang in languages):
        Log.warn(f"Invalid languages value '{languages}', defaulting to English")
        return list(DEFAULT_SETTINGS["languages"])
    return languages


def get_reject_inverted_intervals() -> bool:
    return bool(load_settings().get("reject_inverted_intervals", False))
