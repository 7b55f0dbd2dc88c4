"""Persistent JSON config helpers.

Stores announcement timing, provider timeout, and fallback-scan preferences.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .providers import DEFAULT_PROVIDER_TIMEOUT
from .speech import DEFAULT_ANNOUNCE_DELAY

logger = logging.getLogger(__name__)

APP_NAME = "echonav"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

MAX_ANNOUNCE_DELAY = 10.0


@dataclass(frozen=True)
class NavigationSettings:
    """Effective navigation preferences."""

    announce_delay_seconds: float = DEFAULT_ANNOUNCE_DELAY
    provider_timeout_seconds: float = DEFAULT_PROVIDER_TIMEOUT
    fallback_enabled: bool = True
    fallback_language: str | None = None
    announce_messages: bool = True


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except Exception as exc:
        logger.debug("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem/serialization errors are logged and otherwise ignored so an
    unwritable config never breaks navigation.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception as exc:
        logger.warning("Could not save config %s: %s", CONFIG_PATH, exc)


def _coerce_seconds(value: object, default: float, maximum: float | None = None) -> float:
    """Accept positive numbers (not booleans) up to ``maximum``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if value <= 0:
        return default
    if maximum is not None and value > maximum:
        return default
    return float(value)


def _coerce_bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _coerce_language(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_navigation_settings() -> NavigationSettings:
    """Build settings from config, ignoring invalid individual values."""
    data = load_config()
    defaults = NavigationSettings()
    return NavigationSettings(
        announce_delay_seconds=_coerce_seconds(
            data.get("announce_delay_seconds"),
            defaults.announce_delay_seconds,
            maximum=MAX_ANNOUNCE_DELAY,
        ),
        provider_timeout_seconds=_coerce_seconds(
            data.get("provider_timeout_seconds"),
            defaults.provider_timeout_seconds,
        ),
        fallback_enabled=_coerce_bool(data.get("fallback_enabled"), defaults.fallback_enabled),
        fallback_language=_coerce_language(data.get("fallback_language")),
        announce_messages=_coerce_bool(data.get("announce_messages"), defaults.announce_messages),
    )


def save_announce_delay(seconds: float) -> None:
    """Persist the announcement debounce delay, clamped to ``(0, 10]``."""
    if seconds <= 0:
        return
    config = load_config()
    config["announce_delay_seconds"] = round(min(MAX_ANNOUNCE_DELAY, float(seconds)), 3)
    save_config(config)


def save_fallback_enabled(enabled: bool) -> None:
    config = load_config()
    config["fallback_enabled"] = bool(enabled)
    save_config(config)


def save_fallback_language(language: str | None) -> None:
    """Persist the fallback-scan language; blank clears it."""
    config = load_config()
    config["fallback_language"] = _coerce_language(language)
    save_config(config)
