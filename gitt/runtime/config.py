"""Persistent JSON config helpers.

Stores the UI theme, syntax style, tick rate, and list-pane share.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "gitt"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_STYLE = "monokai"
DEFAULT_TICK_MS = 200
MIN_TICK_MS = 10
DEFAULT_LIST_PANE_PERCENT = 35.0


@dataclass(frozen=True)
class PagerSettings:
    """Config values after validation and defaulting."""

    theme: str | None = None
    style: str = DEFAULT_STYLE
    tick_ms: int = DEFAULT_TICK_MS
    list_pane_percent: float = DEFAULT_LIST_PANE_PERCENT

    @property
    def tick_seconds(self) -> float:
        return self.tick_ms / 1000.0


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_name(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _load_tick_ms(data: dict[str, object]) -> int:
    value = data.get("tick_ms")
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_TICK_MS
    return max(MIN_TICK_MS, value)


def _load_percent(data: dict[str, object], key: str) -> float | None:
    """Read a percentage constrained to the open interval (0, 100)."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0 or value >= 100:
        return None
    return float(value)


def load_settings() -> PagerSettings:
    """Read every setting from one config load."""
    data = load_config()
    percent = _load_percent(data, "list_pane_percent")
    return PagerSettings(
        theme=_load_name(data, "theme"),
        style=_load_name(data, "style") or DEFAULT_STYLE,
        tick_ms=_load_tick_ms(data),
        list_pane_percent=percent if percent is not None else DEFAULT_LIST_PANE_PERCENT,
    )


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_LIST_PANE_PERCENT",
    "DEFAULT_STYLE",
    "DEFAULT_TICK_MS",
    "PagerSettings",
    "load_config",
    "load_settings",
    "save_config",
    "save_theme_name",
]
