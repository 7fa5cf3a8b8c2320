import json
import logging
import os
from pathlib import Path

from platformdirs import user_data_dir

logger = logging.getLogger(__name__)

_home_override = os.environ.get("DAYLOG_HOME")
if _home_override:
    DATA_DIR = Path(_home_override)
    DATA_DIR.mkdir(parents=True, exist_ok=True)
else:
    DATA_DIR = Path(user_data_dir("daylog", ensure_exists=True))

STORE_FILE = DATA_DIR / "store.json"
CONFIG_FILE = DATA_DIR / "config.json"

LOG_LEVEL = os.environ.get("DAYLOG_LOG_LEVEL", "WARNING").upper()

THEMES = ("dark", "light")
DEFAULT_THEME = "dark"

# Must match a label in services.chart_data.DURATION_OPTIONS
DEFAULT_DURATION = "28 Days"


def _read_config() -> dict:
    if not CONFIG_FILE.exists():
        return {}
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_FILE, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _write_config(data: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    with open(CONFIG_FILE, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def load_theme() -> str:
    """Read the colour theme from config.json. Returns 'dark' if unset or unknown."""
    theme = _read_config().get("theme", DEFAULT_THEME)
    return theme if theme in THEMES else DEFAULT_THEME


def save_theme(theme: str) -> None:
    if theme not in THEMES:
        raise ValueError(f"Unknown theme: {theme!r}")
    data = _read_config()
    data["theme"] = theme
    _write_config(data)


def load_duration() -> str:
    """Read the last selected chart duration label."""
    value = _read_config().get("duration", DEFAULT_DURATION)
    return value if isinstance(value, str) else DEFAULT_DURATION


def save_duration(label: str) -> None:
    data = _read_config()
    data["duration"] = label
    _write_config(data)


# Catppuccin Mocha / Latte
PALETTES = {
    "dark": {
        "base": "#1e1e2e",
        "mantle": "#181825",
        "surface": "#313244",
        "overlay": "#45475a",
        "muted": "#585b70",
        "subtext": "#6c7086",
        "text": "#cdd6f4",
        "accent": "#89b4fa",
        "green": "#a6e3a1",
        "peach": "#fab387",
        "mauve": "#cba6f7",
        "red": "#f38ba8",
        "yellow": "#f9e2af",
        "teal": "#94e2d5",
    },
    "light": {
        "base": "#eff1f5",
        "mantle": "#e6e9ef",
        "surface": "#ccd0da",
        "overlay": "#bcc0cc",
        "muted": "#9ca0b0",
        "subtext": "#6c6f85",
        "text": "#4c4f69",
        "accent": "#1e66f5",
        "green": "#40a02b",
        "peach": "#fe640b",
        "mauve": "#8839ef",
        "red": "#d20f39",
        "yellow": "#df8e1d",
        "teal": "#179299",
    },
}

# Current theme and font size, updated by app._apply_theme()
theme = DEFAULT_THEME
font_size = 13


def palette() -> dict[str, str]:
    return PALETTES[theme]
