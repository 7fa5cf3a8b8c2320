"""Key-value store for the journal text.

The store is a single JSON object on disk mapping keys to strings. The
journal lives under one key as the raw text the user entered; it is parsed
again on every read.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from daylog.models.journal import JournalEntry
from daylog.services.journal_parser import parse_journal
from daylog.utils.config import STORE_FILE

logger = logging.getLogger(__name__)

JOURNAL_KEY = "JOURNAL"


def _read_json(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not hold a JSON object")
    return data


def _write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    tmp.replace(path)


def _load_store() -> dict:
    if not STORE_FILE.exists():
        return {}
    return _read_json(STORE_FILE)


def _load_store_for_update() -> dict | None:
    """The current store, or None when the file is unreadable and will be overwritten."""
    try:
        return _load_store()
    except ValueError as exc:
        logger.warning("Overwriting unreadable store %s: %s", STORE_FILE, exc)
        return None


# -- Raw key-value access -----------------------------------------------------


def get_item(key: str) -> str | None:
    value = _load_store().get(key)
    return value if isinstance(value, str) else None


def set_item(key: str, value: str) -> None:
    data = _load_store_for_update()
    if data is None:
        data = {}
    data[key] = value
    _write_json(STORE_FILE, data)


def remove_item(key: str) -> None:
    data = _load_store_for_update()
    if data is None:
        _write_json(STORE_FILE, {})
    elif key in data:
        del data[key]
        _write_json(STORE_FILE, data)


# -- Journal ------------------------------------------------------------------


def update_journal(text: str) -> None:
    """Replace the stored journal text. Errors are logged, not raised."""
    try:
        set_item(JOURNAL_KEY, text)
    except (OSError, ValueError):
        logger.exception("Error updating journal")


def remove_journal() -> None:
    try:
        remove_item(JOURNAL_KEY)
    except (OSError, ValueError):
        logger.exception("Error removing journal")


def load_journal_text() -> str:
    """Raw stored text, or '' when nothing is stored or the store is unreadable."""
    try:
        return get_item(JOURNAL_KEY) or ""
    except (OSError, ValueError):
        logger.exception("Error reading journal text")
        return ""


def get_journal() -> list[JournalEntry]:
    """Parse the stored journal. Newest block first; [] when empty or unreadable."""
    try:
        text = get_item(JOURNAL_KEY)
    except (OSError, ValueError):
        logger.exception("Error getting journal data")
        return []
    if not text:
        return []
    return parse_journal(text)
