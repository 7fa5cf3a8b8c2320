"""Substance description → intensity score lookup."""

from __future__ import annotations

NO_DATA = -1

# Keys are the lowercased substance line exactly as written in the journal.
# 0 means an explicit "none", 1-10 is self-assessed intensity.
SUBSTANCE_INTENSITY: dict[str, int] = {
    "none": 0,
    "no": 0,
    "07.11.24, th:": NO_DATA,  # a date pasted onto the substances line

    # Light (1-3)
    "1 glas wine": 1,
    "1 glas of wine": 1,
    "glass glühwein": 1,
    "1 beer": 1,
    "2 beer": 2,
    "2 glasses wine": 2,
    "3 glasses of wine": 3,
    "1 beer and 1 glas of wine": 2,
    "1 beer, 1 cocktail": 2,
    "1 glühwein and 1 cocktail": 2,

    # Moderate (4-6)
    "4 beer": 4,
    "half a bottle of wine": 4,
    "1 beer, half a bottle of wine": 4,
    "wine": 5,
    "about a bottle of wine": 5,
    "a bottle of glühwein": 5,
    "about 1 bottle of wine": 5,
    "1 bottle wine": 5,
    "4 beer and 2 long drinks": 6,

    # Heavy (7-10)
    "2 bottles of wine and 1 beer": 8,
    "1 bottle wine, 1 joint": 7,
    "1 bottle wine, 125 mg promethazin": 8,
    "8/10": 8,
}


def get_substance_intensity(substance: str | None) -> int:
    """Return the score for a substances line, or -1 if missing or unknown."""
    if substance is None:
        return NO_DATA
    return SUBSTANCE_INTENSITY.get(substance, NO_DATA)
