"""Parse pasted daily-log text into structured journal entries.

A journal is a sequence of blocks separated by a blank line. Inside a block
every line has a fixed meaning by position:

    0  DD.MM.YY, <anything>
    1  substances (free text)
    2  medication: "no", "<N> mtp", "<N> mwo", "mtp", "mwo"
    3  routines: yes|no, yes|no, yes|no  (morning, work, night)
    4  sleep: <time> and <time>  (fell asleep, woke up)
    5  description (optional)
    6  feelings (optional)

Nothing here raises on malformed text; unreadable fields fall back to None,
or INVALID_DATE for the date line.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Callable

from daylog.models.journal import (
    INVALID_DATE,
    JournalEntry,
    Medication,
    Routines,
    SleepSchedule,
)

BLOCK_SEPARATOR = "\n\n"

# "•" saved as UTF-8 and read back as cp1252, plus the intact bullet
_BULLET = re.compile(r"^(?:â€¢|•)\s*")


# -- Block splitter & line normalizer -----------------------------------------


def split_blocks(text: str) -> list[str]:
    """Split raw journal text into entry blocks, first-appearing first."""
    if not text:
        return []
    text = text.replace("\r\n", "\n")
    return [block for block in text.split(BLOCK_SEPARATOR) if block.strip()]


def normalize_lines(block: str) -> list[str]:
    """Trim each line of a block and drop a leading bullet marker."""
    return [_BULLET.sub("", line.strip(), count=1) for line in block.split("\n")]


def line_at(lines: list[str], index: int) -> str:
    return lines[index] if index < len(lines) else ""


# -- Date ---------------------------------------------------------------------


# Optional sign, ASCII digits only
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _to_int(token: str | None) -> int | None:
    if token is None:
        return None
    token = token.strip()
    if not _INTEGER.fullmatch(token):
        return None
    return int(token)


def parse_date(line: str):
    """Read ``DD.MM.YY`` from the text before the first comma.

    Returns a UTC midnight datetime, or INVALID_DATE when any of the three
    parts is missing or not an integer. Out-of-range days and months roll
    over into the neighbouring month or year.
    """
    head = line.split(",", 1)[0]
    parts = head.split(".")
    day, month, year = (_to_int(parts[i]) if i < len(parts) else None for i in range(3))
    if day is None or month is None or year is None:
        return INVALID_DATE

    try:
        year_offset, month_index = divmod(month - 1, 12)
        first = datetime(2000 + year + year_offset, month_index + 1, 1, tzinfo=timezone.utc)
        return first + timedelta(days=day - 1)
    except (OverflowError, ValueError):
        return INVALID_DATE


# -- Substances & medication --------------------------------------------------


def parse_substances(line: str) -> str | None:
    return line.lower() if line else None


def _exact_no(line: str) -> Medication | None:
    return Medication(None, "No") if line == "no" else None


_COUNTED = re.compile(r"([0-9]+)\s*(mtp|mwo)")


def _counted(line: str) -> Medication | None:
    m = _COUNTED.search(line)
    if not m:
        return None
    return Medication(int(m.group(1)), m.group(2).upper())


def _mentions(token: str) -> Callable[[str], Medication | None]:
    def rule(line: str) -> Medication | None:
        return Medication(None, token.upper()) if token in line else None
    return rule


# Evaluated in order; the first rule returning a value wins.
MEDICATION_RULES: list[Callable[[str], Medication | None]] = [
    _exact_no,
    _counted,
    _mentions("mtp"),
    _mentions("mwo"),
]


def parse_medication(line: str) -> Medication:
    if not line:
        return Medication()
    line = line.lower()
    for rule in MEDICATION_RULES:
        result = rule(line)
        if result is not None:
            return result
    return Medication()


# -- Routines -----------------------------------------------------------------


def parse_routines(line: str) -> Routines:
    """Three comma-separated yes/no answers, or nothing at all."""
    if not line:
        return Routines()
    parts = [part.strip() for part in line.lower().split(",")]
    if len(parts) != 3:
        return Routines()
    morning, work, night = (part == "yes" for part in parts)
    return Routines(morning=morning, work=work, night=night)


# -- Sleep schedule -----------------------------------------------------------


def _dotted_time(m: re.Match) -> str:
    hours, minutes = m.group(1), m.group(2)
    if len(minutes) == 1:
        minutes = str(int(minutes) * 10)
    return f"{hours}:{minutes.zfill(2)}"


def _plain_time(m: re.Match) -> str:
    hours, minutes = m.group(1), m.group(2)
    return f"{hours}:{minutes}" if minutes else f"{hours}:00"


# "1.3" must be tried before the bare-hour pattern, which would match "1"
TIME_RULES: list[tuple[re.Pattern, Callable[[re.Match], str]]] = [
    (re.compile(r"([0-9]+)\.([0-9]+)"), _dotted_time),
    (re.compile(r"([0-9]+)(?::([0-9]+))?"), _plain_time),
]


def parse_time(token: str) -> str | None:
    for pattern, transform in TIME_RULES:
        m = pattern.search(token)
        if m:
            return transform(m)
    return None


def parse_sleep_schedule(line: str) -> SleepSchedule:
    if not line:
        return SleepSchedule()
    times = [parse_time(token) for token in line.lower().split("and")]
    night = times[1] if len(times) > 1 else None
    return SleepSchedule(morning=times[0], night=night or None)


# -- Assembly -----------------------------------------------------------------

# (entry field, interpreter) per line position
SLOT_INTERPRETERS: list[tuple[str, Callable]] = [
    ("date", parse_date),
    ("substances", parse_substances),
    ("medication", parse_medication),
    ("routines", parse_routines),
    ("sleep_schedule", parse_sleep_schedule),
]

DESCRIPTION_LINE = 5
FEELINGS_LINE = 6


def parse_block(block: str) -> JournalEntry:
    lines = normalize_lines(block)
    fields = {
        name: interpret(line_at(lines, index))
        for index, (name, interpret) in enumerate(SLOT_INTERPRETERS)
    }
    return JournalEntry(
        description=line_at(lines, DESCRIPTION_LINE) or None,
        feelings=line_at(lines, FEELINGS_LINE) or None,
        **fields,
    )


def parse_journal(text: str) -> list[JournalEntry]:
    """Parse the whole journal. The last block in the text comes first."""
    entries = [parse_block(block) for block in split_blocks(text)]
    entries.reverse()
    return entries


# -- Formatting ---------------------------------------------------------------


def _format_medication(medication: Medication) -> str:
    if medication.type is None:
        return ""
    if medication.type == "No":
        return "no"
    kind = medication.type.lower()
    return f"{medication.amount} {kind}" if medication.amount is not None else kind


def _format_routines(routines: Routines) -> str:
    if not routines.recorded:
        return ""
    return ", ".join("yes" if value else "no" for value in (routines.morning, routines.work, routines.night))


def _format_sleep(schedule: SleepSchedule) -> str:
    times = [t for t in (schedule.morning, schedule.night) if t]
    return " and ".join(times)


def format_entry(entry: JournalEntry) -> str:
    """Write an entry back out as a text block in the journal layout.

    Trailing empty lines are dropped. An unset field in the middle becomes
    an empty line, which ends the block when the text is parsed again, so
    only entries filled in up to their last field read back unchanged.
    """
    if entry.has_valid_date:
        date_line = entry.date.strftime("%d.%m.%y") + ","
    else:
        date_line = ""
    lines = [
        date_line,
        entry.substances or "",
        _format_medication(entry.medication),
        _format_routines(entry.routines),
        _format_sleep(entry.sleep_schedule),
        entry.description or "",
        entry.feelings or "",
    ]
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)


def format_journal(entries: list[JournalEntry]) -> str:
    """Inverse of parse_journal: oldest block first."""
    return BLOCK_SEPARATOR.join(format_entry(e) for e in reversed(entries))
