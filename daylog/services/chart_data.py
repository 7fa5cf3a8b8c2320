"""Turn parsed journal entries into per-chart data points.

Each chart keeps only the entries on or after its own start date: ``days``
before now when a duration is selected, or a fixed first-day-of-records
date for "All Time". Entries whose date could not be parsed never pass
that filter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from daylog.models.journal import INVALID_DATE, JournalEntry, SleepSchedule
from daylog.services.substances import get_substance_intensity


@dataclass(frozen=True)
class DurationOption:
    label: str
    days: int | None   # None = all time
    interval: int      # label every n+1-th category on the x axis


DURATION_OPTIONS = [
    DurationOption("7 Days", 8, 1),
    DurationOption("14 Days", 15, 1),
    DurationOption("28 Days", 29, 3),
    DurationOption("All Time", None, 8),
]

DEFAULT_DURATION = DURATION_OPTIONS[2]


def duration_by_label(label: str) -> DurationOption:
    for option in DURATION_OPTIONS:
        if option.label == label:
            return option
    return DEFAULT_DURATION


def _utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


# "All Time" start per chart
SLEEP_START = _utc(2024, 12, 10)
SUBSTANCES_START = _utc(2024, 10, 24)
ROUTINES_START = _utc(2024, 12, 21)
MEDICATION_START = _utc(2024, 11, 10)


def start_date(days: int | None, all_time_start: datetime, now: datetime | None = None) -> datetime:
    if days:
        now = now or datetime.now(timezone.utc)
        return now - timedelta(days=days)
    return all_time_start


def _in_range(entries: list[JournalEntry], start: datetime) -> list[JournalEntry]:
    return [e for e in entries if e.on_or_after(start)]


# -- Formatting helpers -------------------------------------------------------


def format_month(date) -> str:
    """Axis label like 'Feb 1, 24'."""
    if date is INVALID_DATE or date is None:
        return "Unknown"
    return f"{date:%b} {date.day}, {date:%y}"


def format_long_date(date) -> str:
    """Tooltip header like 'February 1, 2024  Thursday'."""
    if date is INVALID_DATE or date is None:
        return "Invalid Date"
    return f"{date:%B} {date.day}, {date:%Y}  {date:%A}"


def time_to_decimal(time_str: str | None) -> float | None:
    """'1:30' -> 1.5"""
    if not time_str:
        return None
    hours, _, minutes = time_str.partition(":")
    try:
        return int(hours) + int(minutes) / 60
    except ValueError:
        return None


def format_time(decimal: float) -> str:
    """1.5 -> '01:30'"""
    hours = math.floor(decimal)
    minutes = round((decimal - hours) * 60)
    return f"{hours:02d}:{minutes:02d}"


# -- Points -------------------------------------------------------------------


@dataclass
class SleepPoint:
    date: datetime
    label: str
    wakeup: float | None   # from sleep_schedule.morning
    bedtime: float | None  # from sleep_schedule.night
    sleep_schedule: SleepSchedule
    description: str | None = None
    feelings: str | None = None


@dataclass
class SubstancePoint:
    date: datetime
    label: str
    intensity: int
    text: str | None
    description: str | None = None
    feelings: str | None = None


@dataclass
class RoutinePoint:
    date: datetime
    label: str
    morning: bool
    work: bool
    night: bool
    description: str | None = None
    feelings: str | None = None
    value: int = 3


@dataclass
class MedicationPoint:
    date: datetime
    label: str
    type: str | None
    amount: int | None
    value: int
    description: str | None = None
    feelings: str | None = None


def sleep_points(entries: list[JournalEntry], days: int | None, now: datetime | None = None) -> list[SleepPoint]:
    """Sleep chart data, sorted by date."""
    points = [
        SleepPoint(
            date=e.date,
            label=format_month(e.date),
            wakeup=time_to_decimal(e.sleep_schedule.morning),
            bedtime=time_to_decimal(e.sleep_schedule.night),
            sleep_schedule=e.sleep_schedule,
            description=e.description,
            feelings=e.feelings,
        )
        for e in _in_range(entries, start_date(days, SLEEP_START, now))
    ]
    points.sort(key=lambda p: p.date)
    return points


def substance_points(entries: list[JournalEntry], days: int | None, now: datetime | None = None) -> list[SubstancePoint]:
    return [
        SubstancePoint(
            date=e.date,
            label=format_month(e.date),
            intensity=get_substance_intensity(e.substances),
            text=e.substances,
            description=e.description,
            feelings=e.feelings,
        )
        for e in _in_range(entries, start_date(days, SUBSTANCES_START, now))
    ]


def routine_points(entries: list[JournalEntry], days: int | None, now: datetime | None = None) -> list[RoutinePoint]:
    return [
        RoutinePoint(
            date=e.date,
            label=format_month(e.date),
            morning=bool(e.routines.morning),
            work=bool(e.routines.work),
            night=bool(e.routines.night),
            description=e.description,
            feelings=e.feelings,
        )
        for e in _in_range(entries, start_date(days, ROUTINES_START, now))
    ]


def medication_points(entries: list[JournalEntry], days: int | None, now: datetime | None = None) -> list[MedicationPoint]:
    return [
        MedicationPoint(
            date=e.date,
            label=format_month(e.date),
            type=e.medication.type,
            amount=e.medication.amount,
            value=e.medication.amount or 1,
            description=e.description,
            feelings=e.feelings,
        )
        for e in _in_range(entries, start_date(days, MEDICATION_START, now))
    ]
