"""Data classes for parsed journal entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


class _InvalidDate:
    """Stand-in for a date that could not be parsed.

    Falsy, never equal to a real date, and every ordering comparison is
    False in either direction, so range filters like ``date >= start``
    always drop it.
    """

    _instance: _InvalidDate | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other) -> bool:
        return other is self

    def __hash__(self) -> int:
        return hash("daylog.invalid-date")

    def __lt__(self, other) -> bool:
        return False

    __le__ = __gt__ = __ge__ = __lt__

    def __repr__(self) -> str:
        return "INVALID_DATE"

    def __str__(self) -> str:
        return "Invalid Date"


INVALID_DATE = _InvalidDate()


@dataclass(frozen=True)
class Medication:
    amount: int | None = None
    type: str | None = None  # "MTP" | "MWO" | "No" | None

    def to_dict(self) -> dict:
        return {"amount": self.amount, "type": self.type}


@dataclass(frozen=True)
class Routines:
    morning: bool | None = None
    work: bool | None = None
    night: bool | None = None

    @property
    def recorded(self) -> bool:
        return self.morning is not None

    def to_dict(self) -> dict:
        return {"morning": self.morning, "work": self.work, "night": self.night}


@dataclass(frozen=True)
class SleepSchedule:
    morning: str | None = None  # time fell asleep
    night: str | None = None    # time woke up

    def to_dict(self) -> dict:
        return {"morning": self.morning, "night": self.night}


@dataclass
class JournalEntry:
    date: datetime | _InvalidDate
    substances: str | None = None
    medication: Medication = field(default_factory=Medication)
    routines: Routines = field(default_factory=Routines)
    sleep_schedule: SleepSchedule = field(default_factory=SleepSchedule)
    description: str | None = None
    feelings: str | None = None

    @property
    def has_valid_date(self) -> bool:
        return self.date is not INVALID_DATE

    def on_or_after(self, cutoff: datetime) -> bool:
        return self.date >= cutoff

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat() if self.has_valid_date else None,
            "substances": self.substances,
            "medication": self.medication.to_dict(),
            "routines": self.routines.to_dict(),
            "sleep_schedule": self.sleep_schedule.to_dict(),
            "description": self.description,
            "feelings": self.feelings,
        }
