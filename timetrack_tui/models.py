"""Day schedule data: time points, work records and the per-day record store."""

from __future__ import annotations

import datetime as dt
import re
from functools import total_ordering
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

MINUTES_PER_DAY = 24 * 60
LAST_MINUTE_OF_DAY = MINUTES_PER_DAY - 1

_HHMM_RE = re.compile(r"([0-9]{2}):([0-9]{2})")


class TimeFormatError(ValueError):
    """Raised when a value cannot be interpreted as a HH:MM time of day."""


@total_ordering
class TimePoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)

    @model_validator(mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            parsed = cls.parse(value)
            return {"hour": parsed.hour, "minute": parsed.minute}
        return value

    @classmethod
    def parse(cls, text: str) -> "TimePoint":
        match = _HHMM_RE.fullmatch(text) if isinstance(text, str) else None
        if not match:
            raise TimeFormatError(f"Invalid HH:MM: {text!r}")
        hour = int(match.group(1))
        minute = int(match.group(2))
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            raise TimeFormatError(f"Invalid HH:MM: {text!r}")
        return cls(hour=hour, minute=minute)

    @classmethod
    def from_minutes(cls, minutes: int) -> "TimePoint":
        if not 0 <= minutes <= LAST_MINUTE_OF_DAY:
            raise TimeFormatError(f"Minutes since midnight out of range: {minutes}")
        return cls(hour=minutes // 60, minute=minutes % 60)

    def to_minutes(self) -> int:
        return self.hour * 60 + self.minute

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TimePoint):
            return NotImplemented
        return self.to_minutes() < other.to_minutes()

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class WorkRecord(BaseModel):
    """A named interval of the day (task or break)."""

    id: int = Field(ge=0)
    name: str
    start: TimePoint
    end: TimePoint
    description: str = ""
    duration: int = 0  # minutes, derived from start/end

    @model_validator(mode="after")
    def _derive_duration(self) -> "WorkRecord":
        self.update_duration()
        return self

    def update_duration(self) -> None:
        # An end before the start is kept as entered but counts as zero minutes.
        self.duration = max(self.end.to_minutes() - self.start.to_minutes(), 0)


class DayData(BaseModel):
    """ID-keyed store of the work records of one day."""

    date: dt.date = Field(default_factory=dt.date.today)
    work_records: Dict[int, WorkRecord] = Field(default_factory=dict)
    next_free_id: int = Field(default=0, ge=0)

    @classmethod
    def from_records(cls, date: dt.date, records: Iterable[WorkRecord]) -> "DayData":
        day = cls(date=date)
        for record in records:
            day.add_record(record)
        return day

    def next_id(self) -> int:
        record_id = self.next_free_id
        self.next_free_id += 1
        return record_id

    def add_record(self, record: WorkRecord) -> None:
        self.work_records[record.id] = record
        if record.id >= self.next_free_id:
            self.next_free_id = record.id + 1

    def remove_record(self, record_id: int) -> Optional[WorkRecord]:
        return self.work_records.pop(record_id, None)

    def get_record(self, record_id: int) -> Optional[WorkRecord]:
        return self.work_records.get(record_id)

    def get_sorted_records(self) -> List[WorkRecord]:
        return sorted(
            self.work_records.values(),
            key=lambda record: (record.start.to_minutes(), record.end.to_minutes(), record.id),
        )

    def total_minutes(self) -> int:
        return sum(record.duration for record in self.work_records.values())

    def clone(self) -> "DayData":
        return self.model_copy(deep=True)


__all__ = [
    "DayData",
    "LAST_MINUTE_OF_DAY",
    "MINUTES_PER_DAY",
    "TimeFormatError",
    "TimePoint",
    "WorkRecord",
]
