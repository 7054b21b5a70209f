from __future__ import annotations

import datetime as dt

import pytest

from timetrack_tui.config import Settings
from timetrack_tui.models import DayData, TimePoint, WorkRecord
from timetrack_tui.state import AppState


FIXED_NOW = dt.datetime(2024, 1, 1, 14, 37)


@pytest.fixture()
def sample_day() -> dt.date:
    return dt.date(2024, 1, 1)


@pytest.fixture()
def editor_settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture()
def day_data(sample_day: dt.date) -> DayData:
    records = [
        WorkRecord(id=0, name="Standup", start=TimePoint.parse("09:00"), end=TimePoint.parse("09:15")),
        WorkRecord(id=1, name="Review", start=TimePoint.parse("10:00"), end=TimePoint.parse("12:00")),
        WorkRecord(id=2, name="Lunch", start=TimePoint.parse("12:00"), end=TimePoint.parse("12:30")),
        WorkRecord(
            id=3,
            name="Planning",
            start=TimePoint.parse("13:00"),
            end=TimePoint.parse("17:00"),
            description="Sprint",
        ),
    ]
    return DayData.from_records(sample_day, records)


@pytest.fixture()
def app_state(day_data: DayData, editor_settings: Settings) -> AppState:
    return AppState(day_data, config=editor_settings, clock=lambda: FIXED_NOW)


@pytest.fixture()
def empty_state(sample_day: dt.date, editor_settings: Settings) -> AppState:
    return AppState(DayData(date=sample_day), config=editor_settings, clock=lambda: FIXED_NOW)
