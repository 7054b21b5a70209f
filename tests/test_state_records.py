from __future__ import annotations

import datetime as dt

from timetrack_tui.config import Settings
from timetrack_tui.models import DayData, TimePoint, WorkRecord
from timetrack_tui.state import AppState, EditField


def test_add_new_record_follows_selected_record(app_state: AppState) -> None:
    app_state.selected_index = 3
    record = app_state.add_new_record()

    assert record.name == "New Task"
    assert str(record.start) == "17:00"
    assert str(record.end) == "18:00"
    assert record.duration == 60
    assert record.id == 4
    assert app_state.get_selected_record() is record
    assert app_state.selected_index == 4


def test_add_new_record_clamps_to_end_of_day(sample_day: dt.date, editor_settings: Settings) -> None:
    day = DayData.from_records(
        sample_day,
        [WorkRecord(id=0, name="Late", start=TimePoint.parse("22:00"), end=TimePoint.parse("23:30"))],
    )
    state = AppState(day, config=editor_settings)
    record = state.add_new_record()

    assert str(record.start) == "23:30"
    assert str(record.end) == "23:59"
    assert record.duration == 29


def test_add_new_record_without_selection_uses_working_hours(empty_state: AppState) -> None:
    record = empty_state.add_new_record()
    assert (str(record.start), str(record.end)) == ("09:00", "17:00")
    assert empty_state.selected_index == 0


def test_add_break_follows_selected_record(app_state: AppState) -> None:
    record = app_state.add_break()

    assert record.name == "Break"
    assert (str(record.start), str(record.end)) == ("09:15", "09:30")
    assert app_state.selected_index == 1
    assert app_state.get_selected_record().id == record.id


def test_add_break_without_selection_uses_lunch_slot(empty_state: AppState) -> None:
    record = empty_state.add_break()
    assert (str(record.start), str(record.end)) == ("12:00", "12:15")


def test_record_spans_come_from_settings(day_data: DayData) -> None:
    state = AppState(day_data, config=Settings(_env_file=None, task_minutes=30, break_minutes=5))
    state.selected_index = 2
    task = state.add_new_record()
    state.selected_index = 0
    pause = state.add_break()

    assert (str(task.start), str(task.end)) == ("12:30", "13:00")
    assert (str(pause.start), str(pause.end)) == ("09:15", "09:20")


def test_new_record_ids_are_unique(app_state: AppState) -> None:
    ids = {app_state.add_new_record().id for _ in range(3)}
    assert len(ids) == 3
    assert ids.isdisjoint({0, 1, 2, 3})


def test_delete_selected_record_clamps_selection(app_state: AppState) -> None:
    app_state.selected_index = 3
    app_state.delete_selected_record()

    assert 3 not in app_state.day_data.work_records
    assert len(app_state.day_data.work_records) == 3
    assert app_state.selected_index == 2


def test_delete_on_empty_day_is_harmless(empty_state: AppState) -> None:
    empty_state.delete_selected_record()
    assert empty_state.selected_index == 0
    assert empty_state.day_data.work_records == {}


def test_set_current_time_on_end_field(app_state: AppState) -> None:
    app_state.move_field_left()
    app_state.move_field_left()
    assert app_state.edit_field is EditField.END

    app_state.set_current_time_on_field()
    record = app_state.day_data.get_record(0)
    assert str(record.end) == "14:37"
    assert record.duration == 14 * 60 + 37 - 9 * 60

    app_state.undo()
    assert str(app_state.day_data.get_record(0).end) == "09:15"


def test_set_current_time_on_start_field(app_state: AppState) -> None:
    app_state.selected_index = 3
    app_state.move_field_right()
    app_state.set_current_time_on_field()

    record = app_state.day_data.get_record(3)
    assert str(record.start) == "14:37"
    assert record.duration == 17 * 60 - (14 * 60 + 37)


def test_set_current_time_ignores_text_fields(app_state: AppState) -> None:
    before = app_state.day_data.clone()
    app_state.set_current_time_on_field()
    assert app_state.day_data == before


def test_undo_redo_round_trip(app_state: AppState) -> None:
    original = app_state.day_data.clone()
    app_state.selected_index = 3
    app_state.add_new_record()
    changed = app_state.day_data.clone()

    assert app_state.undo()
    assert app_state.day_data == original
    assert app_state.selected_index == 3
    assert app_state.can_redo()

    assert app_state.redo()
    assert app_state.day_data == changed
    assert not app_state.can_redo()


def test_new_mutation_discards_redo(app_state: AppState) -> None:
    app_state.add_break()
    app_state.undo()
    app_state.delete_selected_record()

    assert not app_state.can_redo()
    assert not app_state.redo()


def test_undo_redo_on_fresh_state_are_noops(app_state: AppState) -> None:
    before = app_state.day_data.clone()
    assert not app_state.undo()
    assert not app_state.redo()
    assert app_state.day_data == before


def test_undo_restores_selection_bounds(app_state: AppState) -> None:
    app_state.selected_index = 3
    app_state.add_new_record()
    assert app_state.selected_index == 4
    app_state.undo()
    assert app_state.selected_index == 3


def test_history_depth_from_settings(day_data: DayData) -> None:
    state = AppState(day_data, config=Settings(_env_file=None, history_depth=2))
    for _ in range(5):
        state.add_break()

    assert state.undo()
    assert state.undo()
    assert not state.undo()
    assert len(state.day_data.work_records) == 7
