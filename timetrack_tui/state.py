"""Interactive editing state for one day's work records.

`AppState` is driven by an input shell that maps key events to method calls
depending on the current `mode`. The renderer only reads from it.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from .commands import DEFAULT_COMMANDS, Command, CommandAction, ScoredCommand, filter_commands
from .config import Settings
from .config import settings as default_settings
from .history import History
from .logging_utils import get_logger
from .models import LAST_MINUTE_OF_DAY, DayData, TimeFormatError, TimePoint, WorkRecord

logger = get_logger(__name__)

# Digit positions inside a "HH:MM" buffer; index 2 is the colon.
TIME_SLOT_POSITIONS = (0, 1, 3, 4)
TIME_BUFFER_LENGTH = 5

NEW_TASK_NAME = "New Task"
BREAK_NAME = "Break"
DEFAULT_TASK_SPAN = ("09:00", "17:00")
DEFAULT_BREAK_SPAN = ("12:00", "12:15")


class AppMode(str, Enum):
    BROWSE = "browse"
    EDIT = "edit"
    VISUAL = "visual"
    COMMAND_PALETTE = "command_palette"


class EditField(str, Enum):
    NAME = "name"
    START = "start"
    END = "end"
    DESCRIPTION = "description"


_FIELD_ORDER: Tuple[EditField, ...] = (
    EditField.NAME,
    EditField.START,
    EditField.END,
    EditField.DESCRIPTION,
)
_TIME_FIELDS = frozenset({EditField.START, EditField.END})


class EditError(ValueError):
    """Validation failure while committing the edit buffer."""


def _now() -> dt.datetime:
    return dt.datetime.now().astimezone()


def _cycle_field(field: EditField, step: int) -> EditField:
    index = _FIELD_ORDER.index(field)
    return _FIELD_ORDER[(index + step) % len(_FIELD_ORDER)]


def _field_value(record: WorkRecord, field: EditField) -> str:
    if field is EditField.NAME:
        return record.name
    if field is EditField.START:
        return str(record.start)
    if field is EditField.END:
        return str(record.end)
    return record.description


class AppState:
    """Mode, cursor, edit buffer and undo history on top of a `DayData` store."""

    def __init__(
        self,
        day_data: DayData,
        *,
        config: Optional[Settings] = None,
        clock: Optional[Callable[[], dt.datetime]] = None,
        commands: Optional[Sequence[Command]] = None,
    ) -> None:
        self._settings = config or default_settings
        self._clock = clock or _now
        self._history: History[DayData] = History(self._settings.history_depth)

        self.day_data = day_data
        self.mode = AppMode.BROWSE
        self.selected_index = 0
        self.edit_field = EditField.NAME
        self.input_buffer = ""
        self.time_cursor = 0
        self.should_quit = False
        self.visual_start = 0
        self.visual_end = 0
        self.command_palette_input = ""
        self.command_palette_selected = 0
        self.available_commands: List[Command] = list(commands if commands is not None else DEFAULT_COMMANDS)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def get_selected_record(self) -> Optional[WorkRecord]:
        records = self.day_data.get_sorted_records()
        if 0 <= self.selected_index < len(records):
            return records[self.selected_index]
        return None

    def move_selection_up(self) -> None:
        if self.selected_index > 0:
            self.selected_index -= 1
        if self.mode is AppMode.VISUAL:
            self.visual_end = self.selected_index

    def move_selection_down(self) -> None:
        record_count = len(self.day_data.work_records)
        if self.selected_index < max(record_count - 1, 0):
            self.selected_index += 1
        if self.mode is AppMode.VISUAL:
            self.visual_end = self.selected_index

    def move_field_left(self) -> None:
        self.edit_field = _cycle_field(self.edit_field, -1)

    def move_field_right(self) -> None:
        self.edit_field = _cycle_field(self.edit_field, 1)

    def _clamp_selection(self) -> None:
        record_count = len(self.day_data.work_records)
        if self.selected_index >= record_count:
            self.selected_index = max(record_count - 1, 0)

    def _index_of(self, record_id: int) -> Optional[int]:
        for index, record in enumerate(self.day_data.get_sorted_records()):
            if record.id == record_id:
                return index
        return None

    # ------------------------------------------------------------------
    # Edit mode
    # ------------------------------------------------------------------
    def enter_edit_mode(self) -> None:
        record = self.get_selected_record()
        if record is None:
            return
        self.mode = AppMode.EDIT
        self.input_buffer = _field_value(record, self.edit_field)
        self.time_cursor = 0

    def change_task_name(self) -> None:
        """Start editing the name from an empty buffer."""
        if self.edit_field is not EditField.NAME or self.get_selected_record() is None:
            return
        self.mode = AppMode.EDIT
        self.input_buffer = ""
        self.time_cursor = 0

    def exit_edit_mode(self) -> None:
        self.mode = AppMode.BROWSE
        self.input_buffer = ""
        self.edit_field = EditField.NAME
        self.time_cursor = 0

    def next_field(self) -> None:
        record = self.get_selected_record()
        if record is None:
            return
        self.edit_field = _cycle_field(self.edit_field, 1)
        self.input_buffer = _field_value(record, self.edit_field)
        self.time_cursor = 0

    def handle_char_input(self, char: str) -> None:
        if self.edit_field not in _TIME_FIELDS:
            self.input_buffer += char
            return

        if len(char) != 1 or not (char.isascii() and char.isdigit()):
            return
        if len(self.input_buffer) != TIME_BUFFER_LENGTH:
            return
        if self.time_cursor >= len(TIME_SLOT_POSITIONS):
            return

        pos = TIME_SLOT_POSITIONS[self.time_cursor]
        self.input_buffer = self.input_buffer[:pos] + char + self.input_buffer[pos + 1 :]
        self.time_cursor += 1

        if self.time_cursor >= len(TIME_SLOT_POSITIONS):
            # All four digits typed: commit without an explicit save, stay put on bad input.
            try:
                self._save_current_field()
            except EditError as exc:
                logger.debug("Time auto-commit skipped: %s", exc)
                return
            self.exit_edit_mode()

    def handle_backspace(self) -> None:
        if self.edit_field in _TIME_FIELDS:
            if self.time_cursor > 0:
                self.time_cursor -= 1
            return
        self.input_buffer = self.input_buffer[:-1]

    def _save_current_field(self) -> None:
        selected = self.get_selected_record()
        if selected is None:
            return
        record = self.day_data.get_record(selected.id)
        if record is None:
            return

        if self.edit_field is EditField.NAME:
            name = self.input_buffer.strip()
            if not name:
                raise EditError("Name cannot be empty")
            record.name = name
        elif self.edit_field is EditField.START:
            try:
                record.start = TimePoint.parse(self.input_buffer)
            except TimeFormatError as exc:
                raise EditError("Invalid start time format (use HH:MM)") from exc
            record.update_duration()
        elif self.edit_field is EditField.END:
            try:
                record.end = TimePoint.parse(self.input_buffer)
            except TimeFormatError as exc:
                raise EditError("Invalid end time format (use HH:MM)") from exc
            record.update_duration()
        else:
            record.description = self.input_buffer.strip()
        logger.debug("Record %s: %s set to %r", record.id, self.edit_field.value, self.input_buffer)

    def save_edit(self) -> None:
        """Commit the edit buffer into the selected record.

        Raises `EditError` when the buffer is not valid for the field; the
        state then stays in edit mode with the buffer untouched.
        """
        self._save_snapshot()
        try:
            self._save_current_field()
        except EditError as exc:
            logger.info("Edit rejected: %s", exc)
            raise
        self.exit_edit_mode()

    # ------------------------------------------------------------------
    # Record lifecycle
    # ------------------------------------------------------------------
    def add_new_record(self) -> WorkRecord:
        return self._insert_after_selection(NEW_TASK_NAME, self._settings.task_minutes, DEFAULT_TASK_SPAN)

    def add_break(self) -> WorkRecord:
        return self._insert_after_selection(BREAK_NAME, self._settings.break_minutes, DEFAULT_BREAK_SPAN)

    def _insert_after_selection(self, name: str, minutes: int, fallback: Tuple[str, str]) -> WorkRecord:
        self._save_snapshot()

        current = self.get_selected_record()
        if current is not None:
            start = current.end
            end = TimePoint.from_minutes(min(start.to_minutes() + minutes, LAST_MINUTE_OF_DAY))
        else:
            start, end = TimePoint.parse(fallback[0]), TimePoint.parse(fallback[1])

        record = WorkRecord(id=self.day_data.next_id(), name=name, start=start, end=end)
        self.day_data.add_record(record)
        index = self._index_of(record.id)
        self.selected_index = index if index is not None else 0
        logger.debug("Added record %s (%s %s-%s)", record.id, name, start, end)
        return record

    def delete_selected_record(self) -> None:
        self._save_snapshot()
        record = self.get_selected_record()
        if record is None:
            return
        self.day_data.remove_record(record.id)
        self._clamp_selection()
        logger.debug("Deleted record %s", record.id)

    def set_current_time_on_field(self) -> None:
        """Stamp the wall clock time into the selected Start or End field."""
        self._save_snapshot()

        now = self._clock()
        current_time = f"{now.hour:02d}:{now.minute:02d}"

        selected = self.get_selected_record()
        if selected is None or self.edit_field not in _TIME_FIELDS:
            return
        record = self.day_data.get_record(selected.id)
        if record is None:
            return
        try:
            time_point = TimePoint.parse(current_time)
        except TimeFormatError:
            logger.debug("Ignoring unparsable clock value %r", current_time)
            return

        if self.edit_field is EditField.START:
            record.start = time_point
        else:
            record.end = time_point
        record.update_duration()

    # ------------------------------------------------------------------
    # Visual mode
    # ------------------------------------------------------------------
    def enter_visual_mode(self) -> None:
        self.mode = AppMode.VISUAL
        self.visual_start = self.selected_index
        self.visual_end = self.selected_index

    def exit_visual_mode(self) -> None:
        self.mode = AppMode.BROWSE

    def visual_range(self) -> Tuple[int, int]:
        return min(self.visual_start, self.visual_end), max(self.visual_start, self.visual_end)

    def is_in_visual_selection(self, index: int) -> bool:
        low, high = self.visual_range()
        return low <= index <= high

    def selected_records(self) -> List[WorkRecord]:
        low, high = self.visual_range()
        return self.day_data.get_sorted_records()[low : high + 1]

    def delete_visual_selection(self) -> None:
        self._save_snapshot()

        ids_to_delete = [record.id for record in self.selected_records()]
        for record_id in ids_to_delete:
            self.day_data.remove_record(record_id)

        self._clamp_selection()
        self.exit_visual_mode()
        logger.debug("Deleted records %s", ids_to_delete)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def _save_snapshot(self) -> None:
        self._history.push(self.day_data.clone())

    def undo(self) -> bool:
        previous_state = self._history.undo(self.day_data.clone())
        if previous_state is None:
            return False
        self.day_data = previous_state
        self._clamp_selection()
        logger.debug("Undo, %d step(s) left", self._history.undo_depth)
        return True

    def redo(self) -> bool:
        next_state = self._history.redo(self.day_data.clone())
        if next_state is None:
            return False
        self.day_data = next_state
        self._clamp_selection()
        logger.debug("Redo, %d step(s) left", self._history.redo_depth)
        return True

    def can_undo(self) -> bool:
        return self._history.can_undo()

    def can_redo(self) -> bool:
        return self._history.can_redo()

    # ------------------------------------------------------------------
    # Command palette
    # ------------------------------------------------------------------
    def open_command_palette(self) -> None:
        self.mode = AppMode.COMMAND_PALETTE
        self.command_palette_input = ""
        self.command_palette_selected = 0

    def close_command_palette(self) -> None:
        self.mode = AppMode.BROWSE
        self.command_palette_input = ""
        self.command_palette_selected = 0

    def handle_command_palette_char(self, char: str) -> None:
        self.command_palette_input += char
        self.command_palette_selected = 0

    def handle_command_palette_backspace(self) -> None:
        self.command_palette_input = self.command_palette_input[:-1]
        self.command_palette_selected = 0

    def move_command_palette_up(self) -> None:
        if self.command_palette_selected > 0:
            self.command_palette_selected -= 1

    def move_command_palette_down(self, filtered_count: Optional[int] = None) -> None:
        if filtered_count is None:
            filtered_count = len(self.get_filtered_commands())
        if self.command_palette_selected < max(filtered_count - 1, 0):
            self.command_palette_selected += 1

    def get_filtered_commands(self) -> List[ScoredCommand]:
        return filter_commands(self.available_commands, self.command_palette_input)

    def execute_selected_command(self) -> Optional[CommandAction]:
        filtered = self.get_filtered_commands()
        if not 0 <= self.command_palette_selected < len(filtered):
            return None
        action = filtered[self.command_palette_selected].command.action
        self.close_command_palette()
        return action


__all__ = [
    "AppMode",
    "AppState",
    "EditError",
    "EditField",
    "TIME_SLOT_POSITIONS",
]
