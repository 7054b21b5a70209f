"""Keyboard-driven editor core for a single day's work records."""

from __future__ import annotations

from .actions import dispatch_action, run_selected_command
from .commands import DEFAULT_COMMANDS, Command, CommandAction, ScoredCommand, filter_commands, fuzzy_score
from .history import History
from .models import DayData, TimeFormatError, TimePoint, WorkRecord
from .state import AppMode, AppState, EditError, EditField

__version__ = "0.3.0"

__all__ = [
    "AppMode",
    "AppState",
    "Command",
    "CommandAction",
    "DEFAULT_COMMANDS",
    "DayData",
    "EditError",
    "EditField",
    "History",
    "ScoredCommand",
    "TimeFormatError",
    "TimePoint",
    "WorkRecord",
    "dispatch_action",
    "filter_commands",
    "fuzzy_score",
    "run_selected_command",
]
