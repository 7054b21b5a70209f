"""Runs palette actions against an `AppState`."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from .commands import CommandAction
from .logging_utils import get_logger
from .models import DayData
from .state import AppState

logger = get_logger(__name__)

SaveHook = Callable[[DayData], None]

_STATE_OPERATIONS: Dict[CommandAction, Callable[[AppState], object]] = {
    CommandAction.MOVE_UP: AppState.move_selection_up,
    CommandAction.MOVE_DOWN: AppState.move_selection_down,
    CommandAction.MOVE_LEFT: AppState.move_field_left,
    CommandAction.MOVE_RIGHT: AppState.move_field_right,
    CommandAction.EDIT: AppState.enter_edit_mode,
    CommandAction.CHANGE: AppState.change_task_name,
    CommandAction.NEW: AppState.add_new_record,
    CommandAction.BREAK: AppState.add_break,
    CommandAction.DELETE: AppState.delete_selected_record,
    CommandAction.VISUAL: AppState.enter_visual_mode,
    CommandAction.SET_NOW: AppState.set_current_time_on_field,
    CommandAction.UNDO: AppState.undo,
    CommandAction.REDO: AppState.redo,
}


def dispatch_action(state: AppState, action: CommandAction, *, on_save: Optional[SaveHook] = None) -> bool:
    """Invoke the operation behind ``action``.

    Saving is delegated to ``on_save`` because persistence lives outside the
    editor; without a hook the SAVE action is reported as unhandled.
    """
    if action is CommandAction.QUIT:
        state.should_quit = True
        return True
    if action is CommandAction.SAVE:
        if on_save is None:
            logger.warning("Save requested but no save hook is configured")
            return False
        on_save(state.day_data)
        return True

    operation = _STATE_OPERATIONS.get(action)
    if operation is None:
        raise ValueError(f"Unsupported command action: {action!r}")
    operation(state)
    return True


def run_selected_command(state: AppState, *, on_save: Optional[SaveHook] = None) -> Optional[CommandAction]:
    """Execute the highlighted palette entry; returns the action that ran."""
    action = state.execute_selected_command()
    if action is None:
        return None
    dispatch_action(state, action, on_save=on_save)
    return action


__all__ = ["SaveHook", "dispatch_action", "run_selected_command"]
