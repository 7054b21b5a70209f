from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

DEFAULT_HISTORY_DEPTH = 50

T = TypeVar("T")


class History(Generic[T]):
    """Linear undo/redo over full state snapshots.

    Pushing a new snapshot discards everything that could be redone. The undo
    stack keeps at most ``max_depth`` entries; the oldest one is dropped first.
    """

    def __init__(self, max_depth: int = DEFAULT_HISTORY_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError("History depth must be at least 1")
        self.max_depth = max_depth
        self._undo_stack: List[T] = []
        self._redo_stack: List[T] = []

    def push(self, state: T) -> None:
        if len(self._undo_stack) >= self.max_depth:
            self._undo_stack.pop(0)
        self._undo_stack.append(state)
        self._redo_stack.clear()

    def undo(self, current_state: T) -> Optional[T]:
        if not self._undo_stack:
            return None
        previous_state = self._undo_stack.pop()
        self._push_bounded(self._redo_stack, current_state)
        return previous_state

    def redo(self, current_state: T) -> Optional[T]:
        if not self._redo_stack:
            return None
        next_state = self._redo_stack.pop()
        self._push_bounded(self._undo_stack, current_state)
        return next_state

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()

    def _push_bounded(self, stack: List[T], state: T) -> None:
        if len(stack) >= self.max_depth:
            stack.pop(0)
        stack.append(state)


__all__ = ["DEFAULT_HISTORY_DEPTH", "History"]
