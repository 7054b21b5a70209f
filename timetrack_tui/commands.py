"""Command registry and fuzzy filtering for the command palette."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence


class CommandAction(str, Enum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    EDIT = "edit"
    CHANGE = "change"
    NEW = "new"
    BREAK = "break"
    DELETE = "delete"
    VISUAL = "visual"
    SET_NOW = "set_now"
    UNDO = "undo"
    REDO = "redo"
    SAVE = "save"
    QUIT = "quit"


@dataclass(frozen=True, slots=True)
class Command:
    """A palette entry: key hint, human readable label and the action it triggers."""

    key: str
    description: str
    action: CommandAction

    @property
    def search_text(self) -> str:
        return f"{self.key} {self.description}"


class ScoredCommand(NamedTuple):
    index: int
    score: int
    command: Command


DEFAULT_COMMANDS: tuple[Command, ...] = (
    Command("↑/k", "Move selection up", CommandAction.MOVE_UP),
    Command("↓/j", "Move selection down", CommandAction.MOVE_DOWN),
    Command("←/h", "Move field left", CommandAction.MOVE_LEFT),
    Command("→/l", "Move field right", CommandAction.MOVE_RIGHT),
    Command("Enter/i", "Enter edit mode", CommandAction.EDIT),
    Command("c", "Change task name", CommandAction.CHANGE),
    Command("n", "Add new task", CommandAction.NEW),
    Command("b", "Add break", CommandAction.BREAK),
    Command("d", "Delete selected record", CommandAction.DELETE),
    Command("v", "Enter visual mode", CommandAction.VISUAL),
    Command("t", "Set current time on field", CommandAction.SET_NOW),
    Command("u", "Undo last change", CommandAction.UNDO),
    Command("r", "Redo last change", CommandAction.REDO),
    Command("s", "Save to file", CommandAction.SAVE),
    Command("q", "Quit application", CommandAction.QUIT),
)


# ----------------------------------------------------------------------
# Fuzzy matching
# ----------------------------------------------------------------------
SCORE_MATCH = 16
BONUS_FIRST_CHAR = 8
BONUS_BOUNDARY = 8
BONUS_CONSECUTIVE = 8
PENALTY_GAP_START = 3
PENALTY_GAP_EXTENSION = 1

_BOUNDARY_CHARS = frozenset(" /-_.:")


def _score_from(text: str, query: str, first: int) -> Optional[int]:
    score = 0
    last = -1
    pos = first
    for ch in query:
        pos = text.find(ch, pos)
        if pos == -1:
            return None
        score += SCORE_MATCH
        if pos == 0:
            score += BONUS_FIRST_CHAR
        if pos == 0 or text[pos - 1] in _BOUNDARY_CHARS:
            score += BONUS_BOUNDARY
        if last != -1:
            gap = pos - last - 1
            if gap == 0:
                score += BONUS_CONSECUTIVE
            else:
                score -= PENALTY_GAP_START + PENALTY_GAP_EXTENSION * (gap - 1)
        last = pos
        pos += 1
    return score


def fuzzy_score(text: str, query: str) -> Optional[int]:
    """Score ``query`` as a case-insensitive subsequence of ``text``.

    Returns ``None`` when the query characters do not all appear in order.
    Higher scores mean tighter matches: consecutive characters and matches
    at word starts are rewarded, gaps are penalised.
    """
    if not query:
        return 0
    haystack = text.casefold()
    needle = query.casefold()

    best: Optional[int] = None
    start = haystack.find(needle[0])
    while start != -1:
        score = _score_from(haystack, needle, start)
        if score is None:
            # later starting points can only see fewer characters
            break
        if best is None or score > best:
            best = score
        start = haystack.find(needle[0], start + 1)
    return best


def filter_commands(commands: Sequence[Command], query: str) -> List[ScoredCommand]:
    if not query:
        return [ScoredCommand(i, 0, cmd) for i, cmd in enumerate(commands)]

    results: List[ScoredCommand] = []
    for i, cmd in enumerate(commands):
        score = fuzzy_score(cmd.search_text, query)
        if score is not None:
            results.append(ScoredCommand(i, score, cmd))
    # sorted() is stable, equal scores keep registry order
    return sorted(results, key=lambda item: item.score, reverse=True)


__all__ = [
    "Command",
    "CommandAction",
    "DEFAULT_COMMANDS",
    "ScoredCommand",
    "filter_commands",
    "fuzzy_score",
]
