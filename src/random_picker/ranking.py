"""
Fixed ordering for presented entries.

Hosts usually re-sort results by score and nudge scores by how often an
entry was chosen before. Giving each entry a score far above that nudge,
decreasing with its position, keeps the order the picker decided on.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

from .core import RANK_STEP


@dataclass
class ContextAction:
    """A secondary action offered next to an entry (e.g. "Add to Favorites")."""

    title: str
    action: Callable[[], Any]
    shortcut: str = ""


@dataclass
class Entry:
    """One presentable line: what the host shows and what happens on select."""

    title: str
    subtitle: str = ""
    query_text: str = ""
    score: int = 0
    selected_count: int = 0
    warning: bool = False
    action: Optional[Callable[[], Any]] = None
    context_actions: List[ContextAction] = field(default_factory=list)
    definition: Optional[str] = None

    def activate(self):
        if self.action is not None:
            return self.action()
        return None


def fix_position_as_score(entries: Sequence[Entry]) -> Sequence[Entry]:
    """Score entries so that they keep their current order, and reset usage counts."""
    count = len(entries)
    for index, entry in enumerate(entries):
        entry.score = (count - index) * RANK_STEP
        entry.selected_count = 0
    return entries
