"""Undo/redo over an append-only change log.

Undo and redo only move a cursor; the field is always recomputed from the
active prefix of the log, so redo is an exact replay.
"""

from typing import List, Optional

from ..catalog.templates import TemplateRef
from ..changes.types import MultiChange
from ..config import SolverConfig
from ..core.models import FieldState
from .pipeline import recalculate


class ChangeLog:
    """Recorded changes for one field, with a cursor marking the active prefix."""

    def __init__(self, template: TemplateRef, changes: Optional[list] = None):
        self.template = template
        self._changes: List = list(changes or [])
        self._cursor = len(self._changes)

    @property
    def active_changes(self) -> list:
        return self._changes[:self._cursor]

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._changes)

    def record(self, change):
        """Append a change after the cursor, discarding anything undone."""
        del self._changes[self._cursor:]
        self._changes.append(change)
        self._cursor = len(self._changes)

    def record_batch(self, changes: list):
        """Record several changes as one undo step."""
        if not changes:
            return
        self.record(changes[0] if len(changes) == 1 else MultiChange(changes=list(changes)))

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        self._cursor -= 1
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self._cursor += 1
        return True

    def state(self, config: Optional[SolverConfig] = None) -> FieldState:
        return recalculate(self.template, self.active_changes, config=config)
