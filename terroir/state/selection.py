"""SelectionController: what happens when a region is clicked."""

from __future__ import annotations

import logging

from terroir.state.models import Selection
from terroir.state.reveal import RevealGate
from terroir.state.store import JoinedDataStore
from terroir.state.visited import VisitedSetTracker

logger = logging.getLogger(__name__)


class SelectionController:
    def __init__(self, store: JoinedDataStore, visited: VisitedSetTracker, gate: RevealGate):
        self.store = store
        self.visited = visited
        self.gate = gate
        self._current: Selection | None = None

    @property
    def current(self) -> Selection | None:
        return self._current

    def select_region(self, code: str, name: str) -> Selection:
        """Make *code* the sole active selection.

        Resolves the fact (sentinel when missing), marks the region visited
        and hides the fact again. The previous selection is discarded.
        """
        fact = self.store.get(code)
        self.visited.mark_visited(code)
        self.gate.reset()
        self._current = Selection(code=code, name=name, fact=fact)
        logger.debug("Selected region %s (%s)", code, name)
        return self._current

    def clear(self) -> None:
        """Dismiss the current selection."""
        self._current = None
        self.gate.reset()
