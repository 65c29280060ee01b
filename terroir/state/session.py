"""QuizSession: one user's interaction state over a shared data store."""

from __future__ import annotations

import logging
from typing import Callable

from terroir.state.camera import DEFAULT_VIEWPORT, CameraController
from terroir.state.models import CameraState, LoadStatus, RegionStyle, Selection
from terroir.state.reveal import RevealGate
from terroir.state.selection import SelectionController
from terroir.state.store import JoinedDataStore
from terroir.state.style import style_for
from terroir.state.visited import VisitedSetTracker

logger = logging.getLogger(__name__)

EVENTS = ("click", "hoverEnter", "hoverExit")


class QuizSession:
    """Wires the store, tracker, gate, selection and camera together.

    Clicks and reveal actions are inert until the store is ready. Navigation
    works in every state: the camera does not depend on the data.
    """

    def __init__(self, store: JoinedDataStore, initial_viewport: str = DEFAULT_VIEWPORT):
        self.store = store
        self.visited = VisitedSetTracker()
        self.gate = RevealGate()
        self.selection = SelectionController(store, self.visited, self.gate)
        self.camera = CameraController(initial_viewport)
        self.hovered: str | None = None
        self.handlers: dict[str, Callable[[str, str], object]] = {
            "click": self.select_region,
            "hoverEnter": self.hover_enter,
            "hoverExit": self.hover_exit,
        }

    @property
    def status(self) -> LoadStatus:
        return self.store.status

    @property
    def current(self) -> Selection | None:
        return self.selection.current

    @property
    def revealed(self) -> bool:
        return self.gate.is_shown()

    # -- events ------------------------------------------------------------

    def dispatch(self, event: str, code: str, name: str = "") -> object:
        return self.handlers[event](code, name)

    def select_region(self, code: str, name: str = "") -> Selection | None:
        if not self.store.ready:
            logger.debug("Click on %s ignored: data is %s", code, self.status.value)
            return None
        if not self.store.contains(code):
            logger.warning("Click on unknown region %s ignored", code)
            return None
        if not name:
            region = self.store.region(code)
            name = region.name if region else code
        return self.selection.select_region(code, name)

    def reveal(self) -> None:
        if self.current is None:
            return
        self.gate.reveal()

    def dismiss(self) -> None:
        self.selection.clear()

    def hover_enter(self, code: str, name: str = "") -> None:
        self.hovered = code

    def hover_exit(self, code: str, name: str = "") -> None:
        if self.hovered == code:
            self.hovered = None

    def navigate_to(self, key: str) -> CameraState:
        return self.camera.navigate_to(key)

    # -- derived state -----------------------------------------------------

    def style_for(self, code: str) -> RegionStyle:
        return style_for(self.visited.is_visited(code), hovered=code == self.hovered)

    def visible_fact(self) -> str | None:
        """The current fact, or None while it is still hidden."""
        if self.current is None or not self.revealed:
            return None
        return self.current.fact
