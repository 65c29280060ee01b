"""CameraController and the fixed catalog of named viewports."""

from __future__ import annotations

import logging
from types import MappingProxyType

from terroir.state.errors import UnknownViewportKey
from terroir.state.models import CameraState, Viewport

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT = "metropole"

VIEWPORTS = MappingProxyType({
    "metropole": Viewport(center=(46.603354, 1.888334), zoom=6, label="France métropolitaine"),
    "guadeloupe": Viewport(center=(16.25, -61.58), zoom=9, label="Guadeloupe"),
    "martinique": Viewport(center=(14.64, -61.02), zoom=10, label="Martinique"),
    "guyane": Viewport(center=(3.93, -53.13), zoom=7, label="Guyane"),
    "reunion": Viewport(center=(-21.13, 55.53), zoom=10, label="La Réunion"),
    "mayotte": Viewport(center=(-12.82, 45.15), zoom=11, label="Mayotte"),
})


class CameraController:
    """Holds the active viewport.

    Every ``navigate_to`` replaces the state synchronously and bumps the
    generation, so a renderer still animating an older generation knows it
    has been superseded. No transition is ever queued.
    """

    def __init__(self, initial: str = DEFAULT_VIEWPORT):
        if initial not in VIEWPORTS:
            raise UnknownViewportKey(initial)
        self._state = CameraState(key=initial, viewport=VIEWPORTS[initial], generation=0)

    @property
    def state(self) -> CameraState:
        return self._state

    def navigate_to(self, key: str) -> CameraState:
        if key not in VIEWPORTS:
            raise UnknownViewportKey(key)
        self._state = CameraState(
            key=key,
            viewport=VIEWPORTS[key],
            generation=self._state.generation + 1,
        )
        logger.debug("Camera -> %s (generation %d)", key, self._state.generation)
        return self._state

    def is_current(self, generation: int) -> bool:
        """True when *generation* is the latest navigation command."""
        return generation == self._state.generation
