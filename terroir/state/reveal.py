"""RevealGate: whether the current selection's fact is shown."""

from __future__ import annotations


class RevealGate:
    """Single boolean for the current selection.

    The gate does not know which selection it belongs to; the selection
    controller resets it on every selection change.
    """

    def __init__(self):
        self._shown = False

    def reveal(self) -> None:
        self._shown = True

    def reset(self) -> None:
        self._shown = False

    def is_shown(self) -> bool:
        return self._shown
