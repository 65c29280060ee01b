"""VisitedSetTracker: codes of the regions clicked during a session."""

from __future__ import annotations


class VisitedSetTracker:
    """Append-only set of region codes. Marking twice is a no-op."""

    def __init__(self):
        self._codes: set[str] = set()

    def mark_visited(self, code: str) -> None:
        self._codes.add(code)

    def is_visited(self, code: str) -> bool:
        return code in self._codes

    def codes(self) -> frozenset[str]:
        return frozenset(self._codes)

    def __contains__(self, code: object) -> bool:
        return code in self._codes

    def __len__(self) -> int:
        return len(self._codes)
