"""Exceptions raised by the interaction core."""

from __future__ import annotations


class LoadFailure(Exception):
    """A data source could not be fetched or parsed at all."""


class UnknownViewportKey(LookupError):
    """A navigation command named a viewport outside the fixed catalog.

    The UI only offers catalog keys, so this is a caller bug.
    """

    def __init__(self, key: str):
        super().__init__(f"Unknown viewport key: {key!r}")
        self.key = key
