"""JoinedDataStore: the loaded regions joined with their facts."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from terroir.pipeline import LoadedData, run_load
from terroir.state.errors import LoadFailure
from terroir.state.labels import LabelPlacement
from terroir.state.models import NOT_FOUND_FACT, LoadStatus, Region

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[LoadedData]]


class JoinedDataStore:
    """Holds the joined model once the single startup load resolves.

    ``status`` is exactly one of loading / error / ready. The model is only
    visible in the ready state; a failed load leaves nothing behind.
    """

    def __init__(self, loader: Loader | None = None):
        self._loader = loader or run_load
        self.status = LoadStatus.LOADING
        self.error: str | None = None
        self._facts: dict[str, str] = {}
        self._regions: dict[str, Region] = {}
        self._closed = False
        self.labels = LabelPlacement()

    async def load(self) -> dict[str, str]:
        """Run the load and return the code -> fact model.

        Raises ``LoadFailure`` when either source could not be loaded; any
        other loader error is reported the same way.
        """
        try:
            data = await self._loader()
        except Exception as exc:
            failure = exc
            if not isinstance(exc, LoadFailure):
                failure = LoadFailure(f"Failed to load data: {exc}")
            if self._closed:
                logger.info("Ignoring load failure after teardown")
            else:
                self.status = LoadStatus.ERROR
                self.error = str(failure)
                logger.error("Data load failed: %s", failure)
            if failure is exc:
                raise
            raise failure from exc

        if self._closed:
            logger.info("Ignoring load result after teardown")
            return {}

        self._regions = {r.code: r for r in data.regions}
        self._facts = dict(data.facts)
        self.labels = LabelPlacement()
        self.status = LoadStatus.READY
        self.error = None
        logger.info("Data store ready with %d regions", len(self._regions))
        return dict(self._facts)

    def close(self) -> None:
        """Tear the store down; a load still in flight is ignored on completion."""
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def ready(self) -> bool:
        return self.status is LoadStatus.READY

    @property
    def regions(self) -> list[Region]:
        return list(self._regions.values())

    def region(self, code: str) -> Region | None:
        return self._regions.get(code)

    def contains(self, code: str) -> bool:
        return code in self._facts

    def get(self, code: str) -> str:
        return self._facts.get(code, NOT_FOUND_FACT)

    @property
    def facts(self) -> dict[str, str]:
        return dict(self._facts)
