"""Load pipeline: ingest → clean → transform → join.

Run with:  python -m terroir.pipeline
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass

import httpx
import pandas as pd

from terroir.ingestion.sources import (
    BOUNDARIES_SOURCE,
    LOOKUP_SOURCE,
    fetch_boundaries,
    fetch_lookup,
)
from terroir.processing.cleaner import clean_lookup
from terroir.processing.transformer import (
    build_lookup,
    coverage_report,
    join_facts,
    parse_regions,
)
from terroir.state.errors import LoadFailure
from terroir.state.models import Region

logger = logging.getLogger(__name__)


@dataclass
class LoadedData:
    regions: list[Region]
    lookup: dict[str, str]
    facts: dict[str, str]


async def run_load(
    boundaries_source: str = BOUNDARIES_SOURCE,
    lookup_source: str = LOOKUP_SOURCE,
    client: httpx.AsyncClient | None = None,
) -> LoadedData:
    """Fetch both sources concurrently and join them.

    Any fetch or whole-document parse error becomes a ``LoadFailure``;
    nothing partial is returned.
    """
    logger.info("=== STEP 1: Fetching boundaries and lookup table ===")
    try:
        doc, raw_lookup = await asyncio.gather(
            fetch_boundaries(boundaries_source, client=client),
            fetch_lookup(lookup_source, client=client),
        )
    except (httpx.HTTPError, OSError, ValueError, pd.errors.ParserError) as exc:
        raise LoadFailure(f"Failed to load data: {exc}") from exc

    try:
        logger.info("=== STEP 2: Cleaning lookup table ===")
        lookup = build_lookup(clean_lookup(raw_lookup))

        logger.info("=== STEP 3: Joining regions with facts ===")
        regions = parse_regions(doc)
        facts = join_facts(regions, lookup)
    except (KeyError, TypeError, AttributeError, ValueError) as exc:
        raise LoadFailure(f"Failed to parse data: {exc}") from exc
    return LoadedData(regions=regions, lookup=lookup, facts=facts)


def main() -> dict:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    data = asyncio.run(run_load())
    report = coverage_report(data.regions, data.lookup)
    logger.info("=== Load complete ===")
    logger.info("Coverage: %s", json.dumps(report, ensure_ascii=False))
    return report


if __name__ == "__main__":
    main()
