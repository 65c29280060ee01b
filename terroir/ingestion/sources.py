"""Ingestion of the two upstream documents: region boundaries and the specialty table.

Both sources may be an http(s) URL or a local file path.
"""

from __future__ import annotations

import io
import json
import logging
import os
from pathlib import Path
from typing import Any

import httpx
import pandas as pd

logger = logging.getLogger(__name__)

BOUNDARIES_SOURCE = os.getenv(
    "TERROIR_BOUNDARIES_SOURCE",
    "https://raw.githubusercontent.com/gregoiredavid/france-geojson/master/"
    "departements-avec-outre-mer.geojson",
)

LOOKUP_SOURCE = os.getenv(
    "TERROIR_LOOKUP_SOURCE",
    str(Path(__file__).resolve().parents[2] / "data" / "specialites.csv"),
)

# Fetches may run arbitrarily long
TIMEOUT = httpx.Timeout(None)


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def fetch_text(source: str, client: httpx.AsyncClient | None = None) -> str:
    """Return the raw text of *source*, downloading it when it is a URL."""
    if not _is_url(source):
        logger.info("Reading %s", source)
        return Path(source).read_text(encoding="utf-8")

    logger.info("Downloading %s", source)
    if client is None:
        async with httpx.AsyncClient(timeout=TIMEOUT, follow_redirects=True) as own:
            resp = await own.get(source)
    else:
        resp = await client.get(source)
    resp.raise_for_status()
    logger.info("Downloaded %d bytes", len(resp.content))
    return resp.text


async def fetch_boundaries(
    source: str = BOUNDARIES_SOURCE,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Fetch the GeoJSON FeatureCollection of regions."""
    raw = await fetch_text(source, client=client)
    doc = json.loads(raw)
    if not isinstance(doc, dict) or not isinstance(doc.get("features"), list):
        raise ValueError("Boundary document has no 'features' list")
    logger.info("Boundary document holds %d features", len(doc["features"]))
    return doc


def read_lookup_csv(raw: str, sep: str | None = None) -> pd.DataFrame:
    """Parse the specialty table into a string-typed DataFrame.

    Automatically detects the separator if not provided. Rows with the wrong
    number of fields are dropped; an empty document yields an empty frame.
    """
    if not raw.strip():
        logger.warning("Lookup table is empty")
        return pd.DataFrame()

    if sep is None:
        first_line = raw.split("\n", maxsplit=1)[0]
        sep = ";" if first_line.count(";") > first_line.count(",") else ","

    df = pd.read_csv(
        io.StringIO(raw),
        sep=sep,
        dtype=str,
        keep_default_na=False,
        on_bad_lines="skip",
    )
    logger.info("Parsed lookup table: %d rows x %d columns", len(df), len(df.columns))
    return df


async def fetch_lookup(
    source: str = LOOKUP_SOURCE,
    client: httpx.AsyncClient | None = None,
) -> pd.DataFrame:
    """Fetch and parse the code -> specialty table."""
    raw = await fetch_text(source, client=client)
    return read_lookup_csv(raw)
