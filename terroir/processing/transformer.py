"""Transformation of the raw documents and the code-keyed join between them."""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from terroir.state.models import NOT_FOUND_FACT, Region

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Boundary helpers
# ---------------------------------------------------------------------------

# Property names seen in the upstream GeoJSON for each field.
CODE_KEYS = ["code", "code_insee", "dep_code"]
NAME_KEYS = ["nom", "name", "dep_nom"]


def parse_regions(doc: dict[str, Any]) -> list[Region]:
    """Turn a GeoJSON FeatureCollection into regions.

    Features without a code are skipped; the first feature wins when a code
    appears twice (codes are expected to be unique).
    """
    regions: dict[str, Region] = {}
    skipped = 0
    for feature in doc.get("features", []):
        if not isinstance(feature, dict):
            skipped += 1
            continue
        props = feature.get("properties") or {}
        if not isinstance(props, dict):
            skipped += 1
            continue
        code = _find_key(props, CODE_KEYS)
        if not code:
            skipped += 1
            continue
        code = str(code).strip()
        if code in regions:
            logger.warning("Duplicate region code %s in boundary document", code)
            continue
        name = str(_find_key(props, NAME_KEYS) or code).strip()
        geometry = feature.get("geometry")
        regions[code] = Region(
            code=code,
            name=name,
            geometry=geometry if isinstance(geometry, dict) else {},
        )

    if skipped:
        logger.warning("Skipped %d features without a code", skipped)
    logger.info("Parsed %d regions", len(regions))
    return list(regions.values())


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------


def build_lookup(df: pd.DataFrame) -> dict[str, str]:
    """Build the code -> fact mapping from a cleaned lookup table.

    Later rows overwrite earlier ones for the same code.
    """
    lookup: dict[str, str] = {}
    for code, fact in zip(df["code"], df["specialite"]):
        lookup[str(code)] = str(fact)
    logger.info("Lookup holds %d facts", len(lookup))
    return lookup


# ---------------------------------------------------------------------------
# Join: regions x lookup -> fact per region code
# ---------------------------------------------------------------------------


def join_facts(regions: list[Region], lookup: dict[str, str]) -> dict[str, str]:
    """Resolve a fact for every region, falling back to the sentinel."""
    joined = {r.code: lookup.get(r.code, NOT_FOUND_FACT) for r in regions}

    matched = sum(1 for r in regions if r.code in lookup)
    if regions and not matched:
        logger.warning("Join matched 0 regions — check code alignment")
    logger.info("Joined facts: %d/%d regions matched", matched, len(regions))
    return joined


def coverage_report(regions: list[Region], lookup: dict[str, str]) -> dict[str, Any]:
    """Summarize how well the lookup table covers the loaded regions."""
    codes = {r.code for r in regions}
    return {
        "regions": len(codes),
        "facts": len(lookup),
        "matched": len(codes & lookup.keys()),
        "missing": sorted(codes - lookup.keys()),
        "unused": sorted(lookup.keys() - codes),
    }


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


def _find_key(props: dict[str, Any], candidates: list[str]) -> Any:
    for c in candidates:
        if props.get(c) not in (None, ""):
            return props[c]
    return None
