"""Cleaning and normalization of the specialty lookup table."""

from __future__ import annotations

import logging
import re
import unicodedata

import pandas as pd

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["code", "specialite"]


def _ascii(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return decomposed.encode("ascii", "ignore").decode("ascii")


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Lowercase, strip accents, and snake_case column names.

    ``"Spécialité "`` becomes ``"specialite"``.
    """
    df = df.copy()
    df.columns = [
        re.sub(r"[^a-z0-9]+", "_", _ascii(str(col)).strip().lower()).strip("_")
        for col in df.columns
    ]
    duplicated = df.columns.duplicated()
    if duplicated.any():
        logger.warning("Dropping repeated column(s) %s", list(df.columns[duplicated]))
        df = df.loc[:, ~duplicated]
    return df


def strip_strings(df: pd.DataFrame) -> pd.DataFrame:
    """Strip leading/trailing whitespace from string columns."""
    df = df.copy()
    str_cols = df.select_dtypes(include=["object", "string"]).columns
    for col in str_cols:
        df[col] = df[col].str.strip()
    return df


def drop_incomplete(df: pd.DataFrame, columns: list[str] = REQUIRED_COLUMNS) -> pd.DataFrame:
    """Drop rows where any of *columns* is missing or blank."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        logger.warning("Lookup table lacks column(s) %s, every row is skipped", missing)
        return pd.DataFrame(columns=columns)

    before = len(df)
    mask = pd.Series(True, index=df.index)
    for col in columns:
        mask &= df[col].notna() & (df[col].astype(str) != "")
    df = df[mask]
    skipped = before - len(df)
    if skipped:
        logger.debug("Skipped %d incomplete lookup rows", skipped)
    return df


def drop_duplicates(df: pd.DataFrame, subset: list[str] | None = None) -> pd.DataFrame:
    """Remove duplicate rows, keeping the last occurrence."""
    before = len(df)
    df = df.drop_duplicates(subset=subset, keep="last")
    removed = before - len(df)
    if removed:
        logger.info("Removed %d duplicate rows", removed)
    return df


def clean_lookup(df: pd.DataFrame) -> pd.DataFrame:
    """Run the full cleaning pipeline on the raw lookup table."""
    df = normalize_columns(df)
    df = strip_strings(df)
    df = drop_incomplete(df)
    df = drop_duplicates(df, subset=["code"])
    logger.info("Cleaning complete: %d usable lookup rows", len(df))
    return df
