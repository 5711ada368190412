"""Track loading functions for setcompare.

This module reads bedGraph signal tracks into sorted interval tables.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

BEDGRAPH_COLUMNS = ["chrom", "start", "end", "value"]

# Header lines allowed by the UCSC bedGraph format
_HEADER_PREFIXES = ("track", "browser", "#")


def load_bedgraph(path: Union[Path, str]) -> pd.DataFrame:
    """
    Load a bedGraph track into a sorted interval table.

    Parameters
    ----------
    path : Path or str
        Path to a bedGraph file (chrom, start, end, value; tab-separated)

    Returns
    -------
    pd.DataFrame
        Columns chrom, start, end, value, sorted by chromosome name and
        then by start.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    ValueError
        If the file is malformed or intervals overlap
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Track file not found: {path}")

    logger.info(f"Loading track from {path}")

    with open(path, "r", encoding="utf-8") as handle:
        skip = 0
        for line in handle:
            if line.startswith(_HEADER_PREFIXES):
                skip += 1
            else:
                break

    try:
        df = pd.read_csv(
            path,
            sep=r"\s+",
            header=None,
            skiprows=skip,
            comment="#",
            dtype={0: str},
        )
    except pd.errors.EmptyDataError:
        logger.warning(f"Track {path} contains no intervals")
        return _empty_track()

    if df.shape[1] != 4:
        raise ValueError(
            f"Expected 4 bedGraph columns (chrom, start, end, value) in {path}, "
            f"found {df.shape[1]}"
        )
    df.columns = BEDGRAPH_COLUMNS

    try:
        starts = pd.to_numeric(df["start"])
        ends = pd.to_numeric(df["end"])
        df["value"] = pd.to_numeric(df["value"]).astype(float)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid bedGraph coordinates or values in {path}: {e}") from e

    for column, coords in (("start", starts), ("end", ends)):
        fractional = ~(coords % 1 == 0)
        if fractional.any():
            row = df[fractional].iloc[0]
            raise ValueError(
                f"Non-integer {column} coordinate in {path}: "
                f"{row['chrom']}:{row['start']}-{row['end']}"
            )
    df["start"] = starts.astype(np.int64)
    df["end"] = ends.astype(np.int64)

    missing = df["value"].isna()
    if missing.any():
        row = df[missing].iloc[0]
        raise ValueError(f"Missing value in {path} at {row['chrom']}:{row['start']}-{row['end']}")

    bad = df["start"] >= df["end"]
    if bad.any():
        first = df[bad].iloc[0]
        raise ValueError(
            f"Empty or inverted interval in {path}: "
            f"{first['chrom']}:{first['start']}-{first['end']}"
        )

    df = sort_intervals(df)
    validate_no_overlaps(df, source=str(path))

    logger.info(f"Loaded {len(df)} intervals on {df['chrom'].nunique()} chromosomes from {path.name}")
    return df


def sort_intervals(df: pd.DataFrame) -> pd.DataFrame:
    """Order intervals by chromosome name then start (``sort -k1,1 -k2,2n``)."""
    return df.sort_values(["chrom", "start"], kind="mergesort").reset_index(drop=True)


def validate_no_overlaps(df: pd.DataFrame, source: str = "track") -> None:
    """
    Check that intervals of a sorted track do not overlap.

    Raises
    ------
    ValueError
        If two intervals on the same chromosome overlap
    """
    if len(df) < 2:
        return

    same_chrom = df["chrom"].to_numpy()[1:] == df["chrom"].to_numpy()[:-1]
    overlap = same_chrom & (df["start"].to_numpy()[1:] < df["end"].to_numpy()[:-1])
    if overlap.any():
        i = int(np.flatnonzero(overlap)[0]) + 1
        row = df.iloc[i]
        raise ValueError(
            f"Overlapping intervals in {source} at {row['chrom']}:{row['start']}-{row['end']}"
        )


def track_from_records(records) -> pd.DataFrame:
    """Build a sorted track table from (chrom, start, end, value) tuples."""
    df = pd.DataFrame(list(records), columns=BEDGRAPH_COLUMNS)
    if df.empty:
        return _empty_track()
    df["start"] = df["start"].astype(np.int64)
    df["end"] = df["end"].astype(np.int64)
    df["value"] = df["value"].astype(float)
    df = sort_intervals(df)
    validate_no_overlaps(df)
    return df


def _empty_track() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "chrom": pd.Series([], dtype=str),
            "start": pd.Series([], dtype=np.int64),
            "end": pd.Series([], dtype=np.int64),
            "value": pd.Series([], dtype=float),
        }
    )
