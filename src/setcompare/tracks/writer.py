"""bedGraph output for reducer records."""

from __future__ import annotations

import logging
from itertools import islice
from pathlib import Path
from typing import Iterable, Union

import pandas as pd

from setcompare.tracks.loaders import BEDGRAPH_COLUMNS

logger = logging.getLogger(__name__)


def write_bedgraph(
    records: Iterable,
    path: Union[Path, str],
    chunk_size: int = 100_000,
) -> int:
    """
    Stream (chrom, start, finish, value) records into a bedGraph file.

    Records are consumed lazily and written in chunks, so arbitrarily long
    reducer streams never need to be held in memory.

    Parameters
    ----------
    records : iterable
        Records with four fields, e.g. :class:`setcompare.stats.base.WindowValue`
    path : Path or str
        Output file; parent directories are created
    chunk_size : int
        Number of records buffered per write

    Returns
    -------
    int
        Number of records written
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    iterator = iter(records)
    n_written = 0
    with open(path, "w", encoding="utf-8", newline="") as handle:
        while True:
            chunk = list(islice(iterator, chunk_size))
            if not chunk:
                break
            df = pd.DataFrame(chunk, columns=BEDGRAPH_COLUMNS)
            df.to_csv(handle, sep="\t", header=False, index=False, float_format="%.17g")
            n_written += len(chunk)
            logger.debug(f"Wrote {n_written} records to {path}")

    logger.info(f"Wrote {n_written} records to {path}")
    return n_written
