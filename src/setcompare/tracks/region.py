"""Genomic region strings."""

from __future__ import annotations

import re
from typing import NamedTuple

_REGION_RE = re.compile(r"^(?P<chrom>[^:\s]+):(?P<start>[\d,]+)-(?P<finish>[\d,]+)$")


class Region(NamedTuple):
    """Half-open, 0-based genomic interval."""

    chrom: str
    start: int
    finish: int

    def __str__(self) -> str:
        return f"{self.chrom}:{self.start}-{self.finish}"


def parse_region(text: str) -> Region:
    """
    Parse a ``chrom:start-finish`` string (thousands separators allowed).

    Raises
    ------
    ValueError
        If the string is not a region or the interval is empty
    """
    match = _REGION_RE.match(text.strip())
    if match is None:
        raise ValueError(f"Invalid region '{text}'; expected chrom:start-finish")

    start = int(match.group("start").replace(",", ""))
    finish = int(match.group("finish").replace(",", ""))
    if start >= finish:
        raise ValueError(f"Region '{text}' is empty: start must be below finish")

    return Region(match.group("chrom"), start, finish)
