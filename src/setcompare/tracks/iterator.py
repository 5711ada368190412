"""Pull iterator over the intervals of a single track."""

from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd


class TrackIterator:
    """
    Lazy cursor over a sorted interval table.

    The current interval is exposed through ``chrom``, ``start``, ``finish``
    and ``value``; ``done`` is set once the intervals are exhausted. The
    synchroniser consumes intervals piecewise through :meth:`trim`.

    Parameters
    ----------
    track : pd.DataFrame
        Sorted interval table with columns chrom, start, end, value
        (see :func:`setcompare.tracks.loaders.load_bedgraph`)
    name : str, optional
        Label used in log messages and reprs
    """

    def __init__(self, track: pd.DataFrame, name: Optional[str] = None):
        self.name = name or "track"
        self._chroms = track["chrom"].astype(str).to_numpy()
        self._starts = track["start"].to_numpy(dtype=np.int64)
        self._ends = track["end"].to_numpy(dtype=np.int64)
        self._values = track["value"].to_numpy(dtype=float)

        self._index = 0
        self._stop = len(self._chroms)
        self._region_chrom: Optional[str] = None
        self._region_finish: Optional[int] = None

        self.chrom: Optional[str] = None
        self.start = 0
        self.finish = 0
        self.value = np.nan
        self.done = False
        self._load()

    def __repr__(self) -> str:
        if self.done:
            return f"TrackIterator({self.name!r}, done)"
        return f"TrackIterator({self.name!r}, {self.chrom}:{self.start}-{self.finish}={self.value})"

    def _load(self) -> None:
        """Expose the interval at the cursor, clipped to the seek region."""
        if self._index >= self._stop:
            self.done = True
            return

        self.chrom = self._chroms[self._index]
        self.start = int(self._starts[self._index])
        self.finish = int(self._ends[self._index])
        self.value = float(self._values[self._index])

        if self._region_finish is not None:
            if self.start >= self._region_finish:
                self.done = True
                return
            self.finish = min(self.finish, self._region_finish)

    def advance(self) -> None:
        """Move to the next interval."""
        if self.done:
            return
        self._index += 1
        self._load()

    def trim(self, position: int) -> None:
        """
        Consume the current interval up to ``position``.

        If ``position`` reaches the end of the interval the iterator advances.
        """
        if self.done:
            return
        if position >= self.finish:
            self.advance()
        elif position > self.start:
            self.start = position

    def seek(self, chrom: str, start: int, finish: int) -> None:
        """
        Restrict iteration to the half-open region ``chrom:start-finish``.

        The first and last intervals overlapping the region are clipped to
        it. Seeking a chromosome absent from the track leaves the iterator
        done.
        """
        self.done = False
        self._region_chrom = chrom
        self._region_finish = finish

        positions = np.flatnonzero(self._chroms == chrom)
        if positions.size == 0:
            self._index = self._stop = len(self._chroms)
            self.done = True
            return

        # Intervals of a chromosome are contiguous and sorted by start
        lo, hi = int(positions[0]), int(positions[-1]) + 1
        self._index = lo + int(np.searchsorted(self._ends[lo:hi], start, side="right"))
        self._stop = hi
        self._load()
        if not self.done and self.start < start:
            self.start = start
