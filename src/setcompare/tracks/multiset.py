"""Synchronised traversal of groups of replicate tracks.

A :class:`Multiset` aligns several groups of :class:`TrackIterator` objects
into common genomic windows. At every step it exposes the maximal window over
which no input changes value, and for each group the replicates that are in
play (have a defined value) in that window.

Example
-------
>>> multi = Multiset([[TrackIterator(a1), TrackIterator(a2)], [TrackIterator(b1)]])
>>> while not multi.done:
...     print(multi.chrom, multi.start, multi.finish, multi.sets[0].values)
...     multi.advance()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from setcompare.tracks.iterator import TrackIterator

logger = logging.getLogger(__name__)


@dataclass
class TrackSet:
    """
    Per-window view of one group of replicate tracks.

    Attributes:
        iters: Replicate iterators of the group
        inplay: True where the replicate has a value in the current window
        values: Current replicate values (0 where not in play)
    """

    iters: List[TrackIterator]
    inplay: np.ndarray = field(init=False)
    values: np.ndarray = field(init=False)

    def __post_init__(self):
        self.inplay = np.zeros(len(self.iters), dtype=bool)
        self.values = np.zeros(len(self.iters), dtype=float)

    @property
    def count(self) -> int:
        """Number of replicate tracks in the group."""
        return len(self.iters)


class Multiset:
    """
    Window synchroniser over groups of replicate tracks.

    Parameters
    ----------
    groups : sequence of sequences of TrackIterator
        One entry per group; each group lists its replicate iterators

    Raises
    ------
    ValueError
        If no group is given or a group has no replicates
    """

    def __init__(self, groups: Sequence[Sequence[TrackIterator]]):
        if len(groups) == 0:
            raise ValueError("A multiset needs at least one group of tracks")
        for i, group in enumerate(groups):
            if len(group) == 0:
                raise ValueError(f"Group {i} of the multiset has no tracks")

        self.sets = [TrackSet(list(group)) for group in groups]
        self.inplay = np.zeros(len(self.sets), dtype=bool)
        self.chrom: Optional[str] = None
        self.start = 0
        self.finish = 0
        self.done = False

        logger.debug(f"Multiset over {len(self.sets)} groups: {[s.count for s in self.sets]} tracks")
        self.advance()

    @property
    def count(self) -> int:
        """Number of groups."""
        return len(self.sets)

    def _iterators(self):
        for track_set in self.sets:
            yield from track_set.iters

    def advance(self) -> None:
        """Move to the next window where at least one input changes."""
        live = [it for it in self._iterators() if not it.done]
        if not live:
            self.done = True
            self.inplay[:] = False
            return

        # Inputs are sorted by chromosome name, so the smallest live name is next
        chrom = min(it.chrom for it in live)
        start = min(it.start for it in live if it.chrom == chrom)
        finish = None
        for it in live:
            if it.chrom != chrom:
                continue
            boundary = it.finish if it.start <= start else it.start
            if finish is None or boundary < finish:
                finish = boundary

        self.chrom = chrom
        self.start = start
        self.finish = finish

        for i, track_set in enumerate(self.sets):
            for j, it in enumerate(track_set.iters):
                covering = not it.done and it.chrom == chrom and it.start <= start
                track_set.inplay[j] = covering
                track_set.values[j] = it.value if covering else 0.0
                if covering:
                    it.trim(finish)
            self.inplay[i] = bool(track_set.inplay.any())

    def seek(self, chrom: str, start: int, finish: int) -> None:
        """Restrict every input to ``chrom:start-finish`` and reload the window."""
        logger.debug(f"Multiset seek to {chrom}:{start}-{finish}")
        self.done = False
        for it in self._iterators():
            it.seek(chrom, start, finish)
        self.advance()
