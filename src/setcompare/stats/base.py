"""Shared machinery for two-group comparison reducers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterator, NamedTuple, Optional

import numpy as np

from setcompare.tracks.multiset import Multiset, TrackSet

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when a reducer cannot be built for the given track groups."""


class WindowValue(NamedTuple):
    """One output record: a genomic window and its statistic."""

    chrom: str
    start: int
    finish: int
    value: float


class SetComparison(ABC):
    """
    Lazy iterator comparing the two groups of a :class:`Multiset`.

    The reducer exposes the same state as any track iterator (``chrom``,
    ``start``, ``finish``, ``value``, ``done``) and is loaded with its first
    qualifying window on construction. Subclasses implement :meth:`_compute`,
    which evaluates the synchroniser's current window and returns False when
    the window produced no statistic.

    Parameters
    ----------
    multi : Multiset
        Window synchroniser with exactly two groups

    Raises
    ------
    ConfigurationError
        If the synchroniser does not hold exactly two groups, or the
        subclass rejects the group sizes
    """

    #: Human-readable test name used in messages
    test_name = "comparison"

    def __init__(self, multi: Multiset):
        if multi.count != 2:
            raise ConfigurationError(
                f"The {self.test_name} only works for two sets of tracks, got {multi.count}"
            )
        self._validate(multi.sets[0].count, multi.sets[1].count)

        self.multi = multi
        self.group_a: TrackSet = multi.sets[0]
        self.group_b: TrackSet = multi.sets[1]
        self.n1 = self.group_a.count
        self.n2 = self.group_b.count
        self.N = self.n1 + self.n2

        self.chrom: Optional[str] = None
        self.start = 0
        self.finish = 0
        self.value = np.nan
        self.done = False

        self.n_emitted = 0
        self.n_skipped = 0
        self._setup()

        logger.info(f"{self.test_name} reduction over n1={self.n1}, n2={self.n2} tracks")
        self.advance()

    @abstractmethod
    def _validate(self, n1: int, n2: int) -> None:
        """Reject group sizes the statistic cannot handle."""

    def _setup(self) -> None:
        """Allocate per-reducer state once the group sizes are known."""

    @abstractmethod
    def _compute(self) -> bool:
        """Compute the statistic for the current window; False means skip."""

    def __iter__(self) -> Iterator[WindowValue]:
        while not self.done:
            yield WindowValue(self.chrom, self.start, self.finish, self.value)
            self.advance()

    def __repr__(self) -> str:
        state = "done" if self.done else f"{self.chrom}:{self.start}-{self.finish}={self.value}"
        return f"{type(self).__name__}(n1={self.n1}, n2={self.n2}, {state})"

    def _step(self) -> bool:
        """
        Evaluate one window.

        Returns True when the iterator state was refreshed (a value was
        published or the input is exhausted), False when the window was
        skipped and the caller should try again.
        """
        if self.done:
            return True

        multi = self.multi
        if multi.done:
            self._finish()
            return True

        # Go to the first window where both groups have at least one value
        while not multi.inplay[0] or not multi.inplay[1]:
            multi.advance()
            if multi.done:
                self._finish()
                return True

        self.chrom = multi.chrom
        self.start = multi.start
        self.finish = multi.finish

        produced = self._compute()
        if produced:
            self.n_emitted += 1
        else:
            self.n_skipped += 1
            logger.debug(f"{self.test_name}: no statistic at {self.chrom}:{self.start}-{self.finish}")

        multi.advance()
        return produced

    def _finish(self) -> None:
        self.done = True
        logger.info(
            f"{self.test_name} reduction exhausted: {self.n_emitted} windows emitted, "
            f"{self.n_skipped} skipped"
        )

    def advance(self) -> None:
        """Block until the next qualifying window is published or input runs out."""
        while not self._step():
            pass

    def seek(self, chrom: str, start: int, finish: int) -> None:
        """Reposition on ``chrom:start-finish`` and load the first qualifying window."""
        self.multi.seek(chrom, start, finish)
        self.done = False
        self.advance()
