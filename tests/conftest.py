"""Pytest configuration and fixtures."""

import pytest
import numpy as np

from setcompare.tracks.iterator import TrackIterator
from setcompare.tracks.loaders import track_from_records
from setcompare.tracks.multiset import Multiset


def make_iterator(records, name="track"):
    """Build a track iterator from (chrom, start, end, value) tuples."""
    return TrackIterator(track_from_records(records), name=name)


def single_window_multiset(values_a, values_b, chrom="chr1", start=0, end=10):
    """
    Build a two-group multiset holding a single window.

    ``None`` marks a replicate with no value in the window.
    """
    groups = []
    for values in (values_a, values_b):
        group = []
        for i, v in enumerate(values):
            records = [] if v is None else [(chrom, start, end, v)]
            group.append(make_iterator(records, name=f"rep{i}"))
        groups.append(group)
    return Multiset(groups)


@pytest.fixture
def multiset_factory():
    """Build multisets from nested lists of interval records."""

    def _factory(groups):
        return Multiset(
            [[make_iterator(records, name=f"g{g}r{r}") for r, records in enumerate(group)]
             for g, group in enumerate(groups)]
        )

    return _factory


@pytest.fixture
def replicate_tracks():
    """Two groups of replicate tracks whose windows fall on multiples of 10."""
    group_a = [
        [("chr1", 0, 10, 1.0), ("chr1", 10, 20, 2.0), ("chr1", 20, 30, 3.0), ("chr1", 30, 40, 4.0)],
        [("chr1", 0, 20, 5.0), ("chr1", 20, 40, 6.0), ("chr2", 0, 10, 1.5)],
        [("chr1", 0, 40, 2.5), ("chr2", 0, 10, 0.5)],
    ]
    group_b = [
        [("chr1", 0, 10, 7.0), ("chr1", 10, 30, 1.0), ("chr1", 30, 40, 2.0)],
        [("chr1", 0, 40, 3.0), ("chr2", 0, 10, 9.0)],
    ]
    return [group_a, group_b]


@pytest.fixture
def write_track(tmp_path):
    """Write bedGraph lines to a file under tmp_path."""

    def _write(name, lines):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def single_window():
    """Build a two-group multiset holding one window (None = no value)."""
    return single_window_multiset


@pytest.fixture
def iterator_factory():
    """Build a track iterator from interval records."""
    return make_iterator
