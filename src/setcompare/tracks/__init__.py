"""
Track access layer for setcompare.

This module reads bedGraph tracks and aligns groups of replicate tracks into
common genomic windows:

- bedGraph loading and writing
- Per-track pull iterators with region seeking
- A window synchroniser (Multiset) over groups of tracks

Example usage:
    from setcompare.tracks import load_bedgraph, TrackIterator, Multiset

    group_a = [TrackIterator(load_bedgraph(p)) for p in ("a1.bg", "a2.bg")]
    group_b = [TrackIterator(load_bedgraph(p)) for p in ("b1.bg", "b2.bg")]
    multi = Multiset([group_a, group_b])
"""

from setcompare.tracks.loaders import load_bedgraph, track_from_records
from setcompare.tracks.iterator import TrackIterator
from setcompare.tracks.multiset import Multiset, TrackSet
from setcompare.tracks.region import Region, parse_region
from setcompare.tracks.writer import write_bedgraph

__all__ = [
    "load_bedgraph",
    "track_from_records",
    "TrackIterator",
    "Multiset",
    "TrackSet",
    "Region",
    "parse_region",
    "write_bedgraph",
]
