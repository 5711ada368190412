"""
setcompare: Per-window statistical comparison of genomic signal tracks.

This package provides:
- bedGraph track loading and window synchronisation across replicates
- Welch's t-test and Mann-Whitney U reducers over aligned windows
- Streaming bedGraph output of per-window p-values
- A Typer command line interface
"""

__version__ = "0.1.0"

from setcompare.config import ComparisonConfig
from setcompare.stats import (
    ConfigurationError,
    MWUReduction,
    TTestReduction,
    run_comparison,
)
from setcompare.tracks import Multiset, TrackIterator, load_bedgraph

__all__ = [
    "__version__",
    "ComparisonConfig",
    "ConfigurationError",
    "MWUReduction",
    "TTestReduction",
    "run_comparison",
    "Multiset",
    "TrackIterator",
    "load_bedgraph",
]
