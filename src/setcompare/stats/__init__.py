"""Per-window statistical comparisons between two groups of tracks.

This module provides lazy reducers over a window synchroniser:

- Welch's t-test with Satterthwaite degrees of freedom
- Mann-Whitney U with tie correction (normal approximation)

Public API:
-----------
from setcompare.stats import run_comparison, TTestReduction, MWUReduction

# Stream p-values for every window where both groups have data
for chrom, start, finish, p in TTestReduction(multi):
    ...

# Load tracks, compare and write a bedGraph
summary = run_comparison(
    test="mwu",
    set_a=["a1.bg", "a2.bg"],
    set_b=["b1.bg", "b2.bg"],
    output="derived/mwu.bg",
)
"""

from setcompare.stats.base import ConfigurationError, SetComparison, WindowValue
from setcompare.stats.ttest import TTestReduction, ttest_reduction
from setcompare.stats.mannwhitney import MWUReduction, mwu_reduction
from setcompare.stats.api import build_reducer, run_comparison, run_comparison_from_config

__all__ = [
    "ConfigurationError",
    "SetComparison",
    "WindowValue",
    "TTestReduction",
    "ttest_reduction",
    "MWUReduction",
    "mwu_reduction",
    "build_reducer",
    "run_comparison",
    "run_comparison_from_config",
]
