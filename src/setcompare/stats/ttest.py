"""Welch's t-test between two groups of replicate tracks."""

from __future__ import annotations

import logging
import math
from typing import Tuple

import numpy as np
from scipy import stats as sp_stats

from setcompare.stats.base import ConfigurationError, SetComparison
from setcompare.tracks.multiset import Multiset, TrackSet

logger = logging.getLogger(__name__)


def group_moments(track_set: TrackSet) -> Tuple[float, float, int]:
    """Mean and population variance of a group in the current window.

    Only in-play replicates contribute to the sums, while the denominator is
    the group's replicate count. Values are shifted by the first in-play value
    before squaring, so a constant group has a variance of exactly zero.

    Args:
        track_set: Group view from the synchroniser

    Returns:
        Tuple of (mean, variance, number of in-play replicates)
    """
    count = track_set.count
    values = track_set.values[track_set.inplay]
    n_inplay = len(values)
    if n_inplay == 0:
        return np.nan, np.nan, 0

    shift = float(values[0])
    deltas = values - shift
    # Replicates out of play sit at zero, i.e. at -shift after the shift
    n_out = count - n_inplay
    sum_d = float(deltas.sum()) - n_out * shift
    sum_sq_d = float(np.dot(deltas, deltas)) + n_out * shift * shift

    mean_d = sum_d / count
    var = sum_sq_d / count - mean_d * mean_d
    return shift + mean_d, max(var, 0.0), n_inplay


def welch_satterthwaite_df(var1: float, n1: int, var2: float, n2: int) -> float:
    """Satterthwaite degrees of freedom for Welch's t-test.

    A group with zero variance contributes nothing to the denominator, which
    also covers single-replicate groups. Returns NaN when the denominator
    underflows to zero.
    """
    se2 = var1 / n1 + var2 / n2
    denom = 0.0
    if var1 > 0:
        denom += (var1 * var1) / (n1 * n1 * (n1 - 1))
    if var2 > 0:
        denom += (var2 * var2) / (n2 * n2 * (n2 - 1))
    if denom == 0:
        return np.nan
    return se2 * se2 / denom


class TTestReduction(SetComparison):
    """
    Per-window Welch t-test p-values between two groups of tracks.

    Windows where the summed variance of both groups is zero have no
    statistic and are skipped.
    """

    test_name = "t-test"

    def _validate(self, n1: int, n2: int) -> None:
        if n1 + n2 < 3:
            raise ConfigurationError(
                "The t-test function only works for two sets with enough elements "
                f"to compute variance (n1 + n2 >= 3), got n1={n1}, n2={n2}"
            )

    def _compute(self) -> bool:
        mean1, var1, k1 = group_moments(self.group_a)
        mean2, var2, k2 = group_moments(self.group_b)

        if k1 == 0 or k2 == 0:
            return False
        if var1 + var2 == 0:
            return False

        n1, n2 = self.n1, self.n2
        se2 = var1 / n1 + var2 / n2
        df = welch_satterthwaite_df(var1, n1, var2, n2)
        # Subnormal variances underflow here
        if se2 == 0 or not math.isfinite(df):
            return False

        t = abs(mean1 - mean2) / math.sqrt(se2)
        self.value = float(2 * sp_stats.t.sf(t, df))
        return True


def ttest_reduction(multi: Multiset) -> TTestReduction:
    """Build a t-test reducer over a two-group multiset."""
    return TTestReduction(multi)
