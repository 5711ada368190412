"""Mann-Whitney U (Wilcoxon rank-sum) test between two groups of tracks.

The U statistic of group A counts, over all (A, B) replicate pairs, the pairs
where the A value is larger, with tied pairs counting one half. p-values use
the normal approximation; exact small-sample tables are not provided.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np
from scipy import special

from setcompare.stats.base import ConfigurationError, SetComparison
from setcompare.tracks.multiset import Multiset

logger = logging.getLogger(__name__)

# Group tags of the ranking table
SET_A = False
SET_B = True


def rank_sum_u1(values: Sequence[float], tags: Sequence[bool], n1: int) -> float:
    """
    Tie-corrected U statistic of group A from a sorted ranking table.

    Args:
        values: Table values in ascending order
        tags: Group tag per entry (``SET_A`` / ``SET_B``), sorted with values
        n1: Number of group A entries in the table

    Returns:
        U1, the number of B entries ranked below each A entry summed over A,
        where B entries tied with an A entry count one half
    """
    N = len(values)
    U1 = 0.0
    # A entries consumed so far
    prev = 0
    # B entries in the current run of equal values, and those already passed
    ties = -1
    previous_ties = 0
    run_value = None

    index = 0
    while index < N and prev < n1:
        value = values[index]
        if value != run_value:
            run_value = value
            ties = -1
            previous_ties = 0

        if tags[index] == SET_B:
            previous_ties += 1
        else:
            if ties < 0:
                # First A entry of the run: count the tied B entries ahead
                ties = previous_ties
                index2 = index + 1
                while index2 < N and values[index2] == value:
                    if tags[index2] == SET_B:
                        ties += 1
                    index2 += 1

            # B entries before this A were counted whole by position
            U1 += index - prev
            U1 -= previous_ties / 2.0
            U1 += (ties - previous_ties) / 2.0
            prev += 1
        index += 1

    return U1


def normal_approximation_pvalue(U1: float, mu_U: float, sigma_U: float) -> float:
    """Two-sided p-value of U1 under the normal approximation."""
    if U1 > mu_U:
        return float(2 * special.erf((mu_U - U1) / sigma_U))
    return float(2 * special.erf((U1 - mu_U) / sigma_U))


class MWUReduction(SetComparison):
    """
    Per-window Mann-Whitney U p-values between two groups of tracks.

    Replicates out of play in a window enter the ranking with value 0.
    The ranking table is allocated once and rewritten for every window.
    """

    test_name = "Mann-Whitney U"

    def _validate(self, n1: int, n2: int) -> None:
        if n1 == 0 or n2 == 0:
            raise ConfigurationError(
                "The Mann-Whitney U function only works for two non-empty sets, "
                f"got n1={n1}, n2={n2}"
            )

    def _setup(self) -> None:
        n1, n2 = self.n1, self.n2
        self.mu_U = n1 * n2 / 2
        self.sigma_U = math.sqrt(n1 * n2 * (n1 + n2 + 1) / 12)
        self.U1 = np.nan
        # Ranking table: values with their group tag
        self._table_values = np.zeros(self.N, dtype=float)
        self._table_tags = np.zeros(self.N, dtype=bool)

    def _compute(self) -> bool:
        n1 = self.n1
        values = self._table_values
        tags = self._table_tags

        values[:n1] = np.where(self.group_a.inplay, self.group_a.values, 0.0)
        tags[:n1] = SET_A
        values[n1:] = np.where(self.group_b.inplay, self.group_b.values, 0.0)
        tags[n1:] = SET_B

        order = np.argsort(values, kind="stable")
        self.U1 = rank_sum_u1(values[order].tolist(), tags[order].tolist(), n1)
        self.value = normal_approximation_pvalue(self.U1, self.mu_U, self.sigma_U)
        return True


def mwu_reduction(multi: Multiset) -> MWUReduction:
    """Build a Mann-Whitney U reducer over a two-group multiset."""
    return MWUReduction(multi)
