"""Tests for the Mann-Whitney U reducer."""

import math
from types import SimpleNamespace

import numpy as np
import pytest
from scipy import special

from setcompare.stats.base import ConfigurationError
from setcompare.stats.mannwhitney import (
    SET_A,
    SET_B,
    MWUReduction,
    mwu_reduction,
    normal_approximation_pvalue,
    rank_sum_u1,
)
from setcompare.tracks.multiset import TrackSet


def _brute_force_u1(a, b):
    """Count A > B pairs, ties counting one half."""
    total = 0.0
    for x in a:
        for y in b:
            if x > y:
                total += 1.0
            elif x == y:
                total += 0.5
    return total


def test_u1_single_pair():
    """With one replicate per group U1 is 0 or 1."""
    assert rank_sum_u1([1.0, 2.0], [SET_A, SET_B], 1) == 0.0
    assert rank_sum_u1([1.0, 2.0], [SET_B, SET_A], 1) == 1.0


@pytest.mark.parametrize(
    "tags",
    [
        [SET_A, SET_A, SET_B, SET_B],
        [SET_B, SET_B, SET_A, SET_A],
        [SET_A, SET_B, SET_A, SET_B],
        [SET_B, SET_A, SET_B, SET_A],
        [SET_A, SET_B, SET_B, SET_A],
    ],
)
def test_u1_all_tied_is_unbiased(tags):
    """All-equal tables give n1 * n2 / 2 whatever the tie order."""
    assert rank_sum_u1([3.0] * 4, tags, 2) == 2.0


def test_u1_matches_pairwise_count(rng):
    """Tie-corrected scan agrees with the pairwise definition."""
    for _ in range(300):
        n1 = int(rng.integers(1, 6))
        n2 = int(rng.integers(1, 6))
        a = rng.integers(0, 4, size=n1).astype(float)
        b = rng.integers(0, 4, size=n2).astype(float)

        values = np.concatenate([a, b])
        tags = np.array([SET_A] * n1 + [SET_B] * n2)
        # Random order among ties
        order = np.lexsort((rng.random(n1 + n2), values))

        u1 = rank_sum_u1(values[order].tolist(), tags[order].tolist(), n1)
        assert u1 == _brute_force_u1(a, b)


def test_mwu_worked_example(single_window):
    """A = [1, 2] entirely below B = [3, 4]."""
    reducer = MWUReduction(single_window([1.0, 2.0], [3.0, 4.0]))

    mu_U = 2.0
    sigma_U = math.sqrt(2 * 2 * 5 / 12)
    assert reducer.U1 == 0.0
    assert reducer.mu_U == mu_U
    assert reducer.sigma_U == pytest.approx(sigma_U)
    assert reducer.value == pytest.approx(2 * special.erf((0.0 - mu_U) / sigma_U))


def test_mwu_single_replicates(single_window):
    assert MWUReduction(single_window([1.0], [2.0])).U1 == 0.0
    assert MWUReduction(single_window([2.0], [1.0])).U1 == 1.0


def test_mwu_all_equal(single_window):
    """Equal values give U1 = mu_U and a zero statistic."""
    reducer = MWUReduction(single_window([7.0, 7.0, 7.0], [7.0, 7.0]))

    assert reducer.U1 == 3.0
    assert reducer.value == 0.0


def test_mwu_out_of_play_ranked_as_zero(single_window):
    """A replicate without a value enters the ranking as 0."""
    reducer = MWUReduction(single_window([5.0, None], [3.0, 4.0]))

    # A = [5, 0] against B = [3, 4]
    assert reducer.U1 == 2.0


def test_mwu_symmetry(multiset_factory, rng):
    """U1 of (A, B) and of (B, A) add up to n1 * n2."""
    windows = [(i * 10, (i + 1) * 10) for i in range(5)]
    group_a = [[("chr1", s, f, float(v)) for (s, f), v in zip(windows, rng.integers(0, 3, size=5))] for _ in range(3)]
    group_b = [[("chr1", s, f, float(v)) for (s, f), v in zip(windows, rng.integers(0, 3, size=5))] for _ in range(2)]

    forward = MWUReduction(multiset_factory([group_a, group_b]))
    backward = MWUReduction(multiset_factory([group_b, group_a]))

    while not forward.done:
        assert forward.U1 + backward.U1 == 6.0
        assert forward.value == pytest.approx(backward.value)
        forward.advance()
        backward.advance()
    assert backward.done


def test_mwu_pvalue_sides():
    """The statistic is symmetric around mu_U."""
    assert normal_approximation_pvalue(1.0, 2.0, 1.5) == pytest.approx(
        normal_approximation_pvalue(3.0, 2.0, 1.5)
    )
    assert normal_approximation_pvalue(2.0, 2.0, 1.5) == 0.0


def test_mwu_ranking_table_reused(multiset_factory):
    """The ranking table keeps its size and identity across windows."""
    group_a = [[("chr1", 0, 10, 1.0), ("chr1", 10, 20, 4.0)], [("chr1", 0, 20, 2.0)]]
    group_b = [[("chr1", 0, 10, 3.0), ("chr1", 10, 20, 0.5)]]

    reducer = mwu_reduction(multiset_factory([group_a, group_b]))
    table = reducer._table_values

    assert table.shape == (3,)
    assert reducer.U1 == 0.0
    reducer.advance()
    assert reducer._table_values is table
    assert reducer.U1 == 2.0


def test_mwu_requires_two_groups(multiset_factory):
    multi = multiset_factory([[[("chr1", 0, 10, 1.0)]], [[("chr1", 0, 10, 2.0)]], [[("chr1", 0, 10, 3.0)]]])

    with pytest.raises(ConfigurationError, match="two sets"):
        MWUReduction(multi)


def test_mwu_requires_non_empty_groups(iterator_factory):
    multi = SimpleNamespace(count=2, sets=[TrackSet([]), TrackSet([iterator_factory([])])])

    with pytest.raises(ConfigurationError, match="two non-empty sets"):
        MWUReduction(multi)
