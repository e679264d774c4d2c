"""
Tests for the count-vector enumerators.
"""

import itertools

import pytest

from manaprob.perm import compositions, multi_subsets
from manaprob.prob import choose_exact


class TestCompositions:

    def test_roll_forward_order(self):
        assert list(compositions(3, 3)) == [
            (3, 0, 0), (2, 1, 0), (1, 2, 0), (0, 3, 0),
            (2, 0, 1), (1, 1, 1), (0, 2, 1),
            (1, 0, 2), (0, 1, 2),
            (0, 0, 3),
        ]

    @pytest.mark.parametrize("total", [0, 1, 4, 7, 10])
    @pytest.mark.parametrize("width", [1, 2, 3, 5, 9])
    def test_stars_and_bars_count(self, total, width):
        result = list(compositions(total, width))
        assert len(result) == choose_exact(total + width - 1, width - 1)
        assert len(set(result)) == len(result)
        assert all(sum(c) == total and len(c) == width for c in result)

    def test_empty_total(self):
        assert list(compositions(0, 3)) == [(0, 0, 0)]

    def test_single_slot(self):
        assert list(compositions(4, 1)) == [(4,)]

    def test_bad_width(self):
        with pytest.raises(ValueError):
            list(compositions(3, 0))


class TestMultiSubsets:

    def test_order(self):
        assert list(multi_subsets([2, 4, 1], 2)) == [
            (2, 0, 0), (1, 1, 0), (0, 2, 0), (1, 0, 1), (0, 1, 1),
        ]

    @pytest.mark.parametrize("k", range(8))
    def test_matches_brute_force(self, k):
        caps = [2, 0, 3, 1]
        expected = {
            v
            for v in itertools.product(*(range(c + 1) for c in caps))
            if sum(v) == k
        }
        result = list(multi_subsets(caps, k))
        assert len(result) == len(set(result))
        assert set(result) == expected

    def test_too_many(self):
        assert list(multi_subsets([1, 1], 3)) == []

    def test_zero(self):
        assert list(multi_subsets([3, 2, 1], 0)) == [(0, 0, 0)]

    def test_deterministic(self):
        assert list(multi_subsets([3, 3, 3], 4)) == list(multi_subsets([3, 3, 3], 4))
