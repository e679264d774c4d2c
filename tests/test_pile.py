"""
Tests for piles - shapes, arithmetic, draw probabilities and enumeration.

Tests cover:
- Construction and category access
- Add/subtract and the domination check
- Shape mismatch failures
- Exact-draw and land/spell draw probabilities
- Enumeration of hand shapes and of possible draws
"""

import itertools

import pytest

from manaprob.pile import (
    ColoredPile,
    DualPile,
    GenPile,
    PileShape,
    PileShapeError,
    PileUnderflowError,
)
from manaprob.prob import choose_exact, hypergeometric
from manaprob.types import CardType, DualCardType


# =============================================================================
# CONSTRUCTION
# =============================================================================

class TestColoredPile:

    def test_accessors(self, karsten_deck):
        assert karsten_deck.colored == 8
        assert karsten_deck.other == 9
        assert karsten_deck.spells() == 43
        assert karsten_deck.lands() == 17
        assert karsten_deck.total() == 60

    def test_get_by_category(self, karsten_deck):
        assert karsten_deck.get(CardType.GOOD_LAND) == 8
        assert karsten_deck[CardType.SPELL] == 43
        assert list(karsten_deck.categories()) == list(CardType)

    def test_out_of_range_category(self, karsten_deck):
        with pytest.raises(IndexError):
            karsten_deck.get(3)

    def test_negative_count(self):
        with pytest.raises(ValueError):
            ColoredPile(-1, 0, 0)

    def test_value_semantics(self):
        assert ColoredPile(1, 2, 3) == ColoredPile(1, 2, 3)
        assert len({ColoredPile(1, 2, 3), ColoredPile(1, 2, 3)}) == 1
        assert ColoredPile(1, 2, 3) != ColoredPile(3, 2, 1)

    def test_repr(self):
        assert repr(ColoredPile(1, 2, 3)) == "ColoredPile(colored=1, other=2, spells=3)"


class TestDualPile:

    def test_land_partition(self):
        pile = DualPile(1, 2, 3, 4, 5)
        assert pile.lands() == 10
        assert pile.spells() == 5
        assert (pile.a, pile.b, pile.ab, pile.x, pile.s) == (1, 2, 3, 4, 5)
        assert pile[DualCardType.AB] == 3

    def test_out_of_range_category(self):
        with pytest.raises(IndexError):
            DualPile(1, 2, 3, 4, 5).get(5)


class TestGenPile:

    def test_land_partition(self, colored_shape):
        pile = colored_shape.pile([8, 9, 43])
        assert pile.lands() == 17
        assert pile.spells() == 43
        assert list(pile.categories()) == [0, 1, 2]

    def test_wrong_length(self, colored_shape):
        with pytest.raises(PileShapeError):
            GenPile([1, 2], colored_shape)

    def test_empty(self, colored_shape):
        assert colored_shape.empty().total() == 0

    def test_repr(self, colored_shape):
        assert repr(colored_shape.pile([1, 0, 2])) == "GenPile(1,0,2)"


# =============================================================================
# ARITHMETIC
# =============================================================================

class TestArithmetic:

    def test_round_trip(self, karsten_deck):
        hand = ColoredPile(2, 1, 4)
        assert karsten_deck.dominates(hand)
        assert (karsten_deck - hand) + hand == karsten_deck

    def test_round_trip_gen(self, colored_shape):
        deck = colored_shape.pile([4, 3, 9])
        for hand in deck.subsets(5):
            assert (deck - hand) + hand == deck

    def test_operands_unchanged(self):
        a = ColoredPile(3, 2, 1)
        b = ColoredPile(1, 1, 1)
        assert a - b == ColoredPile(2, 1, 0)
        assert a + b == ColoredPile(4, 3, 2)
        assert a == ColoredPile(3, 2, 1)

    def test_dominates(self):
        assert ColoredPile(3, 2, 1).dominates(ColoredPile(3, 0, 1))
        assert not ColoredPile(3, 2, 1).dominates(ColoredPile(0, 3, 0))

    def test_underflow(self):
        with pytest.raises(PileUnderflowError):
            ColoredPile(1, 1, 1) - ColoredPile(2, 0, 0)
        with pytest.raises(PileUnderflowError):
            DualPile(0, 0, 1, 0, 0) - DualPile(0, 0, 0, 1, 0)

    def test_underflow_is_value_error(self):
        with pytest.raises(ValueError):
            ColoredPile(0, 0, 0) - ColoredPile(0, 0, 1)


class TestShapes:

    def test_fixed_shapes_do_not_mix(self):
        with pytest.raises(PileShapeError):
            ColoredPile(1, 1, 1) + DualPile(1, 1, 1, 1, 1)
        with pytest.raises(PileShapeError):
            DualPile(1, 1, 1, 1, 1).dominates(ColoredPile(0, 0, 0))

    def test_gen_pile_predicate_is_part_of_shape(self, colored_shape):
        other_shape = PileShape(3, lambda idx: idx == 0)
        a = colored_shape.pile([1, 1, 1])
        b = other_shape.pile([1, 1, 1])
        assert a != b
        with pytest.raises(PileShapeError):
            a + b
        with pytest.raises(PileShapeError):
            a.prob_draw(b)

    def test_same_predicate_same_shape(self, colored_shape):
        twin = PileShape(3, colored_shape.is_land)
        assert colored_shape == twin
        assert colored_shape.pile([1, 1, 1]) + twin.pile([1, 0, 0]) == colored_shape.pile(
            [2, 1, 1]
        )

    def test_gen_pile_is_not_colored_pile(self, colored_shape):
        with pytest.raises(PileShapeError):
            colored_shape.pile([1, 1, 1]) - ColoredPile(0, 0, 0)


# =============================================================================
# PROBABILITIES
# =============================================================================

class TestProbabilities:

    def test_prob_land(self, karsten_deck):
        assert karsten_deck.prob_land(3, 4) == pytest.approx(
            hypergeometric(17, 3, 43, 4)
        )

    def test_prob_draw_sums_to_one(self, karsten_deck):
        total = sum(karsten_deck.prob_draw(hand) for hand in karsten_deck.draws(7))
        assert total == pytest.approx(1.0, abs=1e-9)

    def test_prob_draw_collapses_to_prob_land(self, karsten_deck):
        # all lands of a given count, whatever their color
        total = sum(
            karsten_deck.prob_draw(hand)
            for hand in karsten_deck.draws(7)
            if hand.lands() == 3
        )
        assert total == pytest.approx(karsten_deck.prob_land(3, 4))

    def test_prob_draw_impossible(self):
        assert ColoredPile(1, 0, 5).prob_draw(ColoredPile(2, 0, 0)) == 0.0

    def test_gen_pile_matches_colored_pile(self, karsten_deck, colored_shape):
        gen = colored_shape.pile([8, 9, 43])
        for hand in karsten_deck.draws(5):
            assert gen.prob_draw(colored_shape.pile(hand.counts)) == pytest.approx(
                karsten_deck.prob_draw(hand)
            )

    def test_dual_prob_draw_sums_to_one(self, small_dual_deck):
        total = sum(small_dual_deck.prob_draw(h) for h in small_dual_deck.draws(6))
        assert total == pytest.approx(1.0, abs=1e-9)


# =============================================================================
# ENUMERATION
# =============================================================================

class TestEnumeration:

    def test_colored_order(self):
        assert [p.counts for p in ColoredPile.foreach_possible(2)] == [
            (2, 0, 0), (1, 1, 0), (0, 2, 0), (1, 0, 1), (0, 1, 1), (0, 0, 2),
        ]

    def test_dual_order(self):
        piles = list(DualPile.foreach_possible(2))
        assert [p.counts for p in piles[:6]] == [
            (2, 0, 0, 0, 0),
            (1, 1, 0, 0, 0),
            (0, 2, 0, 0, 0),
            (1, 0, 1, 0, 0),
            (0, 1, 1, 0, 0),
            (0, 0, 2, 0, 0),
        ]
        assert piles[-1].counts == (0, 0, 0, 0, 2)

    @pytest.mark.parametrize("n", [1, 4, 7])
    def test_stars_and_bars(self, n, colored_shape):
        assert len(list(ColoredPile.foreach_possible(n))) == choose_exact(n + 2, 2)
        assert len(set(DualPile.foreach_possible(n))) == choose_exact(n + 4, 4)
        assert len(set(colored_shape.empty().compositions(n))) == choose_exact(n + 2, 2)

    def test_draws_respect_deck(self):
        deck = ColoredPile(1, 0, 5)
        draws = list(deck.draws(3))
        assert {d.counts for d in draws} == {(1, 0, 2), (0, 0, 3)}

    def test_subsets_exhaustive(self):
        shape = PileShape(4, lambda idx: idx < 2)
        deck = shape.pile([2, 1, 3, 0])
        expected = {
            v
            for v in itertools.product(range(3), range(2), range(4), range(1))
            if sum(v) == 4
        }
        result = [p.counts for p in deck.subsets(4)]
        assert len(result) == len(expected)
        assert set(result) == expected

    def test_subsets_agree_with_filtered_compositions(self, colored_shape):
        deck = colored_shape.pile([2, 5, 3])
        via_subsets = {p.counts for p in deck.subsets(4)}
        via_compositions = {
            p.counts for p in deck.compositions(4) if deck.dominates(p)
        }
        assert via_subsets == via_compositions
