"""
Core probability engine for manabase analysis.

Closed-form version of Frank Karsten's methodology: instead of sampling
games, every possible opening hand and every possible set of later draws is
enumerated and weighted by its exact hypergeometric probability.
"""

import logging
from typing import Callable, Dict, Optional, Tuple

from . import prob
from .deck import colored_deck, dual_deck
from .goals import can_cast, colored_goal
from .mulligan import LondonMulligan, MulliganStrategy
from .pile import DualPile, Pile, PileShape
from .types import SimulationConfig, default_target

logger = logging.getLogger("manaprob.simulation")

Goal = Callable[[Pile], bool]


def draw_probability(hand: Pile, draws: int, deck: Pile, goal: Goal) -> float:
    """
    Probability that a kept hand reaches the goal after more draws.

    Args:
        hand: Kept hand
        draws: Cards drawn on top of the hand
        deck: Cards left in the deck once the hand is drawn
        goal: Predicate on the final hand

    Returns:
        Sum of the probabilities of every draw that completes the goal
    """
    if draws > 0:
        return sum(
            deck.prob_draw(draw) for draw in deck.draws(draws) if goal(hand + draw)
        )
    return prob.indicator(goal(hand))


def keep_probability(
    deck: Pile, hand_size: int, mulligan: Optional[MulliganStrategy] = None
) -> float:
    """Probability that a hand_size hand from deck is kept, on land count alone."""
    if mulligan is None:
        mulligan = LondonMulligan()

    return sum(
        deck.prob_land(lands, hand_size - lands)
        for lands in range(hand_size + 1)
        if mulligan.should_keep(hand_size, lands)
    )


def _keep_and_reach(
    deck: Pile, hand_size: int, draws: int, goal: Goal, mulligan: MulliganStrategy
) -> Tuple[float, float]:
    keep = keep_probability(deck, hand_size, mulligan)

    # Probability of keeping *and* reaching the goal
    reach = 0.0
    for hand in deck.draws(hand_size):
        if mulligan.should_keep(hand_size, hand.lands()):
            reach += deck.prob_draw(hand) * draw_probability(
                hand, draws, deck - hand, goal
            )

    return keep, reach


def cast_probability(
    deck: Pile,
    hand_size: int,
    draws: int,
    goal: Goal,
    mulligan: Optional[MulliganStrategy] = None,
) -> float:
    """
    Probability of reaching the goal given a hand_size hand was kept.

    Returns 0.0 when no hand of that size would be kept.
    """
    if mulligan is None:
        mulligan = LondonMulligan()

    keep, reach = _keep_and_reach(deck, hand_size, draws, goal, mulligan)
    return reach / keep if keep > 0.0 else 0.0


def turn0(
    deck: Pile,
    draws: int,
    goal: Goal,
    mulligan: Optional[MulliganStrategy] = None,
) -> float:
    """
    Probability of reaching a goal, mulligans included.

    Hands are drawn at 7 cards, then 6, 5 and 4, each from the full deck.
    A hand is kept on its land count alone; once kept, `draws` more cards
    are drawn and the goal is checked on the result.

    Each hand size adds mull * keep * cast, where cast is the chance of the
    goal *given* a keep, so the term is the joint P(kept and goal) and a
    goal that always holds sums to exactly 1.

    Args:
        deck: Deck pile (not modified)
        draws: Cards drawn after the opening hand
        goal: Predicate on the final hand
        mulligan: Keep rules (defaults to London)

    Returns:
        Probability in [0, 1]
    """
    if mulligan is None:
        mulligan = LondonMulligan()

    mull = 1.0  # the chance we mulled before
    succ = 0.0

    for hand_size in mulligan.hand_sizes():
        keep, reach = _keep_and_reach(deck, hand_size, draws, goal, mulligan)
        cast = reach / keep if keep > 0.0 else 0.0
        succ += mull * keep * cast
        mull *= 1.0 - keep

    return succ


def run_simulation(
    config: SimulationConfig,
    good_lands_range: range = None,
    goal: Goal = None,
    mulligan_strategy: MulliganStrategy = None,
    verbose: bool = True,
) -> Dict[int, float]:
    """
    Compute the probability for a range of good_lands counts.

    Args:
        config: Base simulation configuration
        good_lands_range: Range of good_lands counts to test (defaults to 0..total_lands)
        goal: Hand predicate (defaults to good_lands_needed colored sources
            and as many lands)
        mulligan_strategy: Strategy to use (defaults to London)
        verbose: Log each result at INFO instead of DEBUG

    Returns:
        Dictionary mapping {good_lands_count: probability}
    """
    if good_lands_range is None:
        good_lands_range = range(0, config.total_lands + 1)
    if goal is None:
        goal = colored_goal(config.good_lands_needed, config.good_lands_needed)

    level = logging.INFO if verbose else logging.DEBUG
    results = {}

    for good_lands in good_lands_range:
        # Skip impossible configurations
        if good_lands > config.total_lands:
            continue

        deck = colored_deck(config.total_lands, good_lands, config.deck_size)
        probability = turn0(deck, config.draws, goal, mulligan_strategy)
        results[good_lands] = probability

        logger.log(level, "With %2d good lands: Prob=%.4f", good_lands, probability)

    return results


def _check_target(target: Optional[float]) -> float:
    if target is None:
        target = default_target()
    if target < 0:
        raise ValueError(f"Target ratio must be >= 0, got {target}")
    return target


def find_minimum_sources(
    total_lands: int,
    deck_size: int,
    draws: int,
    target: Optional[float],
    goal: Goal,
    mulligan_strategy: MulliganStrategy = None,
) -> int:
    """
    Find minimum number of good lands reaching a share of the best case.

    The best case is the same deck with every land colored. Good lands are
    scanned upwards from 0.

    Args:
        total_lands: Lands in the deck
        deck_size: Cards in the deck
        draws: Cards drawn after the opening hand
        target: Required fraction of the best-case probability (None reads
            MANAPROB_TARGET)
        goal: Predicate on ColoredPile hands
        mulligan_strategy: Strategy to use (defaults to London)

    Returns:
        Minimum number of good lands, or 0 if no count reaches the target
    """
    target = _check_target(target)

    r_max = turn0(colored_deck(total_lands, total_lands, deck_size), draws, goal,
                  mulligan_strategy)

    for good_lands in range(total_lands + 1):
        deck = colored_deck(total_lands, good_lands, deck_size)
        r = turn0(deck, draws, goal, mulligan_strategy)
        logger.debug("%2d/%2d good lands: %.4f (max %.4f)", good_lands, total_lands,
                     r, r_max)
        if r >= target * r_max:
            return good_lands

    logger.warning(
        "Target %.0f%% of %.1f%% not achievable with %d lands",
        prob.perc(target), prob.perc(r_max), total_lands,
    )
    return 0


def find_minimum_duals(
    total_lands: int,
    deck_size: int,
    uncolored: int,
    a_rate: float,
    draws: int,
    target: Optional[float],
    goal: Callable[[DualPile], bool],
    mulligan_strategy: MulliganStrategy = None,
) -> int:
    """
    Find minimum number of dual lands reaching a share of the best case.

    The best case is a deck where every land is dual. Non-dual colored lands
    are split between the colors by a_rate (see dual_deck()).

    Args:
        total_lands: Lands in the deck
        deck_size: Cards in the deck
        uncolored: Lands producing neither color
        a_rate: Share of mono-colored lands producing A
        draws: Cards drawn after the opening hand
        target: Required fraction of the best-case probability
        goal: Predicate on DualPile hands
        mulligan_strategy: Strategy to use (defaults to London)

    Returns:
        Minimum number of duals, or -1 if the target is out of reach
    """
    target = _check_target(target)
    spells = deck_size - total_lands

    r_max = turn0(DualPile(0, 0, total_lands, 0, spells), draws, goal,
                  mulligan_strategy)
    r_all_duals = turn0(
        DualPile(0, 0, total_lands - uncolored, uncolored, spells), draws, goal,
        mulligan_strategy,
    )

    if r_all_duals < target * r_max:
        logger.debug("%d uncolored lands already miss the target", uncolored)
        return -1

    for duals in range(total_lands - uncolored + 1):
        deck = dual_deck(total_lands, deck_size, duals, uncolored, a_rate)
        r = turn0(deck, draws, goal, mulligan_strategy)
        if r >= target * r_max:
            return duals

    return -1


def prob_color_screwed(
    lands: int,
    colored: int,
    deck_size: int,
    cmc: int,
    colored_mana: int,
    mulligan_strategy: MulliganStrategy = None,
) -> float:
    """
    Chance of casting on curve with `colored` sources, relative to all lands
    being colored.

    Returns:
        Ratio in [0, 1], 0.0 when the spell can't be cast even with all
        lands colored
    """
    goal = colored_goal(colored_mana, cmc)
    draws = cmc - 1

    res0 = turn0(colored_deck(lands, lands, deck_size), draws, goal, mulligan_strategy)
    res1 = turn0(colored_deck(lands, colored, deck_size), draws, goal,
                 mulligan_strategy)

    return res1 / res0 if res0 > 0.0 else 0.0


# Categories of the two-color split deck: mono lands, duals, two spell
# kinds needing AA or BB, and other spells.
A, B, C, AB, BC, AC, S1, S2, O = range(9)


def _split_is_land(idx: int) -> bool:
    return idx < S1


SPLIT_SHAPE = PileShape(9, _split_is_land)


def _split_can_cast(hand: Pile, a: int, b: int, x: int) -> bool:
    return can_cast(hand[A] + hand[AC], hand[B] + hand[BC], hand[AB], hand[C], a, b, x)


def best_split(
    lands: int,
    deck_size: int,
    spells_a: int,
    spells_b: int,
    turn: int,
    on_play: bool = True,
    mulligan_strategy: MulliganStrategy = None,
) -> Tuple[int, float]:
    """
    Find the basic land split for a deck with AA and BB spells.

    For each split of `lands` basics into A and B, compare the chance of
    casting either a spell costing AA or a spell costing BB (both with
    turn - 2 generic) on `turn`, against the chance of just having the lands
    and one of those spells.

    Args:
        lands: Basic lands to split
        deck_size: Cards in the deck
        spells_a: Spells costing AA
        spells_b: Spells costing BB
        turn: Turn to cast on (>= 2)
        on_play: True if on play, False if on draw

    Returns:
        (number of A lands, relative success probability)
    """
    if turn < 2:
        raise ValueError(f"turn must be >= 2, got {turn}")
    others = deck_size - lands - spells_a - spells_b
    if others < 0:
        raise ValueError("lands and spells exceed the deck size")

    draws = turn - 1 if on_play else turn

    def base_goal(hand):
        return hand.lands() >= turn and hand[S1] + hand[S2] > 0

    def cast_goal(hand):
        return (_split_can_cast(hand, 2, 0, turn - 2) and hand[S1] > 0) or (
            _split_can_cast(hand, 0, 2, turn - 2) and hand[S2] > 0
        )

    best_p = 0.0
    best_a = 0

    for a in range(lands + 1):
        deck = SPLIT_SHAPE.pile([a, lands - a, 0, 0, 0, 0, spells_a, spells_b, others])
        p_base = turn0(deck, draws, base_goal, mulligan_strategy)
        p_succ = turn0(deck, draws, cast_goal, mulligan_strategy)
        p_rel = p_succ / p_base if p_base > 0.0 else 0.0

        logger.debug("%2d,%2d : %6.2f%%", a, lands - a, prob.perc(p_rel))

        if p_rel >= best_p:
            best_p = p_rel
            best_a = a

    return best_a, best_p
