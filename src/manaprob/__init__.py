"""
Exact manabase probabilities.

Closed-form counterpart of Frank Karsten's mana source calculations:
hypergeometric draws over card-category piles, with a land-count
mulligan down to four cards.
"""

from .types import CardType, DualCardType, SimulationConfig, STANDARD_LAND_COUNTS
from .prob import (
    power,
    choose,
    choose_exact,
    hypergeometric,
    hypergeometric_multi,
    indicator,
    dice_sum_ways,
    dice_sum_probability,
)
from .pile import (
    Pile,
    ColoredPile,
    DualPile,
    GenPile,
    PileShape,
    PileError,
    PileShapeError,
    PileUnderflowError,
)
from .deck import colored_deck, dual_deck
from .goals import colored_goal, dual_goal, land_goal, can_cast
from .mulligan import MulliganStrategy, LondonMulligan
from .simulation import (
    draw_probability,
    keep_probability,
    cast_probability,
    turn0,
    run_simulation,
    find_minimum_sources,
    find_minimum_duals,
    prob_color_screwed,
    best_split,
)

__all__ = [
    # Types
    "CardType",
    "DualCardType",
    "SimulationConfig",
    "STANDARD_LAND_COUNTS",
    # Combinatorics
    "power",
    "choose",
    "choose_exact",
    "hypergeometric",
    "hypergeometric_multi",
    "indicator",
    "dice_sum_ways",
    "dice_sum_probability",
    # Piles
    "Pile",
    "ColoredPile",
    "DualPile",
    "GenPile",
    "PileShape",
    "PileError",
    "PileShapeError",
    "PileUnderflowError",
    # Decks and goals
    "colored_deck",
    "dual_deck",
    "colored_goal",
    "dual_goal",
    "land_goal",
    "can_cast",
    # Mulligan
    "MulliganStrategy",
    "LondonMulligan",
    # Simulation
    "draw_probability",
    "keep_probability",
    "cast_probability",
    "turn0",
    "run_simulation",
    "find_minimum_sources",
    "find_minimum_duals",
    "prob_color_screwed",
    "best_split",
]
