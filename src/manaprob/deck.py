"""
Deck piles for the threshold searches.
"""

import math

from .pile import ColoredPile, DualPile


def colored_deck(total_lands: int, good_lands: int, deck_size: int) -> ColoredPile:
    """
    Build a single-color deck.

    Args:
        total_lands: Total number of lands in deck
        good_lands: Number of lands that produce required color
        deck_size: Total cards in deck
    """
    if good_lands > total_lands:
        raise ValueError(f"{good_lands} good lands exceed {total_lands} lands")
    if total_lands > deck_size:
        raise ValueError(f"{total_lands} lands exceed a {deck_size}-card deck")
    return ColoredPile(good_lands, total_lands - good_lands, deck_size - total_lands)


def dual_deck(
    total_lands: int, deck_size: int, duals: int, uncolored: int, a_rate: float
) -> DualPile:
    """
    Build a two-color deck.

    Lands that are neither dual nor uncolored are split between the two
    colors, a_rate of them (rounded half up) producing color A.

    Args:
        total_lands: Total number of lands in deck
        deck_size: Total cards in deck
        duals: Lands producing A or B
        uncolored: Lands producing neither color
        a_rate: Share of mono-colored lands producing A, in [0, 1]
    """
    mono = total_lands - duals - uncolored
    if mono < 0:
        raise ValueError(
            f"{duals} duals and {uncolored} uncolored exceed {total_lands} lands"
        )
    if total_lands > deck_size:
        raise ValueError(f"{total_lands} lands exceed a {deck_size}-card deck")

    a = min(mono, max(0, math.floor(mono * a_rate + 0.5)))
    b = mono - a

    deck = DualPile(a, b, duals, uncolored, deck_size - total_lands)
    assert deck.total() == deck_size
    return deck
