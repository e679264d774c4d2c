"""
Mulligan rules for the closed-form turn computation.

A rule says, for each opening hand size, which land counts are kept.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Tuple


class MulliganStrategy(ABC):
    """Abstract base class for mulligan decisions."""

    @abstractmethod
    def land_range(self, hand_size: int) -> Tuple[int, int]:
        """
        Accepted land counts for a hand size.

        Args:
            hand_size: Number of cards in hand

        Returns:
            (min_lands, max_lands), both inclusive
        """
        pass

    @abstractmethod
    def hand_sizes(self) -> Iterable[int]:
        """Hand sizes in the order they are tried, largest first."""
        pass

    def should_keep(self, hand_size: int, lands_in_hand: int) -> bool:
        """
        Decide whether to keep this hand.

        Args:
            hand_size: Number of cards in hand
            lands_in_hand: Number of lands in hand

        Returns:
            True if should keep, False if should mulligan
        """
        lands_min, lands_max = self.land_range(hand_size)
        return lands_min <= lands_in_hand <= lands_max


class LondonMulligan(MulliganStrategy):
    """
    Land-count mulligan down to four cards.

    Keep rules (same as old Vancouver):
    - 7 cards: keep if 2-5 lands
    - 6 cards: keep if 2-4 lands
    - 5 cards: keep if 1-4 lands
    - 4 cards: always keep

    Every mulligan redraws from the full deck, one card fewer each time.
    """

    KEEP_RULES = {
        7: (2, 5),
        6: (2, 4),
        5: (1, 4),
        4: (0, 4),
    }

    def land_range(self, hand_size: int) -> Tuple[int, int]:
        try:
            return self.KEEP_RULES[hand_size]
        except KeyError:
            raise ValueError(
                f"No mulligan rule for a {hand_size}-card hand. "
                f"Valid sizes: {sorted(self.KEEP_RULES)}"
            ) from None

    def hand_sizes(self) -> Iterable[int]:
        return sorted(self.KEEP_RULES, reverse=True)
