"""
Types and configuration for manabase probability tables.

Category ids for the fixed pile shapes, standard deck sizes and the
configuration of a single table cell.
"""

import os
from dataclasses import dataclass, field
from enum import IntEnum


class CardType(IntEnum):
    """
    Categories of a colored pile.

    GOOD_LAND: Produces the required color (e.g., Plains for white spells)
    OTHER_LAND: Land but doesn't produce required color
    SPELL: Non-land card
    """

    GOOD_LAND = 0
    OTHER_LAND = 1
    SPELL = 2


class DualCardType(IntEnum):
    """
    Categories of a two-color pile.

    A: Land producing only color A
    B: Land producing only color B
    AB: Dual land producing A or B
    X: Land producing neither (colorless or off-color)
    SPELL: Non-land card
    """

    A = 0
    B = 1
    AB = 2
    X = 3
    SPELL = 4


# Standard deck configurations (deck_size -> land_count)
STANDARD_LAND_COUNTS = {
    40: 17,  # Limited
    60: 24,  # Constructed (Standard/Modern/Pioneer)
    99: 40,  # Duel Commander
}


def default_target() -> float:
    """Target ratio of the maximum probability, overridable via MANAPROB_TARGET."""
    return float(os.getenv("MANAPROB_TARGET", "0.90"))


def default_max_turn() -> int:
    return int(os.getenv("MANAPROB_MAX_TURN", "7"))


@dataclass
class SimulationConfig:
    """Configuration for one threshold search."""

    deck_size: int
    """Total cards in deck (40, 60 or 99)"""

    total_lands: int
    """Total lands in deck"""

    good_lands_needed: int
    """Required colored sources (1 for C, 2 for CC, 3 for CCC)"""

    turn_allowed: int
    """Turn by which to cast the spell"""

    on_play: bool = True
    """True if on play, False if on draw"""

    target_probability: float = field(default_factory=default_target)
    """Fraction of the all-lands-colored probability to reach"""

    def __post_init__(self):
        if self.total_lands > self.deck_size:
            raise ValueError(
                f"{self.total_lands} lands do not fit in a {self.deck_size}-card deck"
            )
        if self.turn_allowed < 1:
            raise ValueError(f"turn_allowed must be >= 1, got {self.turn_allowed}")
        if self.target_probability < 0:
            raise ValueError(
                f"target_probability must be >= 0, got {self.target_probability}"
            )

    @property
    def draws(self) -> int:
        """
        Cards drawn on top of the opening hand by turn_allowed.

        Turn 1 on play = 0 additional draws
        Turn 2 on play = 1 additional draw
        Turn 1 on draw = 1 additional draw
        """
        additional_draws = self.turn_allowed - 1
        if not self.on_play:
            additional_draws += 1
        return additional_draws

    @classmethod
    def from_deck_size(
        cls,
        deck_size: int,
        good_lands_needed: int,
        turn_allowed: int,
        on_play: bool = True,
        land_count: int = None,
        target_probability: float = None,
    ):
        """Create config with standard land count for deck size.

        Args:
            deck_size: Total cards in deck (40, 60 or 99)
            good_lands_needed: Required colored sources
            turn_allowed: Turn by which to cast
            on_play: True if on play, False if on draw
            land_count: Override default land count (optional)
            target_probability: Override MANAPROB_TARGET (optional)
        """
        if land_count is None:
            if deck_size not in STANDARD_LAND_COUNTS:
                raise ValueError(
                    f"Unknown deck size {deck_size}. "
                    f"Valid sizes: {list(STANDARD_LAND_COUNTS.keys())}"
                )
            land_count = STANDARD_LAND_COUNTS[deck_size]

        if target_probability is None:
            target_probability = default_target()

        return cls(
            deck_size=deck_size,
            total_lands=land_count,
            good_lands_needed=good_lands_needed,
            turn_allowed=turn_allowed,
            on_play=on_play,
            target_probability=target_probability,
        )
