"""
Shared pytest fixtures for manaprob tests.

Decks are kept small where the test enumerates many hands, and realistic
(17 lands / 60 cards) where the value itself is checked.
"""

import pytest

from manaprob.mulligan import LondonMulligan
from manaprob.pile import ColoredPile, DualPile, PileShape


def two_lands(idx):
    return idx < 2


@pytest.fixture
def karsten_deck():
    """17 lands in 60 cards, 8 of them colored."""
    return ColoredPile(8, 9, 43)


@pytest.fixture
def small_deck():
    return ColoredPile(4, 3, 9)


@pytest.fixture
def small_dual_deck():
    return DualPile(3, 2, 2, 1, 10)


@pytest.fixture
def colored_shape():
    """GenPile layout matching ColoredPile: two land slots then spells."""
    return PileShape(3, two_lands)


@pytest.fixture
def london():
    return LondonMulligan()
