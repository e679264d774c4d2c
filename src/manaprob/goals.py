"""
Goal predicates over hands.

Each builder returns a callable taking a hand pile and returning True when
the hand achieves the goal.
"""

from typing import Callable

from .pile import ColoredPile, DualPile


def land_goal(lands: int) -> Callable:
    """Hand holds at least `lands` lands, any shape."""
    return lambda hand: hand.lands() >= lands


def colored_goal(colored_mana: int, cmc: int) -> Callable[[ColoredPile], bool]:
    """Enough colored sources for the pips, and enough lands for the cmc."""

    def goal(hand: ColoredPile) -> bool:
        return hand.colored >= colored_mana and hand.lands() >= cmc

    return goal


def dual_goal(a_mana: int, b_mana: int, cmc: int) -> Callable[[DualPile], bool]:
    """
    Cast a spell with a_mana A pips and b_mana B pips.

    Pips not covered by mono lands must be covered by duals; the hand also
    needs cmc lands in total.
    """

    def goal(hand: DualPile) -> bool:
        a_left = max(0, a_mana - hand.a)
        b_left = max(0, b_mana - hand.b)
        return a_left + b_left <= hand.ab and hand.lands() >= cmc

    return goal


def can_cast(la: int, lb: int, lab: int, lx: int, a: int, b: int, x: int) -> bool:
    """
    Check whether lands can pay a cost.

    Args:
        la, lb: Lands producing only A / only B
        lab: Lands producing A or B
        lx: Lands producing neither
        a, b: A and B pips of the cost
        x: Generic mana of the cost

    Returns:
        True if the lands pay the cost. Mono lands go to their own color
        first, duals cover the remaining pips, and everything left over
        pays generic mana.
    """
    # tap for A
    ta = min(la, a)
    la, a = la - ta, a - ta

    # tap for B
    tb = min(lb, b)
    lb, b = lb - tb, b - tb

    # tap for A or B
    ab = a + b
    tab = min(lab, ab)
    lab, ab = lab - tab, ab - tab

    if ab > 0:
        return False
    return x <= lx + la + lb + lab
