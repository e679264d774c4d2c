"""
Piles: fixed-shape vectors of card counts.

A pile describes either a deck or a hand by how many cards of each category
it holds. The set of categories and which of them are lands form the pile's
*shape*; piles of different shapes never mix.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Hashable, Iterable, Iterator, Sequence, Tuple

from . import prob
from .perm import compositions, multi_subsets
from .types import CardType, DualCardType


class PileError(ValueError):
    """Base class for pile contract violations."""


class PileShapeError(PileError):
    """Piles of different shapes were combined or compared."""


class PileUnderflowError(PileError):
    """A pile was asked for more cards than it holds."""


class Pile(ABC):
    """
    Immutable vector of non-negative card counts.

    Subclasses fix the number of categories and the land/spell partition.
    Arithmetic returns new piles.
    """

    __slots__ = ("_counts",)

    def __init__(self, counts: Iterable[int]):
        counts = tuple(counts)
        for idx, count in enumerate(counts):
            if count < 0:
                raise ValueError(f"Negative count {count} for category {idx}")
        self._counts = counts

    @property
    @abstractmethod
    def shape(self) -> Hashable:
        """Identity of the category layout, compared before any arithmetic."""

    @abstractmethod
    def is_land(self, idx: int) -> bool:
        """True if category idx holds lands."""

    @abstractmethod
    def _make(self, counts: Sequence[int]) -> "Pile":
        """Build a pile of the same shape from raw counts."""

    @property
    def counts(self) -> Tuple[int, ...]:
        return self._counts

    @property
    def num_keys(self) -> int:
        return len(self._counts)

    def categories(self) -> Iterable[int]:
        return range(len(self._counts))

    def get(self, idx: int) -> int:
        if not 0 <= idx < len(self._counts):
            raise IndexError(f"Category {idx} out of range for {self!r}")
        return self._counts[idx]

    def __getitem__(self, idx: int) -> int:
        return self.get(idx)

    def total(self) -> int:
        """Return the total number of cards in this pile."""
        return sum(self._counts)

    def lands(self) -> int:
        return sum(c for idx, c in enumerate(self._counts) if self.is_land(idx))

    def spells(self) -> int:
        return self.total() - self.lands()

    def _check_shape(self, other: "Pile"):
        if type(other) is not type(self) or other.shape != self.shape:
            raise PileShapeError(f"Pile shapes differ: {self!r} vs {other!r}")

    def dominates(self, other: "Pile") -> bool:
        """Return True if self has at least as many cards as other in every category."""
        self._check_shape(other)
        return all(a >= b for a, b in zip(self._counts, other._counts))

    def prob_draw(self, draw: "Pile") -> float:
        """
        Probability of drawing exactly `draw` with `self` as the deck.

        Args:
            draw: Composition of the drawn cards, same shape as self

        Returns:
            Probability that draw.total() random cards from self match draw
            in every category
        """
        self._check_shape(draw)
        deck = self._counts
        drawn = draw._counts
        return prob.hypergeometric_multi(len(deck), lambda idx: (deck[idx], drawn[idx]))

    def prob_land(self, lands: int, spells: int) -> float:
        """Probability of drawing exactly `lands` lands and `spells` spells."""
        return prob.hypergeometric(self.lands(), lands, self.spells(), spells)

    def __add__(self, other: "Pile") -> "Pile":
        self._check_shape(other)
        return self._make([a + b for a, b in zip(self._counts, other._counts)])

    def __sub__(self, other: "Pile") -> "Pile":
        if not self.dominates(other):
            raise PileUnderflowError(f"Cannot remove {other!r} from {self!r}")
        return self._make([a - b for a, b in zip(self._counts, other._counts)])

    def __eq__(self, other):
        if not isinstance(other, Pile):
            return NotImplemented
        return (
            type(other) is type(self)
            and other.shape == self.shape
            and other._counts == self._counts
        )

    def __hash__(self):
        return hash((type(self).__name__, self.shape, self._counts))

    def compositions(self, n: int) -> Iterator["Pile"]:
        """
        Yield every pile of this shape holding exactly n cards.

        Category counts are unbounded: this enumerates hand shapes, not
        draws from self. See draws() for the latter.
        """
        for counts in compositions(n, len(self._counts)):
            yield self._make(counts)

    def draws(self, n: int) -> Iterator["Pile"]:
        """Yield every n-card pile that self can supply."""
        return (p for p in self.compositions(n) if self.dominates(p))


class ColoredPile(Pile):
    """
    A colored pile tracks the number of colored lands (C),
    non-colored lands (N) and spells (S).
    """

    __slots__ = ()

    def __init__(self, colored: int, other: int, spells: int):
        super().__init__((colored, other, spells))

    @property
    def shape(self) -> Hashable:
        return "colored"

    def is_land(self, idx: int) -> bool:
        return CardType(idx) != CardType.SPELL

    def _make(self, counts: Sequence[int]) -> "ColoredPile":
        return ColoredPile(*counts)

    def categories(self) -> Iterable[int]:
        return list(CardType)

    @property
    def colored(self) -> int:
        return self._counts[CardType.GOOD_LAND]

    @property
    def other(self) -> int:
        return self._counts[CardType.OTHER_LAND]

    def lands(self) -> int:
        return self._counts[0] + self._counts[1]

    def spells(self) -> int:
        return self._counts[2]

    @classmethod
    def foreach_possible(cls, n: int) -> Iterator["ColoredPile"]:
        """All colored piles of n cards, (n, 0, 0) first."""
        return cls(0, 0, 0).compositions(n)

    def __repr__(self):
        c, n, s = self._counts
        return f"ColoredPile(colored={c}, other={n}, spells={s})"


class DualPile(Pile):
    """
    A two-color pile: mono-A lands, mono-B lands, A/B duals, lands producing
    neither color, and spells.
    """

    __slots__ = ()

    def __init__(self, a: int, b: int, ab: int, x: int, s: int):
        super().__init__((a, b, ab, x, s))

    @property
    def shape(self) -> Hashable:
        return "dual"

    def is_land(self, idx: int) -> bool:
        return DualCardType(idx) != DualCardType.SPELL

    def _make(self, counts: Sequence[int]) -> "DualPile":
        return DualPile(*counts)

    def categories(self) -> Iterable[int]:
        return list(DualCardType)

    @property
    def a(self) -> int:
        return self._counts[DualCardType.A]

    @property
    def b(self) -> int:
        return self._counts[DualCardType.B]

    @property
    def ab(self) -> int:
        return self._counts[DualCardType.AB]

    @property
    def x(self) -> int:
        return self._counts[DualCardType.X]

    @property
    def s(self) -> int:
        return self._counts[DualCardType.SPELL]

    def lands(self) -> int:
        return self.total() - self._counts[DualCardType.SPELL]

    def spells(self) -> int:
        return self._counts[DualCardType.SPELL]

    @classmethod
    def foreach_possible(cls, n: int) -> Iterator["DualPile"]:
        """All dual piles of n cards, (n, 0, 0, 0, 0) first."""
        return cls(0, 0, 0, 0, 0).compositions(n)

    def __repr__(self):
        a, b, ab, x, s = self._counts
        return f"DualPile(a={a}, b={b}, ab={ab}, x={x}, s={s})"


@dataclass(frozen=True)
class PileShape:
    """
    Layout of a GenPile.

    Two shapes are equal only if they have the same number of categories
    and the very same land predicate.
    """

    num_keys: int
    is_land: Callable[[int], bool]

    def pile(self, counts: Sequence[int]) -> "GenPile":
        return GenPile(counts, self)

    def empty(self) -> "GenPile":
        return GenPile([0] * self.num_keys, self)


class GenPile(Pile):
    """Pile with a caller-defined number of categories and land predicate."""

    __slots__ = ("_shape",)

    def __init__(self, counts: Sequence[int], shape: PileShape):
        super().__init__(counts)
        if len(self._counts) != shape.num_keys:
            raise PileShapeError(
                f"Expected {shape.num_keys} categories, got {len(self._counts)}"
            )
        self._shape = shape

    @property
    def shape(self) -> PileShape:
        return self._shape

    def is_land(self, idx: int) -> bool:
        return self._shape.is_land(idx)

    def _make(self, counts: Sequence[int]) -> "GenPile":
        return GenPile(counts, self._shape)

    def subsets(self, n: int) -> Iterator["GenPile"]:
        """
        Yield every n-card pile dominated by self.

        Unlike compositions(), each category is capped by its count in self,
        so this enumerates exactly the possible draws from self as a deck.
        """
        for counts in multi_subsets(self._counts, n):
            yield GenPile(counts, self._shape)

    def draws(self, n: int) -> Iterator["GenPile"]:
        return self.subsets(n)

    def __repr__(self):
        return f"GenPile({','.join(str(c) for c in self._counts)})"
