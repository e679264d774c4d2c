"""
Enumerators over integer count vectors.

Both generators yield tuples; piles wrap them into their own shape.
"""

from typing import Iterator, List, Sequence, Tuple


def compositions(total: int, width: int) -> Iterator[Tuple[int, ...]]:
    """
    Yield every vector of `width` non-negative integers summing to `total`.

    Slots roll forward: slot 0 drains into slot 1, then the first non-empty
    slot i > 0 moves one unit to slot i + 1 and refills slot 0 with the rest.
    For total 3 and width 3:

        (3, 0, 0) -> (2, 1, 0) -> (1, 2, 0) -> (0, 3, 0) ->
        (2, 0, 1) -> (1, 1, 1) -> (0, 2, 1) ->
        (1, 0, 2) -> (0, 1, 2) ->
        (0, 0, 3)
    """
    if width < 1:
        raise ValueError(f"width must be positive, got {width}")
    if width == 1:
        yield (total,)
        return

    counts = [total] + [0] * (width - 1)
    while True:
        yield tuple(counts)

        if counts[0] > 0:
            counts[0] -= 1
            counts[1] += 1
            continue

        for i in range(1, width - 1):
            if counts[i] > 0:
                counts[0] = counts[i] - 1
                counts[i + 1] += 1
                counts[i] = 0
                break
        else:
            # only the last slot holds anything
            return


def multi_subsets(caps: Sequence[int], k: int) -> Iterator[Tuple[int, ...]]:
    """
    Yield every vector v with 0 <= v[i] <= caps[i] and sum(v) == k.

    This is k-subset selection from a multiset given by its multiplicities.
    Categories are assigned from the last to the first; for each one the
    count taken is bounded below by what the remaining categories cannot
    supply and above by the category's own cap.

    Example:
        multi_subsets([2, 4, 1], 2) yields (2, 0, 0), (1, 1, 0), (0, 2, 0),
        (1, 0, 1), (0, 1, 1)
    """
    width = len(caps)
    # (left to pick, categories left, cards left in those categories, picked)
    stack: List[Tuple[int, int, int, Tuple[int, ...]]] = [
        (k, width, sum(caps), (0,) * width)
    ]

    while stack:
        left, pos, avail, picked = stack.pop()
        if left == 0:
            yield picked
            continue
        if pos == 0:
            continue

        t = pos - 1
        m = caps[t]
        lo = max(0, left + m - avail)
        hi = min(left, m)

        for i in range(hi, lo - 1, -1):
            stack.append((left - i, t, avail - m, picked[:t] + (i,) + picked[t + 1 :]))
