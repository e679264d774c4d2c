"""
Combinatorics kernel for closed-form draw probabilities.

Every probability in the package reduces to products of binomial
coefficients. Float coefficients are used on the probability path since
results are always ratios; exact integer coefficients are kept for counting
problems (dice sums).
"""

from typing import Callable, Tuple


def perc(x: float) -> float:
    """Convert a probability to a percentage."""
    return 100.0 * x


def power(base: int, exp: int) -> int:
    """
    Exact integer exponentiation by repeated squaring.

    Args:
        base: Integer base
        exp: Non-negative exponent

    Returns:
        base ** exp (1 when exp is 0)
    """
    acc = 1
    while exp > 0:
        if exp & 1:
            acc *= base
        exp >>= 1
        if exp:
            base *= base
    return acc


def choose(n: int, k: int) -> float:
    """
    Number of ways of choosing k elements out of n, as a float.

    Uses the multiplicative formula over min(k, n - k) factors, so n can
    reach a few hundred without overflow.

    Examples:
        choose(3, 2) -> 3.0
        choose(4, 2) -> 6.0
        choose(2, 5) -> 0.0
    """
    if k > n:
        return 0.0
    if k == 0 or k == n:
        return 1.0

    if k + k > n:
        k = n - k

    res = 1.0
    for j in range(k):
        res = res * (n - j) / (j + 1)
    return res


def choose_exact(n: int, k: int) -> int:
    """Exact integer version of choose()."""
    if k > n:
        return 0
    if k == 0 or k == n:
        return 1

    if 2 * k > n:
        k = n - k

    res = 1
    for j in range(k):
        # res * (n - j) is always a multiple of (j + 1) here
        res = res * (n - j) // (j + 1)
    return res


def hypergeometric(n0: int, k0: int, n1: int, k1: int) -> float:
    """
    Chance of drawing exactly k0 red and k1 white balls out of n0 red and
    n1 white balls.

                            c(n0, k0) * c(n1, k1)
        h(n0, k0, n1, k1) = ---------------------
                             c(n0 + n1, k0 + k1)

    Returns 0.0 when more balls are drawn than the urn holds.
    """
    den = choose(n0 + n1, k0 + k1)
    if den == 0.0:
        return 0.0
    return choose(n0, k0) * choose(n1, k1) / den


def hypergeometric_multi(
    num_categories: int, index_to_pair: Callable[[int], Tuple[int, int]]
) -> float:
    """
    Multivariate hypergeometric probability.

    Args:
        num_categories: Number of categories
        index_to_pair: Maps a category index to (population, drawn)

    Returns:
        Probability that one draw of sum(drawn) cards from the combined
        population has exactly the given per-category composition
    """
    n_total = 0
    k_total = 0
    c_total = 1.0

    for idx in range(num_categories):
        n, k = index_to_pair(idx)
        n_total += n
        k_total += k
        c_total *= choose(n, k)

    den = choose(n_total, k_total)
    if den == 0.0:
        return 0.0
    return c_total / den


def when(cond: bool, what: Callable[[], float]) -> float:
    """Evaluate what() only when cond holds, 0.0 otherwise."""
    return what() if cond else 0.0


def indicator(cond: bool) -> float:
    return 1.0 if cond else 0.0


def dice_sum_ways(dice: int, sides: int, total: int) -> int:
    """
    Count the ordered rolls of `dice` dice with faces 1..sides summing to
    `total`.

    Inclusion-exclusion over the number of dice exceeding `sides`:

        sum_j (-1)^j c(dice, j) c(total - j*sides - 1, dice - 1)
    """
    if dice == 0:
        return 1 if total == 0 else 0
    if total < dice or total > dice * sides:
        return 0

    ways = 0
    for j in range(dice + 1):
        rest = total - j * sides - 1
        if rest < dice - 1:
            break
        term = choose_exact(dice, j) * choose_exact(rest, dice - 1)
        ways += -term if j & 1 else term
    return ways


def dice_sum_probability(dice: int, sides: int, total: int) -> float:
    """Probability that `dice` fair dice with `sides` faces sum to `total`."""
    return dice_sum_ways(dice, sides, total) / power(sides, dice)
