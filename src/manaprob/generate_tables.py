#!/usr/bin/env python3
"""
Generate manabase requirement tables.

Every cell is an exact probability computation (mulligans down to four
cards included), not a simulation.
"""

import argparse
import logging
import re
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv

from .goals import colored_goal, dual_goal
from .prob import perc
from .simulation import find_minimum_duals, find_minimum_sources, prob_color_screwed
from .types import STANDARD_LAND_COUNTS, SimulationConfig, default_max_turn

logger = logging.getLogger("manaprob.generate_tables")


# optional generic mana followed by colored pips, e.g. "2CC"
PATTERN_RE = re.compile(r"^(\d*)(C+)$", re.IGNORECASE)


def parse_pattern(pattern: str) -> Tuple[int, int, str]:
    """
    Split a mana pattern into (colored_pips, generic_mana, label).

    "2CC" -> (2, 2, "2CC"), "CCC" -> (3, 0, "CCC"). The label is the input
    unchanged; pattern_label() builds it back from the counts.
    """
    match = PATTERN_RE.match(pattern)
    if match is None:
        raise ValueError(
            f"Invalid pattern: {pattern}. Expected format like C, 1C, 2CC, CCC"
        )

    generic, pips = match.groups()
    return len(pips), int(generic or 0), pattern


def pattern_label(colored_pips: int, generic_mana: int) -> str:
    """Inverse of parse_pattern: (2, 1) -> "1CC"."""
    prefix = str(generic_mana) if generic_mana > 0 else ""
    return prefix + "C" * colored_pips


def dual_label(a_pips: int, b_pips: int, generic_mana: int = 0) -> str:
    """(2, 1, 0) -> "AAB"."""
    prefix = str(generic_mana) if generic_mana > 0 else ""
    return prefix + "A" * a_pips + "B" * b_pips


def generate_table(
    deck_size: int,
    patterns: List[Tuple[int, int, str]] = None,
    max_turn: int = None,
    land_count: int = None,
    target: float = None,
    on_play: bool = True,
) -> Dict[str, Dict[int, Optional[int]]]:
    """
    Generate a complete table for a deck size.

    Args:
        deck_size: Size of deck (40, 60, or 99)
        patterns: List of (colored_pips, generic_mana, label) tuples
        max_turn: Maximum turn to calculate for (defaults to MANAPROB_MAX_TURN)
        land_count: Override default land count (optional)
        target: Fraction of the all-colored probability to reach (optional)
        on_play: True if on play, False if on draw

    Returns:
        Nested dict: {pattern_label: {turn: minimum_sources}}
    """
    if patterns is None:
        # Default to C, CC, CCC
        patterns = [(1, 0, "C"), (2, 0, "CC"), (3, 0, "CCC")]
    if max_turn is None:
        max_turn = default_max_turn()

    table = {}

    for colored_pips, generic_mana, label in patterns:
        table[label] = {}
        cmc = colored_pips + generic_mana  # Total mana cost
        goal = colored_goal(colored_pips, cmc)

        for turn in range(1, max_turn + 1):
            # Skip impossible combinations (can't cast spell before its CMC)
            if turn < cmc:
                table[label][turn] = None
                continue

            config = SimulationConfig.from_deck_size(
                deck_size=deck_size,
                good_lands_needed=colored_pips,
                turn_allowed=turn,
                on_play=on_play,
                land_count=land_count,
                target_probability=target,
            )

            min_sources = find_minimum_sources(
                config.total_lands,
                config.deck_size,
                config.draws,
                config.target_probability,
                goal,
            )
            table[label][turn] = min_sources if min_sources > 0 else None

            logger.info(
                "%d-card deck, %d lands, pattern %s, turn %d: %s sources",
                deck_size, config.total_lands, label, turn, min_sources,
            )

    return table


def generate_summary_table(
    lands: int, deck_size: int, target: float = None, max_generic: int = 7
) -> Dict[str, Dict[int, int]]:
    """
    Colored sources needed to cast on curve, by colored pips and generic mana.

    Returns:
        Nested dict: {pattern_label: {generic_mana: minimum_sources}}, 0 where
        no source count is needed or reachable
    """
    table = {}

    for colored_pips in range(1, 5):
        label = pattern_label(colored_pips, 0)
        table[label] = {}

        for generic_mana in range(max_generic + 1):
            cmc = colored_pips + generic_mana
            table[label][generic_mana] = find_minimum_sources(
                lands, deck_size, cmc - 1, target, colored_goal(colored_pips, cmc)
            )

    return table


def generate_dual_table(
    lands: int,
    deck_size: int,
    uncolored: int,
    target: float = None,
    max_generic: int = 7,
) -> Dict[str, Dict[int, int]]:
    """
    Dual lands needed to cast two-color spells on curve.

    Mono-colored lands are split between the colors in proportion to the
    spell's pips.

    Returns:
        Nested dict: {pattern_label: {generic_mana: minimum_duals}}, -1 where
        the target can't be reached
    """
    table = {}

    for colored_pips in range(2, 6):
        for b_pips in range(1, colored_pips // 2 + 1):
            a_pips = colored_pips - b_pips
            label = dual_label(a_pips, b_pips)
            a_rate = a_pips / (a_pips + b_pips)
            table[label] = {}

            for generic_mana in range(max_generic + 1):
                cmc = colored_pips + generic_mana
                table[label][generic_mana] = find_minimum_duals(
                    lands,
                    deck_size,
                    uncolored,
                    a_rate,
                    cmc - 1,
                    target,
                    dual_goal(a_pips, b_pips, cmc),
                )

    return table


def generate_screw_table(
    lands: int, colored: int, deck_size: int, max_generic: int = 7
) -> Dict[str, Dict[int, float]]:
    """
    Chance of casting on curve with `colored` of `lands` lands colored,
    relative to all lands colored.

    Returns:
        Nested dict: {pattern_label: {generic_mana: ratio}}
    """
    table = {}

    for colored_pips in range(1, 5):
        label = pattern_label(colored_pips, 0)
        table[label] = {}

        for generic_mana in range(max_generic + 1):
            cmc = colored_pips + generic_mana
            table[label][generic_mana] = prob_color_screwed(
                lands, colored, deck_size, cmc, colored_pips
            )

    return table


def print_table(
    deck_size: int, table: Dict[str, Dict[int, Optional[int]]], max_turn: int = 7
):
    """
    Print one row of minimum colored sources per pattern, turns across.

    Turns before the pattern's cmc show as "-".
    """
    turns = range(1, max_turn + 1)
    rule = "-" * (6 + 9 * max_turn)

    print(f"\n{'=' * len(rule)}")
    print(f"RESULTS FOR {deck_size}-CARD DECK")
    print(f"{'=' * len(rule)}\n")

    for label, row in table.items():
        colored_pips, generic_mana, _ = parse_pattern(label)
        plural = "s" if colored_pips > 1 else ""
        print(
            f"\n{label} (CMC={colored_pips + generic_mana}, "
            f"need {colored_pips} colored source{plural}):"
        )
        print(rule)
        print("Turn |" + "".join(f" {turn:^6} |" for turn in turns))
        print(rule)
        print("Srcs |" + "".join(f" {format_cell(row.get(turn)):^6} |" for turn in turns))
        print()


def format_cell(value) -> str:
    """Render a summary cell: blank for 0, ** for unreachable, % for ratios."""
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{perc(value):.1f}%"
    if value == 0:
        return ""
    if value == -1:
        return "**"
    return str(value)


def print_grid(title: str, table: Dict[str, Dict[int, object]]):
    """Print a summary table with generic mana across and pips down."""
    columns = sorted({col for row in table.values() for col in row})

    print(f"\n{title}")
    header = f"{'':>6} |" + "".join(f" {col:>6} |" for col in columns)
    print(header)
    print("-" * len(header))

    for label, row in table.items():
        cells = "".join(f" {format_cell(row.get(col)):>6} |" for col in columns)
        print(f"{label:>6} |{cells}")
    print()


def main(argv: List[str] = None):
    """Main entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Exact manabase tables (Frank Karsten methodology, London Mulligan)"
    )
    parser.add_argument(
        "--table",
        choices=["frank", "summary", "dual", "screw"],
        default="frank",
        help="Which table to print (default: frank)",
    )
    parser.add_argument(
        "--deck-size",
        type=int,
        required=True,
        help="Deck size (e.g. 40, 60 or 99)",
    )
    parser.add_argument(
        "--land-count",
        type=int,
        help="Number of lands in deck (overrides default for deck size)",
    )
    parser.add_argument(
        "--mana",
        type=int,
        choices=[1, 2, 3],
        help="Only compute specific colored mana (1=C, 2=CC, 3=CCC)",
    )
    parser.add_argument(
        "--patterns",
        type=str,
        help="Comma-separated mana patterns (e.g., C,CC,1C,2C,CCC)",
    )
    parser.add_argument(
        "--on-draw", action="store_true", help="Compute for the player on the draw"
    )
    parser.add_argument(
        "--target", type=float, help="Fraction of the best case to reach (0.90)"
    )
    parser.add_argument("--max-turn", type=int, help="Last turn of the frank table")
    parser.add_argument(
        "--max-generic", type=int, default=7, help="Last generic cost of summaries"
    )
    parser.add_argument(
        "--uncolored", type=int, default=0, help="Uncolored lands (dual table)"
    )
    parser.add_argument(
        "--colored", type=int, help="Colored lands (screw table)"
    )
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    land_count = args.land_count
    if land_count is None:
        if args.deck_size not in STANDARD_LAND_COUNTS:
            parser.error(
                f"--land-count is required for a {args.deck_size}-card deck"
            )
        land_count = STANDARD_LAND_COUNTS[args.deck_size]

    if args.table == "summary":
        table = generate_summary_table(
            land_count, args.deck_size, args.target, args.max_generic
        )
        print_grid(f"{land_count}/{args.deck_size} lands", table)

    elif args.table == "dual":
        table = generate_dual_table(
            land_count, args.deck_size, args.uncolored, args.target, args.max_generic
        )
        print_grid(
            f"{land_count}/{args.deck_size} lands, {args.uncolored} colorless", table
        )

    elif args.table == "screw":
        if args.colored is None:
            parser.error("--colored is required for the screw table")
        table = generate_screw_table(
            land_count, args.colored, args.deck_size, args.max_generic
        )
        print_grid(f"{args.colored}/{land_count} lands colored", table)

    else:
        # Determine which patterns to test
        if args.patterns:
            patterns = [parse_pattern(p.strip()) for p in args.patterns.split(",")]
        elif args.mana:
            patterns = [(args.mana, 0, "C" * args.mana)]
        else:
            patterns = None

        max_turn = args.max_turn or default_max_turn()
        table = generate_table(
            args.deck_size,
            patterns=patterns,
            max_turn=max_turn,
            land_count=land_count,
            target=args.target,
            on_play=not args.on_draw,
        )
        print_table(args.deck_size, table, max_turn)


if __name__ == "__main__":
    main()
