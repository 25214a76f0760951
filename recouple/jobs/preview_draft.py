"""
Preview a day's drafts.

Logs every round of each requested game so the day's puzzles can be checked
before release. With --optimal, also reports the best score reachable when
the first option of every round is taken.
"""

import argparse
import datetime
import logging

from recouple.analysis.draft import generate_daily_rounds
from recouple.analysis.optimal import MAX_OPTIMAL_SLOTS, calculate_optimal
from recouple.config import settings
from recouple.layouts import LAYOUTS, daily_rotation, resolve_daily_config
from recouple.services.contestant_database import load_contestant_pool

logger = logging.getLogger(__name__)


def preview_game(
    date: datetime.date,
    game_index: int,
    layout: str,
    *,
    optimal: bool = False,
) -> int | None:
    """
    Log one game's draft.

    Returns:
        Best score for the first-pick draft when `optimal` is set and the
        layout is small enough to search, otherwise None
    """
    config = resolve_daily_config(date, layout)
    draft = generate_daily_rounds(load_contestant_pool(), date, game_index, config)

    logger.info("Game %d on %s (seed %d, layout %s)", game_index, date, draft.seed, layout)
    for round_index, options in enumerate(draft.rounds, start=1):
        summary = ", ".join(f"{c.name} [{c.show} S{c.season} {c.rarity}*]" for c in options)
        logger.info("  Round %d: %s", round_index, summary or "(pool exhausted)")

    if not optimal:
        return None
    if config.size > MAX_OPTIMAL_SLOTS:
        logger.warning("Layout %s is too large for the optimal search", layout)
        return None

    first_picks = [options[0] for options in draft.rounds if options]
    result = calculate_optimal(config, first_picks, 0)
    logger.info("  Best first-pick arrangement: %d pts", result.optimal_score)
    return result.optimal_score


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Preview the daily drafts")
    parser.add_argument(
        "--date",
        type=datetime.date.fromisoformat,
        default=datetime.date.today(),
        help="Date to preview (YYYY-MM-DD), defaults to today",
    )
    parser.add_argument(
        "--game",
        type=int,
        choices=(1, 2, 3),
        action="append",
        help="Game index to preview (repeatable), defaults to all three",
    )
    parser.add_argument(
        "--layout",
        choices=sorted(LAYOUTS),
        default=settings.default_layout,
        help="Board layout",
    )
    parser.add_argument(
        "--optimal",
        action="store_true",
        help="Also compute the best first-pick arrangement",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    rotation = daily_rotation(args.date, args.layout)
    logger.info("Rotating slot for %s: %s (%s)", args.date, rotation.label, rotation.description)

    for game_index in args.game or (1, 2, 3):
        preview_game(args.date, game_index, args.layout, optimal=args.optimal)


if __name__ == "__main__":
    main()
