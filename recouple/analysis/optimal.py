"""
Optimal arrangement search.

Brute force over every assignment of the drafted cards to the board slots
(N! arrangements via Heap's algorithm). Per-card slot values and per-pair
connection values are precomputed, and each edge is evaluated once and
doubled instead of walking neighbours from both ends.

N is fixed and small (9 slots -> 362,880 arrangements). Larger boards
are refused: 12! arrangements is not a brute-force problem.
"""

import logging
import math
from collections.abc import Sequence

from recouple.analysis.scoring import evaluate_pair
from recouple.models.board import BoardConfig
from recouple.models.contestant import DraftCard
from recouple.models.failure import FailureKind, KnownError
from recouple.models.score import OptimalResult

logger = logging.getLogger(__name__)

MAX_OPTIMAL_SLOTS = 10


class OptimalSearchTooLargeError(KnownError):
    """Raised when the optimal search is asked to enumerate too many arrangements."""

    def __init__(self, slots: int):
        self.slots = slots
        super().__init__(
            kind=FailureKind.SEARCH_TOO_LARGE,
            message=f"Optimal search supports at most {MAX_OPTIMAL_SLOTS} slots.",
            detail=f"Layout has {slots} slots ({math.factorial(slots)} arrangements)",
            status_code=422,
        )


def _slot_values(config: BoardConfig, cards: Sequence[DraftCard]) -> list[list[int]]:
    """values[card][slot] = slot points + rarity points for that placement."""
    rules = config.rules
    values: list[list[int]] = []
    for card in cards:
        row: list[int] = []
        for requirement in config.slots:
            valid = requirement.accepts(card)
            points = rules.slot_match_points if valid and not requirement.is_wildcard else 0
            if valid or not rules.rarity_requires_match:
                points += rules.rarity_points(card.rarity)
            row.append(points)
        values.append(row)
    return values


def _pair_values(config: BoardConfig, cards: Sequence[DraftCard]) -> list[list[int]]:
    """pairs[a][b] = points card a earns next to card b (symmetric)."""
    n = len(cards)
    pairs = [[0] * n for _ in range(n)]
    for a in range(n):
        for b in range(a + 1, n):
            points, _ = evaluate_pair(config.rules, cards[a], cards[b])
            pairs[a][b] = points
            pairs[b][a] = points
    return pairs


def best_arrangement_score(config: BoardConfig, cards: Sequence[DraftCard]) -> int:
    """
    Highest total any arrangement of `cards` can reach on a full board.

    Raises:
        OptimalSearchTooLargeError: If the layout exceeds MAX_OPTIMAL_SLOTS
        ValueError: If the card count does not match the slot count
    """
    n = config.size
    if n > MAX_OPTIMAL_SLOTS:
        raise OptimalSearchTooLargeError(n)
    if len(cards) != n:
        raise ValueError(f"Expected {n} cards, got {len(cards)}")

    slot_values = _slot_values(config, cards)
    pairs = _pair_values(config, cards)
    edges = config.edges
    slots = range(n)

    # A full board completes every group and earns the perfect bonus
    fixed_bonus = len(config.groups) * config.rules.group_bonus + config.rules.perfect_board_bonus

    # perm[slot] = card index; one buffer reused for every arrangement
    perm = list(range(n))

    def evaluate() -> int:
        total = 0
        for s in slots:
            total += slot_values[perm[s]][s]
        connections = 0
        for a, b in edges:
            connections += pairs[perm[a]][perm[b]]
        return total + 2 * connections

    best = evaluate()
    counters = [0] * n
    i = 1
    while i < n:
        if counters[i] < i:
            if i % 2 == 0:
                perm[0], perm[i] = perm[i], perm[0]
            else:
                j = counters[i]
                perm[j], perm[i] = perm[i], perm[j]
            score = evaluate()
            if score > best:
                best = score
            counters[i] += 1
            i = 1
        else:
            counters[i] = 0
            i += 1

    return best + fixed_bonus


def calculate_optimal(
    config: BoardConfig,
    cards: Sequence[DraftCard],
    current_score: int,
) -> OptimalResult:
    """
    Best achievable score for the drafted cards and the player's percentage of it.

    If the card count does not match the board size (a game still being
    drafted), the current score is returned as optimal at 100%.

    Args:
        config: Board configuration the game is played on
        cards: Every drafted card
        current_score: Total of the player's arrangement

    Returns:
        OptimalResult with the best score and round(current / best * 100)

    Raises:
        OptimalSearchTooLargeError: If the layout exceeds MAX_OPTIMAL_SLOTS
    """
    if len(cards) != config.size:
        return OptimalResult(optimal_score=current_score, percentage=100)

    logger.debug(
        "Searching %d arrangements on layout %s",
        math.factorial(config.size),
        config.name,
    )
    best = best_arrangement_score(config, cards)

    if best > 0:
        percentage = math.floor(current_score / best * 100 + 0.5)
    else:
        percentage = 100

    return OptimalResult(optimal_score=best, percentage=percentage)
