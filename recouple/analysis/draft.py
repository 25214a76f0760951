"""
Deterministic daily draft.

Every player sharing a (date, game index) pair sees the same rounds. The
generator is a Mulberry32 stream that reproduces the browser client bit for
bit, so all arithmetic wraps at 32 bits exactly as it does there.

Draft curve: early rounds are more likely to offer high-rarity cards, late
rounds mostly common ones.
"""

import datetime
import logging
from collections.abc import Callable, Mapping, MutableSequence, Sequence
from dataclasses import dataclass
from typing import TypeVar

from recouple.layouts import GRIDDY_RULES
from recouple.models.board import BoardConfig
from recouple.models.contestant import Contestant, DraftCard
from recouple.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Rng = Callable[[], float]

_MASK32 = 0xFFFFFFFF
_TWO_POW_32 = 4294967296

GAME_MULTIPLIERS = (1, 7919, 104729)
GAME_OFFSET = 31337

NUM_ROUNDS = 9
PICKS_PER_ROUND = 3

# Probability of tiers 1..4 per round. Tier-1 mass never decreases.
RARITY_TABLE: tuple[tuple[float, float, float, float], ...] = (
    (0.30, 0.35, 0.25, 0.10),
    (0.35, 0.35, 0.22, 0.08),
    (0.40, 0.35, 0.18, 0.07),
    (0.45, 0.32, 0.16, 0.07),
    (0.50, 0.30, 0.14, 0.06),
    (0.55, 0.28, 0.12, 0.05),
    (0.65, 0.23, 0.09, 0.03),
    (0.75, 0.18, 0.06, 0.01),
    (0.85, 0.13, 0.02, 0.00),
)


class InvalidGameIndexError(KnownError):
    """Raised when a game index outside 1..3 is requested."""

    def __init__(self, game_index: int):
        self.game_index = game_index
        super().__init__(
            kind=FailureKind.INVALID_GAME_INDEX,
            message=f"Game index must be between 1 and {len(GAME_MULTIPLIERS)}.",
            detail=f"Got {game_index}",
        )


def derive_seed(date: datetime.date, game_index: int) -> int:
    """
    Seed for one of the day's games.

    Args:
        date: Calendar date of the game
        game_index: 1, 2 or 3

    Returns:
        Unsigned 32-bit seed

    Raises:
        InvalidGameIndexError: If game_index is not 1, 2 or 3
    """
    if not 1 <= game_index <= len(GAME_MULTIPLIERS):
        raise InvalidGameIndexError(game_index)
    base = date.year * 10000 + date.month * 100 + date.day
    return (base * GAME_MULTIPLIERS[game_index - 1] + game_index * GAME_OFFSET) & _MASK32


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


class SeededRng:
    """
    Mulberry32 pseudo-random stream.

    Calling the instance returns the next float in [0, 1). The state is an
    unsigned 32-bit integer; two instances with the same seed produce the
    same infinite sequence.
    """

    __slots__ = ("state",)

    def __init__(self, seed: int):
        self.state = seed & _MASK32

    def __call__(self) -> float:
        return self.next_uint32() / _TWO_POW_32

    def next_uint32(self) -> int:
        self.state = (self.state + 0x6D2B79F5) & _MASK32
        s = self.state
        t = _imul(s ^ (s >> 15), s | 1)
        t = ((t + _imul(t ^ (t >> 7), t | 61)) & _MASK32) ^ t
        return (t ^ (t >> 14)) & _MASK32


def seeded_rng(seed: int) -> SeededRng:
    return SeededRng(seed)


def seeded_shuffle(items: MutableSequence[T], rng: Rng) -> MutableSequence[T]:
    """Fisher-Yates shuffle in place, one draw per position from the end down to 1."""
    for i in range(len(items) - 1, 0, -1):
        j = int(rng() * (i + 1))
        items[i], items[j] = items[j], items[i]
    return items


def roll_rarity(rng: Rng, round_index: int) -> int:
    """
    Roll a rarity tier for a card offered in `round_index`.

    Rounds past the end of the table reuse its last row. Falls back to
    tier 1 if rounding leaves the draw above the cumulative total.
    """
    probs = RARITY_TABLE[min(round_index, len(RARITY_TABLE) - 1)]
    roll = rng()
    cumulative = 0.0
    for tier, prob in enumerate(probs, start=1):
        cumulative += prob
        if roll < cumulative:
            return tier
    return 1


def generate_all_rounds(
    pool: Sequence[Contestant],
    seed: int,
    *,
    num_rounds: int = NUM_ROUNDS,
    picks_per_round: int = PICKS_PER_ROUND,
    rarity_values: Mapping[int, int] = GRIDDY_RULES.rarity_values,
) -> list[list[DraftCard]]:
    """
    Generate every round of a game's draft.

    The pool is shuffled once, then consumed sequentially so no contestant
    is offered twice. When the pool runs out, later rounds are short or
    empty rather than failing.

    Args:
        pool: Full contestant pool (not modified)
        seed: Seed from derive_seed
        num_rounds: Rounds to generate
        picks_per_round: Options per round
        rarity_values: Rarity tier -> points for the DraftCard

    Returns:
        List of rounds, each a list of DraftCard options
    """
    rng = seeded_rng(seed)
    shuffled = seeded_shuffle(list(pool), rng)

    rounds: list[list[DraftCard]] = []
    pool_index = 0

    for round_index in range(num_rounds):
        options: list[DraftCard] = []
        for _ in range(picks_per_round):
            if pool_index >= len(shuffled):
                break
            contestant = shuffled[pool_index]
            pool_index += 1
            tier = roll_rarity(rng, round_index)
            options.append(
                DraftCard(
                    contestant=contestant,
                    rarity=tier,
                    rarity_points=rarity_values.get(tier, 0),
                )
            )
        rounds.append(options)

    if pool_index < num_rounds * picks_per_round:
        logger.warning(
            "Contestant pool exhausted: %d of %d draft slots filled",
            pool_index,
            num_rounds * picks_per_round,
        )
    logger.debug("Generated %d rounds from seed %d", len(rounds), seed)
    return rounds


@dataclass(frozen=True, slots=True)
class DailyDraft:
    """The draft for one game of one day."""

    date: datetime.date
    game_index: int
    seed: int
    rounds: list[list[DraftCard]]


def generate_daily_rounds(
    pool: Sequence[Contestant],
    date: datetime.date,
    game_index: int,
    config: BoardConfig,
) -> DailyDraft:
    """
    Draft for a given day and game, one round per board slot.

    Raises:
        InvalidGameIndexError: If game_index is not 1, 2 or 3
    """
    seed = derive_seed(date, game_index)
    rounds = generate_all_rounds(
        pool,
        seed,
        num_rounds=config.size,
        rarity_values=config.rules.rarity_values,
    )
    return DailyDraft(date=date, game_index=game_index, seed=seed, rounds=rounds)
