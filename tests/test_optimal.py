"""Tests for the optimal arrangement search."""

import datetime
import itertools
from collections.abc import Callable

import pytest

from recouple.analysis import optimal as optimal_module
from recouple.analysis.draft import generate_all_rounds
from recouple.analysis.optimal import (
    MAX_OPTIMAL_SLOTS,
    OptimalSearchTooLargeError,
    best_arrangement_score,
    calculate_optimal,
)
from recouple.analysis.scoring import calculate_score
from recouple.layouts import GRID_RULES, GRIDDY_RULES, resolve_daily_config
from recouple.models.board import WILDCARD, BoardConfig, RuleSet, SlotRequirement
from recouple.models.contestant import Contestant, DraftCard, Tag
from recouple.models.failure import FailureKind

CardFactory = Callable[..., DraftCard]

GAME_DATE = datetime.date(2026, 1, 1)


def _square(rules: RuleSet, groups: tuple[tuple[int, ...], ...] = ()) -> BoardConfig:
    """Four slots in a cycle: Wild - USA - UK - Wild - back to the start."""
    return BoardConfig(
        name="square",
        slots=(
            WILDCARD,
            SlotRequirement("USA", frozenset({Tag.USA})),
            SlotRequirement("UK", frozenset({Tag.UK})),
            WILDCARD,
        ),
        edges=((0, 1), (1, 2), (2, 3), (3, 0)),
        rules=rules,
        groups=groups,
    )


def _brute_force(config: BoardConfig, cards: list[DraftCard]) -> int:
    return max(
        calculate_score(config, list(arrangement)).total
        for arrangement in itertools.permutations(cards)
    )


@pytest.fixture
def four_cards(make_card: CardFactory) -> list[DraftCard]:
    return [
        make_card("A", tags={Tag.USA}, show="USA", season=2, rarity=2, couple="B"),
        make_card("B", tags={Tag.UK}, show="UK", season=2, rarity=1),
        make_card("C", tags={Tag.UK}, show="UK", season=5, rarity=4),
        make_card("D", show="USA", season=5, rarity=3),
    ]


class TestBestArrangementScore:
    @pytest.mark.parametrize(
        "config",
        [
            _square(GRIDDY_RULES),
            _square(GRID_RULES, groups=((0, 1), (2, 3))),
        ],
        ids=["griddy-rules", "grid-rules"],
    )
    def test_matches_exhaustive_scoring(
        self, config: BoardConfig, four_cards: list[DraftCard]
    ) -> None:
        assert best_arrangement_score(config, four_cards) == _brute_force(config, four_cards)

    def test_group_and_perfect_bonus_included(self, four_cards: list[DraftCard]) -> None:
        plain = best_arrangement_score(_square(GRID_RULES), four_cards)
        grouped = best_arrangement_score(_square(GRID_RULES, groups=((0, 1), (2, 3))), four_cards)

        assert grouped - plain == 2 * GRID_RULES.group_bonus

    def test_card_order_does_not_matter(self, four_cards: list[DraftCard]) -> None:
        config = _square(GRIDDY_RULES)

        assert best_arrangement_score(config, four_cards) == best_arrangement_score(
            config, list(reversed(four_cards))
        )

    def test_wrong_card_count(self, four_cards: list[DraftCard]) -> None:
        with pytest.raises(ValueError, match="Expected 4 cards"):
            best_arrangement_score(_square(GRIDDY_RULES), four_cards[:3])

    def test_uniform_griddy_board(self, make_card: CardFactory) -> None:
        """Nine tagless, same-show, same-season cards: 16 edges x 5 pts x 2 ends."""
        config = resolve_daily_config(GAME_DATE, "griddy")
        cards = [make_card(show="USA", season=1) for _ in range(9)]

        assert best_arrangement_score(config, cards) == 160


class TestCalculateOptimal:
    def test_incomplete_draft_returns_current(self, four_cards: list[DraftCard]) -> None:
        result = calculate_optimal(_square(GRIDDY_RULES), four_cards[:2], 17)

        assert result.optimal_score == 17
        assert result.percentage == 100

    def test_uniform_board_percentage(self, make_card: CardFactory) -> None:
        config = resolve_daily_config(GAME_DATE, "griddy")
        cards = [make_card(show="USA", season=1) for _ in range(9)]

        result = calculate_optimal(config, cards, 80)

        assert result.optimal_score == 160
        assert result.percentage == 50

    def test_drafted_board_never_beats_optimal(self, sample_pool: list[Contestant]) -> None:
        config = resolve_daily_config(GAME_DATE, "griddy")
        cards = [options[0] for options in generate_all_rounds(sample_pool, 77)]
        current = calculate_score(config, cards).total

        result = calculate_optimal(config, cards, current)

        assert result.optimal_score >= current
        assert 0 <= result.percentage <= 100

    def test_zero_best_is_full_marks(self, make_card: CardFactory) -> None:
        config = BoardConfig(
            name="pair",
            slots=(WILDCARD, WILDCARD),
            edges=((0, 1),),
            rules=GRIDDY_RULES,
        )
        cards = [make_card(show="USA", season=1), make_card(show="UK", season=2)]

        result = calculate_optimal(config, cards, 0)

        assert result.optimal_score == 0
        assert result.percentage == 100

    @pytest.mark.parametrize(
        ("current", "expected"),
        [(1, 13), (3, 38), (4, 50), (8, 100), (10, 125)],
    )
    def test_percentage_rounds_half_up(
        self,
        current: int,
        expected: int,
        four_cards: list[DraftCard],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(optimal_module, "best_arrangement_score", lambda config, cards: 8)

        result = calculate_optimal(_square(GRIDDY_RULES), four_cards, current)

        assert result.percentage == expected


class TestSearchLimit:
    def test_grid_is_refused(self, sample_pool: list[Contestant]) -> None:
        config = resolve_daily_config(GAME_DATE, "grid")
        cards = [options[0] for options in generate_all_rounds(sample_pool, 5, num_rounds=12)]

        with pytest.raises(OptimalSearchTooLargeError) as exc_info:
            calculate_optimal(config, cards, 0)

        assert config.size > MAX_OPTIMAL_SLOTS
        assert exc_info.value.slots == 12
        assert exc_info.value.kind == FailureKind.SEARCH_TOO_LARGE
        assert exc_info.value.status_code == 422

    def test_incomplete_grid_draft_is_not_searched(self, four_cards: list[DraftCard]) -> None:
        config = resolve_daily_config(GAME_DATE, "grid")

        result = calculate_optimal(config, four_cards, 9)

        assert result.optimal_score == 9
        assert result.percentage == 100
