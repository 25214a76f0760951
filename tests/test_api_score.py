"""Tests for scoring API endpoints."""

import datetime
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from recouple.analysis.draft import generate_daily_rounds
from recouple.analysis.scoring import calculate_score
from recouple.api.draft import card_to_model
from recouple.layouts import resolve_daily_config
from recouple.main import app
from recouple.models.contestant import Contestant

GAME_DATE = datetime.date(2026, 1, 1)


@pytest.fixture
async def client():
    """Provide an async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def card_json(
    card_id: int,
    name: str,
    *,
    show: str = "USA",
    season: int = 1,
    tags: list[str] | None = None,
    couple: str | None = None,
    rarity: int = 1,
) -> dict[str, Any]:
    return {
        "id": card_id,
        "name": name,
        "tags": tags or [],
        "season": season,
        "show": show,
        "couple": couple,
        "rarity": rarity,
        "rarity_points": 0,
    }


class TestScoreEndpoint:
    async def test_matches_engine(self, client: AsyncClient, sample_pool: list[Contestant]) -> None:
        config = resolve_daily_config(GAME_DATE, "griddy")
        draft = generate_daily_rounds(sample_pool, GAME_DATE, 1, config)
        board = [options[0] for options in draft.rounds]
        expected = calculate_score(config, board)

        response = await client.post(
            "/score",
            json={
                "date": "2026-01-01",
                "board": [card_to_model(card).model_dump(mode="json") for card in board],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == expected.total
        assert data["total_connections"] == expected.total_connections
        assert data["all_filled"] is True
        assert [cell["total"] for cell in data["cells"]] == [c.total for c in expected.cells]

    async def test_partial_board(self, client: AsyncClient) -> None:
        board: list[dict[str, Any] | None] = [None] * 9
        board[3] = card_json(1, "Ava Hart", tags=["usa"], season=3, couple="Cleo Moss")
        board[4] = card_json(2, "Cleo Moss", tags=["usa"], season=3)

        response = await client.post("/score", json={"date": "2026-01-01", "board": board})

        assert response.status_code == 200
        data = response.json()
        # Hub slots 3 and 4: USA slot matched (2), UK slot not; 2 + 1 + 2 + 4 each way
        assert data["total_slot"] == 2
        assert data["total_connections"] == 18
        assert data["total"] == 20
        assert data["couple_edges"] == [[3, 4]]
        assert data["all_filled"] is False
        assert data["all_valid"] is False
        assert data["cells"][4]["is_valid"] is False
        assert data["cells"][0]["is_valid"] is None
        assert data["cells"][3]["connections"][0]["kinds"] == [
            "combo",
            "country",
            "couple",
            "season",
        ]

    async def test_empty_board(self, client: AsyncClient) -> None:
        response = await client.post("/score", json={"date": "2026-01-01", "board": [None] * 9})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 0
        assert data["all_valid"] is False

    async def test_grid_layout(self, client: AsyncClient) -> None:
        board: list[dict[str, Any] | None] = [None] * 12
        for i in range(4):
            board[i] = card_json(i + 1, f"Islander {i + 1}", season=i + 1)

        response = await client.post(
            "/score", json={"date": "2026-01-01", "layout": "grid", "board": board}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["completed_groups"] == [0]
        assert data["group_bonus"] == 5

    async def test_wrong_board_length(self, client: AsyncClient) -> None:
        response = await client.post("/score", json={"date": "2026-01-01", "board": [None] * 8})

        assert response.status_code == 400
        data = response.json()
        assert data["outcome"] == "known_failure"
        assert data["failure"]["kind"] == "board_shape"
        assert data["failure"]["detail"] == "Got 8"

    async def test_unknown_layout(self, client: AsyncClient) -> None:
        response = await client.post(
            "/score", json={"date": "2026-01-01", "layout": "hexagon", "board": [None] * 9}
        )

        assert response.status_code == 404
        assert response.json()["failure"]["kind"] == "unknown_layout"

    async def test_invalid_rarity(self, client: AsyncClient) -> None:
        board: list[dict[str, Any] | None] = [None] * 9
        board[0] = card_json(1, "Ava Hart", rarity=5)

        response = await client.post("/score", json={"date": "2026-01-01", "board": board})

        assert response.status_code == 422

    async def test_unknown_tag(self, client: AsyncClient) -> None:
        board: list[dict[str, Any] | None] = [None] * 9
        board[0] = card_json(1, "Ava Hart", tags=["villa_legend"])

        response = await client.post("/score", json={"date": "2026-01-01", "board": board})

        assert response.status_code == 422


class TestOptimalEndpoint:
    async def test_incomplete_draft(self, client: AsyncClient) -> None:
        cards = [card_json(1, "Ava Hart"), card_json(2, "Blake Reyes")]

        response = await client.post(
            "/optimal", json={"date": "2026-01-01", "cards": cards, "current_score": 12}
        )

        assert response.status_code == 200
        assert response.json() == {"optimal_score": 12, "percentage": 100}

    async def test_full_draft(self, client: AsyncClient) -> None:
        """Nine identical-profile cards score 160 however they are placed."""
        cards = [card_json(i, f"Islander {i}") for i in range(1, 10)]

        response = await client.post(
            "/optimal", json={"date": "2026-01-01", "cards": cards, "current_score": 120}
        )

        assert response.status_code == 200
        assert response.json() == {"optimal_score": 160, "percentage": 75}

    async def test_grid_too_large(self, client: AsyncClient) -> None:
        cards = [card_json(i, f"Islander {i}") for i in range(1, 13)]

        response = await client.post(
            "/optimal",
            json={"date": "2026-01-01", "layout": "grid", "cards": cards, "current_score": 0},
        )

        assert response.status_code == 422
        data = response.json()
        assert data["outcome"] == "known_failure"
        assert data["failure"]["kind"] == "search_too_large"
