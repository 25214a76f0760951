"""
Scoring API endpoints.

Scores a board and computes the optimal arrangement for a finished draft.
Both are stateless: the client sends the whole board or card set each time.
"""

import datetime

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from recouple.analysis.optimal import calculate_optimal
from recouple.analysis.scoring import calculate_score
from recouple.api.draft import DraftCardModel, model_to_card
from recouple.config import settings
from recouple.layouts import resolve_daily_config
from recouple.models.score import ConnectionKind, ScoreBreakdown

router = APIRouter(tags=["score"])


class ScoreRequest(BaseModel):
    """A board to score."""

    date: datetime.date
    layout: str | None = None
    board: list[DraftCardModel | None]


class ConnectionModel(BaseModel):
    neighbor: int
    neighbor_name: str
    points: int
    kinds: list[ConnectionKind]


class CellScoreModel(BaseModel):
    index: int
    slot_points: int
    rarity_points: int
    connection_points: int
    total: int
    is_valid: bool | None
    connections: list[ConnectionModel] = Field(default_factory=list)


class ScoreResponse(BaseModel):
    """Full score breakdown."""

    total: int
    total_slot: int
    total_rarity: int
    total_connections: int
    group_bonus: int
    perfect_bonus: int
    completed_groups: list[int]
    couple_edges: list[tuple[int, int]]
    all_filled: bool
    all_valid: bool
    cells: list[CellScoreModel]


class OptimalRequest(BaseModel):
    """Every drafted card plus the player's current total."""

    date: datetime.date
    layout: str | None = None
    cards: list[DraftCardModel]
    current_score: int


class OptimalResponse(BaseModel):
    optimal_score: int
    percentage: int


def breakdown_to_response(score: ScoreBreakdown) -> ScoreResponse:
    return ScoreResponse(
        total=score.total,
        total_slot=score.total_slot,
        total_rarity=score.total_rarity,
        total_connections=score.total_connections,
        group_bonus=score.group_bonus,
        perfect_bonus=score.perfect_bonus,
        completed_groups=list(score.completed_groups),
        couple_edges=list(score.couple_edges),
        all_filled=score.all_filled,
        all_valid=score.all_valid,
        cells=[
            CellScoreModel(
                index=cell.index,
                slot_points=cell.slot_points,
                rarity_points=cell.rarity_points,
                connection_points=cell.connection_points,
                total=cell.total,
                is_valid=cell.is_valid,
                connections=[
                    ConnectionModel(
                        neighbor=c.neighbor,
                        neighbor_name=c.neighbor_name,
                        points=c.points,
                        kinds=sorted(c.kinds, key=lambda k: k.value),
                    )
                    for c in cell.connections
                ],
            )
            for cell in score.cells
        ],
    )


@router.post("/score", response_model=ScoreResponse)
async def score_board(request: ScoreRequest) -> ScoreResponse:
    """
    Score a board.

    Returns a known failure if the board length does not match the layout.
    """
    config = resolve_daily_config(request.date, request.layout or settings.default_layout)
    board = [model_to_card(c) if c is not None else None for c in request.board]
    return breakdown_to_response(calculate_score(config, board))


@router.post("/optimal", response_model=OptimalResponse)
async def optimal_score(request: OptimalRequest) -> OptimalResponse:
    """
    Best achievable score for the drafted cards.

    The search is CPU-bound and runs in a worker thread.
    """
    config = resolve_daily_config(request.date, request.layout or settings.default_layout)
    cards = [model_to_card(c) for c in request.cards]
    result = await run_in_threadpool(calculate_optimal, config, cards, request.current_score)
    return OptimalResponse(optimal_score=result.optimal_score, percentage=result.percentage)
