"""
Draft API endpoint.

Serves the deterministic draft for a day and game, together with the board
configuration the game is played on.
"""

import datetime
from typing import Annotated

from fastapi import APIRouter, Path, Query
from pydantic import BaseModel, Field

from recouple.analysis.draft import generate_daily_rounds
from recouple.analysis.optimal import MAX_OPTIMAL_SLOTS
from recouple.config import settings
from recouple.layouts import daily_rotation, resolve_daily_config
from recouple.models.board import BoardConfig
from recouple.models.contestant import Contestant, DraftCard, Tag
from recouple.services.contestant_database import get_contestant_pool

router = APIRouter(prefix="/draft", tags=["draft"])


class DraftCardModel(BaseModel):
    """A drafted contestant as sent over the wire."""

    id: int
    name: str
    tags: list[Tag] = Field(default_factory=list)
    season: int
    show: str
    couple: str | None = None
    rarity: int = Field(ge=1, le=4)
    rarity_points: int


class SlotModel(BaseModel):
    """One slot of the board configuration."""

    index: int
    label: str
    tags: list[Tag]
    wildcard: bool
    neighbors: list[int]


class BoardConfigModel(BaseModel):
    """Resolved board configuration for the day."""

    layout: str
    rotating_label: str
    slots: list[SlotModel]
    edges: list[tuple[int, int]]
    # False when POST /optimal would refuse this layout as too large to search
    optimal_available: bool


class DraftResponse(BaseModel):
    """Response model for a day's draft."""

    date: datetime.date
    game_index: int
    seed: int
    board: BoardConfigModel
    rounds: list[list[DraftCardModel]]


def card_to_model(card: DraftCard) -> DraftCardModel:
    return DraftCardModel(
        id=card.id,
        name=card.name,
        tags=sorted(card.tags, key=lambda t: t.value),
        season=card.season,
        show=card.show,
        couple=card.couple,
        rarity=card.rarity,
        rarity_points=card.rarity_points,
    )


def model_to_card(model: DraftCardModel) -> DraftCard:
    return DraftCard(
        contestant=Contestant(
            id=model.id,
            name=model.name,
            tags=frozenset(model.tags),
            season=model.season,
            show=model.show,
            couple=model.couple or None,
        ),
        rarity=model.rarity,
        rarity_points=model.rarity_points,
    )


def config_to_model(config: BoardConfig, rotating_label: str) -> BoardConfigModel:
    return BoardConfigModel(
        layout=config.name,
        rotating_label=rotating_label,
        slots=[
            SlotModel(
                index=i,
                label=slot.label,
                tags=sorted(slot.tags, key=lambda t: t.value),
                wildcard=slot.is_wildcard,
                neighbors=list(config.neighbors(i)),
            )
            for i, slot in enumerate(config.slots)
        ],
        edges=list(config.edges),
        optimal_available=config.size <= MAX_OPTIMAL_SLOTS,
    )


@router.get("/{date}/{game_index}", response_model=DraftResponse)
async def get_daily_draft(
    date: datetime.date,
    game_index: Annotated[int, Path(ge=1, le=3)],
    layout: Annotated[str | None, Query()] = None,
) -> DraftResponse:
    """
    Get every round of the draft for a day and game.

    Identical for every caller asking for the same date, game and layout.
    """
    layout_name = layout or settings.default_layout
    config = resolve_daily_config(date, layout_name)
    draft = generate_daily_rounds(get_contestant_pool(), date, game_index, config)

    return DraftResponse(
        date=draft.date,
        game_index=draft.game_index,
        seed=draft.seed,
        board=config_to_model(config, daily_rotation(date, layout_name).label),
        rounds=[[card_to_model(card) for card in options] for options in draft.rounds],
    )
