"""
Board layouts.

Each layout is a static table: slot requirements, adjacency edges, slot
groups and the rule set that prices them. One slot set per layout rotates
its requirement daily; `resolve_daily_config` turns a layout and a date into
the concrete BoardConfig that every scoring call receives explicitly.

Layouts:
- griddy: 9-slot graph with two wildcard slots and two five-way hubs
- grid: 3x4 grid, row tag AND column tag per cell, row/column completion bonuses
"""

import datetime
import logging
from dataclasses import dataclass
from functools import lru_cache

from recouple.models.board import WILDCARD, BoardConfig, RuleSet, SlotRequirement
from recouple.models.contestant import Tag
from recouple.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)


class InvalidLayoutError(KnownError):
    """Raised when a layout name is not registered."""

    def __init__(self, name: str):
        super().__init__(
            kind=FailureKind.UNKNOWN_LAYOUT,
            message=f"Unknown board layout '{name}'.",
            suggestion=f"Use one of: {', '.join(sorted(LAYOUTS))}",
            status_code=404,
        )


@dataclass(frozen=True, slots=True)
class RotatingRequirement:
    """One of the daily options for the rotating slot(s)."""

    tag: Tag
    label: str
    description: str


@dataclass(frozen=True)
class Layout:
    """
    Static layout definition before the daily rotation is applied.

    Attributes:
        name: Registry key
        slots: Base requirement per slot
        edges: Undirected adjacency list
        rules: Scoring constants
        rotating_slots: Slots that gain the rotating tag
        rotation: Daily options, cycled by day of year
        groups: Slot groups earning the rule set's group bonus
    """

    name: str
    slots: tuple[SlotRequirement, ...]
    edges: tuple[tuple[int, int], ...]
    rules: RuleSet
    rotating_slots: tuple[int, ...]
    rotation: tuple[RotatingRequirement, ...]
    groups: tuple[tuple[int, ...], ...] = ()

    def resolve(self, rotation: RotatingRequirement) -> BoardConfig:
        """Build the concrete configuration with `rotation` applied."""
        slots = list(self.slots)
        for index in self.rotating_slots:
            base = slots[index]
            label = f"{base.label} · {rotation.label}" if base.tags else rotation.label
            slots[index] = SlotRequirement(label=label, tags=base.tags | {rotation.tag})
        return BoardConfig(
            name=self.name,
            slots=tuple(slots),
            edges=self.edges,
            rules=self.rules,
            groups=self.groups,
        )


def grid_edges(rows: int, cols: int) -> tuple[tuple[int, int], ...]:
    """Orthogonal adjacency for a row-major grid, each edge listed once."""
    edges: list[tuple[int, int]] = []
    for row in range(rows):
        for col in range(cols):
            index = row * cols + col
            if col < cols - 1:
                edges.append((index, index + 1))
            if row < rows - 1:
                edges.append((index, index + cols))
    return tuple(edges)


# =============================================================================
# GRIDDY (9 slots)
# =============================================================================
#
#      [0:Winner]────[1:Bombshell]
#       /    \         /    \
#   [2:WILD]─[3:USA]──[4:UK]─[5:WILD]
#       \    /  \      /  \    /
#      [6:Rot]──[8:Casa]──[7:Coupled]
#
# 3 (USA) and 4 (UK) are the five-way hubs.

GRIDDY_RULES = RuleSet(
    slot_match_points=2,
    rarity_values={1: 0, 2: 1, 3: 2, 4: 3},
    country_points=2,
    season_points=1,
    combo_bonus=2,
    couple_points=4,
)

GRIDDY = Layout(
    name="griddy",
    slots=(
        SlotRequirement("Winner", frozenset({Tag.WINNER})),
        SlotRequirement("Bombshell", frozenset({Tag.BOMBSHELL})),
        WILDCARD,
        SlotRequirement("USA", frozenset({Tag.USA})),
        SlotRequirement("UK", frozenset({Tag.UK})),
        WILDCARD,
        SlotRequirement("Rotating", frozenset()),
        SlotRequirement("Coupled", frozenset({Tag.COUPLED})),
        SlotRequirement("Casa Amor", frozenset({Tag.CASA})),
    ),
    edges=(
        (0, 1),
        (0, 2),
        (0, 3),
        (1, 4),
        (1, 5),
        (2, 3),
        (2, 6),
        (3, 4),
        (3, 6),
        (3, 8),
        (4, 5),
        (4, 7),
        (4, 8),
        (5, 7),
        (6, 8),
        (7, 8),
    ),
    rules=GRIDDY_RULES,
    rotating_slots=(6,),
    rotation=(
        RotatingRequirement(Tag.DAY1, "Day 1", "Original islander"),
        RotatingRequirement(Tag.FINALE, "Finale", "Made the final"),
        RotatingRequirement(Tag.SEASON6, "S6+", "Season 6 or later"),
        RotatingRequirement(Tag.OG_ERA, "OG Era", "Seasons 1-5"),
    ),
)


# =============================================================================
# GRID (3 rows x 4 columns)
# =============================================================================
#
# Rows:    0=USA, 1=UK, 2=Made Finale
# Columns: 0=Winner, 1=Coupled, 2=Casa Amor, 3=rotating

GRID_ROWS = 3
GRID_COLS = 4

GRID_RULES = RuleSet(
    slot_match_points=0,
    rarity_values={1: 1, 2: 2, 3: 3, 4: 5},
    rarity_requires_match=True,
    country_points=0,
    season_points=1,
    combo_bonus=0,
    couple_points=3,
    group_bonus=5,
    perfect_board_bonus=20,
)

_GRID_ROW_TAGS = ((Tag.USA, "USA"), (Tag.UK, "UK"), (Tag.FINALE, "Finale"))
_GRID_COL_TAGS = ((Tag.WINNER, "Winner"), (Tag.COUPLED, "Coupled"), (Tag.CASA, "Casa Amor"))


def _grid_slots() -> tuple[SlotRequirement, ...]:
    slots: list[SlotRequirement] = []
    for row_tag, row_label in _GRID_ROW_TAGS:
        for col_tag, col_label in _GRID_COL_TAGS:
            label = f"{row_label} · {col_label}"
            slots.append(SlotRequirement(label, frozenset({row_tag, col_tag})))
        slots.append(SlotRequirement(row_label, frozenset({row_tag})))
    return tuple(slots)


GRID = Layout(
    name="grid",
    slots=_grid_slots(),
    edges=grid_edges(GRID_ROWS, GRID_COLS),
    rules=GRID_RULES,
    rotating_slots=tuple(row * GRID_COLS + GRID_COLS - 1 for row in range(GRID_ROWS)),
    rotation=(
        RotatingRequirement(Tag.SEASON6, "S6+", "Season 6 or later"),
        RotatingRequirement(Tag.OG_ERA, "OG Era", "Seasons 1-5"),
        RotatingRequirement(Tag.BOMBSHELL, "Bombshell", "Entered mid-season"),
        RotatingRequirement(Tag.DAY1, "Day 1", "Original islander"),
    ),
    groups=tuple(
        tuple(row * GRID_COLS + col for col in range(GRID_COLS)) for row in range(GRID_ROWS)
    )
    + tuple(tuple(row * GRID_COLS + col for row in range(GRID_ROWS)) for col in range(GRID_COLS)),
)


LAYOUTS: dict[str, Layout] = {
    GRIDDY.name: GRIDDY,
    GRID.name: GRID,
}

DEFAULT_LAYOUT = GRIDDY.name


def get_layout(name: str) -> Layout:
    """Look up a registered layout by name."""
    layout = LAYOUTS.get(name)
    if layout is None:
        raise InvalidLayoutError(name)
    return layout


def daily_rotation(date: datetime.date, layout: str = DEFAULT_LAYOUT) -> RotatingRequirement:
    """
    Rotating requirement in force on `date`.

    Cycles through the layout's options by day of year (1 January = day 1).
    """
    options = get_layout(layout).rotation
    return options[date.timetuple().tm_yday % len(options)]


@lru_cache(maxsize=32)
def _resolve(layout: str, rotation_index: int) -> BoardConfig:
    definition = get_layout(layout)
    config = definition.resolve(definition.rotation[rotation_index])
    logger.debug("Resolved layout %s with rotation %d", layout, rotation_index)
    return config


def resolve_daily_config(date: datetime.date, layout: str = DEFAULT_LAYOUT) -> BoardConfig:
    """
    Concrete board configuration for a date.

    Resolve once per game and pass the result to every scoring call.
    """
    definition = get_layout(layout)
    rotation = daily_rotation(date, layout)
    return _resolve(layout, definition.rotation.index(rotation))
