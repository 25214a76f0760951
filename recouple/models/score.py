"""
Score breakdown models.

All models are frozen and derived from scratch on every scoring call, so a
returned breakdown always reflects exactly the board it was computed from.
"""

from dataclasses import dataclass
from enum import Enum

from recouple.models.contestant import DraftCard


class ConnectionKind(str, Enum):
    """Which pairwise rule(s) fired for a neighbour relation."""

    COUNTRY = "country"
    SEASON = "season"
    COMBO = "combo"
    COUPLE = "couple"


@dataclass(frozen=True, slots=True)
class Connection:
    """A scoring relation between a cell and one occupied neighbour."""

    neighbor: int
    neighbor_name: str
    points: int
    kinds: frozenset[ConnectionKind]


@dataclass(frozen=True, slots=True)
class CellScore:
    """
    Point decomposition for one slot.

    Attributes:
        index: Slot index
        card: Card in the slot (None when empty)
        slot_points: Requirement-match points
        rarity_points: Rarity points
        connections: Non-zero relations to occupied neighbours
        is_valid: Requirement satisfied; None for an empty slot
    """

    index: int
    card: DraftCard | None
    slot_points: int
    rarity_points: int
    connections: tuple[Connection, ...]
    is_valid: bool | None

    @property
    def connection_points(self) -> int:
        return sum(c.points for c in self.connections)

    @property
    def total(self) -> int:
        return self.slot_points + self.rarity_points + self.connection_points

    def connection_from(self, neighbor: int) -> int:
        """Points this cell receives from the given neighbour slot."""
        for connection in self.connections:
            if connection.neighbor == neighbor:
                return connection.points
        return 0


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """Full score for a board."""

    cells: tuple[CellScore, ...]
    total_slot: int
    total_rarity: int
    total_connections: int
    couple_edges: tuple[tuple[int, int], ...]
    completed_groups: tuple[int, ...]
    group_bonus: int
    perfect_bonus: int
    all_filled: bool
    all_valid: bool

    @property
    def total(self) -> int:
        return (
            self.total_slot
            + self.total_rarity
            + self.total_connections
            + self.group_bonus
            + self.perfect_bonus
        )


@dataclass(frozen=True, slots=True)
class OptimalResult:
    """Best achievable score for a card set and how close the player got."""

    optimal_score: int
    percentage: int
