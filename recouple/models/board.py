"""
Board configuration models.

A board configuration bundles everything the scoring engine needs to know
about a layout: the slot requirements, the adjacency graph and the named
scoring constants. Configurations are immutable and passed explicitly to
every scoring call.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from recouple.models.contestant import DraftCard, Tag
from recouple.models.failure import FailureKind, KnownError

Board = Sequence[DraftCard | None]


class BoardConfigError(KnownError):
    """Raised when a board configuration violates its structural invariants."""

    def __init__(self, name: str, reason: str):
        super().__init__(
            kind=FailureKind.INVARIANT_VIOLATION,
            message=f"Board configuration '{name}' is invalid.",
            detail=reason,
            status_code=500,
        )


class RuleSetError(KnownError):
    """Raised when scoring constants contradict each other."""

    def __init__(self, reason: str):
        super().__init__(
            kind=FailureKind.INVARIANT_VIOLATION,
            message="Scoring rule set is invalid.",
            detail=reason,
            status_code=500,
        )


@dataclass(frozen=True, slots=True)
class SlotRequirement:
    """
    Requirement attached to one board slot.

    A card satisfies the slot when it carries every tag in `tags`.
    An empty tag set is the wildcard: anything may be placed there.
    """

    label: str
    tags: frozenset[Tag] = frozenset()

    @property
    def is_wildcard(self) -> bool:
        return not self.tags

    def accepts(self, card: DraftCard) -> bool:
        return self.tags <= card.tags


WILDCARD = SlotRequirement(label="Wild")


@dataclass(frozen=True)
class RuleSet:
    """
    Named scoring constants for one deployment.

    Rarity values never decrease as the tier rises.

    Attributes:
        slot_match_points: Awarded when a non-wildcard requirement is met
        rarity_values: Rarity tier -> points
        rarity_requires_match: Rarity points only count on a valid placement
        country_points: Neighbour from the same show
        season_points: Neighbour from the same season
        combo_bonus: Extra on top of country + season when both match
        couple_points: Neighbour is the canonical partner
        group_bonus: Awarded per completely filled slot group
        perfect_board_bonus: Awarded when every slot is filled
    """

    slot_match_points: int
    rarity_values: Mapping[int, int]
    country_points: int
    season_points: int
    combo_bonus: int
    couple_points: int
    rarity_requires_match: bool = False
    group_bonus: int = 0
    perfect_board_bonus: int = 0

    def __post_init__(self) -> None:
        values = dict(self.rarity_values)
        tiers = sorted(values)
        for lower, higher in zip(tiers, tiers[1:]):
            if values[higher] < values[lower]:
                raise RuleSetError(
                    f"Tier {higher} is worth {values[higher]}, "
                    f"less than tier {lower} ({values[lower]})"
                )
        object.__setattr__(self, "rarity_values", MappingProxyType(values))

    def rarity_points(self, tier: int) -> int:
        return self.rarity_values.get(tier, 0)


@dataclass(frozen=True)
class BoardConfig:
    """
    A complete, static board layout.

    INVARIANTS (checked on construction):
    - Every edge joins two distinct in-range slots
    - No edge appears twice (in either orientation)
    - Every slot has at least one neighbour
    - Group members are in range
    """

    name: str
    slots: tuple[SlotRequirement, ...]
    edges: tuple[tuple[int, int], ...]
    rules: RuleSet
    groups: tuple[tuple[int, ...], ...] = ()
    _adjacency: tuple[tuple[int, ...], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        size = len(self.slots)
        seen: set[frozenset[int]] = set()
        adjacency: list[list[int]] = [[] for _ in range(size)]

        for a, b in self.edges:
            if not (0 <= a < size and 0 <= b < size):
                raise BoardConfigError(self.name, f"Edge ({a}, {b}) is out of range")
            if a == b:
                raise BoardConfigError(self.name, f"Edge ({a}, {b}) is a self loop")
            key = frozenset((a, b))
            if key in seen:
                raise BoardConfigError(self.name, f"Edge ({a}, {b}) is duplicated")
            seen.add(key)
            adjacency[a].append(b)
            adjacency[b].append(a)

        for index, neighbours in enumerate(adjacency):
            if not neighbours:
                raise BoardConfigError(self.name, f"Slot {index} has no neighbours")

        for group in self.groups:
            if any(not 0 <= i < size for i in group):
                raise BoardConfigError(self.name, f"Group {group} is out of range")

        object.__setattr__(self, "_adjacency", tuple(tuple(n) for n in adjacency))

    @property
    def size(self) -> int:
        return len(self.slots)

    def neighbors(self, index: int) -> tuple[int, ...]:
        return self._adjacency[index]

    def requirement(self, index: int) -> SlotRequirement:
        return self.slots[index]

    def empty_board(self) -> list[DraftCard | None]:
        return [None] * self.size
