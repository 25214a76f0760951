"""
Contestant Models.

This module defines the draftable units of the game.

INVARIANTS:
- Contestant is read-only pool data loaded from the contestant file
- DraftCard is created once by the draft generator and never mutated
- Tags come from a closed vocabulary (Tag)
- All models are frozen (immutable after construction)
"""

from dataclasses import dataclass
from enum import Enum


class Tag(str, Enum):
    """Closed vocabulary of contestant tags used by slot requirements."""

    USA = "usa"
    UK = "uk"
    FINALE = "finale"
    WINNER = "winner"
    COUPLED = "coupled"
    CASA = "casa"
    BOMBSHELL = "bombshell"
    DAY1 = "day1"
    SEASON6 = "season6"
    OG_ERA = "og_era"


@dataclass(frozen=True, slots=True)
class Contestant:
    """
    A contestant from the shared pool.

    Attributes:
        id: Stable contestant identifier
        name: Display name
        tags: Categorical tags (country, life-cycle stage, ...)
        season: Season number within the show
        show: Provenance of the contestant (e.g., "USA", "UK")
        couple: Name of the canonical partner, if any
    """

    id: int
    name: str
    tags: frozenset[Tag]
    season: int
    show: str
    couple: str | None = None


@dataclass(frozen=True, slots=True)
class DraftCard:
    """
    A contestant offered in a draft round.

    Attributes:
        contestant: The pool record this card was drafted from
        rarity: Rarity tier (1-4)
        rarity_points: Points for the tier under the active rule set
    """

    contestant: Contestant
    rarity: int
    rarity_points: int

    def __post_init__(self) -> None:
        if self.rarity not in (1, 2, 3, 4):
            raise ValueError(f"Rarity tier must be 1-4, got {self.rarity}")

    @property
    def id(self) -> int:
        return self.contestant.id

    @property
    def name(self) -> str:
        return self.contestant.name

    @property
    def tags(self) -> frozenset[Tag]:
        return self.contestant.tags

    @property
    def season(self) -> int:
        return self.contestant.season

    @property
    def show(self) -> str:
        return self.contestant.show

    @property
    def couple(self) -> str | None:
        return self.contestant.couple

    def is_couple_with(self, other: "DraftCard") -> bool:
        """True if either card names the other as its canonical partner."""
        return (self.couple is not None and self.couple == other.name) or (
            other.couple is not None and other.couple == self.name
        )
