from collections.abc import Callable

import pytest

from recouple.models.contestant import Contestant, DraftCard, Tag

CardFactory = Callable[..., DraftCard]


@pytest.fixture
def make_card() -> CardFactory:
    """Factory for draft cards with sensible defaults."""
    counter = iter(range(1000, 100000))

    def _make(
        name: str | None = None,
        *,
        tags: set[Tag] | frozenset[Tag] = frozenset(),
        season: int = 1,
        show: str = "USA",
        couple: str | None = None,
        rarity: int = 1,
        rarity_points: int = 0,
        contestant_id: int | None = None,
    ) -> DraftCard:
        cid = contestant_id if contestant_id is not None else next(counter)
        return DraftCard(
            contestant=Contestant(
                id=cid,
                name=name or f"Islander {cid}",
                tags=frozenset(tags),
                season=season,
                show=show,
                couple=couple,
            ),
            rarity=rarity,
            rarity_points=rarity_points,
        )

    return _make


@pytest.fixture
def sample_pool() -> list[Contestant]:
    """Forty contestants across both shows."""
    pool: list[Contestant] = []
    for i in range(40):
        pool.append(
            Contestant(
                id=i + 1,
                name=f"Islander {i + 1}",
                tags=frozenset({Tag.USA if i % 2 == 0 else Tag.UK}),
                season=i % 7 + 1,
                show="USA" if i % 2 == 0 else "UK",
            )
        )
    return pool


@pytest.fixture
def sample_pool_records() -> list[dict]:
    """Raw contestant JSON records."""
    return [
        {
            "id": 1,
            "name": "Ava Hart",
            "tags": ["usa", "og_era", "day1", "coupled"],
            "season": 1,
            "show": "USA",
            "couple": "Cleo Moss",
        },
        {
            "id": 2,
            "name": "Blake Reyes",
            "tags": ["uk", "season6", "bombshell", "winner"],
            "season": 8,
            "show": "UK",
            "couple": "",
        },
        {
            "id": 3,
            "name": "Cleo Moss",
            "tags": ["usa", "og_era", "bombshell", "casa", "coupled"],
            "season": 1,
            "show": "USA",
            "couple": "Ava Hart",
        },
    ]
