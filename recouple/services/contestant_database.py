"""
Contestant database service.

Loads and caches the contestant pool the daily draft is generated from.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import httpx

from recouple.config import settings
from recouple.models.contestant import Contestant, Tag
from recouple.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)

_KNOWN_TAGS = {tag.value for tag in Tag}


class ContestantPoolError(KnownError):
    """Raised when the contestant pool cannot be loaded."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.POOL_UNAVAILABLE,
            message=message,
            detail=detail,
            suggestion="Run `python -m recouple.jobs.download_contestants` first.",
            status_code=503,
        )


async def download_contestant_pool(
    url: str | None = None,
    output_path: Path | None = None,
) -> Path:
    """
    Download the contestant pool JSON file.

    Args:
        url: Source URL. Defaults to settings.contestants_url
        output_path: Where to save the file. Defaults to settings.contestants_path

    Returns:
        Path to downloaded file.

    Raises:
        ContestantPoolError: If no URL is configured or the payload is not a
            valid contestant list
        httpx.HTTPError: If download fails
    """
    url = url or settings.contestants_url
    if not url:
        raise ContestantPoolError("No contestant pool URL configured.")
    if output_path is None:
        output_path = settings.contestants_path

    async with httpx.AsyncClient(timeout=30.0, follow_redirects=True) as client:
        response = await client.get(url)
        response.raise_for_status()
        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise ContestantPoolError(
                "Contestant pool payload is malformed.",
                detail=f"Invalid JSON: {e}",
            ) from e

    if not isinstance(data, list):
        raise ContestantPoolError(
            "Contestant pool payload is malformed.",
            detail=f"Expected a JSON list, got {type(data).__name__}",
        )

    # Validate before replacing the current file
    parse_contestants(data)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output_path


def parse_contestant(record: dict[str, Any]) -> Contestant:
    """
    Build a Contestant from a raw JSON record.

    Unknown tags are dropped; an empty couple string means no partner.

    Raises:
        ContestantPoolError: If the record is not an object, or a required
            field is missing or mistyped
    """
    if not isinstance(record, dict):
        raise ContestantPoolError(
            "Contestant record is malformed.",
            detail=f"Expected a JSON object, got {type(record).__name__}",
        )
    try:
        raw_tags = record.get("tags", [])
        unknown = [t for t in raw_tags if t not in _KNOWN_TAGS]
        if unknown:
            logger.warning("Dropping unknown tags %s for %s", unknown, record.get("name"))
        couple = record.get("couple") or None
        return Contestant(
            id=int(record["id"]),
            name=str(record["name"]),
            tags=frozenset(Tag(t) for t in raw_tags if t in _KNOWN_TAGS),
            season=int(record["season"]),
            show=str(record["show"]),
            couple=str(couple) if couple is not None else None,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ContestantPoolError(
            "Contestant record is malformed.",
            detail=f"{type(e).__name__}: {e} in {record!r}"[:200],
        ) from e


def parse_contestants(records: list[dict[str, Any]]) -> list[Contestant]:
    """
    Parse every record, rejecting duplicate ids.

    Raises:
        ContestantPoolError: On a malformed record or duplicate id
    """
    pool: list[Contestant] = []
    seen: set[int] = set()
    for record in records:
        contestant = parse_contestant(record)
        if contestant.id in seen:
            raise ContestantPoolError(
                "Contestant pool has duplicate ids.",
                detail=f"Duplicate id {contestant.id}",
            )
        seen.add(contestant.id)
        pool.append(contestant)
    return pool


def load_contestant_pool(path: Path | None = None) -> list[Contestant]:
    """
    Load the contestant pool from file.

    Args:
        path: Path to JSON file. Defaults to settings.contestants_path

    Returns:
        Contestants in file order.

    Raises:
        ContestantPoolError: If the file is missing or malformed
    """
    if path is None:
        path = settings.contestants_path

    if not path.exists():
        raise ContestantPoolError(f"Contestant pool not found at {path}.")

    with open(path, encoding="utf-8") as f:
        try:
            records = json.load(f)
        except json.JSONDecodeError as e:
            raise ContestantPoolError(
                "Contestant pool file is malformed.",
                detail=f"Invalid JSON in {path}: {e}",
            ) from e

    if not isinstance(records, list):
        raise ContestantPoolError(
            "Contestant pool file is malformed.",
            detail=f"Expected a JSON list, got {type(records).__name__}",
        )

    pool = parse_contestants(records)
    logger.info("Loaded %d contestants from %s", len(pool), path)
    return pool


@lru_cache(maxsize=1)
def get_contestant_pool() -> tuple[Contestant, ...]:
    """
    Get cached contestant pool.

    Returns:
        Immutable contestant pool, cached after first load.

    Raises:
        ContestantPoolError: If the pool file is missing or malformed
    """
    return tuple(load_contestant_pool())
