"""
Download the contestant pool.

Fetches the pool the daily drafts are generated from, re-reads the saved
file through the same loader the API uses and reports how many islanders
each show contributes. The API's cached pool is dropped so the next request
in this process sees the new file.
"""

import argparse
import asyncio
import logging
from collections import Counter
from pathlib import Path

from recouple.analysis.draft import PICKS_PER_ROUND
from recouple.layouts import LAYOUTS
from recouple.services.contestant_database import (
    download_contestant_pool,
    get_contestant_pool,
    load_contestant_pool,
)

logger = logging.getLogger(__name__)


async def run_download(url: str | None = None, output: Path | None = None) -> int:
    """
    Download the contestant pool and verify the saved file.

    Returns:
        Number of contestants in the refreshed pool.
    """
    logger.info("Downloading contestant pool from %s...", url or "configured URL")

    try:
        path = await download_contestant_pool(url, output)
    except Exception as e:
        logger.error("Failed to download contestant pool: %s", e)
        raise

    pool = load_contestant_pool(path)
    get_contestant_pool.cache_clear()

    by_show = Counter(c.show for c in pool)
    logger.info("Saved %d contestants to %s", len(pool), path)
    for show, count in sorted(by_show.items()):
        logger.info("  %s: %d", show, count)
    for layout in LAYOUTS.values():
        needed = len(layout.slots) * PICKS_PER_ROUND
        if len(pool) < needed:
            logger.warning(
                "Pool has %d contestants; %s drafts need %d and will run short",
                len(pool),
                layout.name,
                needed,
            )

    return len(pool)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Download the contestant pool")
    parser.add_argument("--url", help="Source URL (defaults to RECOUPLE_CONTESTANTS_URL)")
    parser.add_argument("--output", type=Path, help="Where to save the pool file")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_download(args.url, args.output))


if __name__ == "__main__":
    main()
