"""
Recouple services.

Loading and caching of the contestant pool.
"""

from recouple.services.contestant_database import (
    ContestantPoolError,
    download_contestant_pool,
    get_contestant_pool,
    load_contestant_pool,
    parse_contestant,
    parse_contestants,
)

__all__ = [
    "ContestantPoolError",
    "download_contestant_pool",
    "get_contestant_pool",
    "load_contestant_pool",
    "parse_contestant",
    "parse_contestants",
]
