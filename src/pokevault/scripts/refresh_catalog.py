"""Refresh the Pokemon cache from PokeAPI.

Usage:
    pokevault-refresh                      # generation 1 (ids 1-151)
    pokevault-refresh --limit 100 --offset 151
    pokevault-refresh --dex paldea         # regional dex, regional forms first
    pokevault-refresh --dex hisui --suffix hisui
"""

import asyncio
import sys

from pokevault.core.constants import DEFAULT_REFRESH_LIMIT
from pokevault.core.exceptions import CatalogRefreshError
from pokevault.core.fetcher import RefreshResult, refresh_catalog, refresh_regional_dex
from pokevault.core.pokeapi import PokeAPIClient
from pokevault.database import async_session_factory, close_db, init_db
from pokevault.logging import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: list[str]) -> dict:
    """Parse ``--limit``, ``--offset``, ``--dex`` and ``--suffix``."""
    args = {
        "limit": DEFAULT_REFRESH_LIMIT,
        "offset": 0,
        "dex": None,
        "suffix": None,
    }

    i = 0
    while i < len(argv):
        flag = argv[i].lstrip("-").lower()
        value = argv[i + 1] if i + 1 < len(argv) else None
        if flag in ("limit", "offset"):
            if value is None or not value.isdigit():
                raise ValueError(f"--{flag} needs a number")
            args[flag] = int(value)
            i += 2
        elif flag in ("dex", "suffix"):
            if value is None:
                raise ValueError(f"--{flag} needs a value")
            args[flag] = value
            i += 2
        else:
            raise ValueError(f"Unknown argument: {argv[i]}")

    return args


async def main(argv: list[str]) -> int:
    setup_logging()

    try:
        args = parse_args(argv)
    except ValueError as e:
        print(e)
        print(__doc__)
        return 2

    await init_db()
    try:
        async with PokeAPIClient() as client, async_session_factory() as session:
            if args["dex"]:
                result: RefreshResult = await refresh_regional_dex(
                    session, client, args["dex"], args["suffix"]
                )
            else:
                result = await refresh_catalog(
                    session, client, limit=args["limit"], offset=args["offset"]
                )
    except CatalogRefreshError as e:
        logger.error("Refresh failed", error=str(e))
        return 1
    finally:
        await close_db()

    print(
        f"Processed {result.cached} | fetched {result.fetched} | "
        f"already cached {result.skipped} | failed {result.failed} | types {result.types}"
    )
    return 0


def run() -> None:
    sys.exit(asyncio.run(main(sys.argv[1:])))


if __name__ == "__main__":
    run()
