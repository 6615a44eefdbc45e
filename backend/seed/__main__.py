"""CLI entry: create the schema and seed clubs. Usage: python -m seed (from backend dir)."""
from __future__ import annotations

import asyncio
import sys

from core.config import get_settings
from core.database import dispose_database, init_database
from core.logging import setup_logging
from seed.seed_clubs import seed_clubs


async def _main() -> int:
    settings = get_settings()
    setup_logging(settings)
    manager = await init_database(settings.database_url)
    try:
        await manager.create_schema()
        async with manager.session() as session:
            counts = await seed_clubs(session)
    finally:
        await dispose_database()
    print("Seed complete:", counts)
    return 0


def main() -> None:
    exit_code = asyncio.run(_main())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
