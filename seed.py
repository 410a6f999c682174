#!/usr/bin/env python3
"""Load a YAML relationship graph into the database.

Usage:
    python seed.py                          # loads gamegraph/data/seed.yaml
    python seed.py path/to/graph.yaml       # loads a specific file

Uses DATABASE_URL from the environment / .env, creating tables if needed.
"""

import asyncio
import logging
import sys
from pathlib import Path

from gamegraph.db.database import Base, async_session, engine
from gamegraph.services.seed_service import DEFAULT_SEED_FILE, load_seed_file, seed_graph

logger = logging.getLogger("seed")


async def run(path: Path) -> None:
    import gamegraph.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    raw = load_seed_file(path)
    async with async_session() as db:
        summary = await seed_graph(db, raw)
        await db.commit()
    await engine.dispose()

    print(
        f"Seeded {summary.users} users, {summary.games} games, "
        f"{summary.relationships} relationships from {path}"
    )


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_SEED_FILE
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
