"""Seed service - loads users, games and relationships from a YAML graph file.

File layout::

    users:
      - {id: alice, name: Alice}
    games:
      - {name: "Mass Effect 3", gb_uuid: "3030-1234"}
    relationships:
      - {user: alice, game: "Mass Effect 3", relationship: BEATEN}

``game`` in a relationship may be a display name or an already derived gid.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml
from sqlalchemy.ext.asyncio import AsyncSession

from gamegraph.core.edge_policy import EdgeUpsertPolicy
from gamegraph.core.gid import gid_from
from gamegraph.db.graph_store import SqlGraphStore
from gamegraph.models.game import Game
from gamegraph.services.user_service import user_service

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_SEED_FILE = DATA_DIR / "seed.yaml"


@dataclass
class SeedSummary:
    users: int = 0
    games: int = 0
    relationships: int = 0


def load_seed_file(path: Path) -> dict:
    """Parse a seed YAML file."""
    if not path.exists():
        raise FileNotFoundError(f"Seed file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _game_id(ref: str) -> str:
    return ref if ref.startswith("gid-") else gid_from(ref)


async def seed_graph(db: AsyncSession, raw: dict) -> SeedSummary:
    """Insert the seed graph. Re-running it is a no-op for existing rows."""
    summary = SeedSummary()

    for entry in raw.get("users", []):
        await user_service.create_user(db, str(entry["id"]), entry.get("name", entry["id"]))
        summary.users += 1

    for entry in raw.get("games", []):
        game_id = gid_from(entry["name"])
        if await db.get(Game, game_id) is None:
            db.add(Game(id=game_id, name=entry["name"], gb_uuid=entry.get("gb_uuid")))
        summary.games += 1
    await db.flush()

    policy = EdgeUpsertPolicy(SqlGraphStore(db))
    for entry in raw.get("relationships", []):
        await policy.upsert_edge(
            str(entry["user"]), _game_id(entry["game"]), entry["relationship"]
        )
        summary.relationships += 1

    logger.info(
        "Seeded %d users, %d games, %d relationships",
        summary.users, summary.games, summary.relationships,
    )
    return summary
