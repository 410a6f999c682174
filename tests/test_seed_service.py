"""Tests for loading a YAML relationship graph."""

import pytest

from gamegraph.core.errors import InvalidKind
from gamegraph.core.recommender import RecommendationEngine
from gamegraph.db.graph_store import SqlGraphStore
from gamegraph.models import Game, User
from gamegraph.services.seed_service import DEFAULT_SEED_FILE, load_seed_file, seed_graph


async def test_seed_sample_file(db):
    raw = load_seed_file(DEFAULT_SEED_FILE)
    summary = await seed_graph(db, raw)

    assert summary.users == 4
    assert summary.games == 7
    assert summary.relationships == 11
    assert (await db.get(Game, "gid-mass-effect-3-from-ashes")).name == "Mass Effect 3: From Ashes"
    assert (await db.get(User, "alice")).name == "Alice"


async def test_seeded_graph_recommends(db):
    await seed_graph(db, load_seed_file(DEFAULT_SEED_FILE))

    recs = await RecommendationEngine(SqlGraphStore(db)).recommend("alice")

    assert [(r.game_id, r.score) for r in recs] == [
        ("gid-mass-effect-3-from-ashes", 4),
        ("gid-celeste", 5),
        ("gid-disco-elysium", 5),
        ("gid-stardew-valley", 17),
    ]
    # two different neighbors reach Stardew Valley at the same minimum cost
    assert [e.shared_game_id for e in recs[-1].evidence] == ["gid-dark-souls", "gid-hollow-knight"]


async def test_seed_is_rerunnable(db):
    raw = load_seed_file(DEFAULT_SEED_FILE)
    await seed_graph(db, raw)
    await seed_graph(db, raw)

    edges = await SqlGraphStore(db).edges_of("alice")
    assert len(edges) == 3


async def test_seed_rejects_invalid_relationship(db):
    raw = {
        "users": [{"id": "alice"}],
        "games": [{"name": "Celeste"}],
        "relationships": [{"user": "alice", "game": "Celeste", "relationship": "LOVED"}],
    }
    with pytest.raises(InvalidKind):
        await seed_graph(db, raw)


def test_missing_seed_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_seed_file(tmp_path / "nope.yaml")
