"""Tests for the recommendation scoring engine."""

import pytest

from gamegraph.core.errors import StoreUnavailable
from gamegraph.core.recommender import (
    Evidence,
    RecommendationEngine,
    ScoredPath,
    score_paths,
)
from tests.fakes import InMemoryGraphStore, UnavailableGraphStore


@pytest.fixture
def store():
    """A -COMPLETE_100-> G1 <-COMPLETE_100- B -BEATEN-> G2."""
    return (
        InMemoryGraphStore()
        .add("A", "G1", "COMPLETE_100")
        .add("B", "G1", "COMPLETE_100")
        .add("B", "G2", "BEATEN")
    )


async def test_user_without_edges_gets_nothing(store):
    store.users.add("nobody")
    assert await RecommendationEngine(store).recommend("nobody") == []


async def test_single_path_score_and_evidence(store):
    recs = await RecommendationEngine(store).recommend("A")

    assert len(recs) == 1
    assert recs[0].game_id == "G2"
    assert recs[0].score == 1 + 1 + 2
    assert recs[0].evidence == [Evidence("G1", "COMPLETE_100", "COMPLETE_100", "BEATEN")]


async def test_score_is_minimum_over_paths_not_sum(store):
    store.add("A", "G3", "SET_ASIDE").add("C", "G3", "SET_ASIDE").add("C", "G2", "BEATEN")

    recs = await RecommendationEngine(store).recommend("A")
    g2 = next(r for r in recs if r.game_id == "G2")

    assert g2.score == 4
    # only the evidence reaching the minimum is reported
    assert g2.evidence == [Evidence("G1", "COMPLETE_100", "COMPLETE_100", "BEATEN")]


async def test_neighbors_with_different_distance_are_ignored(store):
    store.add("C", "G1", "GOT_BORED").add("C", "G4", "COMPLETE_100")

    recs = await RecommendationEngine(store).recommend("A")

    assert [r.game_id for r in recs] == ["G2"]


async def test_no_neighbor_passes_filter():
    store = (
        InMemoryGraphStore()
        .add("A", "G1", "COMPLETE_100")
        .add("B", "G1", "BEATEN")
        .add("B", "G2", "COMPLETE_100")
    )
    assert await RecommendationEngine(store).recommend("A") == []


async def test_equal_scores_order_by_game_id():
    store = (
        InMemoryGraphStore()
        .add("A", "G1", "COMPLETE_100")
        .add("B", "G1", "COMPLETE_100")
        .add("B", "gid-zelda", "BEATEN")
        .add("B", "gid-celeste", "BEATEN")
        .add("B", "gid-apex", "SET_ASIDE")
    )

    recs = await RecommendationEngine(store).recommend("A")

    assert [(r.game_id, r.score) for r in recs] == [
        ("gid-celeste", 4),
        ("gid-zelda", 4),
        ("gid-apex", 7),
    ]


async def test_already_connected_games_are_excluded(store):
    store.add("A", "G2", "GOT_BORED")
    assert await RecommendationEngine(store).recommend("A") == []


async def test_include_connected_games_for_introspection(store):
    store.add("A", "G2", "GOT_BORED").add("B", "G1", "BEATEN")

    recs = await RecommendationEngine(store).recommend("A", exclude_already_connected=False)
    by_game = {r.game_id: r for r in recs}

    assert by_game["G2"].score == 4
    # B's second edge onto the shared game counts, the edge that joined it does not
    assert by_game["G1"].score == 4
    assert by_game["G1"].evidence == [
        Evidence("G1", "COMPLETE_100", "COMPLETE_100", "BEATEN")
    ]


async def test_duplicate_evidence_from_several_neighbors_is_collapsed(store):
    store.add("C", "G1", "COMPLETE_100").add("C", "G2", "BEATEN")

    recs = await RecommendationEngine(store).recommend("A")

    assert recs[0].evidence == [Evidence("G1", "COMPLETE_100", "COMPLETE_100", "BEATEN")]


async def test_tied_evidence_sorted_by_shared_game(store):
    store.add("A", "G0", "COMPLETE_100").add("C", "G0", "COMPLETE_100").add("C", "G2", "BEATEN")

    recs = await RecommendationEngine(store).recommend("A")

    assert [e.shared_game_id for e in recs[0].evidence] == ["G0", "G1"]


async def test_neighbor_edges_fetched_once_per_call(store):
    store.add("A", "G0", "COMPLETE_100").add("B", "G0", "COMPLETE_100")

    await RecommendationEngine(store).recommend("A")

    assert store.calls.count("edges_from") == 1


async def test_store_unavailable_propagates():
    with pytest.raises(StoreUnavailable):
        await RecommendationEngine(UnavailableGraphStore()).recommend("A")


def test_score_paths_keeps_minimum_and_all_tied_evidence():
    e1 = Evidence("G1", "BEATEN", "BEATEN", "BEATEN")
    e2 = Evidence("G0", "COMPLETE_100", "COMPLETE_100", "SET_ASIDE")
    e3 = Evidence("G5", "SET_ASIDE", "SET_ASIDE", "WOULD_NOT_LIKE")

    candidates = score_paths([
        ScoredPath("X", 31, e3),
        ScoredPath("X", 6, e1),
        ScoredPath("X", 7, e2),
        ScoredPath("X", 6, e1),
    ])

    assert len(candidates) == 1
    assert candidates[0].score == 6
    assert candidates[0].evidence == [e1]


def test_score_paths_empty():
    assert score_paths([]) == []
