"""Recommendation scoring engine - collaborative filtering over 2-hop paths.

For a user ``u`` every qualifying path has the shape::

    u -(k1, d1)-> g <-(k2, d2)- v -(k3, d3)-> g'

where ``d1 == d2`` (``v`` felt as strongly about ``g`` as ``u`` did). The path
costs ``d1 + d2 + d3``; a candidate game ``g'`` scores the minimum cost over
all paths reaching it, and lower scores rank first.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import NamedTuple

from gamegraph.core.store import EdgeRecord, GraphStore
from gamegraph.core.vocabulary import distance_of

logger = logging.getLogger(__name__)


class Evidence(NamedTuple):
    shared_game_id: str
    user_kind: str
    neighbor_kind: str
    recommended_kind: str


class ScoredPath(NamedTuple):
    target_game_id: str
    cost: int
    evidence: Evidence


@dataclass
class CandidateRecommendation:
    game_id: str
    score: int
    evidence: list[Evidence] = field(default_factory=list)


def _evidence_key(e: Evidence) -> tuple:
    return (
        e.shared_game_id,
        distance_of(e.user_kind),
        distance_of(e.neighbor_kind),
        distance_of(e.recommended_kind),
    )


def score_paths(paths: Iterable[ScoredPath]) -> list[CandidateRecommendation]:
    """Aggregate paths into ranked candidates.

    Keeps the minimum cost per target game together with every distinct
    evidence tuple reaching that minimum. Ties on score break on game id.
    """
    best: dict[str, int] = {}
    evidence: dict[str, set[Evidence]] = {}

    for path in paths:
        current = best.get(path.target_game_id)
        if current is None or path.cost < current:
            best[path.target_game_id] = path.cost
            evidence[path.target_game_id] = {path.evidence}
        elif path.cost == current:
            evidence[path.target_game_id].add(path.evidence)

    candidates = [
        CandidateRecommendation(
            game_id=game_id,
            score=score,
            evidence=sorted(evidence[game_id], key=_evidence_key),
        )
        for game_id, score in best.items()
    ]
    candidates.sort(key=lambda c: (c.score, c.game_id))
    return candidates


class RecommendationEngine:
    """Computes ranked game recommendations from an injected graph store."""

    def __init__(self, store: GraphStore):
        self.store = store

    async def recommend(
        self, user_id: str, exclude_already_connected: bool = True
    ) -> list[CandidateRecommendation]:
        own_edges = await self.store.edges_of(user_id)
        if not own_edges:
            return []

        connected = {edge.game_id for edge in own_edges}
        neighbor_edges: dict[str, list[EdgeRecord]] = {}
        paths: list[ScoredPath] = []

        for own in own_edges:
            neighbors = await self.store.users_sharing_game(
                own.game_id, own.distance, exclude_user_id=user_id
            )
            for neighbor in neighbors:
                if neighbor.user_id == user_id or neighbor.distance != own.distance:
                    continue

                if neighbor.user_id not in neighbor_edges:
                    neighbor_edges[neighbor.user_id] = await self.store.edges_from(
                        neighbor.user_id
                    )

                for onward in neighbor_edges[neighbor.user_id]:
                    if exclude_already_connected:
                        if onward.game_id in connected:
                            continue
                    elif onward.game_id == own.game_id and onward.kind == neighbor.kind:
                        # the edge that joined the neighbor to the shared game
                        continue

                    paths.append(ScoredPath(
                        target_game_id=onward.game_id,
                        cost=own.distance + neighbor.distance + onward.distance,
                        evidence=Evidence(
                            shared_game_id=own.game_id,
                            user_kind=own.kind,
                            neighbor_kind=neighbor.kind,
                            recommended_kind=onward.kind,
                        ),
                    ))

        candidates = score_paths(paths)
        logger.debug(
            "Scored %d paths through %d neighbors into %d candidates for %s",
            len(paths), len(neighbor_edges), len(candidates), user_id,
        )
        return candidates
