"""Recommendation service - runs the scoring engine with a Redis result cache."""

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession

from gamegraph.config import settings
from gamegraph.core.recommender import CandidateRecommendation, RecommendationEngine
from gamegraph.db.graph_store import SqlGraphStore
from gamegraph.schemas.recommendation import (
    EvidenceOut,
    RecommendationList,
    RecommendationOut,
)
from gamegraph.schemas.user import GameSummary
from gamegraph.services.game_service import game_service
from gamegraph.services.user_service import user_service

logger = logging.getLogger(__name__)

_redis_client: aioredis.Redis | None = None


class RecommendationService:
    def __init__(self, redis: aioredis.Redis):
        self.redis = redis

    def _cache_key(self, user_id: str, include_connected: bool) -> str:
        return f"recs:{user_id}:all" if include_connected else f"recs:{user_id}"

    async def _cached(self, key: str) -> RecommendationList | None:
        if settings.RECOMMENDATION_CACHE_TTL <= 0:
            return None
        try:
            raw = await self.redis.get(key)
        except RedisError as e:
            logger.warning("Recommendation cache read failed for %s: %s", key, e)
            return None
        if raw:
            logger.debug("Recommendation cache hit: %s", key)
            return RecommendationList.model_validate_json(raw)
        return None

    async def _store(self, key: str, recs: RecommendationList) -> None:
        if settings.RECOMMENDATION_CACHE_TTL <= 0:
            return
        try:
            await self.redis.set(
                key, recs.model_dump_json(), ex=settings.RECOMMENDATION_CACHE_TTL
            )
        except RedisError as e:
            logger.warning("Recommendation cache write failed for %s: %s", key, e)

    async def invalidate(self, user_id: str) -> None:
        """Drop cached recommendations after the user's edges change."""
        if settings.RECOMMENDATION_CACHE_TTL <= 0:
            return
        try:
            await self.redis.delete(
                self._cache_key(user_id, False), self._cache_key(user_id, True)
            )
        except RedisError as e:
            logger.warning("Recommendation cache invalidation failed for %s: %s", user_id, e)

    async def commit_and_invalidate(self, db: AsyncSession, user_id: str) -> None:
        """Commit the user's edge write, then drop their cached recommendations.

        The key is only dropped once the write is visible to other sessions.
        """
        await db.commit()
        await self.invalidate(user_id)

    async def _build(
        self, db: AsyncSession, user_id: str, candidates: list[CandidateRecommendation]
    ) -> RecommendationList:
        candidates = candidates[: settings.MAX_RECOMMENDATIONS]
        games = await game_service.games_by_ids(db, [c.game_id for c in candidates])

        recommendations = []
        for candidate in candidates:
            game = games.get(candidate.game_id)
            recommendations.append(RecommendationOut(
                game=GameSummary(
                    id=candidate.game_id,
                    name=game.name if game is not None else candidate.game_id,
                ),
                score=candidate.score,
                evidence=[
                    EvidenceOut(
                        shared_game_id=e.shared_game_id,
                        user_relationship=e.user_kind,
                        neighbor_relationship=e.neighbor_kind,
                        recommended_relationship=e.recommended_kind,
                    )
                    for e in candidate.evidence
                ],
            ))
        return RecommendationList(user_id=user_id, recommendations=recommendations)

    async def get_recommendations(
        self,
        db: AsyncSession,
        user_id: str,
        limit: int | None = None,
        include_connected: bool = False,
    ) -> RecommendationList:
        """Ranked recommendations for a user, served from cache when fresh."""
        await user_service.get_user(db, user_id)

        key = self._cache_key(user_id, include_connected)
        recs = await self._cached(key)
        if recs is None:
            engine = RecommendationEngine(SqlGraphStore(db))
            candidates = await engine.recommend(
                user_id, exclude_already_connected=not include_connected
            )
            recs = await self._build(db, user_id, candidates)
            await self._store(key, recs)
            logger.info("Computed %d recommendations for %s", len(recs.recommendations), user_id)

        if limit is not None:
            recs = RecommendationList(
                user_id=recs.user_id, recommendations=recs.recommendations[:limit]
            )
        return recs


def _cache_client() -> aioredis.Redis:
    """Lazily connect the recommendation cache; bounded like graph store queries."""
    global _redis_client
    if _redis_client is None:
        _redis_client = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_timeout=settings.STORE_TIMEOUT,
        )
    return _redis_client


async def close_recommendation_cache() -> None:
    """Close the cache connection on shutdown."""
    global _redis_client
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None


async def get_recommendation_service() -> RecommendationService:
    """FastAPI dependency: a service bound to the shared cache connection."""
    return RecommendationService(_cache_client())
