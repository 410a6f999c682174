"""Relationship service - routes edge writes through the upsert policy."""

from sqlalchemy.ext.asyncio import AsyncSession

from gamegraph.core.edge_policy import EdgeUpsertPolicy
from gamegraph.core.vocabulary import Relationship
from gamegraph.db.graph_store import SqlGraphStore


class RelationshipService:
    @staticmethod
    async def add_relationship(
        db: AsyncSession, user_id: str, game_id: str, kind: Relationship | str
    ) -> int:
        """Additively merge a user→game edge. Returns the edge distance."""
        policy = EdgeUpsertPolicy(SqlGraphStore(db))
        return await policy.upsert_edge(user_id, game_id, kind)

    @staticmethod
    async def replace_relationship(
        db: AsyncSession,
        user_id: str,
        game_id: str,
        from_kind: Relationship | str,
        to_kind: Relationship | str,
    ) -> int:
        """Swap one relationship kind for another. Returns the new distance."""
        policy = EdgeUpsertPolicy(SqlGraphStore(db))
        return await policy.replace_edge(user_id, game_id, from_kind, to_kind)


relationship_service = RelationshipService()
