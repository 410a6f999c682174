"""SQLAlchemy-backed implementation of the core's GraphStore contract."""

import asyncio
import logging
from contextlib import asynccontextmanager

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gamegraph.config import settings
from gamegraph.core.errors import StoreUnavailable, UnknownEntity
from gamegraph.core.store import EdgeRecord, NeighborEdge
from gamegraph.models.game import Game
from gamegraph.models.relationship import GameRelationship
from gamegraph.models.user import User

logger = logging.getLogger(__name__)

_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


class SqlGraphStore:
    """Graph store bound to one request-scoped ``AsyncSession``.

    Writes only flush; committing is left to whoever owns the session
    (``get_db`` for HTTP requests, the seed service for the CLI).
    """

    def __init__(self, db: AsyncSession, timeout: float | None = None):
        self.db = db
        self.timeout = settings.STORE_TIMEOUT if timeout is None else timeout

    async def _execute(self, stmt):
        try:
            return await asyncio.wait_for(self.db.execute(stmt), self.timeout)
        except IntegrityError:
            raise
        except DBAPIError as e:
            raise StoreUnavailable(f"Graph store query failed: {e.orig}") from e
        except asyncio.TimeoutError as e:
            raise StoreUnavailable(
                f"Graph store query timed out after {self.timeout}s"
            ) from e

    async def _require(self, model, entity: str, entity_id: str) -> None:
        result = await self._execute(select(model.id).where(model.id == entity_id))
        if result.scalar_one_or_none() is None:
            raise UnknownEntity(entity, entity_id)

    async def merge_edge(
        self, user_id: str, game_id: str, kind: str, attributes: dict
    ) -> None:
        await self._require(User, "User", user_id)
        await self._require(Game, "Game", game_id)

        dialect = self.db.get_bind().dialect.name
        insert = _INSERTS.get(dialect)
        if insert is None:
            raise StoreUnavailable(f"Graph store has no atomic merge for dialect {dialect!r}")

        stmt = (
            insert(GameRelationship)
            .values(user_id=user_id, game_id=game_id, kind=kind, **attributes)
            .on_conflict_do_nothing(index_elements=["user_id", "game_id", "kind"])
        )
        await self._execute(stmt)

    async def delete_edge(self, user_id: str, game_id: str, kind: str) -> bool:
        result = await self._execute(
            delete(GameRelationship).where(
                GameRelationship.user_id == user_id,
                GameRelationship.game_id == game_id,
                GameRelationship.kind == kind,
            )
        )
        return result.rowcount > 0

    @asynccontextmanager
    async def transaction(self):
        # A savepoint: a failed group rolls back alone, earlier session work stays.
        async with self.db.begin_nested():
            yield self

    async def edges_of(self, user_id: str) -> list[EdgeRecord]:
        result = await self._execute(
            select(GameRelationship.game_id, GameRelationship.kind, GameRelationship.distance)
            .where(GameRelationship.user_id == user_id)
            .order_by(GameRelationship.game_id, GameRelationship.distance)
        )
        return [EdgeRecord(*row) for row in result.all()]

    async def users_sharing_game(
        self, game_id: str, distance: int, exclude_user_id: str | None = None
    ) -> list[NeighborEdge]:
        stmt = (
            select(GameRelationship.user_id, GameRelationship.kind, GameRelationship.distance)
            .where(
                GameRelationship.game_id == game_id,
                GameRelationship.distance == distance,
            )
            .order_by(GameRelationship.user_id)
        )
        if exclude_user_id is not None:
            stmt = stmt.where(GameRelationship.user_id != exclude_user_id)
        result = await self._execute(stmt)
        return [NeighborEdge(*row) for row in result.all()]

    async def edges_from(self, user_id: str) -> list[EdgeRecord]:
        return await self.edges_of(user_id)
