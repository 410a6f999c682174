"""Game service - game catalogue queries and game creation."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gamegraph.core.errors import UnknownEntity
from gamegraph.core.gid import gid_from
from gamegraph.models.game import Game
from gamegraph.models.relationship import GameRelationship
from gamegraph.models.user import User

logger = logging.getLogger(__name__)


class GameAlreadyExists(Exception):
    def __init__(self, game: Game):
        self.game = game
        super().__init__(f"Game already exists: {game.id!r}")


class GameService:
    @staticmethod
    async def get_game(db: AsyncSession, game_id: str) -> Game:
        game = await db.get(Game, game_id)
        if game is None:
            raise UnknownEntity("Game", game_id)
        return game

    @staticmethod
    async def list_games(db: AsyncSession, limit: int, offset: int) -> tuple[list[Game], int]:
        """A page of games ordered by name, plus the overall count."""
        result = await db.execute(
            select(Game).order_by(Game.name, Game.id).offset(offset).limit(limit)
        )
        total = await db.scalar(select(func.count()).select_from(Game))
        return list(result.scalars().all()), total or 0

    @staticmethod
    async def get_game_with_users(
        db: AsyncSession, game_id: str
    ) -> tuple[Game, list[tuple[User, str]]]:
        """A game and every user connected to it, with the edge kind."""
        game = await GameService.get_game(db, game_id)
        result = await db.execute(
            select(User, GameRelationship.kind)
            .join(GameRelationship, GameRelationship.user_id == User.id)
            .where(GameRelationship.game_id == game_id)
            .order_by(User.name, GameRelationship.distance)
        )
        return game, [(user, kind) for user, kind in result.all()]

    @staticmethod
    async def games_by_ids(db: AsyncSession, game_ids: list[str]) -> dict[str, Game]:
        if not game_ids:
            return {}
        result = await db.execute(select(Game).where(Game.id.in_(game_ids)))
        return {game.id: game for game in result.scalars().all()}

    @staticmethod
    async def create_game(db: AsyncSession, name: str, gb_uuid: str | None = None) -> Game:
        """Create a game whose id is derived from its name.

        Raises GameAlreadyExists when the derived id is taken, and ValueError
        when the name derives an empty slug.
        """
        game_id = gid_from(name)
        if game_id == "gid-":
            raise ValueError(f"Game name has no letters or digits: {name!r}")
        existing = await db.get(Game, game_id)
        if existing is not None:
            raise GameAlreadyExists(existing)

        game = Game(id=game_id, name=name, gb_uuid=gb_uuid)
        db.add(game)
        await db.flush()
        logger.info("Created game %s (%s)", game_id, name)
        return game


game_service = GameService()
