"""User service - read-side queries over user nodes and their edges."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gamegraph.core.errors import UnknownEntity
from gamegraph.models.game import Game
from gamegraph.models.relationship import GameRelationship
from gamegraph.models.user import User


class UserService:
    @staticmethod
    async def get_user(db: AsyncSession, user_id: str) -> User:
        """Fetch a user or raise UnknownEntity."""
        user = await db.get(User, user_id)
        if user is None:
            raise UnknownEntity("User", user_id)
        return user

    @staticmethod
    async def create_user(db: AsyncSession, user_id: str, name: str) -> User:
        """Insert a user if missing; an existing user keeps its name."""
        user = await db.get(User, user_id)
        if user is None:
            user = User(id=user_id, name=name)
            db.add(user)
            await db.flush()
        return user

    @staticmethod
    async def list_users(db: AsyncSession, limit: int, offset: int) -> tuple[list[User], int]:
        """A page of users ordered by name, plus the overall count."""
        result = await db.execute(
            select(User).order_by(User.name, User.id).offset(offset).limit(limit)
        )
        total = await db.scalar(select(func.count()).select_from(User))
        return list(result.scalars().all()), total or 0

    @staticmethod
    async def list_user_games(
        db: AsyncSession, user_id: str, limit: int, offset: int
    ) -> tuple[list[tuple[Game, str]], int]:
        """A page of (game, relationship kind) pairs for a user, ordered by game name."""
        await UserService.get_user(db, user_id)

        result = await db.execute(
            select(Game, GameRelationship.kind)
            .join(GameRelationship, GameRelationship.game_id == Game.id)
            .where(GameRelationship.user_id == user_id)
            .order_by(Game.name, GameRelationship.distance)
            .offset(offset)
            .limit(limit)
        )
        total = await db.scalar(
            select(func.count())
            .select_from(GameRelationship)
            .where(GameRelationship.user_id == user_id)
        )
        return [(game, kind) for game, kind in result.all()], total or 0


user_service = UserService()
