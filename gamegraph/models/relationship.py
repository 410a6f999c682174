"""Relationship model - a directed, kind-labelled, weighted User→Game edge."""

from datetime import datetime

from sqlalchemy import String, Integer, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gamegraph.db.database import Base


class GameRelationship(Base):
    """One edge per (user, game, kind); several kinds may share a pair."""
    __tablename__ = "relationships"
    __table_args__ = (
        Index("ix_relationships_game_distance", "game_id", "distance"),
    )

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    game_id: Mapped[str] = mapped_column(
        ForeignKey("games.id", ondelete="CASCADE"), primary_key=True
    )
    kind: Mapped[str] = mapped_column(String(50), primary_key=True)  # Relationship value
    distance: Mapped[int] = mapped_column(Integer)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    user: Mapped["User"] = relationship(back_populates="relationships")  # noqa: F821
    game: Mapped["Game"] = relationship(back_populates="relationships")  # noqa: F821
