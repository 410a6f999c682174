"""Game model - a node in the relationship graph, keyed by its derived gid."""

from datetime import datetime

from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gamegraph.db.database import Base


class Game(Base):
    __tablename__ = "games"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)  # e.g. "gid-mass-effect-3"
    name: Mapped[str] = mapped_column(String(255))
    gb_uuid: Mapped[str | None] = mapped_column(String(100), nullable=True)  # external catalog ref

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    relationships: Mapped[list["GameRelationship"]] = relationship(  # noqa: F821
        back_populates="game", cascade="all, delete-orphan"
    )
