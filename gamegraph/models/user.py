"""User model - a node in the relationship graph."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gamegraph.db.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(200))

    relationships: Mapped[list["GameRelationship"]] = relationship(  # noqa: F821
        back_populates="user", cascade="all, delete-orphan"
    )
