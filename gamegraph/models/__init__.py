"""Database models package."""

from gamegraph.models.user import User
from gamegraph.models.game import Game
from gamegraph.models.relationship import GameRelationship

__all__ = ["User", "Game", "GameRelationship"]
