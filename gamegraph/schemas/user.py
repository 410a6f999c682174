"""User-related Pydantic schemas."""

from pydantic import BaseModel

from gamegraph.core.vocabulary import Relationship


class UserOut(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}


class UserPage(BaseModel):
    users: list[UserOut]
    limit: int
    offset: int
    total: int


class GameSummary(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}


class GameWithRelationship(BaseModel):
    game: GameSummary
    relationship: Relationship


class UserGamePage(BaseModel):
    games: list[GameWithRelationship]
    limit: int
    offset: int
    total: int
