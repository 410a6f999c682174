"""Game-related Pydantic schemas."""

from pydantic import BaseModel, Field

from gamegraph.core.vocabulary import Relationship
from gamegraph.schemas.user import UserOut


class GameOut(BaseModel):
    id: str
    name: str
    gb_uuid: str | None = None

    model_config = {"from_attributes": True}


class GameCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    gb_uuid: str | None = None


class GamePage(BaseModel):
    games: list[GameOut]
    limit: int
    offset: int
    total: int


class UserWithRelationship(BaseModel):
    user: UserOut
    relationship: Relationship


class GameDetail(BaseModel):
    game: GameOut
    users: list[UserWithRelationship]
