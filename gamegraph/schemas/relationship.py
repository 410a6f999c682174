"""Relationship write schemas.

Request kinds are plain strings: the relationship vocabulary rejects unknown
kinds with a 400 before any store access.
"""

from pydantic import BaseModel, ConfigDict, Field

from gamegraph.core.vocabulary import Relationship


class RelationshipCreate(BaseModel):
    relationship: str = Field(min_length=1)


class RelationshipReplace(BaseModel):
    """Body of a PUT: ``{"from": ..., "to": ...}``."""
    from_: str = Field(alias="from", min_length=1)
    to: str = Field(min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class RelationshipOut(BaseModel):
    user_id: str
    game_id: str
    relationship: Relationship
    distance: int
