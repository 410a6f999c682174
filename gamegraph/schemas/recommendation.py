"""Recommendation response schemas."""

from pydantic import BaseModel

from gamegraph.core.vocabulary import Relationship
from gamegraph.schemas.user import GameSummary


class EvidenceOut(BaseModel):
    shared_game_id: str
    user_relationship: Relationship
    neighbor_relationship: Relationship
    recommended_relationship: Relationship


class RecommendationOut(BaseModel):
    game: GameSummary
    score: int
    evidence: list[EvidenceOut]


class RecommendationList(BaseModel):
    user_id: str
    recommendations: list[RecommendationOut]
