"""User endpoints - list users, a user's games, relationship writes, recommendations."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gamegraph.api.deps import Page, pagination
from gamegraph.config import settings
from gamegraph.db.database import get_db
from gamegraph.schemas.recommendation import RecommendationList
from gamegraph.schemas.relationship import (
    RelationshipCreate,
    RelationshipOut,
    RelationshipReplace,
)
from gamegraph.schemas.user import (
    GameSummary,
    GameWithRelationship,
    UserGamePage,
    UserOut,
    UserPage,
)
from gamegraph.services.recommendation_service import (
    RecommendationService,
    get_recommendation_service,
)
from gamegraph.services.relationship_service import relationship_service
from gamegraph.services.user_service import user_service

router = APIRouter()


@router.get("", response_model=UserPage)
async def list_users(page: Page = Depends(pagination), db: AsyncSession = Depends(get_db)):
    """List users ordered by name."""
    users, total = await user_service.list_users(db, page.limit, page.offset)
    return UserPage(
        users=[UserOut.model_validate(u) for u in users],
        limit=page.limit,
        offset=page.offset,
        total=total,
    )


@router.get("/{user_id}/games", response_model=UserGamePage)
async def list_user_games(
    user_id: str, page: Page = Depends(pagination), db: AsyncSession = Depends(get_db)
):
    """List a user's games with the relationship kind of each edge."""
    rows, total = await user_service.list_user_games(db, user_id, page.limit, page.offset)
    return UserGamePage(
        games=[
            GameWithRelationship(game=GameSummary.model_validate(game), relationship=kind)
            for game, kind in rows
        ],
        limit=page.limit,
        offset=page.offset,
        total=total,
    )


@router.post("/{user_id}/games/{game_id}/relationship", response_model=RelationshipOut)
async def add_relationship(
    user_id: str,
    game_id: str,
    data: RelationshipCreate,
    db: AsyncSession = Depends(get_db),
    recs: RecommendationService = Depends(get_recommendation_service),
):
    """Add a relationship edge. Existing edges of other kinds are kept."""
    distance = await relationship_service.add_relationship(
        db, user_id, game_id, data.relationship
    )
    await recs.commit_and_invalidate(db, user_id)
    return RelationshipOut(
        user_id=user_id, game_id=game_id, relationship=data.relationship, distance=distance
    )


@router.put("/{user_id}/games/{game_id}/relationship", response_model=RelationshipOut)
async def replace_relationship(
    user_id: str,
    game_id: str,
    data: RelationshipReplace,
    db: AsyncSession = Depends(get_db),
    recs: RecommendationService = Depends(get_recommendation_service),
):
    """Change a relationship from one kind to another."""
    distance = await relationship_service.replace_relationship(
        db, user_id, game_id, data.from_, data.to
    )
    await recs.commit_and_invalidate(db, user_id)
    return RelationshipOut(
        user_id=user_id, game_id=game_id, relationship=data.to, distance=distance
    )


@router.get("/{user_id}/recommendations", response_model=RecommendationList)
async def get_recommendations(
    user_id: str,
    limit: int = Query(default=settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_RECOMMENDATIONS),
    include_connected: bool = False,
    db: AsyncSession = Depends(get_db),
    recs: RecommendationService = Depends(get_recommendation_service),
):
    """Ranked game recommendations for a user, best (lowest score) first."""
    return await recs.get_recommendations(
        db, user_id, limit=limit, include_connected=include_connected
    )
