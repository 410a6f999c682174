"""Game endpoints - list, inspect and create games."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from gamegraph.api.deps import Page, pagination
from gamegraph.db.database import get_db
from gamegraph.schemas.game import (
    GameCreate,
    GameDetail,
    GameOut,
    GamePage,
    UserWithRelationship,
)
from gamegraph.schemas.user import UserOut
from gamegraph.services.game_service import GameAlreadyExists, game_service

router = APIRouter()


@router.get("", response_model=GamePage)
async def list_games(page: Page = Depends(pagination), db: AsyncSession = Depends(get_db)):
    """List games ordered by name."""
    games, total = await game_service.list_games(db, page.limit, page.offset)
    return GamePage(
        games=[GameOut.model_validate(g) for g in games],
        limit=page.limit,
        offset=page.offset,
        total=total,
    )


@router.get("/{game_id}", response_model=GameDetail)
async def get_game(game_id: str, db: AsyncSession = Depends(get_db)):
    """Get a game and every user related to it."""
    game, users = await game_service.get_game_with_users(db, game_id)
    return GameDetail(
        game=GameOut.model_validate(game),
        users=[
            UserWithRelationship(user=UserOut.model_validate(user), relationship=kind)
            for user, kind in users
        ],
    )


@router.post("", response_model=GameOut, status_code=201)
async def create_game(data: GameCreate, db: AsyncSession = Depends(get_db)):
    """Create a game; its id is derived from the name."""
    try:
        game = await game_service.create_game(db, data.name, data.gb_uuid)
    except GameAlreadyExists as e:
        raise HTTPException(status_code=409, detail=f"Game already exists: {e.game.id}")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return GameOut.model_validate(game)
