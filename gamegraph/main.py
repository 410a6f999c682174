"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gamegraph.config import settings
from gamegraph.core.errors import InvalidKind, StoreUnavailable, UnknownEntity
from gamegraph.db.database import engine, Base
from gamegraph.services.recommendation_service import close_recommendation_cache

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
# SQLAlchemy is chatty at INFO
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables (dev only; use migrations in production)
    import gamegraph.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Game graph API started (%s)", settings.APP_ENV)
    yield
    # Shutdown: close connections
    await engine.dispose()
    await close_recommendation_cache()


app = FastAPI(
    title="Game Graph API",
    description="User to game relationship graph with personalized game recommendations",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Core error mapping ---

@app.exception_handler(InvalidKind)
async def invalid_kind_handler(request: Request, exc: InvalidKind):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(UnknownEntity)
async def unknown_entity_handler(request: Request, exc: UnknownEntity):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


# --- Routes ---
from gamegraph.api.routes import games, users  # noqa: E402

app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(games.router, prefix="/games", tags=["games"])


@app.get("/_ping")
async def ping():
    return Response(status_code=200)


@app.get("/health")
async def health_check():
    return {"status": "ok"}
