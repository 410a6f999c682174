"""Shared route dependencies."""

from dataclasses import dataclass

from fastapi import Query

from gamegraph.config import settings


@dataclass
class Page:
    limit: int
    offset: int


def pagination(
    limit: int = Query(default=settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    offset: int = Query(default=0, ge=0),
) -> Page:
    return Page(limit=limit, offset=offset)
