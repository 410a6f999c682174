"""Graph store contract used by the core.

The core never talks to a database directly: it receives an object satisfying
``GraphStore`` and only uses the operations below.
"""

from contextlib import AbstractAsyncContextManager
from typing import NamedTuple, Protocol


class EdgeRecord(NamedTuple):
    """An outgoing User→Game edge as seen from the user."""
    game_id: str
    kind: str
    distance: int


class NeighborEdge(NamedTuple):
    """An incoming edge on a game as seen from the game."""
    user_id: str
    kind: str
    distance: int


class GraphStore(Protocol):
    async def merge_edge(
        self, user_id: str, game_id: str, kind: str, attributes: dict
    ) -> None:
        """Create the (user, game, kind) edge if absent, else leave it untouched."""
        ...

    async def delete_edge(self, user_id: str, game_id: str, kind: str) -> bool:
        """Delete the (user, game, kind) edge. Returns False if it didn't exist."""
        ...

    def transaction(self) -> AbstractAsyncContextManager:
        """Group several writes so they commit or fail together."""
        ...

    async def edges_of(self, user_id: str) -> list[EdgeRecord]:
        ...

    async def users_sharing_game(
        self, game_id: str, distance: int, exclude_user_id: str | None = None
    ) -> list[NeighborEdge]:
        """Edges into ``game_id`` whose distance equals ``distance``."""
        ...

    async def edges_from(self, user_id: str) -> list[EdgeRecord]:
        ...
