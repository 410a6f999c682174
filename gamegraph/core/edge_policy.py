"""Edge upsert policy - decides which single edge a relationship write produces."""

import logging

from gamegraph.core.errors import InvalidKind, UnknownEntity
from gamegraph.core.store import GraphStore
from gamegraph.core.vocabulary import Relationship, distance_of, is_valid

logger = logging.getLogger(__name__)


def _kind_value(kind) -> str:
    if not is_valid(kind):
        raise InvalidKind(kind)
    return kind.value if isinstance(kind, Relationship) else kind


def _require_ids(user_id: str, game_id: str) -> None:
    if not user_id:
        raise UnknownEntity("User", user_id)
    if not game_id:
        raise UnknownEntity("Game", game_id)


class EdgeUpsertPolicy:
    """Writes relationship edges through an injected graph store.

    ``upsert_edge`` is purely additive: it merges the edge for the given kind
    and leaves any other kind between the same pair alone. ``replace_edge``
    swaps one kind for another inside a single store transaction.
    """

    def __init__(self, store: GraphStore):
        self.store = store

    async def upsert_edge(self, user_id: str, game_id: str, kind) -> int:
        """Merge a User→Game edge labelled ``kind``. Returns its distance."""
        kind = _kind_value(kind)
        _require_ids(user_id, game_id)

        distance = distance_of(kind)
        await self.store.merge_edge(user_id, game_id, kind, {"distance": distance})
        logger.info("Merged %s -[%s:%d]-> %s", user_id, kind, distance, game_id)
        return distance

    async def replace_edge(self, user_id: str, game_id: str, from_kind, to_kind) -> int:
        """Replace the ``from_kind`` edge with a ``to_kind`` edge.

        A missing ``from_kind`` edge is not an error; the result is the same
        as an upsert of ``to_kind``. Both kinds are validated before the store
        is touched.
        """
        from_kind = _kind_value(from_kind)
        to_kind = _kind_value(to_kind)
        _require_ids(user_id, game_id)

        if from_kind == to_kind:
            return await self.upsert_edge(user_id, game_id, to_kind)

        distance = distance_of(to_kind)
        async with self.store.transaction():
            removed = await self.store.delete_edge(user_id, game_id, from_kind)
            await self.store.merge_edge(user_id, game_id, to_kind, {"distance": distance})

        logger.info(
            "Replaced %s -[%s]-> %s with %s (previous edge %s)",
            user_id, from_kind, game_id, to_kind, "removed" if removed else "absent",
        )
        return distance
