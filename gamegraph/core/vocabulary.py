"""Relationship vocabulary - the closed set of user→game relationship kinds.

Each kind maps to a distance (inverse affinity): the lower the distance, the
stronger the positive signal. Distances are unique and strictly increasing in
declaration order, so they double as a total order over kinds.
"""

from enum import Enum
from types import MappingProxyType

from gamegraph.core.errors import UnknownKind


class Relationship(str, Enum):
    COMPLETE_100 = "COMPLETE_100"
    BEATEN = "BEATEN"
    SET_ASIDE_ENJOYED = "SET_ASIDE_ENJOYED"
    SET_ASIDE = "SET_ASIDE"
    GOT_BORED = "GOT_BORED"
    WOULD_NOT_LIKE = "WOULD_NOT_LIKE"


RELATIONSHIP_DISTANCES = MappingProxyType({
    Relationship.COMPLETE_100.value: 1,
    Relationship.BEATEN.value: 2,
    Relationship.SET_ASIDE_ENJOYED.value: 3,
    Relationship.SET_ASIDE.value: 5,
    Relationship.GOT_BORED.value: 8,
    Relationship.WOULD_NOT_LIKE.value: 13,
})

VALID_RELATIONSHIPS = frozenset(RELATIONSHIP_DISTANCES)


def _key(kind) -> str | None:
    if isinstance(kind, Relationship):
        return kind.value
    if isinstance(kind, str):
        return kind
    return None


def is_valid(kind) -> bool:
    """Case-sensitive membership test against the vocabulary."""
    return _key(kind) in VALID_RELATIONSHIPS


def distance_of(kind) -> int:
    """Distance for a relationship kind. Raises UnknownKind otherwise."""
    key = _key(kind)
    if key not in VALID_RELATIONSHIPS:
        raise UnknownKind(kind)
    return RELATIONSHIP_DISTANCES[key]
