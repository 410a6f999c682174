"""Errors raised by the relationship graph core."""


class GraphError(Exception):
    """Base class for every error the core reports to its caller."""


class InvalidKind(GraphError):
    """A relationship kind outside the vocabulary was supplied."""

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Invalid relationship: {kind}")


class UnknownKind(InvalidKind):
    """Raised by distance lookups for a kind the vocabulary doesn't know."""


class UnknownEntity(GraphError):
    """A referenced user or game does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id!r}")


class StoreUnavailable(GraphError):
    """The graph store failed or timed out. Never retried by the core."""
