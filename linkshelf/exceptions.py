"""Custom exception hierarchy for the linkshelf application."""


class LinkshelfError(Exception):
    """Base exception for all application errors returned by use cases."""

    def __init__(self, message: str) -> None:
        """Initialize exception with message."""
        self.message = message
        super().__init__(self.message)


class ValidationError(LinkshelfError):
    """Malformed input: bad identifier, name too long, unknown enum value."""


class AccessError(LinkshelfError):
    """Permission denied on a collection or card mutation."""


class NotFoundError(LinkshelfError):
    """Referenced aggregate does not exist."""

    def __init__(
        self,
        entity_type: str | None = None,
        entity_id: object = None,
        *,
        message: str | None = None,
    ) -> None:
        """Initialize with entity type and id or a custom message."""
        self.entity_type = entity_type
        self.entity_id = entity_id
        if message:
            super().__init__(message)
        elif entity_type and entity_id is not None:
            super().__init__(f"{entity_type} with id {entity_id} not found")
        else:
            super().__init__("Resource not found")


class UnexpectedError(LinkshelfError):
    """A storage or collaborator failure surfaced to callers."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        """Initialize with message and the underlying failure."""
        self.cause = cause
        super().__init__(message)

    @classmethod
    def create(cls, cause: BaseException | object) -> "UnexpectedError":
        """Wrap an arbitrary failure."""
        if isinstance(cause, BaseException):
            return cls(f"An unexpected error occurred: {cause}", cause)
        return cls(f"An unexpected error occurred: {cause}")


class InfrastructureError(LinkshelfError):
    """Base class for failures at the storage or collaborator boundary."""


class PersistenceError(InfrastructureError):
    """The database rejected or failed an operation."""


class ConcurrencyConflictError(PersistenceError):
    """An aggregate was changed by someone else since it was loaded."""

    def __init__(self, aggregate: str, aggregate_id: object, expected_version: int) -> None:
        """Initialize with the aggregate and the version the caller saw."""
        self.aggregate = aggregate
        self.aggregate_id = aggregate_id
        self.expected_version = expected_version
        super().__init__(
            f"{aggregate} {aggregate_id} was modified concurrently "
            f"(expected version {expected_version})"
        )
