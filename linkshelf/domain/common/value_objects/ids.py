from dataclasses import dataclass
from typing import Self
from uuid import UUID

from ..entity import EntityId
from ..exceptions import ValidationError
from ..result import Failure, Result, Success


@dataclass(frozen=True)
class _UuidEntityId(EntityId):
    @classmethod
    def create(cls, value: "str | UUID | Self") -> Result[Self, ValidationError]:
        """Parse an identifier from its string form."""
        if isinstance(value, cls):
            return Success(value)
        if isinstance(value, UUID):
            return Success(cls(value))
        try:
            return Success(cls(UUID(value.strip())))
        except (AttributeError, ValueError):
            return Failure(
                ValidationError(f"Invalid {cls.__name__}", field=cls.__name__, value=value)
            )


@dataclass(frozen=True)
class CardId(_UuidEntityId):
    """Strongly-typed card identifier."""


@dataclass(frozen=True)
class CollectionId(_UuidEntityId):
    """Strongly-typed collection identifier."""
