"""Entities and their typed identifiers."""

from dataclasses import dataclass
from typing import Generic, Self, TypeVar
from uuid import UUID, uuid4

from .value_object import ValueObject


@dataclass(frozen=True)
class EntityId(ValueObject):
    """
    UUID identifier with its own type per entity.

    A CardId is never accepted where a CollectionId is expected even though
    both wrap a UUID.
    """

    value: UUID

    def __post_init__(self) -> None:
        if not isinstance(self.value, UUID):
            raise TypeError(f"{type(self).__name__} expects a UUID, got {self.value!r}")

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        return cls(uuid4())


IdType = TypeVar("IdType", bound=EntityId)


class Entity(Generic[IdType]):
    """Identity-based equality: two loads of the same card compare equal."""

    id: IdType

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.id == self.id  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"
