"""Domain events recorded by aggregates and dispatched after commit."""

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """
    Something that happened to an aggregate, named in the past tense.

    Concrete events add the ids they refer to, for example
    ``CardAddedToLibrary(card_id=..., curator_id=...)``.
    """

    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
