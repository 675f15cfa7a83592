"""
Aggregate roots.

Cards own their library memberships; collections own their card links,
collaborators and counters. Only the root mutates them.
"""

from dataclasses import dataclass, field
from typing import Generic

from .domain_event import DomainEvent
from .entity import Entity, IdType


@dataclass(eq=False)
class AggregateRoot(Entity[IdType], Generic[IdType]):
    """
    Consistency boundary that records events while it changes.

    ``version`` is the value read from storage; repositories refuse to save
    when the stored row has moved on since.
    """

    version: int = field(default=0, compare=False, kw_only=True)
    _events: list[DomainEvent] = field(
        default_factory=list, repr=False, compare=False, kw_only=True
    )

    def _record_event(self, event: DomainEvent) -> None:
        self._events.append(event)

    def collect_events(self) -> list[DomainEvent]:
        """Hand over the recorded events and forget them."""
        events, self._events = self._events, []
        return events
