"""SQLAlchemy implementation of the Unit of Work."""

from collections.abc import Callable

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from linkshelf.application.common.unit_of_work import UnitOfWork
from linkshelf.domain.common import AggregateRoot, DomainEvent
from linkshelf.exceptions import PersistenceError

logger = structlog.get_logger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of Work bound to one SQLAlchemy session.

    Repositories sharing the session only flush; this class commits or
    rolls back, then hands events of tracked aggregates to the handlers.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self._tracked: list[AggregateRoot] = []
        self._handlers: list[Callable[[DomainEvent], None]] = []

    def track(self, aggregate: AggregateRoot) -> None:
        if not any(tracked is aggregate for tracked in self._tracked):
            self._tracked.append(aggregate)

    def commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            logger.exception("unit_of_work_commit_failed")
            self.rollback()
            raise PersistenceError(f"Commit failed: {e}") from e

        events = self.collect_events()
        for event in events:
            for handler in self._handlers:
                handler(event)
        if events:
            logger.debug("domain_events_dispatched", count=len(events))

    def rollback(self) -> None:
        self.db.rollback()
        for aggregate in self._tracked:
            aggregate.collect_events()
        self._tracked.clear()

    def collect_events(self) -> list[DomainEvent]:
        events: list[DomainEvent] = []
        for aggregate in self._tracked:
            events.extend(aggregate.collect_events())
        self._tracked.clear()
        return events

    def register_event_handler(self, handler: Callable[[DomainEvent], None]) -> None:
        self._handlers.append(handler)
