"""
Unit of Work interface.

Commands load aggregates, mutate them and save them inside one unit of
work so the parent row and its replaced children commit together.

Example:
    with self.uow:
        collection = self.collection_repository.find_by_id(collection_id)
        collection.add_card(card_id, curator_id)
        self.collection_repository.save(collection)
        self.uow.commit()
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from types import TracebackType
from typing import Self, TypeVar

import structlog

from linkshelf.domain.common import AggregateRoot, DomainEvent
from linkshelf.domain.common.result import Failure, Result
from linkshelf.exceptions import InfrastructureError, LinkshelfError, UnexpectedError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class UnitOfWork(ABC):
    """
    Unit of Work interface (Port).

    Rolls back when the managed block raises; commit must be called
    explicitly. Events recorded by tracked aggregates are dispatched to
    registered handlers after a successful commit.
    """

    @abstractmethod
    def commit(self) -> None:
        """Commit the current transaction and dispatch collected events."""
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """Discard all changes made within the unit of work."""
        raise NotImplementedError

    def __enter__(self) -> Self:
        """Enter the unit of work context."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Rollback if the block raised."""
        if exc_type is not None:
            self.rollback()

    def track(self, aggregate: AggregateRoot) -> None:
        """
        Track an aggregate whose events should be dispatched on commit.

        Override in implementations that support event dispatching.
        """
        _ = aggregate

    def collect_events(self) -> list[DomainEvent]:
        """Collect domain events from tracked aggregates."""
        return []

    def register_event_handler(self, handler: Callable[[DomainEvent], None]) -> None:
        """Register a handler to be called for domain events after commit."""
        _ = handler


def run_in_unit_of_work(
    uow: UnitOfWork, operation: Callable[[], Result[T, LinkshelfError]]
) -> Result[T, LinkshelfError]:
    """
    Run a command body inside a unit of work.

    Commits when the body succeeds and rolls back when it returns a
    Failure. Storage failures raised on the way become UnexpectedError.
    """
    try:
        with uow:
            result = operation()
            if result.is_failure:
                uow.rollback()
            else:
                uow.commit()
            return result
    except InfrastructureError as e:
        logger.warning("unit_of_work_failed", error=str(e), error_type=type(e).__name__)
        return Failure(UnexpectedError.create(e))
