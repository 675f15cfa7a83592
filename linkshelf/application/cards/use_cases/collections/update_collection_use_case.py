"""Use case for renaming collections and editing their description."""

import structlog

from linkshelf.application.cards.parsing import parse_collection_id, parse_curator_id
from linkshelf.application.cards.protocols import (
    CollectionPublisherProtocol,
    CollectionRepositoryProtocol,
)
from linkshelf.application.common.errors import to_application_error
from linkshelf.application.common.unit_of_work import UnitOfWork, run_in_unit_of_work
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import CollectionId, CuratorId
from linkshelf.exceptions import LinkshelfError, NotFoundError, UnexpectedError

logger = structlog.get_logger(__name__)


class UpdateCollectionUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        collection_repository: CollectionRepositoryProtocol,
        collection_publisher: CollectionPublisherProtocol,
    ) -> None:
        self.uow = uow
        self.collection_repository = collection_repository
        self.collection_publisher = collection_publisher

    def update_collection(
        self, collection_id: str, name: str, description: str | None, curator_id: str
    ) -> Result[str, LinkshelfError]:
        """Update name and description; a published collection is republished."""
        parsed_curator = parse_curator_id(curator_id)
        if parsed_curator.is_failure:
            return Failure(parsed_curator.unwrap_error())
        parsed_collection = parse_collection_id(collection_id)
        if parsed_collection.is_failure:
            return Failure(parsed_collection.unwrap_error())

        return run_in_unit_of_work(
            self.uow,
            lambda: self._update(
                parsed_collection.unwrap(), name, description, parsed_curator.unwrap()
            ),
        )

    def _update(
        self,
        collection_id: CollectionId,
        name: str,
        description: str | None,
        curator_id: CuratorId,
    ) -> Result[str, LinkshelfError]:
        collection = self.collection_repository.find_by_id(collection_id)
        if collection is None:
            return Failure(NotFoundError("Collection", str(collection_id)))

        updated = collection.update_details(name, description, curator_id)
        if updated.is_failure:
            return Failure(to_application_error(updated.unwrap_error()))

        if collection.published_record_id is not None:
            published = self.collection_publisher.publish(collection)
            if published.is_failure:
                error = published.unwrap_error()
                return Failure(UnexpectedError(f"Failed to republish collection: {error}", error))
            collection.mark_as_published(published.unwrap())

        self.collection_repository.save(collection)
        logger.info("collection_updated", collection_id=str(collection_id))
        return Success(str(collection_id))
