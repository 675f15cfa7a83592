"""Use case for creating collections."""

import structlog

from linkshelf.application.cards.parsing import parse_curator_id
from linkshelf.application.cards.protocols import (
    CollectionPublisherProtocol,
    CollectionRepositoryProtocol,
)
from linkshelf.application.common.errors import to_application_error
from linkshelf.application.common.unit_of_work import UnitOfWork, run_in_unit_of_work
from linkshelf.domain.cards.entities.collection import Collection
from linkshelf.domain.cards.value_objects import CollectionAccessType
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import CuratorId
from linkshelf.exceptions import LinkshelfError, UnexpectedError

logger = structlog.get_logger(__name__)


class CreateCollectionUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        collection_repository: CollectionRepositoryProtocol,
        collection_publisher: CollectionPublisherProtocol,
    ) -> None:
        self.uow = uow
        self.collection_repository = collection_repository
        self.collection_publisher = collection_publisher

    def create_collection(
        self,
        name: str,
        curator_id: str,
        description: str | None = None,
        access_type: str | None = None,
    ) -> Result[str, LinkshelfError]:
        """
        Create and publish a collection.

        Args:
            name: Collection name, 1 to 100 characters after trimming
            curator_id: DID of the author
            description: Optional description, at most 500 characters
            access_type: "OPEN" or "CLOSED"; defaults to CLOSED

        Returns:
            Success with the new collection id
        """
        parsed_curator = parse_curator_id(curator_id)
        if parsed_curator.is_failure:
            return Failure(parsed_curator.unwrap_error())

        return run_in_unit_of_work(
            self.uow,
            lambda: self._create(name, parsed_curator.unwrap(), description, access_type),
        )

    def _create(
        self,
        name: str,
        curator_id: CuratorId,
        description: str | None,
        access_type: str | None,
    ) -> Result[str, LinkshelfError]:
        created = Collection.create(
            author_id=curator_id,
            name=name,
            description=description,
            access_type=access_type or CollectionAccessType.CLOSED,
        )
        if created.is_failure:
            return Failure(to_application_error(created.unwrap_error()))
        collection = self.collection_repository.save(created.unwrap())
        self.uow.track(collection)

        published = self.collection_publisher.publish(collection)
        if published.is_failure:
            error = published.unwrap_error()
            return Failure(UnexpectedError(f"Failed to publish collection: {error}", error))
        collection.mark_as_published(published.unwrap())
        self.collection_repository.save(collection)

        logger.info(
            "collection_created",
            collection_id=str(collection.id),
            curator_id=curator_id.value,
            access_type=collection.access_type.value,
        )
        return Success(str(collection.id))
