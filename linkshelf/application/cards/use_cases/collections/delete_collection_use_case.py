"""Use case for deleting collections."""

import structlog

from linkshelf.application.cards.parsing import parse_collection_id, parse_curator_id
from linkshelf.application.cards.protocols import (
    CollectionPublisherProtocol,
    CollectionRepositoryProtocol,
)
from linkshelf.application.common.unit_of_work import UnitOfWork, run_in_unit_of_work
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import CollectionId, CuratorId
from linkshelf.exceptions import AccessError, LinkshelfError, NotFoundError, UnexpectedError

logger = structlog.get_logger(__name__)


class DeleteCollectionUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        collection_repository: CollectionRepositoryProtocol,
        collection_publisher: CollectionPublisherProtocol,
    ) -> None:
        self.uow = uow
        self.collection_repository = collection_repository
        self.collection_publisher = collection_publisher

    def delete_collection(
        self, collection_id: str, curator_id: str
    ) -> Result[str, LinkshelfError]:
        """
        Unpublish and delete a collection. Only its author may do this.

        Cards linked to the collection are left untouched.
        """
        parsed_curator = parse_curator_id(curator_id)
        if parsed_curator.is_failure:
            return Failure(parsed_curator.unwrap_error())
        parsed_collection = parse_collection_id(collection_id)
        if parsed_collection.is_failure:
            return Failure(parsed_collection.unwrap_error())

        return run_in_unit_of_work(
            self.uow, lambda: self._delete(parsed_collection.unwrap(), parsed_curator.unwrap())
        )

    def _delete(
        self, collection_id: CollectionId, curator_id: CuratorId
    ) -> Result[str, LinkshelfError]:
        collection = self.collection_repository.find_by_id(collection_id)
        if collection is None:
            return Failure(NotFoundError("Collection", str(collection_id)))
        if not collection.can_delete(curator_id):
            return Failure(AccessError("Only the author can delete this collection"))

        if collection.published_record_id is not None:
            unpublished = self.collection_publisher.unpublish(collection.published_record_id)
            if unpublished.is_failure:
                error = unpublished.unwrap_error()
                return Failure(UnexpectedError(f"Failed to unpublish collection: {error}", error))

        self.collection_repository.delete(collection_id)
        logger.info(
            "collection_deleted", collection_id=str(collection_id), curator_id=curator_id.value
        )
        return Success(str(collection_id))
