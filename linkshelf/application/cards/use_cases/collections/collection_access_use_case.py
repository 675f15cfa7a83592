"""Use case for managing who may change a collection."""

from collections.abc import Callable

import structlog

from linkshelf.application.cards.parsing import parse_collection_id, parse_curator_id
from linkshelf.application.cards.protocols import CollectionRepositoryProtocol
from linkshelf.application.common.errors import to_application_error
from linkshelf.application.common.unit_of_work import UnitOfWork, run_in_unit_of_work
from linkshelf.domain.cards.entities.collection import Collection
from linkshelf.domain.common.exceptions import DomainError
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import CollectionId, CuratorId
from linkshelf.exceptions import LinkshelfError, NotFoundError

logger = structlog.get_logger(__name__)


class CollectionAccessUseCase:
    """Author-only changes to collaborators and the access type."""

    def __init__(
        self, uow: UnitOfWork, collection_repository: CollectionRepositoryProtocol
    ) -> None:
        self.uow = uow
        self.collection_repository = collection_repository

    def add_collaborator(
        self, collection_id: str, collaborator_id: str, curator_id: str
    ) -> Result[str, LinkshelfError]:
        parsed_collaborator = parse_curator_id(collaborator_id)
        if parsed_collaborator.is_failure:
            return Failure(parsed_collaborator.unwrap_error())
        collaborator = parsed_collaborator.unwrap()
        return self._change(
            "collection_collaborator_added",
            collection_id,
            curator_id,
            lambda collection, user: collection.add_collaborator(collaborator, user),
        )

    def remove_collaborator(
        self, collection_id: str, collaborator_id: str, curator_id: str
    ) -> Result[str, LinkshelfError]:
        parsed_collaborator = parse_curator_id(collaborator_id)
        if parsed_collaborator.is_failure:
            return Failure(parsed_collaborator.unwrap_error())
        collaborator = parsed_collaborator.unwrap()
        return self._change(
            "collection_collaborator_removed",
            collection_id,
            curator_id,
            lambda collection, user: collection.remove_collaborator(collaborator, user),
        )

    def change_access_type(
        self, collection_id: str, access_type: str, curator_id: str
    ) -> Result[str, LinkshelfError]:
        return self._change(
            "collection_access_type_changed",
            collection_id,
            curator_id,
            lambda collection, user: collection.change_access_type(access_type, user),
        )

    def _change(
        self,
        event: str,
        collection_id: str,
        curator_id: str,
        change: Callable[[Collection, CuratorId], Result[None, DomainError]],
    ) -> Result[str, LinkshelfError]:
        parsed_curator = parse_curator_id(curator_id)
        if parsed_curator.is_failure:
            return Failure(parsed_curator.unwrap_error())
        parsed_collection = parse_collection_id(collection_id)
        if parsed_collection.is_failure:
            return Failure(parsed_collection.unwrap_error())

        return run_in_unit_of_work(
            self.uow,
            lambda: self._apply(
                event, parsed_collection.unwrap(), parsed_curator.unwrap(), change
            ),
        )

    def _apply(
        self,
        event: str,
        collection_id: CollectionId,
        curator_id: CuratorId,
        change: Callable[[Collection, CuratorId], Result[None, DomainError]],
    ) -> Result[str, LinkshelfError]:
        collection = self.collection_repository.find_by_id(collection_id)
        if collection is None:
            return Failure(NotFoundError("Collection", str(collection_id)))

        changed = change(collection, curator_id)
        if changed.is_failure:
            return Failure(to_application_error(changed.unwrap_error()))

        self.collection_repository.save(collection)
        logger.info(event, collection_id=str(collection_id), curator_id=curator_id.value)
        return Success(str(collection_id))
