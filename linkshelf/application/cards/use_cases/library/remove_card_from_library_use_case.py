"""Use case for removing a card from a curator's library."""

import structlog

from linkshelf.application.cards.parsing import parse_card_id, parse_curator_id
from linkshelf.application.cards.protocols import (
    CardRepositoryProtocol,
    CollectionRepositoryProtocol,
)
from linkshelf.application.cards.services import CardCollectionService, CardLibraryService
from linkshelf.application.common.unit_of_work import UnitOfWork, run_in_unit_of_work
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import CardId, CuratorId
from linkshelf.exceptions import LinkshelfError, NotFoundError

logger = structlog.get_logger(__name__)


class RemoveCardFromLibraryUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        card_repository: CardRepositoryProtocol,
        collection_repository: CollectionRepositoryProtocol,
        card_library_service: CardLibraryService,
        card_collection_service: CardCollectionService,
    ) -> None:
        self.uow = uow
        self.card_repository = card_repository
        self.collection_repository = collection_repository
        self.card_library_service = card_library_service
        self.card_collection_service = card_collection_service

    def remove_card_from_library(
        self, card_id: str, curator_id: str
    ) -> Result[str, LinkshelfError]:
        """
        Remove a card from a curator's library.

        The membership is unpublished and the card is unlinked from the
        curator's own collections. When no library holds the card any more
        and the curator created it, the card itself is deleted and unlinked
        from every other collection.

        Returns:
            Success with the card id
        """
        parsed_curator = parse_curator_id(curator_id)
        if parsed_curator.is_failure:
            return Failure(parsed_curator.unwrap_error())
        parsed_card = parse_card_id(card_id)
        if parsed_card.is_failure:
            return Failure(parsed_card.unwrap_error())

        return run_in_unit_of_work(
            self.uow, lambda: self._remove(parsed_card.unwrap(), parsed_curator.unwrap())
        )

    def _remove(self, card_id: CardId, curator_id: CuratorId) -> Result[str, LinkshelfError]:
        card = self.card_repository.find_by_id(card_id)
        if card is None:
            return Failure(NotFoundError("Card", str(card_id)))
        self.uow.track(card)

        removed = self.card_library_service.remove_card_from_library(card, curator_id)
        if removed.is_failure:
            return Failure(removed.unwrap_error())

        own_collections = [
            collection.id
            for collection in self.collection_repository.find_by_curator_id(curator_id)
            if collection.has_card(card_id)
        ]
        if own_collections:
            unlinked = self.card_collection_service.remove_card_from_collections(
                card_id, own_collections, curator_id
            )
            if unlinked.is_failure:
                return Failure(unlinked.unwrap_error())
            for collection in unlinked.unwrap():
                self.uow.track(collection)

        if card.library_count == 0 and card.is_owned_by(curator_id):
            for collection in self.card_collection_service.detach_deleted_card(card_id):
                self.uow.track(collection)
            self.card_repository.delete(card_id)
            logger.info("orphaned_card_deleted", card_id=str(card_id), curator_id=curator_id.value)

        logger.info(
            "card_library_remove_completed", card_id=str(card_id), curator_id=curator_id.value
        )
        return Success(str(card_id))
