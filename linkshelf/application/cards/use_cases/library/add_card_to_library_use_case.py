"""Use case for adding an existing card to a curator's library."""

import structlog

from linkshelf.application.cards.parsing import (
    parse_card_id,
    parse_collection_ids,
    parse_curator_id,
)
from linkshelf.application.cards.protocols import CardRepositoryProtocol
from linkshelf.application.cards.services import CardCollectionService, CardLibraryService
from linkshelf.application.common.unit_of_work import UnitOfWork, run_in_unit_of_work
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import CardId, CollectionId, CuratorId
from linkshelf.exceptions import LinkshelfError, NotFoundError

logger = structlog.get_logger(__name__)


class AddCardToLibraryUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        card_repository: CardRepositoryProtocol,
        card_library_service: CardLibraryService,
        card_collection_service: CardCollectionService,
    ) -> None:
        self.uow = uow
        self.card_repository = card_repository
        self.card_library_service = card_library_service
        self.card_collection_service = card_collection_service

    def add_card_to_library(
        self, card_id: str, curator_id: str, collection_ids: list[str] | None = None
    ) -> Result[str, LinkshelfError]:
        """
        Add a card, possibly curated by someone else, to a curator's library.

        Returns:
            Success with the card id
        """
        parsed_curator = parse_curator_id(curator_id)
        if parsed_curator.is_failure:
            return Failure(parsed_curator.unwrap_error())
        parsed_card = parse_card_id(card_id)
        if parsed_card.is_failure:
            return Failure(parsed_card.unwrap_error())
        parsed_collections = parse_collection_ids(collection_ids)
        if parsed_collections.is_failure:
            return Failure(parsed_collections.unwrap_error())

        return run_in_unit_of_work(
            self.uow,
            lambda: self._add(
                parsed_card.unwrap(), parsed_curator.unwrap(), parsed_collections.unwrap()
            ),
        )

    def _add(
        self, card_id: CardId, curator_id: CuratorId, collection_ids: list[CollectionId]
    ) -> Result[str, LinkshelfError]:
        card = self.card_repository.find_by_id(card_id)
        if card is None:
            return Failure(NotFoundError("Card", str(card_id)))
        self.uow.track(card)

        added = self.card_library_service.add_card_to_library(card, curator_id)
        if added.is_failure:
            return Failure(added.unwrap_error())

        if collection_ids:
            linked = self.card_collection_service.add_card_to_collections(
                card, collection_ids, curator_id
            )
            if linked.is_failure:
                return Failure(linked.unwrap_error())
            for collection in linked.unwrap():
                self.uow.track(collection)

        logger.info("card_library_add_completed", card_id=str(card_id), curator_id=curator_id.value)
        return Success(str(card_id))
