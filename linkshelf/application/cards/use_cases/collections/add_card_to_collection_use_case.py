"""Use case for linking a card into collections."""

from linkshelf.application.cards.parsing import (
    parse_card_id,
    parse_collection_ids,
    parse_curator_id,
)
from linkshelf.application.cards.protocols import CardRepositoryProtocol
from linkshelf.application.cards.services import CardCollectionService
from linkshelf.application.common.unit_of_work import UnitOfWork, run_in_unit_of_work
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import CardId, CollectionId, CuratorId
from linkshelf.exceptions import LinkshelfError, NotFoundError, ValidationError


class AddCardToCollectionUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        card_repository: CardRepositoryProtocol,
        card_collection_service: CardCollectionService,
    ) -> None:
        self.uow = uow
        self.card_repository = card_repository
        self.card_collection_service = card_collection_service

    def add_card_to_collection(
        self, card_id: str, collection_ids: list[str], curator_id: str
    ) -> Result[str, LinkshelfError]:
        parsed_curator = parse_curator_id(curator_id)
        if parsed_curator.is_failure:
            return Failure(parsed_curator.unwrap_error())
        parsed_card = parse_card_id(card_id)
        if parsed_card.is_failure:
            return Failure(parsed_card.unwrap_error())
        parsed_collections = parse_collection_ids(collection_ids)
        if parsed_collections.is_failure:
            return Failure(parsed_collections.unwrap_error())
        if not parsed_collections.unwrap():
            return Failure(ValidationError("At least one collection ID is required"))

        return run_in_unit_of_work(
            self.uow,
            lambda: self._add(
                parsed_card.unwrap(), parsed_collections.unwrap(), parsed_curator.unwrap()
            ),
        )

    def _add(
        self, card_id: CardId, collection_ids: list[CollectionId], curator_id: CuratorId
    ) -> Result[str, LinkshelfError]:
        card = self.card_repository.find_by_id(card_id)
        if card is None:
            return Failure(NotFoundError("Card", str(card_id)))

        linked = self.card_collection_service.add_card_to_collections(
            card, collection_ids, curator_id
        )
        if linked.is_failure:
            return Failure(linked.unwrap_error())
        for collection in linked.unwrap():
            self.uow.track(collection)
        return Success(str(card_id))
