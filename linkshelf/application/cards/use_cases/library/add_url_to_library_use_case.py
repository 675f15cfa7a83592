"""Use case for saving a URL to a curator's library."""

import structlog

from linkshelf.application.cards.parsing import parse_collection_ids, parse_curator_id, parse_url
from linkshelf.application.cards.protocols import (
    CardRepositoryProtocol,
    MetadataServiceProtocol,
)
from linkshelf.application.cards.responses import AddUrlToLibraryResponse
from linkshelf.application.cards.services import CardCollectionService, CardLibraryService
from linkshelf.application.common.errors import to_application_error
from linkshelf.application.common.unit_of_work import UnitOfWork, run_in_unit_of_work
from linkshelf.domain.cards.entities.card import Card
from linkshelf.domain.cards.services import CardFactory
from linkshelf.domain.cards.value_objects import UrlMetadata
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import URL, CollectionId, CuratorId
from linkshelf.exceptions import LinkshelfError

logger = structlog.get_logger(__name__)


class AddUrlToLibraryUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        card_repository: CardRepositoryProtocol,
        metadata_service: MetadataServiceProtocol,
        card_library_service: CardLibraryService,
        card_collection_service: CardCollectionService,
    ) -> None:
        self.uow = uow
        self.card_repository = card_repository
        self.metadata_service = metadata_service
        self.card_library_service = card_library_service
        self.card_collection_service = card_collection_service
        self.card_factory = CardFactory()

    def add_url_to_library(
        self,
        url: str,
        curator_id: str,
        note: str | None = None,
        collection_ids: list[str] | None = None,
    ) -> Result[AddUrlToLibraryResponse, LinkshelfError]:
        """
        Save a URL to a curator's library.

        Reuses the curator's existing URL card for the URL or creates one
        with fetched metadata. A note, when given, becomes (or replaces the
        text of) the curator's note card attached to the URL card. The URL
        card is then linked into each requested collection.

        Args:
            url: URL to save
            curator_id: DID of the curator
            note: Optional note text
            collection_ids: Collections the URL card should be added to

        Returns:
            Success with the URL card id and note card id, or Failure with
            ValidationError, NotFoundError, AccessError or UnexpectedError
        """
        parsed_curator = parse_curator_id(curator_id)
        if parsed_curator.is_failure:
            return Failure(parsed_curator.unwrap_error())
        parsed_url = parse_url(url)
        if parsed_url.is_failure:
            return Failure(parsed_url.unwrap_error())
        parsed_collections = parse_collection_ids(collection_ids)
        if parsed_collections.is_failure:
            return Failure(parsed_collections.unwrap_error())

        return run_in_unit_of_work(
            self.uow,
            lambda: self._add(
                parsed_url.unwrap(),
                parsed_curator.unwrap(),
                note,
                parsed_collections.unwrap(),
            ),
        )

    def _add(
        self,
        url: URL,
        curator_id: CuratorId,
        note: str | None,
        collection_ids: list[CollectionId],
    ) -> Result[AddUrlToLibraryResponse, LinkshelfError]:
        url_card = self.card_repository.find_users_url_card_by_url(url, curator_id)
        if url_card is None:
            created = self.card_factory.create_url_card(
                curator_id, url, metadata=self._fetch_metadata(url)
            )
            if created.is_failure:
                return Failure(to_application_error(created.unwrap_error()))
            url_card = self.card_repository.save(created.unwrap())
        self.uow.track(url_card)

        added = self.card_library_service.add_card_to_library(url_card, curator_id)
        if added.is_failure:
            return Failure(added.unwrap_error())

        note_card: Card | None = None
        if note is not None and note.strip():
            note_result = self._save_note(url_card, url, curator_id, note)
            if note_result.is_failure:
                return Failure(note_result.unwrap_error())
            note_card = note_result.unwrap()

        if collection_ids:
            linked = self.card_collection_service.add_card_to_collections(
                url_card, collection_ids, curator_id
            )
            if linked.is_failure:
                return Failure(linked.unwrap_error())
            for collection in linked.unwrap():
                self.uow.track(collection)

        logger.info(
            "url_added_to_library",
            url=url.value,
            curator_id=curator_id.value,
            url_card_id=str(url_card.id),
            note_card_id=str(note_card.id) if note_card else None,
            collection_count=len(collection_ids),
        )
        return Success(
            AddUrlToLibraryResponse(
                url_card_id=str(url_card.id),
                note_card_id=str(note_card.id) if note_card else None,
            )
        )

    def _fetch_metadata(self, url: URL) -> UrlMetadata | None:
        fetched = self.metadata_service.fetch_metadata(url)
        if fetched.is_failure:
            logger.warning(
                "url_metadata_fetch_failed", url=url.value, error=str(fetched.unwrap_error())
            )
            return None
        return fetched.unwrap()

    def _save_note(
        self, url_card: Card, url: URL, curator_id: CuratorId, text: str
    ) -> Result[Card, LinkshelfError]:
        existing = [
            card
            for card in self.card_repository.find_note_cards_by_parent(url_card.id)
            if card.is_owned_by(curator_id)
        ]
        if existing:
            note_card = existing[0]
            updated = note_card.update_note_text(text, curator_id)
            if updated.is_failure:
                return Failure(to_application_error(updated.unwrap_error()))
            note_card = self.card_repository.save(note_card)
        else:
            created = self.card_factory.create_note_card(
                curator_id, text, parent_card_id=url_card.id, url=url
            )
            if created.is_failure:
                return Failure(to_application_error(created.unwrap_error()))
            note_card = self.card_repository.save(created.unwrap())
        self.uow.track(note_card)

        added = self.card_library_service.add_card_to_library(note_card, curator_id)
        if added.is_failure:
            return Failure(added.unwrap_error())
        return Success(added.unwrap())
