"""Read-side repository for cards."""

from sqlalchemy.orm import Session

from linkshelf.application.cards.dtos import (
    CardQueryOptions,
    CollectionCardQueryResultDTO,
    LibraryForUrlDTO,
    NoteCardForUrlDTO,
    UrlCardQueryResultDTO,
    UrlCardViewDTO,
)
from linkshelf.application.common.pagination import PaginatedResult
from linkshelf.infrastructure.cards.query_services import (
    CollectionCardQueryService,
    NoteCardQueryService,
    UrlCardQueryService,
)
from linkshelf.infrastructure.common.errors import translate_persistence_errors


class CardQueryRepository:
    """
    Card read models.

    Delegates to one query service per read concern so each stays small;
    callers only see this repository.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.url_cards = UrlCardQueryService(db)
        self.collection_cards = CollectionCardQueryService(db)
        self.note_cards = NoteCardQueryService(db)

    @translate_persistence_errors
    def get_url_cards_of_user(
        self,
        curator_id: str,
        options: CardQueryOptions,
        calling_user_id: str | None = None,
    ) -> PaginatedResult[UrlCardQueryResultDTO]:
        return self.url_cards.get_url_cards_of_user(curator_id, options, calling_user_id)

    @translate_persistence_errors
    def get_cards_in_collection(
        self,
        collection_id: str,
        options: CardQueryOptions,
        calling_user_id: str | None = None,
    ) -> PaginatedResult[CollectionCardQueryResultDTO]:
        return self.collection_cards.get_cards_in_collection(
            collection_id, options, calling_user_id
        )

    @translate_persistence_errors
    def get_url_card_view(
        self, card_id: str, calling_user_id: str | None = None
    ) -> UrlCardViewDTO | None:
        return self.url_cards.get_url_card_view(card_id, calling_user_id)

    @translate_persistence_errors
    def get_libraries_for_card(self, card_id: str) -> list[str]:
        return self.url_cards.get_libraries_for_card(card_id)

    @translate_persistence_errors
    def get_libraries_for_url(
        self, url: str, options: CardQueryOptions
    ) -> PaginatedResult[LibraryForUrlDTO]:
        return self.url_cards.get_libraries_for_url(url, options)

    @translate_persistence_errors
    def get_note_cards_for_url(
        self, url: str, options: CardQueryOptions
    ) -> PaginatedResult[NoteCardForUrlDTO]:
        return self.note_cards.get_note_cards_for_url(url, options)
