from typing import Protocol

from linkshelf.application.cards.dtos import (
    CardQueryOptions,
    CollectionCardQueryResultDTO,
    LibraryForUrlDTO,
    NoteCardForUrlDTO,
    UrlCardQueryResultDTO,
    UrlCardViewDTO,
)
from linkshelf.application.common.pagination import PaginatedResult


class CardQueryRepositoryProtocol(Protocol):
    def get_url_cards_of_user(
        self,
        curator_id: str,
        options: CardQueryOptions,
        calling_user_id: str | None = None,
    ) -> PaginatedResult[UrlCardQueryResultDTO]: ...

    def get_cards_in_collection(
        self,
        collection_id: str,
        options: CardQueryOptions,
        calling_user_id: str | None = None,
    ) -> PaginatedResult[CollectionCardQueryResultDTO]: ...

    def get_url_card_view(
        self, card_id: str, calling_user_id: str | None = None
    ) -> UrlCardViewDTO | None: ...

    def get_libraries_for_card(self, card_id: str) -> list[str]: ...

    def get_libraries_for_url(
        self, url: str, options: CardQueryOptions
    ) -> PaginatedResult[LibraryForUrlDTO]: ...

    def get_note_cards_for_url(
        self, url: str, options: CardQueryOptions
    ) -> PaginatedResult[NoteCardForUrlDTO]: ...
