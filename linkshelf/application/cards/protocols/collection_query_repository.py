from typing import Protocol

from linkshelf.application.cards.dtos import (
    CollectionContainingCardDTO,
    CollectionForUrlDTO,
    CollectionQueryOptions,
    CollectionQueryResultDTO,
)
from linkshelf.application.common.pagination import PaginatedResult


class CollectionQueryRepositoryProtocol(Protocol):
    def find_by_creator(
        self, curator_id: str, options: CollectionQueryOptions
    ) -> PaginatedResult[CollectionQueryResultDTO]: ...

    def get_collections_containing_card_for_user(
        self, card_id: str, curator_id: str
    ) -> list[CollectionContainingCardDTO]: ...

    def get_collections_with_url(
        self, url: str, options: CollectionQueryOptions
    ) -> PaginatedResult[CollectionForUrlDTO]: ...
