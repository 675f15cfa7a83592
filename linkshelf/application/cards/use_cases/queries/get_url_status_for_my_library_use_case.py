"""Use case for checking whether a curator already saved a URL."""

from linkshelf.application.cards.parsing import parse_curator_id, parse_url
from linkshelf.application.cards.protocols import (
    CardRepositoryProtocol,
    CollectionQueryRepositoryProtocol,
)
from linkshelf.application.cards.responses import UrlStatusDTO
from linkshelf.application.common.errors import run_query
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import URL, CuratorId
from linkshelf.exceptions import LinkshelfError


class GetUrlStatusForMyLibraryUseCase:
    def __init__(
        self,
        card_repository: CardRepositoryProtocol,
        collection_query_repository: CollectionQueryRepositoryProtocol,
    ) -> None:
        self.card_repository = card_repository
        self.collection_query_repository = collection_query_repository

    def get_url_status(self, url: str, curator_id: str) -> Result[UrlStatusDTO, LinkshelfError]:
        """
        Get the caller's URL card for a URL and the caller's collections holding it.

        An empty status is returned when the caller has no card for the URL.
        """
        parsed_curator = parse_curator_id(curator_id)
        if parsed_curator.is_failure:
            return Failure(parsed_curator.unwrap_error())
        parsed_url = parse_url(url)
        if parsed_url.is_failure:
            return Failure(parsed_url.unwrap_error())

        return run_query(lambda: self._status(parsed_url.unwrap(), parsed_curator.unwrap()))

    def _status(self, url: URL, curator_id: CuratorId) -> Result[UrlStatusDTO, LinkshelfError]:
        card = self.card_repository.find_users_url_card_by_url(url, curator_id)
        if card is None:
            return Success(UrlStatusDTO())
        collections = self.collection_query_repository.get_collections_containing_card_for_user(
            str(card.id), curator_id.value
        )
        return Success(UrlStatusDTO(card_id=str(card.id), collections=collections))
