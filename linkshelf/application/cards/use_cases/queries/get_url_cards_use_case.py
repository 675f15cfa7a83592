"""Use case for listing the URL cards in a curator's library."""

from linkshelf.application.cards.dtos import CardSortField, SortOrder, UrlCardQueryResultDTO
from linkshelf.application.cards.parsing import parse_card_query_options, resolve_curator_id
from linkshelf.application.cards.protocols import (
    CardQueryRepositoryProtocol,
    IdentityResolutionServiceProtocol,
)
from linkshelf.application.cards.responses import PageDTO, PaginationInfo, SortingInfo
from linkshelf.application.common.errors import run_query
from linkshelf.application.common.pagination import DEFAULT_PAGE_SIZE
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.exceptions import LinkshelfError


class GetUrlCardsUseCase:
    def __init__(
        self,
        card_query_repository: CardQueryRepositoryProtocol,
        identity_resolver: IdentityResolutionServiceProtocol,
    ) -> None:
        self.card_query_repository = card_query_repository
        self.identity_resolver = identity_resolver

    def get_url_cards(
        self,
        identifier: str,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        sort_by: CardSortField | str | None = None,
        sort_order: SortOrder | str | None = None,
        calling_user_id: str | None = None,
    ) -> Result[PageDTO[UrlCardQueryResultDTO], LinkshelfError]:
        """
        Get one page of the URL cards in a curator's library.

        Args:
            identifier: DID or handle of the library owner
            page: 1-based page number
            limit: Page size; values above 100 are clamped
            sort_by: Card sort field, default updated_at
            sort_order: asc or desc, default desc
            calling_user_id: Viewer, used for the url_in_library flag

        Returns:
            Success with the page, or Failure with ValidationError for bad
            paging input and UnexpectedError when resolution fails
        """
        options = parse_card_query_options(page, limit, sort_by, sort_order)
        if options.is_failure:
            return Failure(options.unwrap_error())

        def query() -> Result[PageDTO[UrlCardQueryResultDTO], LinkshelfError]:
            curator = resolve_curator_id(self.identity_resolver, identifier)
            if curator.is_failure:
                return Failure(curator.unwrap_error())
            query_options = options.unwrap()
            result = self.card_query_repository.get_url_cards_of_user(
                curator.unwrap().value, query_options, calling_user_id
            )
            return Success(
                PageDTO(
                    items=result.items,
                    pagination=PaginationInfo.from_result(result),
                    sorting=SortingInfo(query_options.sort_by, query_options.sort_order),
                )
            )

        return run_query(query)
