"""Use case for listing the collections that hold a URL."""

from linkshelf.application.cards.dtos import CollectionForUrlDTO, CollectionSortField, SortOrder
from linkshelf.application.cards.parsing import parse_collection_query_options, parse_url
from linkshelf.application.cards.protocols import CollectionQueryRepositoryProtocol
from linkshelf.application.cards.responses import PageDTO, PaginationInfo, SortingInfo
from linkshelf.application.common.errors import run_query
from linkshelf.application.common.pagination import DEFAULT_PAGE_SIZE
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.exceptions import LinkshelfError


class GetCollectionsForUrlUseCase:
    def __init__(self, collection_query_repository: CollectionQueryRepositoryProtocol) -> None:
        self.collection_query_repository = collection_query_repository

    def get_collections_for_url(
        self,
        url: str,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        sort_by: CollectionSortField | str | None = None,
        sort_order: SortOrder | str | None = None,
    ) -> Result[PageDTO[CollectionForUrlDTO], LinkshelfError]:
        parsed_url = parse_url(url)
        if parsed_url.is_failure:
            return Failure(parsed_url.unwrap_error())
        options = parse_collection_query_options(page, limit, sort_by, sort_order)
        if options.is_failure:
            return Failure(options.unwrap_error())

        def query() -> Result[PageDTO[CollectionForUrlDTO], LinkshelfError]:
            query_options = options.unwrap()
            result = self.collection_query_repository.get_collections_with_url(
                parsed_url.unwrap().value, query_options
            )
            return Success(
                PageDTO(
                    items=result.items,
                    pagination=PaginationInfo.from_result(result),
                    sorting=SortingInfo(query_options.sort_by, query_options.sort_order),
                )
            )

        return run_query(query)
