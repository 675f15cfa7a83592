"""Use case for listing a curator's collections."""

from linkshelf.application.cards.dtos import CollectionSortField, SortOrder
from linkshelf.application.cards.parsing import (
    parse_collection_query_options,
    resolve_curator_id,
)
from linkshelf.application.cards.protocols import (
    CollectionQueryRepositoryProtocol,
    IdentityResolutionServiceProtocol,
    ProfileServiceProtocol,
)
from linkshelf.application.cards.responses import (
    AuthorDTO,
    CollectionListItemDTO,
    PageDTO,
    PaginationInfo,
    SortingInfo,
)
from linkshelf.application.common.errors import run_query
from linkshelf.application.common.pagination import DEFAULT_PAGE_SIZE
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.exceptions import LinkshelfError, UnexpectedError


class GetCollectionsUseCase:
    def __init__(
        self,
        collection_query_repository: CollectionQueryRepositoryProtocol,
        profile_service: ProfileServiceProtocol,
        identity_resolver: IdentityResolutionServiceProtocol,
    ) -> None:
        self.collection_query_repository = collection_query_repository
        self.profile_service = profile_service
        self.identity_resolver = identity_resolver

    def get_collections(
        self,
        identifier: str,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        sort_by: CollectionSortField | str | None = None,
        sort_order: SortOrder | str | None = None,
        search_text: str | None = None,
    ) -> Result[PageDTO[CollectionListItemDTO], LinkshelfError]:
        """
        Get one page of the collections a curator authored.

        ``search_text`` filters by name or description; blank text lists
        everything. Every item carries the author's profile.
        """
        options = parse_collection_query_options(page, limit, sort_by, sort_order, search_text)
        if options.is_failure:
            return Failure(options.unwrap_error())

        def query() -> Result[PageDTO[CollectionListItemDTO], LinkshelfError]:
            curator = resolve_curator_id(self.identity_resolver, identifier)
            if curator.is_failure:
                return Failure(curator.unwrap_error())
            curator_id = curator.unwrap()

            query_options = options.unwrap()
            result = self.collection_query_repository.find_by_creator(
                curator_id.value, query_options
            )
            profile = self.profile_service.get_profile(curator_id.value)
            if profile.is_failure:
                error = profile.unwrap_error()
                return Failure(UnexpectedError(f"Failed to fetch author profile: {error}", error))
            author = AuthorDTO.from_profile(profile.unwrap())

            items = [
                CollectionListItemDTO(
                    id=item.id,
                    name=item.name,
                    description=item.description,
                    card_count=item.card_count,
                    created_at=item.created_at,
                    updated_at=item.updated_at,
                    created_by=author,
                    uri=item.uri,
                )
                for item in result.items
            ]
            return Success(
                PageDTO(
                    items=items,
                    pagination=PaginationInfo.from_result(result),
                    sorting=SortingInfo(query_options.sort_by, query_options.sort_order),
                )
            )

        return run_query(query)
