"""Use case for showing a collection with its cards."""

import structlog

from linkshelf.application.cards.dtos import CardQueryOptions, CardSortField, SortOrder
from linkshelf.application.cards.parsing import parse_card_query_options, parse_collection_id
from linkshelf.application.cards.protocols import (
    AtUriResolutionServiceProtocol,
    CardQueryRepositoryProtocol,
    CollectionRepositoryProtocol,
    ProfileServiceProtocol,
)
from linkshelf.application.cards.responses import (
    AuthorDTO,
    CollectionPageDTO,
    PaginationInfo,
    SortingInfo,
)
from linkshelf.application.common.errors import run_query
from linkshelf.application.common.pagination import DEFAULT_PAGE_SIZE
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import CollectionId
from linkshelf.exceptions import LinkshelfError, NotFoundError, UnexpectedError

logger = structlog.get_logger(__name__)


class GetCollectionPageUseCase:
    def __init__(
        self,
        collection_repository: CollectionRepositoryProtocol,
        card_query_repository: CardQueryRepositoryProtocol,
        profile_service: ProfileServiceProtocol,
        at_uri_resolution_service: AtUriResolutionServiceProtocol,
    ) -> None:
        self.collection_repository = collection_repository
        self.card_query_repository = card_query_repository
        self.profile_service = profile_service
        self.at_uri_resolution_service = at_uri_resolution_service

    def get_collection_page(
        self,
        collection_id: str,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        sort_by: CardSortField | str | None = None,
        sort_order: SortOrder | str | None = None,
        calling_user_id: str | None = None,
    ) -> Result[CollectionPageDTO, LinkshelfError]:
        """
        Get a collection, its author profile and one page of its URL cards.

        Returns:
            Success with the page, or Failure with ValidationError,
            NotFoundError when the collection does not exist, or
            UnexpectedError when the author profile cannot be loaded
        """
        parsed_collection = parse_collection_id(collection_id)
        if parsed_collection.is_failure:
            return Failure(parsed_collection.unwrap_error())
        options = parse_card_query_options(page, limit, sort_by, sort_order)
        if options.is_failure:
            return Failure(options.unwrap_error())

        return run_query(
            lambda: self._load(parsed_collection.unwrap(), options.unwrap(), calling_user_id)
        )

    def get_collection_page_by_at_uri(
        self,
        uri: str,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        sort_by: CardSortField | str | None = None,
        sort_order: SortOrder | str | None = None,
        calling_user_id: str | None = None,
    ) -> Result[CollectionPageDTO, LinkshelfError]:
        """Same as get_collection_page, addressing the collection by its published URI."""
        options = parse_card_query_options(page, limit, sort_by, sort_order)
        if options.is_failure:
            return Failure(options.unwrap_error())

        def query() -> Result[CollectionPageDTO, LinkshelfError]:
            collection_id = self.at_uri_resolution_service.resolve_collection_id(uri)
            if collection_id is None:
                return Failure(NotFoundError(message=f"No collection published at {uri}"))
            return self._load(collection_id, options.unwrap(), calling_user_id)

        return run_query(query)

    def _load(
        self,
        collection_id: CollectionId,
        options: CardQueryOptions,
        calling_user_id: str | None,
    ) -> Result[CollectionPageDTO, LinkshelfError]:
        collection = self.collection_repository.find_by_id(collection_id)
        if collection is None:
            return Failure(NotFoundError("Collection", str(collection_id)))

        profile = self.profile_service.get_profile(collection.author_id.value)
        if profile.is_failure:
            error = profile.unwrap_error()
            logger.warning(
                "collection_author_profile_failed",
                collection_id=str(collection_id),
                error=str(error),
            )
            return Failure(UnexpectedError(f"Failed to fetch author profile: {error}", error))

        cards = self.card_query_repository.get_cards_in_collection(
            str(collection_id), options, calling_user_id
        )
        record = collection.published_record_id
        return Success(
            CollectionPageDTO(
                id=str(collection.id),
                name=collection.name,
                description=collection.description,
                author=AuthorDTO.from_profile(profile.unwrap()),
                url_cards=cards.items,
                pagination=PaginationInfo.from_result(cards),
                sorting=SortingInfo(options.sort_by, options.sort_order),
                uri=record.uri if record else None,
            )
        )
