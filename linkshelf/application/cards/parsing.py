"""Conversion of raw use case input into domain value objects."""

from linkshelf.application.cards.dtos import (
    CardQueryOptions,
    CardSortField,
    CollectionQueryOptions,
    CollectionSortField,
    SortOrder,
)
from linkshelf.application.cards.protocols import IdentityResolutionServiceProtocol
from linkshelf.application.common.pagination import Pagination
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import (
    URL,
    CardId,
    CollectionId,
    CuratorId,
    DIDOrHandle,
)
from linkshelf.exceptions import LinkshelfError, UnexpectedError, ValidationError


def parse_curator_id(value: str) -> Result[CuratorId, ValidationError]:
    parsed = CuratorId.create(value)
    if parsed.is_failure:
        return Failure(ValidationError(f"Invalid curator ID: {parsed.unwrap_error().message}"))
    return Success(parsed.unwrap())


def parse_url(value: str) -> Result[URL, ValidationError]:
    parsed = URL.create(value)
    if parsed.is_failure:
        return Failure(ValidationError(f"Invalid URL: {parsed.unwrap_error().message}"))
    return Success(parsed.unwrap())


def parse_card_id(value: str) -> Result[CardId, ValidationError]:
    parsed = CardId.create(value)
    if parsed.is_failure:
        return Failure(ValidationError("Invalid card ID"))
    return Success(parsed.unwrap())


def parse_collection_id(value: str) -> Result[CollectionId, ValidationError]:
    parsed = CollectionId.create(value)
    if parsed.is_failure:
        return Failure(ValidationError("Invalid collection ID"))
    return Success(parsed.unwrap())


def parse_collection_ids(
    values: list[str] | None,
) -> Result[list[CollectionId], ValidationError]:
    """Parse a list of collection ids, dropping duplicates but keeping order."""
    collection_ids: list[CollectionId] = []
    for value in values or []:
        parsed = parse_collection_id(value)
        if parsed.is_failure:
            return Failure(parsed.unwrap_error())
        collection_id = parsed.unwrap()
        if collection_id not in collection_ids:
            collection_ids.append(collection_id)
    return Success(collection_ids)


def parse_identifier(value: str) -> Result[DIDOrHandle, ValidationError]:
    parsed = DIDOrHandle.create(value)
    if parsed.is_failure:
        return Failure(ValidationError(f"Invalid identifier: {parsed.unwrap_error().message}"))
    return Success(parsed.unwrap())


def parse_pagination(page: int, limit: int) -> Result[Pagination, ValidationError]:
    """Validate page and limit; limits above the maximum are clamped."""
    try:
        return Success(Pagination.from_request(page, limit))
    except ValueError as e:
        return Failure(ValidationError(str(e)))


def parse_card_query_options(
    page: int,
    limit: int,
    sort_by: CardSortField | str | None = None,
    sort_order: SortOrder | str | None = None,
) -> Result[CardQueryOptions, ValidationError]:
    pagination = parse_pagination(page, limit)
    if pagination.is_failure:
        return Failure(pagination.unwrap_error())
    try:
        sort_field = CardSortField(sort_by) if sort_by else CardSortField.UPDATED_AT
        order = SortOrder(sort_order) if sort_order else SortOrder.DESC
    except ValueError as e:
        return Failure(ValidationError(f"Invalid sort option: {e}"))
    return Success(
        CardQueryOptions(pagination=pagination.unwrap(), sort_by=sort_field, sort_order=order)
    )


def parse_collection_query_options(
    page: int,
    limit: int,
    sort_by: CollectionSortField | str | None = None,
    sort_order: SortOrder | str | None = None,
    search_text: str | None = None,
) -> Result[CollectionQueryOptions, ValidationError]:
    pagination = parse_pagination(page, limit)
    if pagination.is_failure:
        return Failure(pagination.unwrap_error())
    try:
        sort_field = CollectionSortField(sort_by) if sort_by else CollectionSortField.UPDATED_AT
        order = SortOrder(sort_order) if sort_order else SortOrder.DESC
    except ValueError as e:
        return Failure(ValidationError(f"Invalid sort option: {e}"))
    return Success(
        CollectionQueryOptions(
            pagination=pagination.unwrap(),
            sort_by=sort_field,
            sort_order=order,
            search_text=search_text,
        )
    )


def resolve_curator_id(
    identity_resolver: IdentityResolutionServiceProtocol, identifier: str
) -> Result[CuratorId, LinkshelfError]:
    """Resolve a DID or handle to the canonical curator id."""
    parsed = parse_identifier(identifier)
    if parsed.is_failure:
        return Failure(parsed.unwrap_error())
    resolved = identity_resolver.resolve_to_canonical_id(parsed.unwrap())
    if resolved.is_failure:
        error = resolved.unwrap_error()
        return Failure(UnexpectedError(f"Could not resolve identifier: {error}", error))
    return Success(resolved.unwrap())
