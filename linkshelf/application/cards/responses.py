"""Response shapes returned by the card and collection use cases."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, TypeVar

from linkshelf.application.cards.dtos import (
    CardSortField,
    CollectionCardQueryResultDTO,
    CollectionContainingCardDTO,
    CollectionSortField,
    SortOrder,
)
from linkshelf.application.cards.protocols import Profile
from linkshelf.application.common.pagination import PaginatedResult

T = TypeVar("T")


@dataclass(frozen=True)
class AuthorDTO:
    id: str
    name: str
    handle: str
    avatar_url: str | None = None
    description: str | None = None

    @classmethod
    def from_profile(cls, profile: Profile) -> "AuthorDTO":
        return cls(
            id=profile.id,
            name=profile.name,
            handle=profile.handle,
            avatar_url=profile.avatar_url,
            description=profile.description,
        )


@dataclass(frozen=True)
class PaginationInfo:
    current_page: int
    total_pages: int
    total_count: int
    has_more: bool
    limit: int

    @classmethod
    def from_result(cls, result: PaginatedResult[Any]) -> "PaginationInfo":
        return cls(
            current_page=result.page,
            total_pages=result.total_pages,
            total_count=result.total_count,
            has_more=result.has_more,
            limit=result.limit,
        )


@dataclass(frozen=True)
class SortingInfo:
    sort_by: CardSortField | CollectionSortField
    sort_order: SortOrder


@dataclass(frozen=True)
class PageDTO(Generic[T]):
    """One page of a list query with its pagination and sorting blocks."""

    items: list[T]
    pagination: PaginationInfo
    sorting: SortingInfo


@dataclass(frozen=True)
class AddUrlToLibraryResponse:
    url_card_id: str
    note_card_id: str | None = None


@dataclass(frozen=True)
class CollectionPageDTO:
    """A collection with its author and one page of its URL cards."""

    id: str
    name: str
    description: str | None
    author: AuthorDTO
    url_cards: list[CollectionCardQueryResultDTO]
    pagination: PaginationInfo
    sorting: SortingInfo
    uri: str | None = None


@dataclass(frozen=True)
class CollectionListItemDTO:
    id: str
    name: str
    description: str | None
    card_count: int
    created_at: datetime
    updated_at: datetime
    created_by: AuthorDTO
    uri: str | None = None


@dataclass(frozen=True)
class UrlStatusDTO:
    """Whether the caller holds a URL and which of their collections contain it."""

    card_id: str | None = None
    collections: list[CollectionContainingCardDTO] = field(default_factory=list)
