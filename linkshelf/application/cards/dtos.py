"""
Read models returned by the card and collection query repositories.

Query repositories never hand out aggregates. They assemble these flat DTOs
directly from storage rows; identifiers are plain strings.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from linkshelf.application.common.pagination import Pagination


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class CardSortField(StrEnum):
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    LIBRARY_COUNT = "library_count"


class CollectionSortField(StrEnum):
    NAME = "name"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    CARD_COUNT = "card_count"


@dataclass(frozen=True)
class CardQueryOptions:
    pagination: Pagination = field(default_factory=Pagination)
    sort_by: CardSortField = CardSortField.UPDATED_AT
    sort_order: SortOrder = SortOrder.DESC


@dataclass(frozen=True)
class CollectionQueryOptions:
    """
    Options for collection list queries.

    ``search_text`` is matched case-insensitively against name or
    description; blank text means no filter.
    """

    pagination: Pagination = field(default_factory=Pagination)
    sort_by: CollectionSortField = CollectionSortField.UPDATED_AT
    sort_order: SortOrder = SortOrder.DESC
    search_text: str | None = None

    @property
    def normalized_search_text(self) -> str | None:
        if self.search_text is None:
            return None
        return self.search_text.strip() or None


@dataclass(frozen=True)
class UrlCardContentDTO:
    url: str
    title: str | None = None
    description: str | None = None
    author: str | None = None
    thumbnail_url: str | None = None
    site_name: str | None = None


@dataclass(frozen=True)
class NoteDTO:
    id: str
    text: str


@dataclass(frozen=True)
class CollectionRefDTO:
    id: str
    name: str
    author_id: str
    uri: str | None = None


@dataclass(frozen=True)
class UrlCardQueryResultDTO:
    """A URL card from a curator's library with its note and collections."""

    id: str
    url: str
    card_content: UrlCardContentDTO
    library_count: int
    url_library_count: int
    url_in_library: bool | None
    created_at: datetime
    updated_at: datetime
    author_id: str
    collections: list[CollectionRefDTO] = field(default_factory=list)
    note: NoteDTO | None = None


@dataclass(frozen=True)
class CollectionCardQueryResultDTO:
    """A URL card inside a collection with the collection author's note."""

    id: str
    url: str
    card_content: UrlCardContentDTO
    library_count: int
    url_library_count: int
    url_in_library: bool | None
    created_at: datetime
    updated_at: datetime
    author_id: str
    note: NoteDTO | None = None


@dataclass(frozen=True)
class UrlCardViewDTO:
    id: str
    url: str
    card_content: UrlCardContentDTO
    library_count: int
    url_library_count: int
    url_in_library: bool | None
    created_at: datetime
    updated_at: datetime
    author_id: str
    in_libraries: list[str] = field(default_factory=list)
    in_collections: list[CollectionRefDTO] = field(default_factory=list)
    note: NoteDTO | None = None


@dataclass(frozen=True)
class LibraryUrlCardDTO:
    """The URL card a curator holds, as shown next to their library entry."""

    id: str
    url: str
    card_content: UrlCardContentDTO
    library_count: int
    url_library_count: int
    url_in_library: bool
    created_at: datetime
    updated_at: datetime
    author_id: str
    note: NoteDTO | None = None


@dataclass(frozen=True)
class LibraryForUrlDTO:
    user_id: str
    card: LibraryUrlCardDTO


@dataclass(frozen=True)
class NoteCardForUrlDTO:
    id: str
    note: str
    author_id: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class CollectionQueryResultDTO:
    id: str
    name: str
    description: str | None
    access_type: str
    card_count: int
    created_at: datetime
    updated_at: datetime
    author_id: str
    uri: str | None = None


@dataclass(frozen=True)
class CollectionContainingCardDTO:
    id: str
    name: str
    description: str | None = None
    uri: str | None = None


@dataclass(frozen=True)
class CollectionForUrlDTO:
    id: str
    name: str
    author_id: str
    description: str | None = None
    uri: str | None = None


class AtUriResourceType(StrEnum):
    COLLECTION = "collection"
    CARD = "card"
    COLLECTION_LINK = "collection_link"


@dataclass(frozen=True)
class CollectionLinkRef:
    collection_id: str
    card_id: str


@dataclass(frozen=True)
class AtUriResolutionResult:
    """Internal resource an AT-URI points at."""

    type: AtUriResourceType
    id: str | CollectionLinkRef
