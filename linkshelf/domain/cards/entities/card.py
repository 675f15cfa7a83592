"""
Card aggregate root.

Encapsulates the business rules for saved content and the personal
libraries it belongs to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from linkshelf.domain.cards.events import CardAddedToLibrary, CardRemovedFromLibrary
from linkshelf.domain.cards.exceptions import CardLibraryError, CardValidationError
from linkshelf.domain.cards.value_objects import (
    CardContent,
    CardType,
    HighlightCardContent,
    LibraryMembership,
    NoteCardContent,
    UrlCardContent,
)
from linkshelf.domain.common.aggregate_root import AggregateRoot
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import URL, CardId, CuratorId, PublishedRecordId

_CONTENT_TYPES: dict[CardType, type] = {
    CardType.URL: UrlCardContent,
    CardType.NOTE: NoteCardContent,
    CardType.HIGHLIGHT: HighlightCardContent,
}


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(eq=False)
class Card(AggregateRoot[CardId]):
    """
    Card aggregate root.

    A card is one piece of saved content owned by exactly one curator.

    Business Rules:
    - Content variant always matches the card type
    - URL cards carry the URL of their content and never have a parent
    - At most one library membership per curator
    - library_count always equals the number of library memberships
    """

    # Identity
    id: CardId
    curator_id: CuratorId

    # Content
    type: CardType
    content: CardContent
    url: URL | None = None
    parent_card_id: CardId | None = None

    # Library
    library_memberships: list[LibraryMembership] = field(default_factory=list)
    library_count: int = 0

    # Provenance
    original_published_record_id: PublishedRecordId | None = None

    # Metadata
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    # Query methods

    @property
    def is_url_card(self) -> bool:
        return self.type == CardType.URL

    @property
    def is_note_card(self) -> bool:
        return self.type == CardType.NOTE

    @property
    def is_highlight_card(self) -> bool:
        return self.type == CardType.HIGHLIGHT

    def is_in_library(self, curator_id: CuratorId) -> bool:
        """Check whether the curator has this card in their library."""
        return self.library_membership_for(curator_id) is not None

    def library_membership_for(self, curator_id: CuratorId) -> LibraryMembership | None:
        for membership in self.library_memberships:
            if membership.curator_id == curator_id:
                return membership
        return None

    def is_owned_by(self, curator_id: CuratorId) -> bool:
        return self.curator_id == curator_id

    # Command methods (state changes)

    def add_to_library(self, curator_id: CuratorId) -> Result[Card, CardLibraryError]:
        """
        Add the card to a curator's library.

        Adding a card that is already in the library succeeds without
        changing anything.

        Args:
            curator_id: Curator whose library receives the card

        Returns:
            Success with this card
        """
        if self.is_in_library(curator_id):
            return Success(self)

        now = _now()
        self.library_memberships.append(LibraryMembership(curator_id=curator_id, added_at=now))
        self.library_count = len(self.library_memberships)
        self.updated_at = now
        self._record_event(CardAddedToLibrary(card_id=self.id, curator_id=curator_id))
        return Success(self)

    def remove_from_library(self, curator_id: CuratorId) -> Result[Card, CardLibraryError]:
        """
        Remove the card from a curator's library.

        Removing a card that is not in the library succeeds without
        changing anything.
        """
        remaining = [m for m in self.library_memberships if m.curator_id != curator_id]
        if len(remaining) == len(self.library_memberships):
            return Success(self)

        self.library_memberships = remaining
        self.library_count = len(remaining)
        self.updated_at = _now()
        self._record_event(CardRemovedFromLibrary(card_id=self.id, curator_id=curator_id))
        return Success(self)

    def mark_card_in_library_as_published(
        self, curator_id: CuratorId, published_record_id: PublishedRecordId
    ) -> Result[Card, CardLibraryError]:
        """
        Attach the provenance record of a library publication.

        Returns:
            Failure with CardLibraryError if the curator has no membership
        """
        for index, membership in enumerate(self.library_memberships):
            if membership.curator_id == curator_id:
                self.library_memberships[index] = membership.with_published_record(
                    published_record_id
                )
                return Success(self)
        return Failure(
            CardLibraryError(
                "Card is not in the curator's library", card_id=self.id, curator_id=curator_id
            )
        )

    def mark_as_published(self, published_record_id: PublishedRecordId) -> None:
        """Record the provenance of the card's first publication."""
        self.original_published_record_id = published_record_id

    def update_content(
        self, content: CardContent, curator_id: CuratorId
    ) -> Result[Card, CardValidationError]:
        """
        Replace the content of a note card.

        Only the owning curator may edit, and only note cards are editable.
        """
        if not self.is_note_card or not isinstance(content, NoteCardContent):
            return Failure(CardValidationError("Only note cards can be updated", field="type"))
        if not self.is_owned_by(curator_id):
            return Failure(
                CardValidationError("Only the author can update this card", field="curator_id")
            )

        self.content = content
        self.updated_at = _now()
        return Success(self)

    def update_note_text(
        self, text: str, curator_id: CuratorId
    ) -> Result[Card, CardValidationError]:
        """Replace the text of a note card, keeping its title."""
        if not isinstance(self.content, NoteCardContent):
            return Failure(CardValidationError("Only note cards can be updated", field="type"))
        try:
            content = self.content.update_text(text)
        except CardValidationError as e:
            return Failure(e)
        return self.update_content(content, curator_id)

    # Factory methods

    @classmethod
    def create(
        cls,
        curator_id: CuratorId,
        type: CardType,
        content: CardContent,
        url: URL | None = None,
        parent_card_id: CardId | None = None,
        library_memberships: list[LibraryMembership] | None = None,
        original_published_record_id: PublishedRecordId | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        id: CardId | None = None,
    ) -> Result[Card, CardValidationError]:
        """
        Create a card after checking that type, content and references agree.

        Args:
            curator_id: Owning curator
            type: Card type
            content: Content variant, must match ``type``
            url: URL the card is about; derived from URL content
            parent_card_id: URL card a note or highlight is attached to
            library_memberships: Initial memberships, deduplicated by curator
            id: Existing identifier, generated when omitted

        Returns:
            Success with the new card, or Failure with CardValidationError
        """
        expected = _CONTENT_TYPES.get(type)
        if expected is None:
            return Failure(CardValidationError("Invalid card type", field="type", value=type))
        if not isinstance(content, expected):
            return Failure(
                CardValidationError(
                    f"Content does not match card type {type}", field="content", value=type
                )
            )

        if isinstance(content, UrlCardContent):
            if url is not None and url != content.url:
                return Failure(
                    CardValidationError("URL card url must match its content", field="url")
                )
            url = content.url
            if parent_card_id is not None:
                return Failure(
                    CardValidationError("URL cards cannot have a parent card", field="parent")
                )
        elif isinstance(content, HighlightCardContent) and url is None:
            url = content.source_url

        memberships: list[LibraryMembership] = []
        seen: set[CuratorId] = set()
        for membership in library_memberships or []:
            if membership.curator_id not in seen:
                seen.add(membership.curator_id)
                memberships.append(membership)

        now = _now()
        created = created_at or now
        return Success(
            cls(
                id=id or CardId.generate(),
                curator_id=curator_id,
                type=type,
                content=content,
                url=url,
                parent_card_id=parent_card_id,
                library_memberships=memberships,
                library_count=len(memberships),
                original_published_record_id=original_published_record_id,
                created_at=created,
                updated_at=updated_at or created,
            )
        )

    @classmethod
    def create_with_id(
        cls,
        id: CardId,
        curator_id: CuratorId,
        type: CardType,
        content: CardContent,
        url: URL | None,
        parent_card_id: CardId | None,
        library_memberships: list[LibraryMembership],
        library_count: int,
        original_published_record_id: PublishedRecordId | None,
        created_at: datetime,
        updated_at: datetime,
        version: int = 0,
    ) -> Card:
        """Reconstitute a card from persistence without validation."""
        return cls(
            id=id,
            curator_id=curator_id,
            type=type,
            content=content,
            url=url,
            parent_card_id=parent_card_id,
            library_memberships=list(library_memberships),
            library_count=library_count,
            original_published_record_id=original_published_record_id,
            created_at=created_at,
            updated_at=updated_at,
            version=version,
        )
