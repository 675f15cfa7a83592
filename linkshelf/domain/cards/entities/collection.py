"""
Collection aggregate root.

Encapsulates access control and card membership of curated collections.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from linkshelf.domain.cards.events import (
    CardAddedToCollection,
    CardRemovedFromCollection,
    CollectionCreated,
)
from linkshelf.domain.cards.exceptions import (
    CollectionAccessError,
    CollectionCardLinkError,
    CollectionValidationError,
)
from linkshelf.domain.cards.value_objects import CardLink, CollectionAccessType
from linkshelf.domain.common.aggregate_root import AggregateRoot
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import (
    CardId,
    CollectionId,
    CuratorId,
    PublishedRecordId,
)

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500


def _now() -> datetime:
    return datetime.now(UTC)


def _validate_details(
    name: str | None, description: str | None
) -> Result[tuple[str, str | None], CollectionValidationError]:
    trimmed_name = (name or "").strip()
    if not trimmed_name:
        return Failure(CollectionValidationError("Collection name cannot be empty", field="name"))
    if len(trimmed_name) > MAX_NAME_LENGTH:
        return Failure(
            CollectionValidationError(
                f"Collection name cannot exceed {MAX_NAME_LENGTH} characters", field="name"
            )
        )

    trimmed_description = description.strip() if description else None
    if trimmed_description and len(trimmed_description) > MAX_DESCRIPTION_LENGTH:
        return Failure(
            CollectionValidationError(
                f"Collection description cannot exceed {MAX_DESCRIPTION_LENGTH} characters",
                field="description",
            )
        )
    return Success((trimmed_name, trimmed_description or None))


@dataclass(eq=False)
class Collection(AggregateRoot[CollectionId]):
    """
    Collection aggregate root.

    A named set of cards curated by one author and optionally shared.

    Business Rules:
    - Name is non-empty and at most 100 characters, description at most 500
    - The author can always change the card set
    - OPEN collections accept card changes from anyone
    - CLOSED collections accept card changes from the author and collaborators
    - Only the author manages collaborators, access type and details
    - card_count always equals the number of card links
    """

    # Identity
    id: CollectionId
    author_id: CuratorId

    # Details
    name: str
    description: str | None = None
    access_type: CollectionAccessType = CollectionAccessType.CLOSED

    # Membership
    collaborator_ids: list[CuratorId] = field(default_factory=list)
    card_links: list[CardLink] = field(default_factory=list)
    card_count: int = 0

    # Provenance
    published_record_id: PublishedRecordId | None = None

    # Metadata
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    # Query methods

    @property
    def is_open(self) -> bool:
        return self.access_type == CollectionAccessType.OPEN

    @property
    def is_closed(self) -> bool:
        return self.access_type == CollectionAccessType.CLOSED

    @property
    def card_ids(self) -> list[CardId]:
        return [link.card_id for link in self.card_links]

    def is_author(self, user_id: CuratorId) -> bool:
        return self.author_id == user_id

    def is_collaborator(self, user_id: CuratorId) -> bool:
        return user_id in self.collaborator_ids

    def has_card(self, card_id: CardId) -> bool:
        return any(link.card_id == card_id for link in self.card_links)

    def can_add_card(self, user_id: CuratorId) -> bool:
        """
        Check whether a curator may change the card set.

        Authors always can. OPEN collections admit anyone, CLOSED ones only
        listed collaborators.
        """
        if self.is_author(user_id):
            return True
        if self.is_open:
            return True
        return self.is_collaborator(user_id)

    def can_delete(self, user_id: CuratorId) -> bool:
        return self.is_author(user_id)

    # Command methods (state changes)

    def add_card(
        self, card_id: CardId, user_id: CuratorId
    ) -> Result[CardLink, CollectionAccessError]:
        """
        Link a card to this collection.

        Args:
            card_id: Card to add
            user_id: Curator performing the change

        Returns:
            Success with the (new or existing) link, or Failure with
            CollectionAccessError if the curator may not add cards
        """
        if not self.can_add_card(user_id):
            return Failure(
                CollectionAccessError(
                    "User does not have permission to add cards to this collection"
                )
            )

        for link in self.card_links:
            if link.card_id == card_id:
                return Success(link)

        now = _now()
        link = CardLink(card_id=card_id, added_by=user_id, added_at=now)
        self.card_links.append(link)
        self.card_count = len(self.card_links)
        self.updated_at = now
        self._record_event(
            CardAddedToCollection(collection_id=self.id, card_id=card_id, added_by=user_id)
        )
        return Success(link)

    def remove_card(
        self, card_id: CardId, user_id: CuratorId
    ) -> Result[None, CollectionAccessError]:
        """Unlink a card; removing a card that is not linked is a no-op."""
        if not self.can_add_card(user_id):
            return Failure(
                CollectionAccessError(
                    "User does not have permission to remove cards from this collection"
                )
            )

        remaining = [link for link in self.card_links if link.card_id != card_id]
        if len(remaining) == len(self.card_links):
            return Success(None)

        self.card_links = remaining
        self.card_count = len(remaining)
        self.updated_at = _now()
        self._record_event(
            CardRemovedFromCollection(collection_id=self.id, card_id=card_id, removed_by=user_id)
        )
        return Success(None)

    def remove_deleted_card(self, card_id: CardId) -> CardLink | None:
        """Drop the link to a card that is being deleted, whoever added it."""
        link = self.get_card_link(card_id)
        if link is None:
            return None
        self.card_links = [existing for existing in self.card_links if existing is not link]
        self.card_count = len(self.card_links)
        self.updated_at = _now()
        return link

    def get_card_link(self, card_id: CardId) -> CardLink | None:
        for link in self.card_links:
            if link.card_id == card_id:
                return link
        return None

    def add_collaborator(
        self, collaborator_id: CuratorId, user_id: CuratorId
    ) -> Result[None, CollectionAccessError]:
        if not self.is_author(user_id):
            return Failure(CollectionAccessError("Only the author can add collaborators"))
        if collaborator_id not in self.collaborator_ids:
            self.collaborator_ids.append(collaborator_id)
            self.updated_at = _now()
        return Success(None)

    def remove_collaborator(
        self, collaborator_id: CuratorId, user_id: CuratorId
    ) -> Result[None, CollectionAccessError]:
        if not self.is_author(user_id):
            return Failure(CollectionAccessError("Only the author can remove collaborators"))
        if collaborator_id in self.collaborator_ids:
            self.collaborator_ids = [c for c in self.collaborator_ids if c != collaborator_id]
            self.updated_at = _now()
        return Success(None)

    def change_access_type(
        self, access_type: CollectionAccessType | str, user_id: CuratorId
    ) -> Result[None, CollectionAccessError | CollectionValidationError]:
        if not self.is_author(user_id):
            return Failure(CollectionAccessError("Only the author can change access type"))
        parsed = CollectionAccessType.parse(access_type)
        if parsed.is_failure:
            return Failure(parsed.unwrap_error())
        new_type = parsed.unwrap()
        if new_type != self.access_type:
            self.access_type = new_type
            self.updated_at = _now()
        return Success(None)

    def update_details(
        self, name: str, description: str | None, user_id: CuratorId
    ) -> Result[None, CollectionAccessError | CollectionValidationError]:
        """Rename the collection and replace its description (author only)."""
        if not self.is_author(user_id):
            return Failure(CollectionAccessError("Only the author can update this collection"))
        validated = _validate_details(name, description)
        if validated.is_failure:
            return Failure(validated.unwrap_error())
        self.name, self.description = validated.unwrap()
        self.updated_at = _now()
        return Success(None)

    def mark_as_published(self, published_record_id: PublishedRecordId) -> None:
        self.published_record_id = published_record_id

    def mark_card_link_as_published(
        self, card_id: CardId, published_record_id: PublishedRecordId
    ) -> Result[None, CollectionCardLinkError]:
        """
        Attach the provenance record of a card-link publication.

        Returns:
            Failure with CollectionCardLinkError if the card is not linked
        """
        for index, link in enumerate(self.card_links):
            if link.card_id == card_id:
                self.card_links[index] = link.with_published_record(published_record_id)
                return Success(None)
        return Failure(
            CollectionCardLinkError("Card is not in this collection", card_id=str(card_id))
        )

    # Factory methods

    @classmethod
    def create(
        cls,
        author_id: CuratorId,
        name: str,
        description: str | None = None,
        access_type: CollectionAccessType | str = CollectionAccessType.CLOSED,
        collaborator_ids: list[CuratorId] | None = None,
        card_links: list[CardLink] | None = None,
        published_record_id: PublishedRecordId | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        id: CollectionId | None = None,
    ) -> Result[Collection, CollectionValidationError]:
        """
        Create a collection after validating its details.

        Returns:
            Success with the new collection, or Failure with
            CollectionValidationError for a bad name, description or
            access type
        """
        validated = _validate_details(name, description)
        if validated.is_failure:
            return Failure(validated.unwrap_error())
        parsed_access = CollectionAccessType.parse(access_type)
        if parsed_access.is_failure:
            return Failure(parsed_access.unwrap_error())

        valid_name, valid_description = validated.unwrap()
        collaborators = list(dict.fromkeys(collaborator_ids or []))
        links: list[CardLink] = []
        seen: set[CardId] = set()
        for link in card_links or []:
            if link.card_id not in seen:
                seen.add(link.card_id)
                links.append(link)

        created = created_at or _now()
        collection = cls(
            id=id or CollectionId.generate(),
            author_id=author_id,
            name=valid_name,
            description=valid_description,
            access_type=parsed_access.unwrap(),
            collaborator_ids=collaborators,
            card_links=links,
            card_count=len(links),
            published_record_id=published_record_id,
            created_at=created,
            updated_at=updated_at or created,
        )
        if id is None:
            collection._record_event(
                CollectionCreated(
                    collection_id=collection.id, author_id=author_id, name=valid_name
                )
            )
        return Success(collection)

    @classmethod
    def create_with_id(
        cls,
        id: CollectionId,
        author_id: CuratorId,
        name: str,
        description: str | None,
        access_type: CollectionAccessType,
        collaborator_ids: list[CuratorId],
        card_links: list[CardLink],
        card_count: int,
        published_record_id: PublishedRecordId | None,
        created_at: datetime,
        updated_at: datetime,
        version: int = 0,
    ) -> Collection:
        """Reconstitute a collection from persistence without validation."""
        return cls(
            id=id,
            author_id=author_id,
            name=name,
            description=description,
            access_type=access_type,
            collaborator_ids=list(collaborator_ids),
            card_links=list(card_links),
            card_count=card_count,
            published_record_id=published_record_id,
            created_at=created_at,
            updated_at=updated_at,
            version=version,
        )
