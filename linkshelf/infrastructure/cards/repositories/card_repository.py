"""Repository for Card aggregates."""

from collections import defaultdict
from collections.abc import Sequence
from uuid import UUID

import structlog
from sqlalchemy import delete, insert, select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from linkshelf.domain.cards.entities.card import Card
from linkshelf.domain.cards.value_objects import CardType
from linkshelf.domain.common.value_objects import URL, CardId, CuratorId
from linkshelf.exceptions import ConcurrencyConflictError
from linkshelf.infrastructure.cards.mappers.card_mapper import CardMapper, LibraryMembershipRow
from linkshelf.infrastructure.cards.repositories.published_record_repository import (
    PublishedRecordRepository,
)
from linkshelf.infrastructure.common.errors import translate_persistence_errors
from linkshelf.models import Card as CardORM
from linkshelf.models import CollectionCard as CollectionCardORM
from linkshelf.models import LibraryMembership as LibraryMembershipORM
from linkshelf.models import PublishedRecord as PublishedRecordORM

logger = structlog.get_logger(__name__)


class CardRepository:
    """
    Repository for Card aggregates.

    Saving writes the card row and replaces all of its library membership
    rows. The caller's unit of work owns the transaction.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CardMapper()
        self.published_records = PublishedRecordRepository(db)

    @translate_persistence_errors
    def find_by_id(self, card_id: CardId) -> Card | None:
        """
        Find a card by ID.

        Args:
            card_id: The card ID

        Returns:
            Card entity with its library memberships, or None
        """
        stmt = (
            select(CardORM)
            .where(CardORM.id == card_id.value)
            .execution_options(populate_existing=True)
        )
        orm_model = self.db.execute(stmt).unique().scalar_one_or_none()
        if orm_model is None:
            return None
        return self._to_domain([orm_model])[0]

    @translate_persistence_errors
    def find_users_url_card_by_url(self, url: URL, curator_id: CuratorId) -> Card | None:
        """Find the URL card a curator created for the given URL."""
        return self._find_one_by_url(url, curator_id, CardType.URL)

    @translate_persistence_errors
    def find_users_note_card_by_url(self, url: URL, curator_id: CuratorId) -> Card | None:
        """Find the note card a curator wrote for the given URL."""
        return self._find_one_by_url(url, curator_id, CardType.NOTE)

    @translate_persistence_errors
    def find_note_cards_by_parent(self, parent_card_id: CardId) -> list[Card]:
        stmt = (
            select(CardORM)
            .where(
                CardORM.parent_card_id == parent_card_id.value,
                CardORM.type == CardType.NOTE.value,
            )
            .order_by(CardORM.created_at, CardORM.id)
            .execution_options(populate_existing=True)
        )
        return self._to_domain(self.db.execute(stmt).unique().scalars().all())

    @translate_persistence_errors
    def save(self, card: Card) -> Card:
        """
        Save a card and replace its library memberships.

        Args:
            card: The card entity to save

        Returns:
            The saved card with its version advanced

        Raises:
            ConcurrencyConflictError: If the stored card changed since it was loaded
        """
        existing = self.db.execute(
            select(CardORM)
            .where(CardORM.id == card.id.value)
            .execution_options(populate_existing=True)
        ).unique().scalar_one_or_none()
        self._check_version(card, existing)

        record_id = self.published_records.get_or_create_optional(
            card.original_published_record_id
        )
        orm_model = self.mapper.to_orm(card, existing, published_record_id=record_id)
        if existing is None:
            self.db.add(orm_model)
        try:
            self.db.flush()
        except StaleDataError as e:
            raise ConcurrencyConflictError("Card", card.id, card.version) from e

        self._replace_memberships(card)
        card.version = orm_model.version
        logger.debug(
            "card_saved",
            card_id=str(card.id),
            version=card.version,
            library_count=card.library_count,
        )
        return card

    @translate_persistence_errors
    def delete(self, card_id: CardId) -> bool:
        """
        Delete a card together with its memberships and collection links.

        Returns:
            True if deleted, False if not found
        """
        orm_model = self.db.execute(
            select(CardORM).where(CardORM.id == card_id.value)
        ).unique().scalar_one_or_none()
        if orm_model is None:
            return False

        self.db.execute(
            delete(LibraryMembershipORM)
            .where(LibraryMembershipORM.card_id == card_id.value)
            .execution_options(synchronize_session=False)
        )
        self.db.execute(
            delete(CollectionCardORM)
            .where(CollectionCardORM.card_id == card_id.value)
            .execution_options(synchronize_session=False)
        )
        self.db.delete(orm_model)
        try:
            self.db.flush()
        except StaleDataError as e:
            raise ConcurrencyConflictError("Card", card_id, orm_model.version) from e
        logger.debug("card_deleted", card_id=str(card_id))
        return True

    def _find_one_by_url(self, url: URL, curator_id: CuratorId, card_type: CardType) -> Card | None:
        stmt = (
            select(CardORM)
            .where(
                CardORM.url == url.value,
                CardORM.curator_id == curator_id.value,
                CardORM.type == card_type.value,
            )
            .order_by(CardORM.created_at, CardORM.id)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        orm_model = self.db.execute(stmt).unique().scalar_one_or_none()
        if orm_model is None:
            return None
        return self._to_domain([orm_model])[0]

    def _check_version(self, card: Card, existing: CardORM | None) -> None:
        if existing is None and card.version != 0:
            raise ConcurrencyConflictError("Card", card.id, card.version)
        if existing is not None and existing.version != card.version:
            logger.warning(
                "card_version_conflict",
                card_id=str(card.id),
                expected_version=card.version,
                stored_version=existing.version,
            )
            raise ConcurrencyConflictError("Card", card.id, card.version)

    def _replace_memberships(self, card: Card) -> None:
        self.db.execute(
            delete(LibraryMembershipORM)
            .where(LibraryMembershipORM.card_id == card.id.value)
            .execution_options(synchronize_session=False)
        )
        rows = [
            {
                "card_id": card.id.value,
                "user_id": membership.curator_id.value,
                "added_at": membership.added_at,
                "published_record_id": self.published_records.get_or_create_optional(
                    membership.published_record_id
                ),
            }
            for membership in card.library_memberships
        ]
        if rows:
            self.db.execute(insert(LibraryMembershipORM), rows)

    def _load_memberships(
        self, card_ids: Sequence[UUID]
    ) -> dict[UUID, list[LibraryMembershipRow]]:
        stmt = (
            select(
                LibraryMembershipORM.card_id,
                LibraryMembershipORM.user_id,
                LibraryMembershipORM.added_at,
                PublishedRecordORM.uri,
                PublishedRecordORM.cid,
            )
            .outerjoin(
                PublishedRecordORM,
                LibraryMembershipORM.published_record_id == PublishedRecordORM.id,
            )
            .where(LibraryMembershipORM.card_id.in_(card_ids))
            .order_by(LibraryMembershipORM.added_at, LibraryMembershipORM.user_id)
        )
        memberships: dict[UUID, list[LibraryMembershipRow]] = defaultdict(list)
        for row in self.db.execute(stmt):
            memberships[row.card_id].append(
                LibraryMembershipRow(
                    user_id=row.user_id,
                    added_at=row.added_at,
                    record_uri=row.uri,
                    record_cid=row.cid,
                )
            )
        return memberships

    def _to_domain(self, orm_models: Sequence[CardORM]) -> list[Card]:
        if not orm_models:
            return []
        memberships = self._load_memberships([orm.id for orm in orm_models])
        return [self.mapper.to_domain(orm, memberships.get(orm.id, [])) for orm in orm_models]
