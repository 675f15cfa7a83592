"""Repository for Collection aggregates."""

from collections import defaultdict
from collections.abc import Sequence
from uuid import UUID

import structlog
from sqlalchemy import delete, insert, select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from linkshelf.domain.cards.entities.collection import Collection
from linkshelf.domain.common.value_objects import CardId, CollectionId, CuratorId
from linkshelf.exceptions import ConcurrencyConflictError
from linkshelf.infrastructure.cards.mappers.collection_mapper import CardLinkRow, CollectionMapper
from linkshelf.infrastructure.cards.repositories.published_record_repository import (
    PublishedRecordRepository,
)
from linkshelf.infrastructure.common.errors import translate_persistence_errors
from linkshelf.models import Collection as CollectionORM
from linkshelf.models import CollectionCard as CollectionCardORM
from linkshelf.models import CollectionCollaborator as CollectionCollaboratorORM
from linkshelf.models import PublishedRecord as PublishedRecordORM

logger = structlog.get_logger(__name__)


class CollectionRepository:
    """
    Repository for Collection aggregates.

    Saving writes the collection row and replaces its collaborator and
    card link rows inside the caller's transaction.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CollectionMapper()
        self.published_records = PublishedRecordRepository(db)

    @translate_persistence_errors
    def find_by_id(self, collection_id: CollectionId) -> Collection | None:
        """
        Find a collection by ID.

        Args:
            collection_id: The collection ID

        Returns:
            Collection entity with collaborators and card links, or None
        """
        stmt = (
            select(CollectionORM)
            .where(CollectionORM.id == collection_id.value)
            .execution_options(populate_existing=True)
        )
        orm_model = self.db.execute(stmt).unique().scalar_one_or_none()
        if orm_model is None:
            return None
        return self._to_domain([orm_model])[0]

    @translate_persistence_errors
    def find_by_curator_id(self, curator_id: CuratorId) -> list[Collection]:
        """Get all collections authored by a curator, ordered by name."""
        stmt = (
            select(CollectionORM)
            .where(CollectionORM.author_id == curator_id.value)
            .order_by(CollectionORM.name, CollectionORM.id)
            .execution_options(populate_existing=True)
        )
        return self._to_domain(self.db.execute(stmt).unique().scalars().all())

    @translate_persistence_errors
    def find_by_card_id(self, card_id: CardId) -> list[Collection]:
        """Get every collection, of any author, that links the card."""
        linked = select(CollectionCardORM.collection_id).where(
            CollectionCardORM.card_id == card_id.value
        )
        stmt = (
            select(CollectionORM)
            .where(CollectionORM.id.in_(linked))
            .order_by(CollectionORM.name, CollectionORM.id)
            .execution_options(populate_existing=True)
        )
        return self._to_domain(self.db.execute(stmt).unique().scalars().all())

    @translate_persistence_errors
    def save(self, collection: Collection) -> Collection:
        """
        Save a collection and replace its collaborators and card links.

        Raises:
            ConcurrencyConflictError: If the stored collection changed since it was loaded
        """
        existing = self.db.execute(
            select(CollectionORM)
            .where(CollectionORM.id == collection.id.value)
            .execution_options(populate_existing=True)
        ).unique().scalar_one_or_none()
        self._check_version(collection, existing)

        record_id = self.published_records.get_or_create_optional(collection.published_record_id)
        orm_model = self.mapper.to_orm(collection, existing, published_record_id=record_id)
        if existing is None:
            self.db.add(orm_model)
        try:
            self.db.flush()
        except StaleDataError as e:
            raise ConcurrencyConflictError("Collection", collection.id, collection.version) from e

        self._replace_children(collection)
        collection.version = orm_model.version
        logger.debug(
            "collection_saved",
            collection_id=str(collection.id),
            version=collection.version,
            card_count=collection.card_count,
        )
        return collection

    @translate_persistence_errors
    def delete(self, collection_id: CollectionId) -> bool:
        """
        Delete a collection with its collaborators and card links.

        Returns:
            True if deleted, False if not found
        """
        orm_model = self.db.execute(
            select(CollectionORM).where(CollectionORM.id == collection_id.value)
        ).unique().scalar_one_or_none()
        if orm_model is None:
            return False

        self._delete_children(collection_id.value)
        self.db.delete(orm_model)
        try:
            self.db.flush()
        except StaleDataError as e:
            raise ConcurrencyConflictError("Collection", collection_id, orm_model.version) from e
        logger.debug("collection_deleted", collection_id=str(collection_id))
        return True

    def _check_version(self, collection: Collection, existing: CollectionORM | None) -> None:
        if existing is None and collection.version != 0:
            raise ConcurrencyConflictError("Collection", collection.id, collection.version)
        if existing is not None and existing.version != collection.version:
            logger.warning(
                "collection_version_conflict",
                collection_id=str(collection.id),
                expected_version=collection.version,
                stored_version=existing.version,
            )
            raise ConcurrencyConflictError("Collection", collection.id, collection.version)

    def _delete_children(self, collection_id: UUID) -> None:
        self.db.execute(
            delete(CollectionCollaboratorORM)
            .where(CollectionCollaboratorORM.collection_id == collection_id)
            .execution_options(synchronize_session=False)
        )
        self.db.execute(
            delete(CollectionCardORM)
            .where(CollectionCardORM.collection_id == collection_id)
            .execution_options(synchronize_session=False)
        )

    def _replace_children(self, collection: Collection) -> None:
        self._delete_children(collection.id.value)

        collaborator_rows = [
            {"collection_id": collection.id.value, "collaborator_id": collaborator.value}
            for collaborator in collection.collaborator_ids
        ]
        if collaborator_rows:
            self.db.execute(insert(CollectionCollaboratorORM), collaborator_rows)

        link_rows = [
            {
                "collection_id": collection.id.value,
                "card_id": link.card_id.value,
                "added_by": link.added_by.value,
                "added_at": link.added_at,
                "published_record_id": self.published_records.get_or_create_optional(
                    link.published_record_id
                ),
            }
            for link in collection.card_links
        ]
        if link_rows:
            self.db.execute(insert(CollectionCardORM), link_rows)

    def _to_domain(self, orm_models: Sequence[CollectionORM]) -> list[Collection]:
        if not orm_models:
            return []
        ids = [orm.id for orm in orm_models]

        collaborators: dict[UUID, list[str]] = defaultdict(list)
        collaborator_stmt = (
            select(
                CollectionCollaboratorORM.collection_id,
                CollectionCollaboratorORM.collaborator_id,
            )
            .where(CollectionCollaboratorORM.collection_id.in_(ids))
            .order_by(CollectionCollaboratorORM.collaborator_id)
        )
        for row in self.db.execute(collaborator_stmt):
            collaborators[row.collection_id].append(row.collaborator_id)

        links: dict[UUID, list[CardLinkRow]] = defaultdict(list)
        link_stmt = (
            select(
                CollectionCardORM.collection_id,
                CollectionCardORM.card_id,
                CollectionCardORM.added_by,
                CollectionCardORM.added_at,
                PublishedRecordORM.uri,
                PublishedRecordORM.cid,
            )
            .outerjoin(
                PublishedRecordORM,
                CollectionCardORM.published_record_id == PublishedRecordORM.id,
            )
            .where(CollectionCardORM.collection_id.in_(ids))
            .order_by(CollectionCardORM.added_at, CollectionCardORM.card_id)
        )
        for row in self.db.execute(link_stmt):
            links[row.collection_id].append(
                CardLinkRow(
                    card_id=row.card_id,
                    added_by=row.added_by,
                    added_at=row.added_at,
                    record_uri=row.uri,
                    record_cid=row.cid,
                )
            )

        return [
            self.mapper.to_domain(orm, collaborators.get(orm.id, []), links.get(orm.id, []))
            for orm in orm_models
        ]
