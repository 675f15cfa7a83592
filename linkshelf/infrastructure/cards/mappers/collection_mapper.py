"""Mapper for Collection ORM ↔ Domain conversion."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import structlog

from linkshelf.domain.cards.entities.collection import Collection
from linkshelf.domain.cards.value_objects import CardLink, CollectionAccessType
from linkshelf.domain.common.value_objects import (
    CardId,
    CollectionId,
    CuratorId,
    PublishedRecordId,
)
from linkshelf.infrastructure.cards.mappers.card_mapper import published_record_from
from linkshelf.models import Collection as CollectionORM
from linkshelf.utils import ensure_utc

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CardLinkRow:
    """A collection_cards row joined with its published record."""

    card_id: UUID
    added_by: str
    added_at: datetime
    record_uri: str | None = None
    record_cid: str | None = None


class CollectionMapper:
    """Mapper for Collection ORM ↔ Domain conversion."""

    def to_domain(
        self,
        orm_model: CollectionORM,
        collaborator_ids: Sequence[str],
        card_links: Sequence[CardLinkRow],
    ) -> Collection:
        """Convert ORM model and its child rows to a domain entity."""
        links = [
            CardLink(
                card_id=CardId(row.card_id),
                added_by=CuratorId(row.added_by),
                added_at=ensure_utc(row.added_at),
                published_record_id=published_record_from(row.record_uri, row.record_cid),
            )
            for row in card_links
        ]
        if orm_model.card_count != len(links):
            logger.warning(
                "collection_card_count_reconciled",
                collection_id=str(orm_model.id),
                stored_count=orm_model.card_count,
                link_count=len(links),
            )

        record = orm_model.published_record
        return Collection.create_with_id(
            id=CollectionId(orm_model.id),
            author_id=CuratorId(orm_model.author_id),
            name=orm_model.name,
            description=orm_model.description,
            access_type=CollectionAccessType(orm_model.access_type),
            collaborator_ids=[CuratorId(value) for value in collaborator_ids],
            card_links=links,
            card_count=len(links),
            published_record_id=(
                PublishedRecordId(uri=record.uri, cid=record.cid) if record else None
            ),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
            version=orm_model.version,
        )

    def to_orm(
        self,
        domain_entity: Collection,
        orm_model: CollectionORM | None = None,
        published_record_id: int | None = None,
    ) -> CollectionORM:
        """Convert domain entity to ORM model, bumping the version."""
        if orm_model is None:
            orm_model = CollectionORM(
                id=domain_entity.id.value, author_id=domain_entity.author_id.value
            )

        orm_model.name = domain_entity.name
        orm_model.description = domain_entity.description
        orm_model.access_type = domain_entity.access_type.value
        orm_model.card_count = len(domain_entity.card_links)
        orm_model.published_record_id = published_record_id
        orm_model.created_at = domain_entity.created_at
        orm_model.updated_at = domain_entity.updated_at
        orm_model.version = domain_entity.version + 1
        return orm_model
