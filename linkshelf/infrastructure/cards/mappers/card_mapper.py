"""Mapper for Card ORM ↔ Domain conversion."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

import structlog

from linkshelf.domain.cards.entities.card import Card
from linkshelf.domain.cards.value_objects import (
    CardType,
    LibraryMembership,
    card_content_from_dict,
)
from linkshelf.domain.common.value_objects import URL, CardId, CuratorId, PublishedRecordId
from linkshelf.models import Card as CardORM
from linkshelf.utils import ensure_utc

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LibraryMembershipRow:
    """A library membership row joined with its published record."""

    user_id: str
    added_at: datetime
    record_uri: str | None = None
    record_cid: str | None = None


def published_record_from(uri: str | None, cid: str | None) -> PublishedRecordId | None:
    if uri is None or cid is None:
        return None
    return PublishedRecordId(uri=uri, cid=cid)


class CardMapper:
    """Mapper for Card ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: CardORM, memberships: Sequence[LibraryMembershipRow]) -> Card:
        """
        Convert ORM model and its membership rows to a domain entity.

        A stored library_count that disagrees with the membership rows is
        replaced by the row count.
        """
        library_memberships = [
            LibraryMembership(
                curator_id=CuratorId(row.user_id),
                added_at=ensure_utc(row.added_at),
                published_record_id=published_record_from(row.record_uri, row.record_cid),
            )
            for row in memberships
        ]
        if orm_model.library_count != len(library_memberships):
            logger.warning(
                "card_library_count_reconciled",
                card_id=str(orm_model.id),
                stored_count=orm_model.library_count,
                membership_count=len(library_memberships),
            )

        record = orm_model.published_record
        return Card.create_with_id(
            id=CardId(orm_model.id),
            curator_id=CuratorId(orm_model.curator_id),
            type=CardType(orm_model.type),
            content=card_content_from_dict(orm_model.content_data),
            url=URL(orm_model.url) if orm_model.url else None,
            parent_card_id=CardId(orm_model.parent_card_id) if orm_model.parent_card_id else None,
            library_memberships=library_memberships,
            library_count=len(library_memberships),
            original_published_record_id=(
                PublishedRecordId(uri=record.uri, cid=record.cid) if record else None
            ),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
            version=orm_model.version,
        )

    def to_orm(
        self,
        domain_entity: Card,
        orm_model: CardORM | None = None,
        published_record_id: int | None = None,
    ) -> CardORM:
        """Convert domain entity to ORM model, bumping the version."""
        if orm_model is None:
            orm_model = CardORM(
                id=domain_entity.id.value, curator_id=domain_entity.curator_id.value
            )

        orm_model.type = domain_entity.type.value
        orm_model.content_data = domain_entity.content.to_dict()
        orm_model.url = domain_entity.url.value if domain_entity.url else None
        orm_model.parent_card_id = (
            domain_entity.parent_card_id.value if domain_entity.parent_card_id else None
        )
        orm_model.published_record_id = published_record_id
        orm_model.library_count = len(domain_entity.library_memberships)
        orm_model.created_at = domain_entity.created_at
        orm_model.updated_at = domain_entity.updated_at
        orm_model.version = domain_entity.version + 1
        return orm_model
