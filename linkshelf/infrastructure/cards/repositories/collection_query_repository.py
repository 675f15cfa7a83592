"""Read-side repository for collection listings."""

from uuid import UUID

import structlog
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from linkshelf.application.cards.dtos import (
    CollectionContainingCardDTO,
    CollectionForUrlDTO,
    CollectionQueryOptions,
    CollectionQueryResultDTO,
)
from linkshelf.application.common.pagination import PaginatedResult
from linkshelf.infrastructure.cards.query_services.query_helpers import (
    COLLECTION_SORT_COLUMNS,
    count_rows,
    ordering,
    url_card_filter,
)
from linkshelf.infrastructure.common.errors import translate_persistence_errors
from linkshelf.models import Card as CardORM
from linkshelf.models import Collection as CollectionORM
from linkshelf.models import CollectionCard as CollectionCardORM
from linkshelf.models import PublishedRecord as PublishedRecordORM
from linkshelf.utils import LIKE_ESCAPE_CHAR, ensure_utc, escape_like

logger = structlog.get_logger(__name__)


class CollectionQueryRepository:
    """Flat collection listings assembled straight from rows."""

    def __init__(self, db: Session) -> None:
        self.db = db

    @translate_persistence_errors
    def find_by_creator(
        self, curator_id: str, options: CollectionQueryOptions
    ) -> PaginatedResult[CollectionQueryResultDTO]:
        """
        Get a curator's collections, optionally filtered by search text.

        The search is a case-insensitive substring match over name or
        description. Wildcards typed by the user match literally.

        Args:
            curator_id: Author of the collections
            options: Pagination, sorting and search text

        Returns:
            Page of collections with the total matching count
        """
        pagination = options.pagination
        base = (
            select(
                CollectionORM.id,
                CollectionORM.author_id,
                CollectionORM.name,
                CollectionORM.description,
                CollectionORM.access_type,
                CollectionORM.card_count,
                CollectionORM.created_at,
                CollectionORM.updated_at,
                PublishedRecordORM.uri,
            )
            .outerjoin(
                PublishedRecordORM, CollectionORM.published_record_id == PublishedRecordORM.id
            )
            .where(CollectionORM.author_id == curator_id)
        )

        search_text = options.normalized_search_text
        if search_text is not None:
            pattern = f"%{escape_like(search_text)}%"
            base = base.where(
                or_(
                    CollectionORM.name.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
                    CollectionORM.description.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
                )
            )

        total_count = count_rows(self.db, base)
        sort_column = COLLECTION_SORT_COLUMNS[options.sort_by]
        stmt = (
            base.order_by(*ordering(sort_column, CollectionORM.id, options.sort_order))
            .limit(pagination.limit)
            .offset(pagination.offset)
        )
        items = [
            CollectionQueryResultDTO(
                id=str(row.id),
                name=row.name,
                description=row.description,
                access_type=row.access_type,
                card_count=row.card_count,
                created_at=ensure_utc(row.created_at),
                updated_at=ensure_utc(row.updated_at),
                author_id=row.author_id,
                uri=row.uri,
            )
            for row in self.db.execute(stmt)
        ]
        logger.debug(
            "collections_by_creator_loaded",
            curator_id=curator_id,
            search_text=search_text,
            total_count=total_count,
        )
        return PaginatedResult(items=items, total_count=total_count, pagination=pagination)

    @translate_persistence_errors
    def get_collections_containing_card_for_user(
        self, card_id: str, curator_id: str
    ) -> list[CollectionContainingCardDTO]:
        """Get the curator's own collections that link the card, by name."""
        try:
            card_uuid = UUID(card_id)
        except ValueError:
            return []
        stmt = (
            select(
                CollectionORM.id,
                CollectionORM.name,
                CollectionORM.description,
                PublishedRecordORM.uri,
            )
            .join(CollectionCardORM, CollectionCardORM.collection_id == CollectionORM.id)
            .outerjoin(
                PublishedRecordORM, CollectionORM.published_record_id == PublishedRecordORM.id
            )
            .where(
                CollectionCardORM.card_id == card_uuid,
                CollectionORM.author_id == curator_id,
            )
            .order_by(CollectionORM.name.asc(), CollectionORM.id.asc())
        )
        return [
            CollectionContainingCardDTO(
                id=str(row.id), name=row.name, description=row.description, uri=row.uri
            )
            for row in self.db.execute(stmt)
        ]

    @translate_persistence_errors
    def get_collections_with_url(
        self, url: str, options: CollectionQueryOptions
    ) -> PaginatedResult[CollectionForUrlDTO]:
        """
        Get the collections holding any URL card for an exact URL.

        A collection linking several cards with the same URL is listed and
        counted once.
        """
        pagination = options.pagination
        holding = (
            select(CollectionCardORM.collection_id)
            .join(CardORM, CollectionCardORM.card_id == CardORM.id)
            .where(url_card_filter(url))
        )
        base = (
            select(
                CollectionORM.id,
                CollectionORM.name,
                CollectionORM.author_id,
                CollectionORM.description,
                PublishedRecordORM.uri,
            )
            .outerjoin(
                PublishedRecordORM, CollectionORM.published_record_id == PublishedRecordORM.id
            )
            .where(CollectionORM.id.in_(holding))
        )
        total_count = count_rows(self.db, base)
        sort_column = COLLECTION_SORT_COLUMNS[options.sort_by]
        stmt = (
            base.order_by(*ordering(sort_column, CollectionORM.id, options.sort_order))
            .limit(pagination.limit)
            .offset(pagination.offset)
        )
        items = [
            CollectionForUrlDTO(
                id=str(row.id),
                name=row.name,
                author_id=row.author_id,
                description=row.description,
                uri=row.uri,
            )
            for row in self.db.execute(stmt)
        ]
        return PaginatedResult(items=items, total_count=total_count, pagination=pagination)
