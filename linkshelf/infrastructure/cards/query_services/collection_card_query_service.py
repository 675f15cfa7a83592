"""Read-side queries for the cards inside a collection."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from linkshelf.application.cards.dtos import CardQueryOptions, CollectionCardQueryResultDTO
from linkshelf.application.common.pagination import PaginatedResult
from linkshelf.domain.cards.value_objects import CardType
from linkshelf.infrastructure.cards.query_services.query_helpers import (
    CARD_SORT_COLUMNS,
    count_rows,
    notes_by_parent,
    ordering,
    url_card_content,
    url_library_counts,
    urls_in_library,
)
from linkshelf.models import Card as CardORM
from linkshelf.models import Collection as CollectionORM
from linkshelf.models import CollectionCard as CollectionCardORM
from linkshelf.utils import ensure_utc


class CollectionCardQueryService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_cards_in_collection(
        self,
        collection_id: str,
        options: CardQueryOptions,
        calling_user_id: str | None = None,
    ) -> PaginatedResult[CollectionCardQueryResultDTO]:
        """
        Get the URL cards linked to a collection.

        The note attached to each card is the one written by the
        collection's author; notes by the card's curator or by other
        members are left out. An unknown collection yields an empty page.
        """
        pagination = options.pagination
        empty = PaginatedResult[CollectionCardQueryResultDTO](
            items=[], total_count=0, pagination=pagination
        )
        try:
            collection_uuid = UUID(collection_id)
        except ValueError:
            return empty

        author_id = self.db.execute(
            select(CollectionORM.author_id).where(CollectionORM.id == collection_uuid)
        ).scalar_one_or_none()
        if author_id is None:
            return empty

        base = (
            select(
                CardORM.id,
                CardORM.curator_id,
                CardORM.url,
                CardORM.content_data,
                CardORM.library_count,
                CardORM.created_at,
                CardORM.updated_at,
            )
            .join(CollectionCardORM, CollectionCardORM.card_id == CardORM.id)
            .where(
                CollectionCardORM.collection_id == collection_uuid,
                CardORM.type == CardType.URL.value,
            )
        )
        total_count = count_rows(self.db, base)
        sort_column = CARD_SORT_COLUMNS[options.sort_by]
        stmt = (
            base.order_by(*ordering(sort_column, CardORM.id, options.sort_order))
            .limit(pagination.limit)
            .offset(pagination.offset)
        )
        rows = self.db.execute(stmt).all()

        card_ids = [row.id for row in rows]
        urls = [row.url for row in rows if row.url]
        notes = notes_by_parent(self.db, card_ids, author_id)
        library_counts = url_library_counts(self.db, urls)
        in_library = urls_in_library(self.db, urls, calling_user_id)

        items = [
            CollectionCardQueryResultDTO(
                id=str(row.id),
                url=row.url or "",
                card_content=url_card_content(row.content_data, row.url),
                library_count=row.library_count,
                url_library_count=library_counts.get(row.url or "", 0),
                url_in_library=in_library.get(row.url or ""),
                created_at=ensure_utc(row.created_at),
                updated_at=ensure_utc(row.updated_at),
                author_id=row.curator_id,
                note=notes.get(row.id),
            )
            for row in rows
        ]
        return PaginatedResult(items=items, total_count=total_count, pagination=pagination)
