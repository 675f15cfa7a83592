"""Read-side queries for note cards."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from linkshelf.application.cards.dtos import CardQueryOptions, NoteCardForUrlDTO
from linkshelf.application.common.pagination import PaginatedResult
from linkshelf.domain.cards.value_objects import CardType
from linkshelf.infrastructure.cards.query_services.query_helpers import (
    CARD_SORT_COLUMNS,
    count_rows,
    note_text,
    ordering,
)
from linkshelf.models import Card as CardORM
from linkshelf.utils import ensure_utc


class NoteCardQueryService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_note_cards_for_url(
        self, url: str, options: CardQueryOptions
    ) -> PaginatedResult[NoteCardForUrlDTO]:
        """Get every curator's note cards written for an exact URL."""
        pagination = options.pagination
        base = select(
            CardORM.id,
            CardORM.curator_id,
            CardORM.content_data,
            CardORM.created_at,
            CardORM.updated_at,
        ).where(CardORM.url == url, CardORM.type == CardType.NOTE.value)
        total_count = count_rows(self.db, base)

        sort_column = CARD_SORT_COLUMNS[options.sort_by]
        stmt = (
            base.order_by(*ordering(sort_column, CardORM.id, options.sort_order))
            .limit(pagination.limit)
            .offset(pagination.offset)
        )
        items = [
            NoteCardForUrlDTO(
                id=str(row.id),
                note=note_text(row.content_data),
                author_id=row.curator_id,
                created_at=ensure_utc(row.created_at),
                updated_at=ensure_utc(row.updated_at),
            )
            for row in self.db.execute(stmt)
        ]
        return PaginatedResult(items=items, total_count=total_count, pagination=pagination)
