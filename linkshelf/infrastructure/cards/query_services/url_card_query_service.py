"""Read-side queries centred on URL cards."""

from collections import defaultdict
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from linkshelf.application.cards.dtos import (
    CardQueryOptions,
    CollectionRefDTO,
    LibraryForUrlDTO,
    LibraryUrlCardDTO,
    NoteDTO,
    UrlCardQueryResultDTO,
    UrlCardViewDTO,
)
from linkshelf.application.common.pagination import PaginatedResult
from linkshelf.domain.cards.value_objects import CardType
from linkshelf.infrastructure.cards.query_services.query_helpers import (
    CARD_SORT_COLUMNS,
    collections_by_card,
    count_rows,
    notes_by_parent,
    ordering,
    url_card_content,
    url_card_filter,
    url_library_counts,
    urls_in_library,
)
from linkshelf.models import Card as CardORM
from linkshelf.models import LibraryMembership as LibraryMembershipORM
from linkshelf.utils import ensure_utc

logger = structlog.get_logger(__name__)


class UrlCardQueryService:
    """Queries returning URL cards enriched with notes, collections and URL counts."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_url_cards_of_user(
        self,
        curator_id: str,
        options: CardQueryOptions,
        calling_user_id: str | None = None,
    ) -> PaginatedResult[UrlCardQueryResultDTO]:
        """
        Get the URL cards in a curator's library.

        Each card carries the curator's own note for it, the collections
        containing it, how many curators hold its URL and whether the
        calling user holds it. Notes and highlights are never returned as
        items.

        Args:
            curator_id: Library owner
            options: Pagination and sorting
            calling_user_id: Viewer for the ``url_in_library`` flag

        Returns:
            Page of URL cards with the total across all pages
        """
        pagination = options.pagination
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
            .join(LibraryMembershipORM, LibraryMembershipORM.card_id == CardORM.id)
            .where(
                LibraryMembershipORM.user_id == curator_id,
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
        if not rows:
            return PaginatedResult(items=[], total_count=total_count, pagination=pagination)

        card_ids = [row.id for row in rows]
        urls = [row.url for row in rows if row.url]
        collections = collections_by_card(self.db, card_ids)
        notes = notes_by_parent(self.db, card_ids, curator_id)
        library_counts = url_library_counts(self.db, urls)
        in_library = urls_in_library(self.db, urls, calling_user_id)

        items = [
            UrlCardQueryResultDTO(
                id=str(row.id),
                url=row.url or "",
                card_content=url_card_content(row.content_data, row.url),
                library_count=row.library_count,
                url_library_count=library_counts.get(row.url or "", 0),
                url_in_library=in_library.get(row.url or ""),
                created_at=ensure_utc(row.created_at),
                updated_at=ensure_utc(row.updated_at),
                author_id=row.curator_id,
                collections=collections.get(row.id, []),
                note=notes.get(row.id),
            )
            for row in rows
        ]
        return PaginatedResult(items=items, total_count=total_count, pagination=pagination)

    def get_url_card_view(
        self, card_id: str, calling_user_id: str | None = None
    ) -> UrlCardViewDTO | None:
        """
        Get one URL card with the libraries and collections holding it.

        The attached note is the one written by the card's own curator.

        Returns:
            The card view, or None when the id is unknown or not a URL card
        """
        try:
            card_uuid = UUID(card_id)
        except ValueError:
            return None

        row = self.db.execute(
            select(
                CardORM.id,
                CardORM.curator_id,
                CardORM.url,
                CardORM.content_data,
                CardORM.library_count,
                CardORM.created_at,
                CardORM.updated_at,
            ).where(CardORM.id == card_uuid, CardORM.type == CardType.URL.value)
        ).one_or_none()
        if row is None:
            return None

        libraries = self.get_libraries_for_card(card_id)
        collections: list[CollectionRefDTO] = collections_by_card(self.db, [row.id]).get(
            row.id, []
        )
        note = notes_by_parent(self.db, [row.id], row.curator_id).get(row.id)
        urls = [row.url] if row.url else []
        library_counts = url_library_counts(self.db, urls)
        in_library = urls_in_library(self.db, urls, calling_user_id)

        return UrlCardViewDTO(
            id=str(row.id),
            url=row.url or "",
            card_content=url_card_content(row.content_data, row.url),
            library_count=row.library_count,
            url_library_count=library_counts.get(row.url or "", 0),
            url_in_library=in_library.get(row.url or ""),
            created_at=ensure_utc(row.created_at),
            updated_at=ensure_utc(row.updated_at),
            author_id=row.curator_id,
            in_libraries=libraries,
            in_collections=collections,
            note=note,
        )

    def get_libraries_for_card(self, card_id: str) -> list[str]:
        """Curator ids whose library holds the card, oldest membership first."""
        try:
            card_uuid = UUID(card_id)
        except ValueError:
            return []
        stmt = (
            select(LibraryMembershipORM.user_id)
            .where(LibraryMembershipORM.card_id == card_uuid)
            .order_by(LibraryMembershipORM.added_at, LibraryMembershipORM.user_id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_libraries_for_url(
        self, url: str, options: CardQueryOptions
    ) -> PaginatedResult[LibraryForUrlDTO]:
        """
        Get one row per (curator, URL card) for an exact URL.

        Only URL cards count; notes carrying the same URL are ignored. The
        total is computed even when the requested page is empty. Each row
        carries the held card with its own curator's note; ``url_in_library``
        is always True since every row is a library entry.
        """
        pagination = options.pagination
        base = (
            select(
                LibraryMembershipORM.user_id,
                CardORM.id,
                CardORM.curator_id,
                CardORM.url,
                CardORM.content_data,
                CardORM.library_count,
                CardORM.created_at,
                CardORM.updated_at,
            )
            .join(CardORM, LibraryMembershipORM.card_id == CardORM.id)
            .where(url_card_filter(url))
        )
        total_count = count_rows(self.db, base)
        stmt = (
            base.order_by(
                *ordering(CARD_SORT_COLUMNS[options.sort_by], CardORM.id, options.sort_order),
                LibraryMembershipORM.user_id,
            )
            .limit(pagination.limit)
            .offset(pagination.offset)
        )
        rows = self.db.execute(stmt).all()

        card_ids_by_author: dict[str, list[UUID]] = defaultdict(list)
        for row in rows:
            card_ids_by_author[row.curator_id].append(row.id)
        notes: dict[UUID, NoteDTO] = {}
        for author_id, card_ids in card_ids_by_author.items():
            notes.update(notes_by_parent(self.db, card_ids, author_id))
        url_library_count = url_library_counts(self.db, [url]).get(url, 0)

        items = [
            LibraryForUrlDTO(
                user_id=row.user_id,
                card=LibraryUrlCardDTO(
                    id=str(row.id),
                    url=row.url or "",
                    card_content=url_card_content(row.content_data, row.url),
                    library_count=row.library_count,
                    url_library_count=url_library_count,
                    url_in_library=True,
                    created_at=ensure_utc(row.created_at),
                    updated_at=ensure_utc(row.updated_at),
                    author_id=row.curator_id,
                    note=notes.get(row.id),
                ),
            )
            for row in rows
        ]
        logger.debug("libraries_for_url_loaded", url=url, total_count=total_count)
        return PaginatedResult(items=items, total_count=total_count, pagination=pagination)
