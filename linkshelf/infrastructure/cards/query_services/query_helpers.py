"""Building blocks shared by the card and collection query services."""

from collections.abc import Iterable, Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import ColumnElement, Select, and_, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from linkshelf.application.cards.dtos import (
    CardSortField,
    CollectionRefDTO,
    CollectionSortField,
    NoteDTO,
    SortOrder,
    UrlCardContentDTO,
)
from linkshelf.domain.cards.value_objects import CardType
from linkshelf.models import Card as CardORM
from linkshelf.models import Collection as CollectionORM
from linkshelf.models import CollectionCard as CollectionCardORM
from linkshelf.models import LibraryMembership as LibraryMembershipORM
from linkshelf.models import PublishedRecord as PublishedRecordORM

CARD_SORT_COLUMNS: dict[CardSortField, InstrumentedAttribute[Any]] = {
    CardSortField.CREATED_AT: CardORM.created_at,
    CardSortField.UPDATED_AT: CardORM.updated_at,
    CardSortField.LIBRARY_COUNT: CardORM.library_count,
}

COLLECTION_SORT_COLUMNS: dict[CollectionSortField, InstrumentedAttribute[Any]] = {
    CollectionSortField.NAME: CollectionORM.name,
    CollectionSortField.CREATED_AT: CollectionORM.created_at,
    CollectionSortField.UPDATED_AT: CollectionORM.updated_at,
    CollectionSortField.CARD_COUNT: CollectionORM.card_count,
}


def ordering(
    column: InstrumentedAttribute[Any], tie_breaker: InstrumentedAttribute[Any], order: SortOrder
) -> tuple[ColumnElement[Any], ColumnElement[Any]]:
    """Order by a column, then by id in the same direction for stable pages."""
    if order == SortOrder.ASC:
        return column.asc(), tie_breaker.asc()
    return column.desc(), tie_breaker.desc()


def count_rows(db: Session, stmt: Select[Any]) -> int:
    """Count the rows a select statement would return."""
    return db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()


def url_card_content(content_data: dict[str, Any], url: str | None) -> UrlCardContentDTO:
    metadata = content_data.get("metadata") or {}
    return UrlCardContentDTO(
        url=content_data.get("url") or url or "",
        title=metadata.get("title"),
        description=metadata.get("description"),
        author=metadata.get("author"),
        thumbnail_url=metadata.get("image_url"),
        site_name=metadata.get("site_name"),
    )


def note_text(content_data: dict[str, Any]) -> str:
    return content_data.get("text") or ""


def url_library_counts(db: Session, urls: Iterable[str]) -> dict[str, int]:
    """Number of distinct curators holding any URL card for each URL."""
    url_list = sorted({url for url in urls if url})
    if not url_list:
        return {}
    stmt = (
        select(CardORM.url, func.count(func.distinct(LibraryMembershipORM.user_id)))
        .join(LibraryMembershipORM, LibraryMembershipORM.card_id == CardORM.id)
        .where(CardORM.type == CardType.URL.value, CardORM.url.in_(url_list))
        .group_by(CardORM.url)
    )
    return {row[0]: row[1] for row in db.execute(stmt)}


def urls_in_library(db: Session, urls: Iterable[str], curator_id: str | None) -> dict[str, bool]:
    """
    Whether the curator has a URL card in their library for each URL.

    Returns an empty mapping when no curator is given, so lookups yield None.
    """
    url_list = sorted({url for url in urls if url})
    if curator_id is None or not url_list:
        return {}
    stmt = (
        select(CardORM.url)
        .join(LibraryMembershipORM, LibraryMembershipORM.card_id == CardORM.id)
        .where(
            CardORM.type == CardType.URL.value,
            CardORM.url.in_(url_list),
            LibraryMembershipORM.user_id == curator_id,
        )
        .distinct()
    )
    present = {row[0] for row in db.execute(stmt)}
    return {url: url in present for url in url_list}


def notes_by_parent(
    db: Session, parent_ids: Sequence[UUID], author_id: str
) -> dict[UUID, NoteDTO]:
    """
    The note each parent card has from one specific curator.

    Notes written by anyone else are never returned. When a curator wrote
    several notes for the same card the earliest one wins.
    """
    if not parent_ids:
        return {}
    stmt = (
        select(CardORM.id, CardORM.parent_card_id, CardORM.content_data)
        .where(
            CardORM.type == CardType.NOTE.value,
            CardORM.curator_id == author_id,
            CardORM.parent_card_id.in_(parent_ids),
        )
        .order_by(CardORM.created_at, CardORM.id)
    )
    notes: dict[UUID, NoteDTO] = {}
    for row in db.execute(stmt):
        if row.parent_card_id not in notes:
            notes[row.parent_card_id] = NoteDTO(id=str(row.id), text=note_text(row.content_data))
    return notes


def collections_by_card(
    db: Session, card_ids: Sequence[UUID]
) -> dict[UUID, list[CollectionRefDTO]]:
    """Collections containing each card, ordered by name."""
    if not card_ids:
        return {}
    stmt = (
        select(
            CollectionCardORM.card_id,
            CollectionORM.id,
            CollectionORM.name,
            CollectionORM.author_id,
            PublishedRecordORM.uri,
        )
        .join(CollectionORM, CollectionCardORM.collection_id == CollectionORM.id)
        .outerjoin(PublishedRecordORM, CollectionORM.published_record_id == PublishedRecordORM.id)
        .where(CollectionCardORM.card_id.in_(card_ids))
        .order_by(CollectionORM.name, CollectionORM.id)
    )
    collections: dict[UUID, list[CollectionRefDTO]] = {}
    for row in db.execute(stmt):
        collections.setdefault(row.card_id, []).append(
            CollectionRefDTO(id=str(row.id), name=row.name, author_id=row.author_id, uri=row.uri)
        )
    return collections


def url_card_filter(url: str) -> ColumnElement[bool]:
    return and_(CardORM.url == url, CardORM.type == CardType.URL.value)
