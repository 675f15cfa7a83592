"""Resolution of published AT-URIs to internal identifiers."""

from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from linkshelf.application.cards.dtos import (
    AtUriResolutionResult,
    AtUriResourceType,
    CollectionLinkRef,
)
from linkshelf.domain.common.value_objects import CardId, CollectionId
from linkshelf.infrastructure.common.errors import translate_persistence_errors
from linkshelf.models import Card as CardORM
from linkshelf.models import Collection as CollectionORM
from linkshelf.models import CollectionCard as CollectionCardORM
from linkshelf.models import PublishedRecord as PublishedRecordORM

logger = structlog.get_logger(__name__)


class AtUriResolutionService:
    """
    Looks up which collection, card or collection link was published under a URI.

    Collections are checked first, then cards by their original record,
    then collection links.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    @translate_persistence_errors
    def resolve_at_uri(self, uri: str) -> AtUriResolutionResult | None:
        collection_id = self._find_collection(uri)
        if collection_id is not None:
            return AtUriResolutionResult(type=AtUriResourceType.COLLECTION, id=str(collection_id))

        card_id = self._find_card(uri)
        if card_id is not None:
            return AtUriResolutionResult(type=AtUriResourceType.CARD, id=str(card_id))

        link = self._find_collection_link(uri)
        if link is not None:
            return AtUriResolutionResult(type=AtUriResourceType.COLLECTION_LINK, id=link)

        logger.debug("at_uri_unresolved", uri=uri)
        return None

    @translate_persistence_errors
    def resolve_collection_id(self, uri: str) -> CollectionId | None:
        collection_id = self._find_collection(uri)
        return CollectionId(collection_id) if collection_id is not None else None

    @translate_persistence_errors
    def resolve_card_id(self, uri: str) -> CardId | None:
        card_id = self._find_card(uri)
        return CardId(card_id) if card_id is not None else None

    @translate_persistence_errors
    def resolve_collection_link_id(self, uri: str) -> CollectionLinkRef | None:
        return self._find_collection_link(uri)

    def _find_collection(self, uri: str) -> UUID | None:
        stmt = (
            select(CollectionORM.id)
            .join(PublishedRecordORM, CollectionORM.published_record_id == PublishedRecordORM.id)
            .where(PublishedRecordORM.uri == uri)
            .limit(1)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def _find_card(self, uri: str) -> UUID | None:
        stmt = (
            select(CardORM.id)
            .join(PublishedRecordORM, CardORM.published_record_id == PublishedRecordORM.id)
            .where(PublishedRecordORM.uri == uri)
            .limit(1)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def _find_collection_link(self, uri: str) -> CollectionLinkRef | None:
        stmt = (
            select(CollectionCardORM.collection_id, CollectionCardORM.card_id)
            .join(
                PublishedRecordORM,
                CollectionCardORM.published_record_id == PublishedRecordORM.id,
            )
            .where(PublishedRecordORM.uri == uri)
            .limit(1)
        )
        row = self.db.execute(stmt).one_or_none()
        if row is None:
            return None
        return CollectionLinkRef(collection_id=str(row.collection_id), card_id=str(row.card_id))
