"""Collection link changes paired with their publication."""

from collections.abc import Sequence

import structlog

from linkshelf.application.cards.protocols import (
    CollectionPublisherProtocol,
    CollectionRepositoryProtocol,
)
from linkshelf.application.common.errors import to_application_error
from linkshelf.domain.cards.entities.card import Card
from linkshelf.domain.cards.entities.collection import Collection
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import CardId, CollectionId, CuratorId
from linkshelf.exceptions import LinkshelfError, NotFoundError, UnexpectedError

logger = structlog.get_logger(__name__)


class CardCollectionService:
    """Links cards into collections and unlinks them, publishing each change."""

    def __init__(
        self,
        collection_repository: CollectionRepositoryProtocol,
        collection_publisher: CollectionPublisherProtocol,
    ) -> None:
        self.collection_repository = collection_repository
        self.collection_publisher = collection_publisher

    def add_card_to_collection(
        self, card: Card, collection_id: CollectionId, curator_id: CuratorId
    ) -> Result[Collection, LinkshelfError]:
        """
        Link a card into one collection and publish the link.

        A link that already exists and was published is left untouched.

        Returns:
            Success with the saved collection, or Failure with NotFoundError,
            AccessError or UnexpectedError
        """
        collection = self.collection_repository.find_by_id(collection_id)
        if collection is None:
            return Failure(NotFoundError("Collection", str(collection_id)))

        existing = collection.get_card_link(card.id)
        if existing is not None and existing.published_record_id is not None:
            return Success(collection)

        added = collection.add_card(card.id, curator_id)
        if added.is_failure:
            return Failure(to_application_error(added.unwrap_error()))

        published = self.collection_publisher.publish_card_added_to_collection(
            card, collection, curator_id
        )
        if published.is_failure:
            error = published.unwrap_error()
            return Failure(UnexpectedError(f"Failed to publish collection link: {error}", error))

        marked = collection.mark_card_link_as_published(card.id, published.unwrap())
        if marked.is_failure:
            return Failure(to_application_error(marked.unwrap_error()))

        saved = self.collection_repository.save(collection)
        logger.info(
            "card_added_to_collection",
            card_id=str(card.id),
            collection_id=str(collection_id),
            curator_id=curator_id.value,
        )
        return Success(saved)

    def add_card_to_collections(
        self, card: Card, collection_ids: Sequence[CollectionId], curator_id: CuratorId
    ) -> Result[list[Collection], LinkshelfError]:
        """Link a card into several collections, stopping at the first failure."""
        collections: list[Collection] = []
        for collection_id in collection_ids:
            result = self.add_card_to_collection(card, collection_id, curator_id)
            if result.is_failure:
                return Failure(result.unwrap_error())
            collections.append(result.unwrap())
        return Success(collections)

    def remove_card_from_collection(
        self, card_id: CardId, collection_id: CollectionId, curator_id: CuratorId
    ) -> Result[Collection, LinkshelfError]:
        collection = self.collection_repository.find_by_id(collection_id)
        if collection is None:
            return Failure(NotFoundError("Collection", str(collection_id)))

        link = collection.get_card_link(card_id)
        removed = collection.remove_card(card_id, curator_id)
        if removed.is_failure:
            return Failure(to_application_error(removed.unwrap_error()))
        if link is None:
            return Success(collection)

        if link.published_record_id is not None:
            unpublished = self.collection_publisher.unpublish_card_added_to_collection(
                link.published_record_id
            )
            if unpublished.is_failure:
                error = unpublished.unwrap_error()
                return Failure(
                    UnexpectedError(f"Failed to unpublish collection link: {error}", error)
                )

        saved = self.collection_repository.save(collection)
        logger.info(
            "card_removed_from_collection",
            card_id=str(card_id),
            collection_id=str(collection_id),
            curator_id=curator_id.value,
        )
        return Success(saved)

    def remove_card_from_collections(
        self, card_id: CardId, collection_ids: Sequence[CollectionId], curator_id: CuratorId
    ) -> Result[list[Collection], LinkshelfError]:
        collections: list[Collection] = []
        for collection_id in collection_ids:
            result = self.remove_card_from_collection(card_id, collection_id, curator_id)
            if result.is_failure:
                return Failure(result.unwrap_error())
            collections.append(result.unwrap())
        return Success(collections)

    def detach_deleted_card(self, card_id: CardId) -> list[Collection]:
        """
        Unlink a card that is about to be deleted from every collection.

        Published links are unpublished on a best-effort basis; a failure is
        logged and does not keep the card alive.
        """
        detached: list[Collection] = []
        for collection in self.collection_repository.find_by_card_id(card_id):
            link = collection.remove_deleted_card(card_id)
            if link is None:
                continue
            if link.published_record_id is not None:
                unpublished = self.collection_publisher.unpublish_card_added_to_collection(
                    link.published_record_id
                )
                if unpublished.is_failure:
                    logger.warning(
                        "collection_link_unpublish_failed",
                        card_id=str(card_id),
                        collection_id=str(collection.id),
                        error=str(unpublished.unwrap_error()),
                    )
            detached.append(self.collection_repository.save(collection))
        return detached
