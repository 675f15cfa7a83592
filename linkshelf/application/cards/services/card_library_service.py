"""Library membership changes paired with their publication."""

import structlog

from linkshelf.application.cards.protocols import CardPublisherProtocol, CardRepositoryProtocol
from linkshelf.application.common.errors import to_application_error
from linkshelf.domain.cards.entities.card import Card
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import CuratorId
from linkshelf.exceptions import LinkshelfError, UnexpectedError

logger = structlog.get_logger(__name__)


class CardLibraryService:
    """
    Adds cards to and removes cards from curator libraries.

    A membership is only recorded once the publisher has accepted it, and
    the published record is stamped on the membership before the card is
    saved. Callers own the transaction.
    """

    def __init__(
        self,
        card_repository: CardRepositoryProtocol,
        card_publisher: CardPublisherProtocol,
    ) -> None:
        self.card_repository = card_repository
        self.card_publisher = card_publisher

    def add_card_to_library(
        self, card: Card, curator_id: CuratorId
    ) -> Result[Card, LinkshelfError]:
        if card.is_in_library(curator_id):
            return Success(card)

        published = self.card_publisher.publish_card_to_library(card, curator_id)
        if published.is_failure:
            error = published.unwrap_error()
            logger.warning(
                "card_library_publish_failed",
                card_id=str(card.id),
                curator_id=curator_id.value,
                error=str(error),
            )
            return Failure(UnexpectedError(f"Failed to publish card to library: {error}", error))
        record = published.unwrap()

        added = card.add_to_library(curator_id)
        if added.is_failure:
            return Failure(to_application_error(added.unwrap_error()))
        marked = card.mark_card_in_library_as_published(curator_id, record)
        if marked.is_failure:
            return Failure(to_application_error(marked.unwrap_error()))
        if card.original_published_record_id is None and card.is_owned_by(curator_id):
            card.mark_as_published(record)

        saved = self.card_repository.save(card)
        logger.info("card_added_to_library", card_id=str(card.id), curator_id=curator_id.value)
        return Success(saved)

    def remove_card_from_library(
        self, card: Card, curator_id: CuratorId
    ) -> Result[Card, LinkshelfError]:
        membership = card.library_membership_for(curator_id)
        if membership is None:
            return Success(card)

        if membership.published_record_id is not None:
            unpublished = self.card_publisher.unpublish_card_from_library(
                membership.published_record_id, curator_id
            )
            if unpublished.is_failure:
                error = unpublished.unwrap_error()
                return Failure(
                    UnexpectedError(f"Failed to unpublish card from library: {error}", error)
                )

        removed = card.remove_from_library(curator_id)
        if removed.is_failure:
            return Failure(to_application_error(removed.unwrap_error()))

        saved = self.card_repository.save(card)
        logger.info(
            "card_removed_from_library", card_id=str(card.id), curator_id=curator_id.value
        )
        return Success(saved)
