"""Use case for editing the text of a note card."""

import structlog

from linkshelf.application.cards.parsing import parse_card_id, parse_curator_id
from linkshelf.application.cards.protocols import CardRepositoryProtocol
from linkshelf.application.common.errors import to_application_error
from linkshelf.application.common.unit_of_work import UnitOfWork, run_in_unit_of_work
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.domain.common.value_objects import CardId, CuratorId
from linkshelf.exceptions import AccessError, LinkshelfError, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class UpdateNoteCardUseCase:
    def __init__(self, uow: UnitOfWork, card_repository: CardRepositoryProtocol) -> None:
        self.uow = uow
        self.card_repository = card_repository

    def update_note_card(
        self, card_id: str, note: str, curator_id: str
    ) -> Result[str, LinkshelfError]:
        """
        Replace the text of a note card.

        Returns:
            Success with the card id, or Failure with ValidationError when
            the card is not a note, AccessError when the curator did not
            write it, NotFoundError when it does not exist
        """
        parsed_curator = parse_curator_id(curator_id)
        if parsed_curator.is_failure:
            return Failure(parsed_curator.unwrap_error())
        parsed_card = parse_card_id(card_id)
        if parsed_card.is_failure:
            return Failure(parsed_card.unwrap_error())

        return run_in_unit_of_work(
            self.uow, lambda: self._update(parsed_card.unwrap(), note, parsed_curator.unwrap())
        )

    def _update(
        self, card_id: CardId, note: str, curator_id: CuratorId
    ) -> Result[str, LinkshelfError]:
        card = self.card_repository.find_by_id(card_id)
        if card is None:
            return Failure(NotFoundError("Card", str(card_id)))
        if not card.is_note_card:
            return Failure(ValidationError("Only note cards can be updated"))
        if not card.is_owned_by(curator_id):
            return Failure(AccessError("Only the author can update this note"))

        updated = card.update_note_text(note, curator_id)
        if updated.is_failure:
            return Failure(to_application_error(updated.unwrap_error()))
        self.card_repository.save(card)

        logger.info("note_card_updated", card_id=str(card_id), curator_id=curator_id.value)
        return Success(str(card_id))
