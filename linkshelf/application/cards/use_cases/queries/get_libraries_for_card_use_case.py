"""Use case for listing the curators whose library holds a card."""

from linkshelf.application.cards.parsing import parse_card_id
from linkshelf.application.cards.protocols import CardQueryRepositoryProtocol
from linkshelf.application.common.errors import run_query
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.exceptions import LinkshelfError


class GetLibrariesForCardUseCase:
    def __init__(self, card_query_repository: CardQueryRepositoryProtocol) -> None:
        self.card_query_repository = card_query_repository

    def get_libraries_for_card(self, card_id: str) -> Result[list[str], LinkshelfError]:
        parsed_card = parse_card_id(card_id)
        if parsed_card.is_failure:
            return Failure(parsed_card.unwrap_error())
        return run_query(
            lambda: Success(
                self.card_query_repository.get_libraries_for_card(str(parsed_card.unwrap()))
            )
        )
