"""Use case for showing a single URL card."""

from linkshelf.application.cards.dtos import UrlCardViewDTO
from linkshelf.application.cards.parsing import parse_card_id
from linkshelf.application.cards.protocols import CardQueryRepositoryProtocol
from linkshelf.application.common.errors import run_query
from linkshelf.domain.common.result import Failure, Result, Success
from linkshelf.exceptions import LinkshelfError, NotFoundError


class GetUrlCardViewUseCase:
    def __init__(self, card_query_repository: CardQueryRepositoryProtocol) -> None:
        self.card_query_repository = card_query_repository

    def get_url_card_view(
        self, card_id: str, calling_user_id: str | None = None
    ) -> Result[UrlCardViewDTO, LinkshelfError]:
        parsed_card = parse_card_id(card_id)
        if parsed_card.is_failure:
            return Failure(parsed_card.unwrap_error())

        def query() -> Result[UrlCardViewDTO, LinkshelfError]:
            view = self.card_query_repository.get_url_card_view(
                str(parsed_card.unwrap()), calling_user_id
            )
            if view is None:
                return Failure(NotFoundError("URL card", card_id))
            return Success(view)

        return run_query(query)
