"""
Domain service building cards from primitive input.

Use cases receive strings from callers; the factory turns them into value
objects and reports any malformed field as a CardValidationError.
"""

from collections.abc import Sequence

from linkshelf.domain.cards.entities.card import Card
from linkshelf.domain.cards.exceptions import CardValidationError
from linkshelf.domain.cards.value_objects import (
    CardType,
    HighlightCardContent,
    NoteCardContent,
    Selector,
    UrlCardContent,
    UrlMetadata,
)
from linkshelf.domain.common.exceptions import ValidationError
from linkshelf.domain.common.result import Failure, Result
from linkshelf.domain.common.value_objects import URL, CardId, CuratorId


class CardFactory:
    """Stateless factory for the three card kinds."""

    def create_url_card(
        self,
        curator_id: str | CuratorId,
        url: str | URL,
        metadata: UrlMetadata | None = None,
    ) -> Result[Card, CardValidationError]:
        try:
            curator = self._curator(curator_id)
            card_url = url if isinstance(url, URL) else URL(url)
        except ValidationError as e:
            return Failure(self._as_card_error(e))
        return Card.create(
            curator_id=curator,
            type=CardType.URL,
            content=UrlCardContent(url=card_url, metadata=metadata),
        )

    def create_note_card(
        self,
        curator_id: str | CuratorId,
        text: str,
        parent_card_id: str | CardId | None = None,
        url: str | URL | None = None,
        title: str | None = None,
    ) -> Result[Card, CardValidationError]:
        """
        Create a note card, optionally attached to a URL card.

        Args:
            curator_id: Author of the note
            text: Note text
            parent_card_id: URL card the note belongs to
            url: URL the note is about, usually the parent's URL
            title: Optional note title
        """
        try:
            curator = self._curator(curator_id)
            content = NoteCardContent(text=text, title=title)
            note_url = None if url is None else (url if isinstance(url, URL) else URL(url))
        except ValidationError as e:
            return Failure(self._as_card_error(e))

        parent: CardId | None = None
        if parent_card_id is not None:
            parsed = CardId.create(parent_card_id)
            if parsed.is_failure:
                return Failure(CardValidationError("Invalid parent card ID", field="parent"))
            parent = parsed.unwrap()

        return Card.create(
            curator_id=curator,
            type=CardType.NOTE,
            content=content,
            url=note_url,
            parent_card_id=parent,
        )

    def create_highlight_card(
        self,
        curator_id: str | CuratorId,
        text: str,
        source_url: str | URL,
        selectors: Sequence[Selector] = (),
        context: str | None = None,
        document_title: str | None = None,
        parent_card_id: CardId | None = None,
    ) -> Result[Card, CardValidationError]:
        try:
            curator = self._curator(curator_id)
            content = HighlightCardContent(
                text=text,
                source_url=source_url if isinstance(source_url, URL) else URL(source_url),
                selectors=tuple(selectors),
                context=context,
                document_title=document_title,
            )
        except ValidationError as e:
            return Failure(self._as_card_error(e))
        return Card.create(
            curator_id=curator,
            type=CardType.HIGHLIGHT,
            content=content,
            parent_card_id=parent_card_id,
        )

    @staticmethod
    def _curator(curator_id: str | CuratorId) -> CuratorId:
        return curator_id if isinstance(curator_id, CuratorId) else CuratorId(curator_id)

    @staticmethod
    def _as_card_error(error: ValidationError) -> CardValidationError:
        if isinstance(error, CardValidationError):
            return error
        return CardValidationError(error.message, field=error.field, value=error.value)
