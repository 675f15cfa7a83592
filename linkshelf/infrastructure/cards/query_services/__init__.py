"""Read-side query services for cards."""

from linkshelf.infrastructure.cards.query_services.collection_card_query_service import (
    CollectionCardQueryService,
)
from linkshelf.infrastructure.cards.query_services.note_card_query_service import (
    NoteCardQueryService,
)
from linkshelf.infrastructure.cards.query_services.url_card_query_service import (
    UrlCardQueryService,
)

__all__ = ["CollectionCardQueryService", "NoteCardQueryService", "UrlCardQueryService"]
