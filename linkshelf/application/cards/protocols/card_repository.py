from typing import Protocol

from linkshelf.domain.cards.entities.card import Card
from linkshelf.domain.common.value_objects import URL, CardId, CuratorId


class CardRepositoryProtocol(Protocol):
    def find_by_id(self, card_id: CardId) -> Card | None: ...

    def find_users_url_card_by_url(self, url: URL, curator_id: CuratorId) -> Card | None: ...

    def find_users_note_card_by_url(self, url: URL, curator_id: CuratorId) -> Card | None: ...

    def find_note_cards_by_parent(self, parent_card_id: CardId) -> list[Card]: ...

    def save(self, card: Card) -> Card: ...

    def delete(self, card_id: CardId) -> bool: ...
