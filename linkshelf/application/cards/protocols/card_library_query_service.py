from typing import Protocol

from linkshelf.domain.common.value_objects import CardId, CuratorId


class CardLibraryQueryServiceProtocol(Protocol):
    def get_libraries_for_card(self, card_id: CardId) -> list[CuratorId]: ...

    def get_cards_in_library(self, curator_id: CuratorId) -> list[CardId]: ...

    def is_card_in_library(self, card_id: CardId, curator_id: CuratorId) -> bool: ...

    def get_library_membership_count(self, card_id: CardId) -> int: ...

    def get_library_card_count(self, curator_id: CuratorId) -> int: ...
