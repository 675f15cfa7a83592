from typing import Protocol

from linkshelf.domain.cards.entities.collection import Collection
from linkshelf.domain.common.value_objects import CardId, CollectionId, CuratorId


class CollectionRepositoryProtocol(Protocol):
    def find_by_id(self, collection_id: CollectionId) -> Collection | None: ...

    def find_by_curator_id(self, curator_id: CuratorId) -> list[Collection]: ...

    def find_by_card_id(self, card_id: CardId) -> list[Collection]: ...

    def save(self, collection: Collection) -> Collection: ...

    def delete(self, collection_id: CollectionId) -> bool: ...
