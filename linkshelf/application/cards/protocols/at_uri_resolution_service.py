from typing import Protocol

from linkshelf.application.cards.dtos import AtUriResolutionResult, CollectionLinkRef
from linkshelf.domain.common.value_objects import CardId, CollectionId


class AtUriResolutionServiceProtocol(Protocol):
    def resolve_at_uri(self, uri: str) -> AtUriResolutionResult | None: ...

    def resolve_collection_id(self, uri: str) -> CollectionId | None: ...

    def resolve_card_id(self, uri: str) -> CardId | None: ...

    def resolve_collection_link_id(self, uri: str) -> CollectionLinkRef | None: ...
