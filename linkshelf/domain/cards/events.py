"""Domain events raised by card and collection aggregates."""

from dataclasses import dataclass

from linkshelf.domain.common.domain_event import DomainEvent
from linkshelf.domain.common.value_objects.curator_id import CuratorId
from linkshelf.domain.common.value_objects.ids import CardId, CollectionId


@dataclass(frozen=True, kw_only=True)
class CardAddedToLibrary(DomainEvent):
    card_id: CardId
    curator_id: CuratorId


@dataclass(frozen=True, kw_only=True)
class CardRemovedFromLibrary(DomainEvent):
    card_id: CardId
    curator_id: CuratorId


@dataclass(frozen=True, kw_only=True)
class CollectionCreated(DomainEvent):
    collection_id: CollectionId
    author_id: CuratorId
    name: str


@dataclass(frozen=True, kw_only=True)
class CardAddedToCollection(DomainEvent):
    collection_id: CollectionId
    card_id: CardId
    added_by: CuratorId


@dataclass(frozen=True, kw_only=True)
class CardRemovedFromCollection(DomainEvent):
    collection_id: CollectionId
    card_id: CardId
    removed_by: CuratorId
