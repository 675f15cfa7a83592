"""
Capabilities provided by systems outside this package.

Identity resolution, profiles, publishing and page metadata are supplied
by the host application. Failures are reported as a Failure holding the
underlying exception; use cases wrap them as UnexpectedError.
"""

from dataclasses import dataclass
from typing import Protocol

from linkshelf.domain.cards.entities.card import Card
from linkshelf.domain.cards.entities.collection import Collection
from linkshelf.domain.cards.value_objects import UrlMetadata
from linkshelf.domain.common.result import Result
from linkshelf.domain.common.value_objects import (
    URL,
    CuratorId,
    DIDOrHandle,
    PublishedRecordId,
)


@dataclass(frozen=True)
class Profile:
    """Display data for a curator; never stored by this package."""

    id: str
    name: str
    handle: str
    avatar_url: str | None = None
    description: str | None = None


class IdentityResolutionServiceProtocol(Protocol):
    def resolve_to_canonical_id(
        self, identifier: DIDOrHandle
    ) -> Result[CuratorId, Exception]: ...


class ProfileServiceProtocol(Protocol):
    def get_profile(self, curator_id: str) -> Result[Profile, Exception]: ...


class CardPublisherProtocol(Protocol):
    def publish_card_to_library(
        self, card: Card, curator_id: CuratorId
    ) -> Result[PublishedRecordId, Exception]: ...

    def unpublish_card_from_library(
        self, record: PublishedRecordId, curator_id: CuratorId
    ) -> Result[None, Exception]: ...


class CollectionPublisherProtocol(Protocol):
    def publish(self, collection: Collection) -> Result[PublishedRecordId, Exception]: ...

    def unpublish(self, record: PublishedRecordId) -> Result[None, Exception]: ...

    def publish_card_added_to_collection(
        self, card: Card, collection: Collection, curator_id: CuratorId
    ) -> Result[PublishedRecordId, Exception]: ...

    def unpublish_card_added_to_collection(
        self, record: PublishedRecordId
    ) -> Result[None, Exception]: ...


class MetadataServiceProtocol(Protocol):
    def fetch_metadata(self, url: URL) -> Result[UrlMetadata, Exception]: ...
