"""Common value objects shared across all domain modules."""

from .curator_id import CuratorId
from .did_or_handle import DIDOrHandle, Handle
from .ids import CardId, CollectionId
from .published_record_id import PublishedRecordId
from .url import URL

__all__ = [
    # IDs
    "CardId",
    "CollectionId",
    "CuratorId",
    # Identity
    "DIDOrHandle",
    "Handle",
    # Provenance
    "PublishedRecordId",
    "URL",
]
