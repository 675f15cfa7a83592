from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

from linkshelf.domain.common.value_object import ValueObject
from linkshelf.domain.common.value_objects.curator_id import CuratorId
from linkshelf.domain.common.value_objects.published_record_id import PublishedRecordId


@dataclass(frozen=True)
class LibraryMembership(ValueObject):
    """One curator's inclusion of a card in their personal library."""

    curator_id: CuratorId
    added_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    published_record_id: PublishedRecordId | None = None

    def with_published_record(self, record: PublishedRecordId) -> "LibraryMembership":
        return replace(self, published_record_id=record)
