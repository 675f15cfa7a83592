"""Metadata retrieved for a bookmarked URL."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any, Self

from linkshelf.domain.cards.exceptions import CardValidationError
from linkshelf.domain.common.value_object import ValueObject

DEFAULT_MAX_AGE = timedelta(hours=24)


@dataclass(frozen=True)
class UrlMetadata(ValueObject):
    """
    Page metadata captured when a URL card was saved.

    Every field except ``url`` is optional because pages expose very
    different amounts of metadata. ``retrieved_at`` defaults to now.
    """

    url: str
    title: str | None = None
    description: str | None = None
    author: str | None = None
    published_date: datetime | None = None
    site_name: str | None = None
    image_url: str | None = None
    type: str | None = None
    retrieved_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise CardValidationError("URL is required for metadata", field="url")

    def is_stale(self, max_age: timedelta = DEFAULT_MAX_AGE, now: datetime | None = None) -> bool:
        """Whether the metadata is older than ``max_age``."""
        current = now or datetime.now(UTC)
        return current - self.retrieved_at > max_age

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "author": self.author,
            "published_date": self.published_date.isoformat() if self.published_date else None,
            "site_name": self.site_name,
            "image_url": self.image_url,
            "type": self.type,
            "retrieved_at": self.retrieved_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        published = data.get("published_date")
        retrieved = data.get("retrieved_at")
        return cls(
            url=data["url"],
            title=data.get("title"),
            description=data.get("description"),
            author=data.get("author"),
            published_date=datetime.fromisoformat(published) if published else None,
            site_name=data.get("site_name"),
            image_url=data.get("image_url"),
            type=data.get("type"),
            retrieved_at=datetime.fromisoformat(retrieved) if retrieved else datetime.now(UTC),
        )
