"""
Card content variants.

Content is a tagged union with one frozen dataclass per card type. Each
variant validates its own required fields, so a card can only ever hold a
complete payload for its type.
"""

from dataclasses import dataclass, field
from typing import Any

from linkshelf.domain.cards.exceptions import CardValidationError
from linkshelf.domain.cards.value_objects.card_type import CardType
from linkshelf.domain.cards.value_objects.url_metadata import UrlMetadata
from linkshelf.domain.common.value_object import ValueObject
from linkshelf.domain.common.value_objects.url import URL

MAX_NOTE_TEXT_LENGTH = 10_000
MAX_HIGHLIGHT_TEXT_LENGTH = 5_000


@dataclass(frozen=True)
class UrlCardContent(ValueObject):
    """Bookmarked URL with the metadata fetched for it, if any."""

    url: URL
    metadata: UrlMetadata | None = None

    @property
    def type(self) -> CardType:
        return CardType.URL

    @property
    def title(self) -> str | None:
        return self.metadata.title if self.metadata else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": CardType.URL.value,
            "url": self.url.value,
            "metadata": self.metadata.to_dict() if self.metadata else None,
        }


@dataclass(frozen=True)
class NoteCardContent(ValueObject):
    """Free text written by a curator, stored trimmed."""

    text: str
    title: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise CardValidationError("Note text cannot be empty", field="text")
        if len(self.text) > MAX_NOTE_TEXT_LENGTH:
            raise CardValidationError(
                f"Note text cannot exceed {MAX_NOTE_TEXT_LENGTH} characters", field="text"
            )
        object.__setattr__(self, "text", self.text.strip())

    @property
    def type(self) -> CardType:
        return CardType.NOTE

    def update_text(self, text: str) -> "NoteCardContent":
        return NoteCardContent(text=text, title=self.title)

    def to_dict(self) -> dict[str, Any]:
        return {"type": CardType.NOTE.value, "text": self.text, "title": self.title}


@dataclass(frozen=True)
class TextQuoteSelector(ValueObject):
    exact: str
    prefix: str | None = None
    suffix: str | None = None

    def __post_init__(self) -> None:
        if not self.exact:
            raise CardValidationError("Text quote selector requires exact text", field="exact")


@dataclass(frozen=True)
class TextPositionSelector(ValueObject):
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end <= self.start:
            raise CardValidationError(
                "Text position selector requires 0 <= start < end",
                field="selector",
                value=(self.start, self.end),
            )


@dataclass(frozen=True)
class RangeSelector(ValueObject):
    start_container: str
    end_container: str
    start_offset: int | None = None
    end_offset: int | None = None


Selector = TextQuoteSelector | TextPositionSelector | RangeSelector

_SELECTOR_TYPES: dict[str, type] = {
    "TextQuoteSelector": TextQuoteSelector,
    "TextPositionSelector": TextPositionSelector,
    "RangeSelector": RangeSelector,
}


@dataclass(frozen=True)
class HighlightCardContent(ValueObject):
    """Text quoted from a web page together with how to find it again."""

    text: str
    source_url: URL
    selectors: tuple[Selector, ...] = field(default_factory=tuple)
    context: str | None = None
    document_title: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise CardValidationError("Highlight text cannot be empty", field="text")
        if len(self.text) > MAX_HIGHLIGHT_TEXT_LENGTH:
            raise CardValidationError(
                f"Highlight text cannot exceed {MAX_HIGHLIGHT_TEXT_LENGTH} characters",
                field="text",
            )
        object.__setattr__(self, "text", self.text.strip())
        object.__setattr__(self, "selectors", tuple(self.selectors))

    @property
    def type(self) -> CardType:
        return CardType.HIGHLIGHT

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": CardType.HIGHLIGHT.value,
            "text": self.text,
            "source_url": self.source_url.value,
            "selectors": [
                {"type": selector.__class__.__name__, **selector.__dict__}
                for selector in self.selectors
            ],
            "context": self.context,
            "document_title": self.document_title,
        }


CardContent = UrlCardContent | NoteCardContent | HighlightCardContent


def card_content_from_dict(data: dict[str, Any]) -> CardContent:
    """
    Rebuild card content from its stored JSON form.

    Raises:
        ValidationError: If the payload is not a known content type
            or fails validation
    """
    content_type = data.get("type")
    try:
        if content_type == CardType.URL.value:
            metadata = data.get("metadata")
            return UrlCardContent(
                url=URL(data["url"]),
                metadata=UrlMetadata.from_dict(metadata) if metadata else None,
            )
        if content_type == CardType.NOTE.value:
            return NoteCardContent(text=data["text"], title=data.get("title"))
        if content_type == CardType.HIGHLIGHT.value:
            selectors = []
            for raw in data.get("selectors") or []:
                attrs = dict(raw)
                selector_cls = _SELECTOR_TYPES.get(attrs.pop("type", ""))
                if selector_cls is None:
                    raise CardValidationError("Unknown selector type", field="selectors", value=raw)
                selectors.append(selector_cls(**attrs))
            return HighlightCardContent(
                text=data["text"],
                source_url=URL(data["source_url"]),
                selectors=tuple(selectors),
                context=data.get("context"),
                document_title=data.get("document_title"),
            )
    except KeyError as e:
        raise CardValidationError(f"Card content is missing {e.args[0]}", field="content") from e
    raise CardValidationError("Unknown card content type", field="content", value=content_type)
