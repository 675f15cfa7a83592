"""Tests for card content variants and their stored form."""

from datetime import UTC, datetime, timedelta

import pytest

from linkshelf.domain.cards.exceptions import CardValidationError
from linkshelf.domain.cards.value_objects import (
    CollectionAccessType,
    HighlightCardContent,
    NoteCardContent,
    TextPositionSelector,
    TextQuoteSelector,
    UrlCardContent,
    UrlMetadata,
    card_content_from_dict,
)
from linkshelf.domain.cards.value_objects.card_content import MAX_NOTE_TEXT_LENGTH
from linkshelf.domain.common.value_objects import URL

ARTICLE = URL("https://example.com/article")


class TestNoteCardContent:
    def test_text_is_trimmed(self) -> None:
        assert NoteCardContent(text="  hello  ").text == "hello"

    def test_empty_text_raises(self) -> None:
        with pytest.raises(CardValidationError):
            NoteCardContent(text="   ")

    def test_length_limit(self) -> None:
        NoteCardContent(text="x" * MAX_NOTE_TEXT_LENGTH)
        with pytest.raises(CardValidationError):
            NoteCardContent(text="x" * (MAX_NOTE_TEXT_LENGTH + 1))

    def test_update_text_keeps_title(self) -> None:
        updated = NoteCardContent(text="a", title="T").update_text("b")
        assert updated == NoteCardContent(text="b", title="T")


class TestHighlightCardContent:
    def test_selectors_are_stored_as_tuple(self) -> None:
        content = HighlightCardContent(
            text="quoted",
            source_url=ARTICLE,
            selectors=[TextQuoteSelector(exact="quoted")],  # type: ignore[arg-type]
        )
        assert isinstance(content.selectors, tuple)

    def test_invalid_position_selector_raises(self) -> None:
        with pytest.raises(CardValidationError):
            TextPositionSelector(start=10, end=5)

    def test_empty_quote_selector_raises(self) -> None:
        with pytest.raises(CardValidationError):
            TextQuoteSelector(exact="")


class TestStoredContent:
    def test_url_content_restores_metadata(self) -> None:
        metadata = UrlMetadata(
            url=ARTICLE.value,
            title="An article",
            published_date=datetime(2024, 5, 1, tzinfo=UTC),
        )
        content = UrlCardContent(url=ARTICLE, metadata=metadata)

        restored = card_content_from_dict(content.to_dict())
        assert isinstance(restored, UrlCardContent)
        assert restored.title == "An article"
        assert restored.metadata == metadata

    def test_highlight_content_restores_selectors(self) -> None:
        content = HighlightCardContent(
            text="quoted",
            source_url=ARTICLE,
            selectors=(
                TextQuoteSelector(exact="quoted", prefix="a "),
                TextPositionSelector(start=3, end=9),
            ),
            document_title="An article",
        )
        assert card_content_from_dict(content.to_dict()) == content

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(CardValidationError):
            card_content_from_dict({"type": "VIDEO"})

    def test_missing_field_raises(self) -> None:
        with pytest.raises(CardValidationError):
            card_content_from_dict({"type": "NOTE"})

    def test_unknown_selector_raises(self) -> None:
        with pytest.raises(CardValidationError):
            card_content_from_dict(
                {
                    "type": "HIGHLIGHT",
                    "text": "q",
                    "source_url": ARTICLE.value,
                    "selectors": [{"type": "XPathSelector", "value": "/p[1]"}],
                }
            )


class TestUrlMetadata:
    def test_staleness(self) -> None:
        now = datetime(2024, 1, 2, tzinfo=UTC)
        fresh = UrlMetadata(url=ARTICLE.value, retrieved_at=now - timedelta(hours=1))
        stale = UrlMetadata(url=ARTICLE.value, retrieved_at=now - timedelta(days=2))
        assert not fresh.is_stale(now=now)
        assert stale.is_stale(now=now)

    def test_url_is_required(self) -> None:
        with pytest.raises(CardValidationError):
            UrlMetadata(url=" ")


class TestCollectionAccessType:
    @pytest.mark.parametrize("raw", ["OPEN", "open", " Open "])
    def test_parse_is_case_insensitive(self, raw: str) -> None:
        assert CollectionAccessType.parse(raw).unwrap() == CollectionAccessType.OPEN

    def test_parse_rejects_unknown(self) -> None:
        assert CollectionAccessType.parse("SECRET").is_failure
