"""Tests for CardFactory domain service."""

from linkshelf.domain.cards.exceptions import CardValidationError
from linkshelf.domain.cards.services import CardFactory
from linkshelf.domain.cards.value_objects import CardType, UrlMetadata
from linkshelf.domain.common.value_objects import URL, CardId


class TestCardFactory:
    def test_create_url_card(self) -> None:
        metadata = UrlMetadata(url="https://example.com/", title="Example")
        card = CardFactory().create_url_card(
            "did:plc:alice", "https://example.com", metadata=metadata
        ).unwrap()

        assert card.type == CardType.URL
        assert card.url == URL("https://example.com/")
        assert card.curator_id.value == "did:plc:alice"
        assert card.library_count == 0

    def test_bad_curator_becomes_card_validation_error(self) -> None:
        result = CardFactory().create_url_card("alice", "https://example.com/")
        assert result.is_failure
        error = result.unwrap_error()
        assert isinstance(error, CardValidationError)
        assert error.field == "curator_id"

    def test_bad_url_fails(self) -> None:
        result = CardFactory().create_url_card("did:plc:alice", "example.com")
        assert isinstance(result.unwrap_error(), CardValidationError)

    def test_create_note_card_with_parent(self) -> None:
        parent = CardId.generate()
        card = CardFactory().create_note_card(
            "did:plc:alice",
            "my note",
            parent_card_id=str(parent),
            url="https://example.com/a",
        ).unwrap()

        assert card.type == CardType.NOTE
        assert card.parent_card_id == parent
        assert card.url == URL("https://example.com/a")

    def test_note_parent_may_be_an_existing_card_id(self) -> None:
        factory = CardFactory()
        url_card = factory.create_url_card("did:plc:alice", "https://example.com/a").unwrap()

        note = factory.create_note_card(
            "did:plc:alice", "hi", parent_card_id=url_card.id
        ).unwrap()

        assert note.parent_card_id == url_card.id

    def test_note_with_bad_parent_fails(self) -> None:
        result = CardFactory().create_note_card("did:plc:alice", "text", parent_card_id="nope")
        assert result.unwrap_error().field == "parent"

    def test_empty_note_fails(self) -> None:
        assert CardFactory().create_note_card("did:plc:alice", " ").is_failure

    def test_create_highlight_card(self) -> None:
        card = CardFactory().create_highlight_card(
            "did:plc:alice", "quoted", "https://example.com/a", context="around it"
        ).unwrap()
        assert card.type == CardType.HIGHLIGHT
        assert card.url == URL("https://example.com/a")
