"""Tests for the card query repository."""

from sqlalchemy.orm import Session

from linkshelf.application.cards.dtos import CardQueryOptions, CardSortField, SortOrder
from linkshelf.application.common.pagination import Pagination
from linkshelf.domain.cards.value_objects import CollectionAccessType
from linkshelf.infrastructure.cards.repositories import CardQueryRepository
from tests.conftest import (
    ALICE,
    BOB,
    CAROL,
    add_test_card_to_library,
    create_test_collection,
    create_test_note_card,
    create_test_url_card,
)

URL_1 = "https://x.test/1"


def _options(
    page: int = 1,
    limit: int = 20,
    sort_by: CardSortField = CardSortField.UPDATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
) -> CardQueryOptions:
    return CardQueryOptions(
        pagination=Pagination(page=page, limit=limit), sort_by=sort_by, sort_order=sort_order
    )


class TestCardsInCollection:
    def test_reads_collection_returns_card_without_note(self, db_session: Session) -> None:
        card = create_test_url_card(db_session, url=URL_1)
        reads = create_test_collection(
            db_session, name="Reads", access_type=CollectionAccessType.OPEN, cards=[card]
        )

        result = CardQueryRepository(db_session).get_cards_in_collection(
            str(reads.id), _options()
        )
        assert result.total_count == 1
        assert len(result.items) == 1
        item = result.items[0]
        assert item.id == str(card.id)
        assert item.library_count == 1
        assert item.note is None

    def test_note_by_other_curator_is_excluded(self, db_session: Session) -> None:
        card = create_test_url_card(db_session, url=URL_1)
        reads = create_test_collection(
            db_session, name="Reads", access_type=CollectionAccessType.OPEN, cards=[card]
        )
        create_test_note_card(db_session, card, "B's take", curator_id=BOB)

        result = CardQueryRepository(db_session).get_cards_in_collection(
            str(reads.id), _options()
        )
        assert result.items[0].note is None

    def test_collection_author_note_is_attached(self, db_session: Session) -> None:
        card = create_test_url_card(db_session, url=URL_1, curator_id=BOB)
        reads = create_test_collection(
            db_session, author_id=ALICE, access_type=CollectionAccessType.OPEN, cards=[card]
        )
        create_test_note_card(db_session, card, "Bob's own note", curator_id=BOB)
        alice_note = create_test_note_card(db_session, card, "Alice's note", curator_id=ALICE)

        item = CardQueryRepository(db_session).get_cards_in_collection(
            str(reads.id), _options()
        ).items[0]
        assert item.note is not None
        assert item.note.id == str(alice_note.id)
        assert item.note.text == "Alice's note"

    def test_unknown_collection_is_empty(self, db_session: Session) -> None:
        repository = CardQueryRepository(db_session)
        assert repository.get_cards_in_collection("not-a-uuid", _options()).total_count == 0


class TestUrlCardsOfUser:
    def test_only_url_cards_with_own_note(self, db_session: Session) -> None:
        card = create_test_url_card(db_session, url=URL_1, title="First")
        mine = create_test_note_card(db_session, card, "my note")
        create_test_note_card(db_session, card, "not mine", curator_id=BOB)
        collection = create_test_collection(db_session, cards=[card])

        result = CardQueryRepository(db_session).get_url_cards_of_user(ALICE, _options())
        assert result.total_count == 1
        item = result.items[0]
        assert item.card_content.title == "First"
        assert item.note is not None
        assert item.note.id == str(mine.id)
        assert [c.id for c in item.collections] == [str(collection.id)]
        assert item.url_in_library is None

    def test_cards_saved_from_others_are_listed(self, db_session: Session) -> None:
        card = create_test_url_card(db_session, url=URL_1)
        add_test_card_to_library(db_session, card, BOB)

        result = CardQueryRepository(db_session).get_url_cards_of_user(BOB, _options())
        assert [item.id for item in result.items] == [str(card.id)]
        assert result.items[0].author_id == ALICE

    def test_url_counts_and_viewer_flag(self, db_session: Session) -> None:
        create_test_url_card(db_session, url=URL_1)
        create_test_url_card(db_session, url=URL_1, curator_id=BOB)
        repository = CardQueryRepository(db_session)

        as_bob = repository.get_url_cards_of_user(ALICE, _options(), calling_user_id=BOB)
        assert as_bob.items[0].url_library_count == 2
        assert as_bob.items[0].url_in_library is True

        as_carol = repository.get_url_cards_of_user(ALICE, _options(), calling_user_id=CAROL)
        assert as_carol.items[0].url_in_library is False

    def test_pagination_and_sorting(self, db_session: Session) -> None:
        cards = [
            create_test_url_card(db_session, url=f"https://x.test/{index}")
            for index in range(5)
        ]
        repository = CardQueryRepository(db_session)
        options = _options(
            page=2, limit=2, sort_by=CardSortField.CREATED_AT, sort_order=SortOrder.ASC
        )

        result = repository.get_url_cards_of_user(ALICE, options)
        assert [item.id for item in result.items] == [str(cards[2].id), str(cards[3].id)]
        assert result.total_count == 5
        assert result.has_more

        past_end = repository.get_url_cards_of_user(ALICE, _options(page=4, limit=2))
        assert past_end.items == []
        assert past_end.total_count == 5
        assert not past_end.has_more


class TestUrlLookups:
    def test_url_card_view(self, db_session: Session) -> None:
        card = create_test_url_card(db_session, url=URL_1)
        add_test_card_to_library(db_session, card, BOB)
        note = create_test_note_card(db_session, card, "author's note")
        create_test_collection(db_session, cards=[card])

        view = CardQueryRepository(db_session).get_url_card_view(str(card.id), BOB)
        assert view is not None
        assert view.in_libraries == [ALICE, BOB]
        assert len(view.in_collections) == 1
        assert view.note is not None
        assert view.note.id == str(note.id)
        assert view.url_in_library is True

    def test_url_card_view_of_note_is_none(self, db_session: Session) -> None:
        card = create_test_url_card(db_session, url=URL_1)
        note = create_test_note_card(db_session, card, "text")
        repository = CardQueryRepository(db_session)
        assert repository.get_url_card_view(str(note.id)) is None
        assert repository.get_url_card_view("bad-id") is None

    def test_libraries_for_url_ignore_notes(self, db_session: Session) -> None:
        alice_card = create_test_url_card(db_session, url=URL_1)
        bob_card = create_test_url_card(db_session, url=URL_1, curator_id=BOB)
        create_test_note_card(db_session, alice_card, "note with same url")
        create_test_url_card(db_session, url="https://x.test/2", curator_id=CAROL)

        result = CardQueryRepository(db_session).get_libraries_for_url(URL_1, _options())
        pairs = {(item.user_id, item.card.id) for item in result.items}
        assert pairs == {(ALICE, str(alice_card.id)), (BOB, str(bob_card.id))}
        assert result.total_count == 2

    def test_libraries_for_url_total_survives_empty_page(self, db_session: Session) -> None:
        create_test_url_card(db_session, url=URL_1)
        result = CardQueryRepository(db_session).get_libraries_for_url(
            URL_1, _options(page=5, limit=1)
        )
        assert result.items == []
        assert result.total_count == 1

    def test_libraries_for_url_carry_card_view(self, db_session: Session) -> None:
        alice_card = create_test_url_card(db_session, url=URL_1, title="Alice's pick")
        bob_card = create_test_url_card(db_session, url=URL_1, curator_id=BOB)
        own_note = create_test_note_card(db_session, alice_card, "mine")
        create_test_note_card(db_session, alice_card, "not mine", curator_id=BOB)
        add_test_card_to_library(db_session, alice_card, CAROL)

        result = CardQueryRepository(db_session).get_libraries_for_url(URL_1, _options())
        by_user = {item.user_id: item.card for item in result.items}

        assert set(by_user) == {ALICE, BOB, CAROL}
        alice_view = by_user[ALICE]
        assert alice_view.id == str(alice_card.id)
        assert alice_view.card_content.title == "Alice's pick"
        assert alice_view.library_count == 2
        assert alice_view.url_library_count == 3
        assert alice_view.url_in_library is True
        assert alice_view.note is not None
        assert alice_view.note.id == str(own_note.id)
        assert by_user[CAROL] == alice_view
        assert by_user[BOB].id == str(bob_card.id)
        assert by_user[BOB].note is None

    def test_note_cards_for_url(self, db_session: Session) -> None:
        card = create_test_url_card(db_session, url=URL_1)
        first = create_test_note_card(db_session, card, "first")
        second = create_test_note_card(db_session, card, "second", curator_id=BOB)

        result = CardQueryRepository(db_session).get_note_cards_for_url(
            URL_1, _options(sort_by=CardSortField.CREATED_AT, sort_order=SortOrder.ASC)
        )
        assert [(item.id, item.note) for item in result.items] == [
            (str(first.id), "first"),
            (str(second.id), "second"),
        ]
        assert result.items[1].author_id == BOB
