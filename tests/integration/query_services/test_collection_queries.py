"""Tests for the collection query repository."""

from sqlalchemy.orm import Session

from linkshelf.application.cards.dtos import (
    CollectionQueryOptions,
    CollectionSortField,
    SortOrder,
)
from linkshelf.application.common.pagination import Pagination
from linkshelf.domain.cards.value_objects import CollectionAccessType
from linkshelf.infrastructure.cards.repositories import CollectionQueryRepository
from tests.conftest import (
    ALICE,
    BOB,
    create_test_collection,
    create_test_note_card,
    create_test_url_card,
)


def _options(
    search_text: str | None = None,
    sort_by: CollectionSortField = CollectionSortField.NAME,
    sort_order: SortOrder = SortOrder.ASC,
    page: int = 1,
    limit: int = 20,
) -> CollectionQueryOptions:
    return CollectionQueryOptions(
        pagination=Pagination(page=page, limit=limit),
        sort_by=sort_by,
        sort_order=sort_order,
        search_text=search_text,
    )


def _seed_six(db_session: Session) -> None:
    create_test_collection(db_session, name="Reads")
    create_test_collection(db_session, name="Cooking", description="Recipes worth keeping")
    create_test_collection(db_session, name="Learning PYTHON")
    create_test_collection(db_session, name="Rust", description="Systems programming")
    create_test_collection(db_session, name="Go")
    create_test_collection(db_session, name="Misc", description="Anything else")


class TestFindByCreator:
    def test_search_for_python_among_six(self, db_session: Session) -> None:
        _seed_six(db_session)

        result = CollectionQueryRepository(db_session).find_by_creator(
            ALICE, _options(search_text="python")
        )
        assert result.total_count == 1
        assert [item.name for item in result.items] == ["Learning PYTHON"]

    def test_search_matches_description(self, db_session: Session) -> None:
        _seed_six(db_session)
        result = CollectionQueryRepository(db_session).find_by_creator(
            ALICE, _options(search_text="RECIPES")
        )
        assert [item.name for item in result.items] == ["Cooking"]

    def test_blank_search_lists_everything(self, db_session: Session) -> None:
        _seed_six(db_session)
        result = CollectionQueryRepository(db_session).find_by_creator(
            ALICE, _options(search_text="   ")
        )
        assert result.total_count == 6

    def test_wildcards_match_literally(self, db_session: Session) -> None:
        create_test_collection(db_session, name="100% done")
        create_test_collection(db_session, name="1000 things")
        result = CollectionQueryRepository(db_session).find_by_creator(
            ALICE, _options(search_text="0%")
        )
        assert [item.name for item in result.items] == ["100% done"]

    def test_only_own_collections_sorted_and_paged(self, db_session: Session) -> None:
        _seed_six(db_session)
        create_test_collection(db_session, author_id=BOB, name="Bob's")

        result = CollectionQueryRepository(db_session).find_by_creator(
            ALICE, _options(limit=2, page=2)
        )
        assert [item.name for item in result.items] == ["Learning PYTHON", "Misc"]
        assert result.total_count == 6
        assert result.has_more

    def test_card_count_and_uri(self, db_session: Session) -> None:
        card = create_test_url_card(db_session)
        create_test_collection(
            db_session,
            cards=[card],
            record_uri="at://did:plc:alice/network.linkshelf.collection/1",
        )

        item = CollectionQueryRepository(db_session).find_by_creator(ALICE, _options()).items[0]
        assert item.card_count == 1
        assert item.uri == "at://did:plc:alice/network.linkshelf.collection/1"
        assert item.access_type == CollectionAccessType.CLOSED.value

    def test_sort_by_card_count_desc(self, db_session: Session) -> None:
        first = create_test_url_card(db_session, url="https://x.test/1")
        second = create_test_url_card(db_session, url="https://x.test/2")
        create_test_collection(db_session, name="One", cards=[first])
        create_test_collection(db_session, name="Two", cards=[first, second])
        create_test_collection(db_session, name="None")

        result = CollectionQueryRepository(db_session).find_by_creator(
            ALICE, _options(sort_by=CollectionSortField.CARD_COUNT, sort_order=SortOrder.DESC)
        )
        assert [item.name for item in result.items] == ["Two", "One", "None"]


class TestCollectionsForCardAndUrl:
    def test_collections_containing_card_for_user(self, db_session: Session) -> None:
        card = create_test_url_card(db_session)
        create_test_collection(db_session, name="Zeta", cards=[card])
        create_test_collection(db_session, name="Alpha", cards=[card])
        create_test_collection(db_session, name="Unrelated")
        create_test_collection(
            db_session,
            author_id=BOB,
            name="Bob's open",
            access_type=CollectionAccessType.OPEN,
            cards=[card],
        )

        found = CollectionQueryRepository(db_session).get_collections_containing_card_for_user(
            str(card.id), ALICE
        )
        assert [item.name for item in found] == ["Alpha", "Zeta"]

    def test_collections_with_url_are_distinct(self, db_session: Session) -> None:
        alice_card = create_test_url_card(db_session, url="https://x.test/1")
        bob_card = create_test_url_card(db_session, url="https://x.test/1", curator_id=BOB)
        note = create_test_note_card(db_session, alice_card, "note")
        create_test_collection(
            db_session,
            name="Both",
            access_type=CollectionAccessType.OPEN,
            cards=[alice_card, bob_card],
        )
        create_test_collection(db_session, author_id=BOB, name="Bob only", cards=[bob_card])
        create_test_collection(db_session, name="Notes only", cards=[note])

        result = CollectionQueryRepository(db_session).get_collections_with_url(
            "https://x.test/1", _options()
        )
        assert [item.name for item in result.items] == ["Bob only", "Both"]
        assert result.total_count == 2
        assert result.items[0].author_id == BOB
