"""Tests for the library command use cases."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from linkshelf import models
from linkshelf.core import Container
from linkshelf.domain.cards.value_objects import CollectionAccessType, NoteCardContent
from linkshelf.domain.common.value_objects import CardId, CollectionId, CuratorId
from linkshelf.exceptions import AccessError, NotFoundError, UnexpectedError, ValidationError
from linkshelf.infrastructure.cards.repositories import CardRepository, CollectionRepository
from linkshelf.infrastructure.common.di import use_case_scope
from tests.conftest import ALICE, BOB, create_test_collection, create_test_url_card

ARTICLE = "https://example.com/article"


def _card_count(db_session: Session) -> int:
    return db_session.execute(select(func.count()).select_from(models.Card)).scalar_one()


class TestAddUrlToLibrary:
    def test_creates_published_url_card(
        self, container: Container, db_session: Session, fakes
    ) -> None:
        with use_case_scope(container, container.add_url_to_library_use_case, db_session) as uc:
            response = uc.add_url_to_library(ARTICLE, ALICE).unwrap()

        assert response.note_card_id is None
        card = CardRepository(db_session).find_by_id(CardId.create(response.url_card_id).unwrap())
        assert card is not None
        assert card.is_in_library(CuratorId(ALICE))
        assert card.content.title == "Example page"  # type: ignore[union-attr]
        assert card.original_published_record_id is not None
        membership = card.library_membership_for(CuratorId(ALICE))
        assert membership is not None
        assert membership.published_record_id == card.original_published_record_id
        assert fakes.metadata_service.fetched == [ARTICLE]

    def test_saving_same_url_twice_is_idempotent(
        self, container: Container, db_session: Session, fakes
    ) -> None:
        with use_case_scope(container, container.add_url_to_library_use_case, db_session) as uc:
            first = uc.add_url_to_library(ARTICLE, ALICE).unwrap()
            second = uc.add_url_to_library(ARTICLE, ALICE).unwrap()

        assert first.url_card_id == second.url_card_id
        assert _card_count(db_session) == 1
        assert len(fakes.card_publisher.published) == 1
        assert len(fakes.metadata_service.fetched) == 1

    def test_note_is_created_then_updated(self, container: Container, db_session: Session) -> None:
        with use_case_scope(container, container.add_url_to_library_use_case, db_session) as uc:
            first = uc.add_url_to_library(ARTICLE, ALICE, note="first take").unwrap()
            second = uc.add_url_to_library(ARTICLE, ALICE, note="second take").unwrap()

        assert first.note_card_id is not None
        assert second.note_card_id == first.note_card_id
        note = CardRepository(db_session).find_by_id(CardId.create(first.note_card_id).unwrap())
        assert note is not None
        assert note.content == NoteCardContent(text="second take")
        assert str(note.parent_card_id) == first.url_card_id
        assert note.is_in_library(CuratorId(ALICE))

    def test_links_into_collections(
        self, container: Container, db_session: Session, fakes
    ) -> None:
        collection = create_test_collection(db_session)

        with use_case_scope(container, container.add_url_to_library_use_case, db_session) as uc:
            response = uc.add_url_to_library(
                ARTICLE, ALICE, collection_ids=[str(collection.id)]
            ).unwrap()

        loaded = CollectionRepository(db_session).find_by_id(collection.id)
        assert loaded is not None
        assert [str(card_id) for card_id in loaded.card_ids] == [response.url_card_id]
        assert loaded.card_count == 1
        link = loaded.get_card_link(loaded.card_ids[0])
        assert link is not None
        assert link.published_record_id is not None
        assert len(fakes.collection_publisher.links_published) == 1

    def test_metadata_failure_still_saves(
        self, container: Container, db_session: Session, fakes
    ) -> None:
        fakes.metadata_service.fail = True
        with use_case_scope(container, container.add_url_to_library_use_case, db_session) as uc:
            response = uc.add_url_to_library(ARTICLE, ALICE).unwrap()

        card = CardRepository(db_session).find_by_id(CardId.create(response.url_card_id).unwrap())
        assert card is not None
        assert card.content.title is None  # type: ignore[union-attr]

    def test_invalid_input(self, container: Container, db_session: Session) -> None:
        with use_case_scope(container, container.add_url_to_library_use_case, db_session) as uc:
            assert isinstance(uc.add_url_to_library("nope", ALICE).unwrap_error(), ValidationError)
            assert isinstance(
                uc.add_url_to_library(ARTICLE, "alice").unwrap_error(), ValidationError
            )
            bad_collection = uc.add_url_to_library(ARTICLE, ALICE, collection_ids=["x"])
            assert isinstance(bad_collection.unwrap_error(), ValidationError)

    def test_publish_failure_rolls_back(
        self, container: Container, db_session: Session, fakes
    ) -> None:
        fakes.card_publisher.fail = True
        with use_case_scope(container, container.add_url_to_library_use_case, db_session) as uc:
            result = uc.add_url_to_library(ARTICLE, ALICE)

        assert isinstance(result.unwrap_error(), UnexpectedError)
        assert _card_count(db_session) == 0

    def test_missing_collection_rolls_back(
        self, container: Container, db_session: Session
    ) -> None:
        with use_case_scope(container, container.add_url_to_library_use_case, db_session) as uc:
            result = uc.add_url_to_library(
                ARTICLE, ALICE, collection_ids=[str(CollectionId.generate())]
            )

        assert isinstance(result.unwrap_error(), NotFoundError)
        assert _card_count(db_session) == 0

    def test_closed_collection_of_other_curator(
        self, container: Container, db_session: Session
    ) -> None:
        collection = create_test_collection(db_session, author_id=BOB)
        with use_case_scope(container, container.add_url_to_library_use_case, db_session) as uc:
            result = uc.add_url_to_library(ARTICLE, ALICE, collection_ids=[str(collection.id)])

        assert isinstance(result.unwrap_error(), AccessError)


class TestAddCardToLibrary:
    def test_other_curator_saves_card(
        self, container: Container, db_session: Session, fakes
    ) -> None:
        card = create_test_url_card(db_session)

        with use_case_scope(container, container.add_card_to_library_use_case, db_session) as uc:
            assert uc.add_card_to_library(str(card.id), BOB).unwrap() == str(card.id)
            assert uc.add_card_to_library(str(card.id), BOB).is_success

        loaded = CardRepository(db_session).find_by_id(card.id)
        assert loaded is not None
        assert loaded.library_count == 2
        assert loaded.original_published_record_id is None
        assert fakes.card_publisher.published == [(str(card.id), BOB)]

    def test_unknown_card(self, container: Container, db_session: Session) -> None:
        with use_case_scope(container, container.add_card_to_library_use_case, db_session) as uc:
            result = uc.add_card_to_library(str(CardId.generate()), BOB)
            assert isinstance(result.unwrap_error(), NotFoundError)
            assert isinstance(uc.add_card_to_library("bad", BOB).unwrap_error(), ValidationError)


class TestRemoveCardFromLibrary:
    def _save(self, container: Container, db_session: Session, curator_id: str) -> str:
        with use_case_scope(container, container.add_url_to_library_use_case, db_session) as uc:
            return uc.add_url_to_library(ARTICLE, curator_id).unwrap().url_card_id

    def test_non_owner_removal_keeps_card(
        self, container: Container, db_session: Session, fakes
    ) -> None:
        card_id = self._save(container, db_session, ALICE)
        with use_case_scope(container, container.add_card_to_library_use_case, db_session) as uc:
            uc.add_card_to_library(card_id, BOB).unwrap()

        with use_case_scope(
            container, container.remove_card_from_library_use_case, db_session
        ) as uc:
            assert uc.remove_card_from_library(card_id, BOB).unwrap() == card_id

        loaded = CardRepository(db_session).find_by_id(CardId.create(card_id).unwrap())
        assert loaded is not None
        assert loaded.library_count == 1
        assert not loaded.is_in_library(CuratorId(BOB))
        assert len(fakes.card_publisher.unpublished) == 1

    def test_owner_removal_while_others_hold_keeps_card(
        self, container: Container, db_session: Session
    ) -> None:
        card_id = self._save(container, db_session, ALICE)
        with use_case_scope(container, container.add_card_to_library_use_case, db_session) as uc:
            uc.add_card_to_library(card_id, BOB).unwrap()

        with use_case_scope(
            container, container.remove_card_from_library_use_case, db_session
        ) as uc:
            uc.remove_card_from_library(card_id, ALICE).unwrap()

        loaded = CardRepository(db_session).find_by_id(CardId.create(card_id).unwrap())
        assert loaded is not None
        assert loaded.library_count == 1

    def test_last_removal_by_owner_deletes_card(
        self, container: Container, db_session: Session, fakes
    ) -> None:
        card_id = self._save(container, db_session, ALICE)
        own = create_test_collection(db_session, name="Mine")
        shared = create_test_collection(
            db_session, author_id=BOB, name="Shared", access_type=CollectionAccessType.OPEN
        )
        with use_case_scope(
            container, container.add_card_to_collection_use_case, db_session
        ) as uc:
            uc.add_card_to_collection(card_id, [str(own.id), str(shared.id)], ALICE).unwrap()

        with use_case_scope(
            container, container.remove_card_from_library_use_case, db_session
        ) as uc:
            uc.remove_card_from_library(card_id, ALICE).unwrap()

        parsed = CardId.create(card_id).unwrap()
        assert CardRepository(db_session).find_by_id(parsed) is None
        for collection_id in (own.id, shared.id):
            loaded = CollectionRepository(db_session).find_by_id(collection_id)
            assert loaded is not None
            assert not loaded.has_card(parsed)
            assert loaded.card_count == 0
        assert len(fakes.collection_publisher.links_unpublished) == 2

    def test_unknown_card(self, container: Container, db_session: Session) -> None:
        with use_case_scope(
            container, container.remove_card_from_library_use_case, db_session
        ) as uc:
            result = uc.remove_card_from_library(str(CardId.generate()), ALICE)
        assert isinstance(result.unwrap_error(), NotFoundError)


class TestUpdateNoteCard:
    def _note(self, container: Container, db_session: Session) -> str:
        with use_case_scope(container, container.add_url_to_library_use_case, db_session) as uc:
            note_id = uc.add_url_to_library(ARTICLE, ALICE, note="draft").unwrap().note_card_id
        assert note_id is not None
        return note_id

    def test_author_updates_text(self, container: Container, db_session: Session) -> None:
        note_id = self._note(container, db_session)
        with use_case_scope(container, container.update_note_card_use_case, db_session) as uc:
            assert uc.update_note_card(note_id, "final", ALICE).unwrap() == note_id

        note = CardRepository(db_session).find_by_id(CardId.create(note_id).unwrap())
        assert note is not None
        assert note.content == NoteCardContent(text="final")

    def test_other_curator_is_denied(self, container: Container, db_session: Session) -> None:
        note_id = self._note(container, db_session)
        with use_case_scope(container, container.update_note_card_use_case, db_session) as uc:
            result = uc.update_note_card(note_id, "hijack", BOB)
        assert isinstance(result.unwrap_error(), AccessError)

    def test_url_card_is_rejected(self, container: Container, db_session: Session) -> None:
        card = create_test_url_card(db_session)
        with use_case_scope(container, container.update_note_card_use_case, db_session) as uc:
            result = uc.update_note_card(str(card.id), "text", ALICE)
        assert isinstance(result.unwrap_error(), ValidationError)

    def test_empty_text_is_rejected(self, container: Container, db_session: Session) -> None:
        note_id = self._note(container, db_session)
        with use_case_scope(container, container.update_note_card_use_case, db_session) as uc:
            result = uc.update_note_card(note_id, "  ", ALICE)
        assert isinstance(result.unwrap_error(), ValidationError)

    def test_unknown_note(self, container: Container, db_session: Session) -> None:
        with use_case_scope(container, container.update_note_card_use_case, db_session) as uc:
            result = uc.update_note_card(str(CardId.generate()), "text", ALICE)
        assert isinstance(result.unwrap_error(), NotFoundError)
