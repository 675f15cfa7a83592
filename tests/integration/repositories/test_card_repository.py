"""Tests for CardRepository persistence."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from linkshelf import models
from linkshelf.domain.cards.value_objects import NoteCardContent
from linkshelf.domain.common.value_objects import URL, CardId, CuratorId
from linkshelf.exceptions import ConcurrencyConflictError, PersistenceError
from linkshelf.infrastructure.cards.repositories import CardRepository
from linkshelf.infrastructure.cards.repositories.published_record_repository import (
    PublishedRecordRepository,
)
from tests.conftest import (
    ALICE,
    BOB,
    add_test_card_to_library,
    create_test_note_card,
    create_test_url_card,
    published,
)


class TestCardRepository:
    def test_save_and_find_round_trip(self, db_session: Session) -> None:
        card = create_test_url_card(db_session, title="An article")

        loaded = CardRepository(db_session).find_by_id(card.id)
        assert loaded is not None
        assert loaded.url == URL("https://example.com/article")
        assert loaded.content == card.content
        assert loaded.library_count == 1
        assert loaded.is_in_library(CuratorId(ALICE))
        assert loaded.created_at.tzinfo is not None

    def test_find_missing_returns_none(self, db_session: Session) -> None:
        assert CardRepository(db_session).find_by_id(CardId.generate()) is None

    def test_version_advances_on_each_save(self, db_session: Session) -> None:
        card = create_test_url_card(db_session)
        assert card.version == 1
        updated = add_test_card_to_library(db_session, card, BOB)
        assert updated.version == 2
        assert updated.library_count == 2

    def test_stale_copy_is_rejected(self, db_session: Session) -> None:
        card = create_test_url_card(db_session)
        repository = CardRepository(db_session)
        first = repository.find_by_id(card.id)
        second = repository.find_by_id(card.id)
        assert first is not None
        assert second is not None

        first.add_to_library(CuratorId(BOB))
        repository.save(first)
        db_session.commit()

        second.add_to_library(CuratorId("did:plc:carol"))
        with pytest.raises(ConcurrencyConflictError):
            repository.save(second)

    def test_memberships_are_replaced_on_save(self, db_session: Session) -> None:
        card = add_test_card_to_library(db_session, create_test_url_card(db_session), BOB)
        repository = CardRepository(db_session)
        loaded = repository.find_by_id(card.id)
        assert loaded is not None

        loaded.remove_from_library(CuratorId(ALICE))
        repository.save(loaded)
        db_session.commit()

        rows = db_session.execute(
            select(models.LibraryMembership.user_id).where(
                models.LibraryMembership.card_id == card.id.value
            )
        ).scalars().all()
        assert rows == [BOB]
        reloaded = repository.find_by_id(card.id)
        assert reloaded is not None
        assert reloaded.library_count == 1

    def test_find_users_cards_by_url(self, db_session: Session) -> None:
        url_card = create_test_url_card(db_session)
        note = create_test_note_card(db_session, url_card, "my thoughts")
        create_test_url_card(db_session, curator_id=BOB)
        repository = CardRepository(db_session)
        url = URL("https://example.com/article")

        found = repository.find_users_url_card_by_url(url, CuratorId(ALICE))
        assert found is not None
        assert found.id == url_card.id
        found_note = repository.find_users_note_card_by_url(url, CuratorId(ALICE))
        assert found_note is not None
        assert found_note.id == note.id
        assert repository.find_users_url_card_by_url(url, CuratorId("did:plc:nobody")) is None

    def test_find_note_cards_by_parent(self, db_session: Session) -> None:
        url_card = create_test_url_card(db_session)
        mine = create_test_note_card(db_session, url_card, "first")
        theirs = create_test_note_card(db_session, url_card, "second", curator_id=BOB)

        notes = CardRepository(db_session).find_note_cards_by_parent(url_card.id)
        assert [note.id for note in notes] == [mine.id, theirs.id]
        assert isinstance(notes[0].content, NoteCardContent)

    def test_published_record_is_stored_once(self, db_session: Session) -> None:
        record_uri = "at://did:plc:alice/network.linkshelf.card/1"
        card = create_test_url_card(db_session, record_uri=record_uri)
        repository = CardRepository(db_session)
        loaded = repository.find_by_id(card.id)
        assert loaded is not None
        assert loaded.original_published_record_id == published(record_uri)

        loaded.mark_card_in_library_as_published(CuratorId(ALICE), published(record_uri))
        repository.save(loaded)
        db_session.commit()

        count = db_session.execute(
            select(func.count()).select_from(models.PublishedRecord)
        ).scalar_one()
        assert count == 1

    def test_record_missing_after_conflict_is_a_persistence_error(
        self, db_session: Session, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        record = published("at://did:plc:alice/network.linkshelf.card/2")
        repository = PublishedRecordRepository(db_session)
        repository.get_or_create(record)
        monkeypatch.setattr(repository, "find_id", lambda _record: None)

        with pytest.raises(PersistenceError, match="vanished"):
            repository.get_or_create(record)

    def test_delete_removes_memberships(self, db_session: Session) -> None:
        card = create_test_url_card(db_session)
        repository = CardRepository(db_session)

        assert repository.delete(card.id)
        db_session.commit()

        assert repository.find_by_id(card.id) is None
        remaining = db_session.execute(
            select(func.count()).select_from(models.LibraryMembership)
        ).scalar_one()
        assert remaining == 0
        assert not repository.delete(card.id)
