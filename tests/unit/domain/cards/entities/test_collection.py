"""Tests for the Collection aggregate."""

from linkshelf.domain.cards.entities.collection import Collection
from linkshelf.domain.cards.events import (
    CardAddedToCollection,
    CardRemovedFromCollection,
    CollectionCreated,
)
from linkshelf.domain.cards.exceptions import (
    CollectionAccessError,
    CollectionCardLinkError,
    CollectionValidationError,
)
from linkshelf.domain.cards.value_objects import CardLink, CollectionAccessType
from linkshelf.domain.common.value_objects import CardId, CollectionId, CuratorId, PublishedRecordId

AUTHOR = CuratorId("did:plc:author")
COLLABORATOR = CuratorId("did:plc:collab")
STRANGER = CuratorId("did:plc:stranger")


def _collection(access_type: CollectionAccessType = CollectionAccessType.CLOSED) -> Collection:
    collection = Collection.create(
        author_id=AUTHOR, name="Reads", access_type=access_type
    ).unwrap()
    collection.collect_events()
    return collection


class TestCollectionCreate:
    def test_defaults(self) -> None:
        collection = Collection.create(author_id=AUTHOR, name="  Reads  ").unwrap()
        assert collection.name == "Reads"
        assert collection.description is None
        assert collection.is_closed
        assert collection.card_count == 0
        assert collection.created_at == collection.updated_at
        assert isinstance(collection.collect_events()[0], CollectionCreated)

    def test_name_is_required(self) -> None:
        result = Collection.create(author_id=AUTHOR, name="   ")
        assert result.is_failure
        assert isinstance(result.unwrap_error(), CollectionValidationError)

    def test_name_length_limit(self) -> None:
        assert Collection.create(author_id=AUTHOR, name="x" * 100).is_success
        assert Collection.create(author_id=AUTHOR, name="x" * 101).is_failure

    def test_description_length_limit(self) -> None:
        assert Collection.create(author_id=AUTHOR, name="n", description="d" * 500).is_success
        result = Collection.create(author_id=AUTHOR, name="n", description="d" * 501)
        assert result.is_failure
        assert result.unwrap_error().field == "description"

    def test_blank_description_becomes_none(self) -> None:
        collection = Collection.create(author_id=AUTHOR, name="n", description="  ").unwrap()
        assert collection.description is None

    def test_access_type_accepts_strings(self) -> None:
        collection = Collection.create(author_id=AUTHOR, name="n", access_type="open").unwrap()
        assert collection.is_open

    def test_unknown_access_type_fails(self) -> None:
        assert Collection.create(author_id=AUTHOR, name="n", access_type="PUBLIC").is_failure

    def test_duplicate_links_and_collaborators_are_collapsed(self) -> None:
        card_id = CardId.generate()
        collection = Collection.create(
            author_id=AUTHOR,
            name="n",
            collaborator_ids=[COLLABORATOR, COLLABORATOR],
            card_links=[
                CardLink(card_id=card_id, added_by=AUTHOR),
                CardLink(card_id=card_id, added_by=COLLABORATOR),
            ],
        ).unwrap()
        assert collection.collaborator_ids == [COLLABORATOR]
        assert collection.card_count == 1

    def test_existing_id_records_no_event(self) -> None:
        collection = Collection.create(
            author_id=AUTHOR, name="n", id=CollectionId.generate()
        ).unwrap()
        assert collection.collect_events() == []


class TestCollectionCards:
    def test_author_can_add_to_closed_collection(self) -> None:
        collection = _collection()
        card_id = CardId.generate()

        link = collection.add_card(card_id, AUTHOR).unwrap()
        assert link.card_id == card_id
        assert link.added_by == AUTHOR
        assert collection.card_count == 1
        assert isinstance(collection.collect_events()[0], CardAddedToCollection)

    def test_stranger_cannot_add_to_closed_collection(self) -> None:
        collection = _collection()
        result = collection.add_card(CardId.generate(), STRANGER)
        assert result.is_failure
        assert isinstance(result.unwrap_error(), CollectionAccessError)
        assert collection.card_count == 0

    def test_collaborator_can_add_to_closed_collection(self) -> None:
        collection = _collection()
        collection.add_collaborator(COLLABORATOR, AUTHOR)
        assert collection.add_card(CardId.generate(), COLLABORATOR).is_success

    def test_anyone_can_add_to_open_collection(self) -> None:
        collection = _collection(CollectionAccessType.OPEN)
        assert collection.add_card(CardId.generate(), STRANGER).is_success

    def test_adding_same_card_twice_keeps_first_link(self) -> None:
        collection = _collection(CollectionAccessType.OPEN)
        card_id = CardId.generate()
        first = collection.add_card(card_id, AUTHOR).unwrap()
        collection.collect_events()

        second = collection.add_card(card_id, STRANGER).unwrap()
        assert second == first
        assert collection.card_count == 1
        assert collection.collect_events() == []

    def test_remove_card(self) -> None:
        collection = _collection()
        card_id = CardId.generate()
        collection.add_card(card_id, AUTHOR)
        collection.collect_events()

        assert collection.remove_card(card_id, AUTHOR).is_success
        assert not collection.has_card(card_id)
        assert collection.card_count == 0
        assert isinstance(collection.collect_events()[0], CardRemovedFromCollection)

    def test_remove_unlinked_card_is_noop(self) -> None:
        collection = _collection()
        assert collection.remove_card(CardId.generate(), AUTHOR).is_success
        assert collection.collect_events() == []

    def test_stranger_cannot_remove_from_closed_collection(self) -> None:
        collection = _collection()
        card_id = CardId.generate()
        collection.add_card(card_id, AUTHOR)
        assert collection.remove_card(card_id, STRANGER).is_failure
        assert collection.has_card(card_id)

    def test_remove_deleted_card_skips_access_check(self) -> None:
        collection = _collection()
        card_id = CardId.generate()
        collection.add_card(card_id, AUTHOR)

        link = collection.remove_deleted_card(card_id)
        assert link is not None
        assert collection.card_count == 0
        assert collection.remove_deleted_card(card_id) is None

    def test_mark_card_link_as_published(self) -> None:
        collection = _collection()
        card_id = CardId.generate()
        collection.add_card(card_id, AUTHOR)
        record = PublishedRecordId(uri="at://did:plc:author/link/1", cid="bafy1")

        assert collection.mark_card_link_as_published(card_id, record).is_success
        link = collection.get_card_link(card_id)
        assert link is not None
        assert link.published_record_id == record

    def test_mark_unlinked_card_fails(self) -> None:
        collection = _collection()
        record = PublishedRecordId(uri="at://x/link/1", cid="bafy1")
        card_id = CardId.generate()
        result = collection.mark_card_link_as_published(card_id, record)
        error = result.unwrap_error()
        assert isinstance(error, CollectionCardLinkError)
        assert error.details == {"card_id": str(card_id)}


class TestCollectionAccess:
    def test_only_author_manages_collaborators(self) -> None:
        collection = _collection()
        assert collection.add_collaborator(COLLABORATOR, STRANGER).is_failure
        assert collection.add_collaborator(COLLABORATOR, AUTHOR).is_success
        assert collection.add_collaborator(COLLABORATOR, AUTHOR).is_success
        assert collection.collaborator_ids == [COLLABORATOR]

        assert collection.remove_collaborator(COLLABORATOR, COLLABORATOR).is_failure
        assert collection.remove_collaborator(COLLABORATOR, AUTHOR).is_success
        assert not collection.is_collaborator(COLLABORATOR)

    def test_removed_collaborator_loses_access(self) -> None:
        collection = _collection()
        collection.add_collaborator(COLLABORATOR, AUTHOR)
        collection.remove_collaborator(COLLABORATOR, AUTHOR)
        assert not collection.can_add_card(COLLABORATOR)

    def test_change_access_type(self) -> None:
        collection = _collection()
        assert collection.change_access_type("OPEN", STRANGER).is_failure
        assert collection.change_access_type(CollectionAccessType.OPEN, AUTHOR).is_success
        assert collection.can_add_card(STRANGER)
        assert collection.change_access_type("bogus", AUTHOR).is_failure

    def test_update_details(self) -> None:
        collection = _collection()
        assert collection.update_details("Renamed", "About", STRANGER).is_failure
        assert collection.update_details(" Renamed ", "About", AUTHOR).is_success
        assert collection.name == "Renamed"
        assert collection.description == "About"
        assert collection.update_details("", None, AUTHOR).is_failure
        assert collection.name == "Renamed"

    def test_only_author_can_delete(self) -> None:
        collection = _collection(CollectionAccessType.OPEN)
        collection.add_collaborator(COLLABORATOR, AUTHOR)
        assert collection.can_delete(AUTHOR)
        assert not collection.can_delete(COLLABORATOR)
