"""Pytest configuration and fixtures."""

from collections.abc import Generator

import pytest
from sqlalchemy.orm import Session, sessionmaker

import linkshelf.models  # noqa: F401  # registers tables on Base.metadata
from linkshelf.config import Settings
from linkshelf.database import Base, create_database_engine
from linkshelf.domain.cards.entities.card import Card
from linkshelf.domain.cards.entities.collection import Collection
from linkshelf.domain.cards.services import CardFactory
from linkshelf.domain.cards.value_objects import CollectionAccessType, UrlMetadata
from linkshelf.domain.common.value_objects import CuratorId, PublishedRecordId
from linkshelf.infrastructure.cards.repositories import CardRepository, CollectionRepository

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

# Create test engine
test_engine = create_database_engine(Settings(DATABASE_URL=TEST_DATABASE_URL))

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

ALICE = "did:plc:alice"
BOB = "did:plc:bob"
CAROL = "did:plc:carol"


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


def published(uri: str, cid: str = "bafy-test") -> PublishedRecordId:
    return PublishedRecordId(uri=uri, cid=cid)


def create_test_url_card(
    db_session: Session,
    curator_id: str = ALICE,
    url: str = "https://example.com/article",
    title: str | None = None,
    in_library: bool = True,
    record_uri: str | None = None,
) -> Card:
    """Create a URL card and, by default, add it to its curator's library."""
    metadata = UrlMetadata(url=url, title=title) if title else None
    card = CardFactory().create_url_card(curator_id, url, metadata=metadata).unwrap()
    curator = CuratorId(curator_id)
    if in_library:
        card.add_to_library(curator)
    if record_uri:
        card.mark_as_published(published(record_uri))
    saved = CardRepository(db_session).save(card)
    db_session.commit()
    return saved


def create_test_note_card(
    db_session: Session,
    parent: Card,
    text: str,
    curator_id: str = ALICE,
    in_library: bool = True,
) -> Card:
    """Create a note attached to a URL card."""
    card = (
        CardFactory()
        .create_note_card(curator_id, text, parent_card_id=parent.id, url=parent.url)
        .unwrap()
    )
    if in_library:
        card.add_to_library(CuratorId(curator_id))
    saved = CardRepository(db_session).save(card)
    db_session.commit()
    return saved


def add_test_card_to_library(db_session: Session, card: Card, curator_id: str) -> Card:
    repository = CardRepository(db_session)
    stored = repository.find_by_id(card.id)
    assert stored is not None
    stored.add_to_library(CuratorId(curator_id))
    saved = repository.save(stored)
    db_session.commit()
    return saved


def create_test_collection(
    db_session: Session,
    author_id: str = ALICE,
    name: str = "Reads",
    description: str | None = None,
    access_type: CollectionAccessType = CollectionAccessType.CLOSED,
    cards: list[Card] | None = None,
    record_uri: str | None = None,
) -> Collection:
    """Create a collection authored by ``author_id`` linking the given cards."""
    author = CuratorId(author_id)
    collection = Collection.create(
        author_id=author, name=name, description=description, access_type=access_type
    ).unwrap()
    for card in cards or []:
        collection.add_card(card.id, author).unwrap()
    if record_uri:
        collection.mark_as_published(published(record_uri))
    saved = CollectionRepository(db_session).save(collection)
    db_session.commit()
    return saved
