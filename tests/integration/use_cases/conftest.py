"""Container fixtures wiring use cases to fake collaborators."""

from collections.abc import Generator
from dataclasses import dataclass, field

import pytest

from linkshelf.core import Container
from tests.fakes import (
    FakeCardPublisher,
    FakeCollectionPublisher,
    FakeIdentityResolver,
    FakeMetadataService,
    FakeProfileService,
)


@dataclass
class Collaborators:
    card_publisher: FakeCardPublisher = field(default_factory=FakeCardPublisher)
    collection_publisher: FakeCollectionPublisher = field(default_factory=FakeCollectionPublisher)
    profile_service: FakeProfileService = field(default_factory=FakeProfileService)
    identity_resolver: FakeIdentityResolver = field(
        default_factory=lambda: FakeIdentityResolver({"alice.example.com": "did:plc:alice"})
    )
    metadata_service: FakeMetadataService = field(default_factory=FakeMetadataService)


@pytest.fixture
def fakes() -> Collaborators:
    return Collaborators()


@pytest.fixture
def container(fakes: Collaborators) -> Generator[Container, None, None]:
    """A container whose external collaborators are in-memory fakes."""
    container = Container()
    container.card_publisher.override(fakes.card_publisher)
    container.collection_publisher.override(fakes.collection_publisher)
    container.profile_service.override(fakes.profile_service)
    container.identity_resolver.override(fakes.identity_resolver)
    container.metadata_service.override(fakes.metadata_service)
    yield container
    container.reset_override()
