"""Database models."""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from linkshelf.database import Base


class PublishedRecord(Base):
    """Deduplicated (uri, cid) provenance stamp of an external publication."""

    __tablename__ = "published_records"
    __table_args__ = (UniqueConstraint("uri", "cid", name="uq_published_records_uri_cid"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uri: Mapped[str] = mapped_column(String(512), nullable=False, index=True)
    cid: Mapped[str] = mapped_column(String(255), nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        """String representation of PublishedRecord."""
        return f"<PublishedRecord(id={self.id}, uri='{self.uri}')>"


class Card(Base):
    """Card model for saved URLs, notes and highlights."""

    __tablename__ = "cards"
    __table_args__ = (
        Index("ix_cards_curator_id_type", "curator_id", "type"),
        Index("ix_cards_url_type", "url", "type"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    curator_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    content_data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    url: Mapped[str | None] = mapped_column(Text, nullable=True)
    parent_card_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("cards.id", ondelete="SET NULL"), nullable=True, index=True
    )
    published_record_id: Mapped[int | None] = mapped_column(
        ForeignKey("published_records.id"), nullable=True
    )
    library_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    published_record: Mapped[PublishedRecord | None] = relationship(lazy="joined")

    __mapper_args__ = {"version_id_col": version, "version_id_generator": False}

    def __repr__(self) -> str:
        """String representation of Card."""
        return f"<Card(id={self.id}, type='{self.type}', curator_id='{self.curator_id}')>"


class LibraryMembership(Base):
    """One curator's library entry for a card."""

    __tablename__ = "library_memberships"

    card_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("cards.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[str] = mapped_column(String(255), primary_key=True, index=True)
    added_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    published_record_id: Mapped[int | None] = mapped_column(
        ForeignKey("published_records.id"), nullable=True
    )


class Collection(Base):
    """Collection model for curated card groupings."""

    __tablename__ = "collections"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    author_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    access_type: Mapped[str] = mapped_column(String(10), nullable=False)
    card_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    published_record_id: Mapped[int | None] = mapped_column(
        ForeignKey("published_records.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    published_record: Mapped[PublishedRecord | None] = relationship(lazy="joined")

    __mapper_args__ = {"version_id_col": version, "version_id_generator": False}

    def __repr__(self) -> str:
        """String representation of Collection."""
        return f"<Collection(id={self.id}, name='{self.name}')>"


class CollectionCollaborator(Base):
    """Curator invited to change a closed collection."""

    __tablename__ = "collection_collaborators"

    collection_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("collections.id", ondelete="CASCADE"), primary_key=True
    )
    collaborator_id: Mapped[str] = mapped_column(String(255), primary_key=True)


class CollectionCard(Base):
    """Link between a collection and a card."""

    __tablename__ = "collection_cards"

    collection_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("collections.id", ondelete="CASCADE"), primary_key=True
    )
    card_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("cards.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    added_by: Mapped[str] = mapped_column(String(255), nullable=False)
    added_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    published_record_id: Mapped[int | None] = mapped_column(
        ForeignKey("published_records.id"), nullable=True
    )
