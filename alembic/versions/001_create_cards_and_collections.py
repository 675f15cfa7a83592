"""Create cards, library memberships, collections and published records.

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the card and collection tables."""
    op.create_table(
        "published_records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("uri", sa.String(length=512), nullable=False),
        sa.Column("cid", sa.String(length=255), nullable=False),
        sa.Column(
            "recorded_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("uri", "cid", name="uq_published_records_uri_cid"),
    )
    op.create_index(
        op.f("ix_published_records_uri"), "published_records", ["uri"], unique=False
    )

    op.create_table(
        "cards",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("curator_id", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("content_data", sa.JSON(), nullable=False),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("parent_card_id", sa.Uuid(), nullable=True),
        sa.Column("published_record_id", sa.Integer(), nullable=True),
        sa.Column("library_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["parent_card_id"], ["cards.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["published_record_id"], ["published_records.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_cards_curator_id"), "cards", ["curator_id"], unique=False)
    op.create_index(op.f("ix_cards_parent_card_id"), "cards", ["parent_card_id"], unique=False)
    op.create_index("ix_cards_curator_id_type", "cards", ["curator_id", "type"], unique=False)
    op.create_index("ix_cards_url_type", "cards", ["url", "type"], unique=False)

    op.create_table(
        "library_memberships",
        sa.Column("card_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("added_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("published_record_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["card_id"], ["cards.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["published_record_id"], ["published_records.id"]),
        sa.PrimaryKeyConstraint("card_id", "user_id"),
    )
    op.create_index(
        op.f("ix_library_memberships_user_id"), "library_memberships", ["user_id"], unique=False
    )

    op.create_table(
        "collections",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("author_id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("access_type", sa.String(length=10), nullable=False),
        sa.Column("card_count", sa.Integer(), nullable=False),
        sa.Column("published_record_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["published_record_id"], ["published_records.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_collections_author_id"), "collections", ["author_id"], unique=False)

    op.create_table(
        "collection_collaborators",
        sa.Column("collection_id", sa.Uuid(), nullable=False),
        sa.Column("collaborator_id", sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(["collection_id"], ["collections.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("collection_id", "collaborator_id"),
    )

    op.create_table(
        "collection_cards",
        sa.Column("collection_id", sa.Uuid(), nullable=False),
        sa.Column("card_id", sa.Uuid(), nullable=False),
        sa.Column("added_by", sa.String(length=255), nullable=False),
        sa.Column("added_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("published_record_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["card_id"], ["cards.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["collection_id"], ["collections.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["published_record_id"], ["published_records.id"]),
        sa.PrimaryKeyConstraint("collection_id", "card_id"),
    )
    op.create_index(
        op.f("ix_collection_cards_card_id"), "collection_cards", ["card_id"], unique=False
    )


def downgrade() -> None:
    """Drop the card and collection tables."""
    op.drop_index(op.f("ix_collection_cards_card_id"), table_name="collection_cards")
    op.drop_table("collection_cards")
    op.drop_table("collection_collaborators")
    op.drop_index(op.f("ix_collections_author_id"), table_name="collections")
    op.drop_table("collections")
    op.drop_index(op.f("ix_library_memberships_user_id"), table_name="library_memberships")
    op.drop_table("library_memberships")
    op.drop_index("ix_cards_url_type", table_name="cards")
    op.drop_index("ix_cards_curator_id_type", table_name="cards")
    op.drop_index(op.f("ix_cards_parent_card_id"), table_name="cards")
    op.drop_index(op.f("ix_cards_curator_id"), table_name="cards")
    op.drop_table("cards")
    op.drop_index(op.f("ix_published_records_uri"), table_name="published_records")
    op.drop_table("published_records")
