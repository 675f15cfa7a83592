"""Repository for deduplicated published records."""

import structlog
from sqlalchemy import insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from linkshelf.domain.common.value_objects import PublishedRecordId
from linkshelf.exceptions import PersistenceError
from linkshelf.infrastructure.common.errors import translate_persistence_errors
from linkshelf.models import PublishedRecord as PublishedRecordORM

logger = structlog.get_logger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class PublishedRecordRepository:
    """
    Stores each (uri, cid) pair exactly once.

    Two operations publishing the same record may race; the insert skips
    on conflict and the loser reads back the winner's row id.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    @translate_persistence_errors
    def get_or_create(self, record: PublishedRecordId) -> int:
        """
        Return the row id for a published record, inserting it if new.

        Args:
            record: The (uri, cid) pair

        Returns:
            Id of the single row holding this pair
        """
        dialect_insert = _UPSERT_DIALECTS.get(self.db.get_bind().dialect.name)
        if dialect_insert is not None:
            stmt = (
                dialect_insert(PublishedRecordORM)
                .values(uri=record.uri, cid=record.cid)
                .on_conflict_do_nothing(index_elements=["uri", "cid"])
                .returning(PublishedRecordORM.id)
            )
            inserted_id = self.db.execute(stmt).scalar_one_or_none()
            if inserted_id is not None:
                return inserted_id
            logger.debug("published_record_already_exists", uri=record.uri, cid=record.cid)
        else:
            existing_id = self.find_id(record)
            if existing_id is not None:
                return existing_id
            stmt = (
                insert(PublishedRecordORM)
                .values(uri=record.uri, cid=record.cid)
                .returning(PublishedRecordORM.id)
            )
            return self.db.execute(stmt).scalar_one()

        existing_id = self.find_id(record)
        if existing_id is None:
            raise PersistenceError(f"Published record {record.uri} vanished after conflict")
        return existing_id

    def find_id(self, record: PublishedRecordId) -> int | None:
        stmt = select(PublishedRecordORM.id).where(
            PublishedRecordORM.uri == record.uri,
            PublishedRecordORM.cid == record.cid,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_or_create_optional(self, record: PublishedRecordId | None) -> int | None:
        return self.get_or_create(record) if record is not None else None
