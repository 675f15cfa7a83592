"""Library membership lookups by domain identifiers."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from linkshelf.domain.common.value_objects import CardId, CuratorId
from linkshelf.infrastructure.common.errors import translate_persistence_errors
from linkshelf.models import LibraryMembership as LibraryMembershipORM


class CardLibraryQueryService:
    def __init__(self, db: Session) -> None:
        self.db = db

    @translate_persistence_errors
    def get_libraries_for_card(self, card_id: CardId) -> list[CuratorId]:
        stmt = (
            select(LibraryMembershipORM.user_id)
            .where(LibraryMembershipORM.card_id == card_id.value)
            .order_by(LibraryMembershipORM.added_at, LibraryMembershipORM.user_id)
        )
        return [CuratorId(user_id) for user_id in self.db.execute(stmt).scalars()]

    @translate_persistence_errors
    def get_cards_in_library(self, curator_id: CuratorId) -> list[CardId]:
        stmt = (
            select(LibraryMembershipORM.card_id)
            .where(LibraryMembershipORM.user_id == curator_id.value)
            .order_by(LibraryMembershipORM.added_at, LibraryMembershipORM.card_id)
        )
        return [CardId(card_id) for card_id in self.db.execute(stmt).scalars()]

    @translate_persistence_errors
    def is_card_in_library(self, card_id: CardId, curator_id: CuratorId) -> bool:
        stmt = select(LibraryMembershipORM.card_id).where(
            LibraryMembershipORM.card_id == card_id.value,
            LibraryMembershipORM.user_id == curator_id.value,
        )
        return self.db.execute(stmt.limit(1)).first() is not None

    @translate_persistence_errors
    def get_library_membership_count(self, card_id: CardId) -> int:
        stmt = (
            select(func.count())
            .select_from(LibraryMembershipORM)
            .where(LibraryMembershipORM.card_id == card_id.value)
        )
        return self.db.execute(stmt).scalar_one()

    @translate_persistence_errors
    def get_library_card_count(self, curator_id: CuratorId) -> int:
        stmt = (
            select(func.count())
            .select_from(LibraryMembershipORM)
            .where(LibraryMembershipORM.user_id == curator_id.value)
        )
        return self.db.execute(stmt).scalar_one()
