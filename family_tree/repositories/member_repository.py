"""
Repository for family member data access
"""

import uuid

from family_tree.database import db
from family_tree.database.models import Member
from family_tree.repositories.base_repository import ModelRepository


class MemberRepository(ModelRepository[Member]):
    """Owner-scoped access to members"""

    def __init__(self, db_session=None):
        super().__init__(Member, db_session)

    def get_for_owner(self, owner_id: str, member_id: uuid.UUID) -> Member | None:
        """Get a member only if it belongs to owner_id"""
        def _get_for_owner():
            return self.db_session.execute(
                db.select(Member).where(Member.id == member_id, Member.owner_id == owner_id)
            ).scalar_one_or_none()

        return self.safe_query(_get_for_owner, "get member for owner")

    def list_for_owner(self, owner_id: str) -> list[Member]:
        """List members by family name, then given name"""
        def _list_for_owner():
            return self.db_session.execute(
                db.select(Member)
                .where(Member.owner_id == owner_id)
                .order_by(Member.last_name, Member.first_name, Member.created_at)
            ).scalars().all()

        return self.safe_query(_list_for_owner, "list members for owner")

    def count_for_owner(self, owner_id: str) -> int:
        def _count_for_owner():
            return self.db_session.execute(
                db.select(db.func.count(Member.id)).where(Member.owner_id == owner_id)
            ).scalar_one()

        return self.safe_query(_count_for_owner, "count members for owner")
