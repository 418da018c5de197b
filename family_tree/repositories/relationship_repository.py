"""
Repository for relationship data access
"""

import uuid

from sqlalchemy import and_, or_

from family_tree.database import db
from family_tree.database.models import Member, Relationship
from family_tree.repositories.base_repository import ModelRepository


class RelationshipRepository(ModelRepository[Relationship]):
    """Owner-scoped access to relationships

    Relationships have no owner column; they belong to the owner of their
    first endpoint.
    """

    def __init__(self, db_session=None):
        super().__init__(Relationship, db_session)

    def create(self, **kwargs) -> Relationship:
        """Create a relationship numbered after every existing one"""
        kwargs.setdefault('sequence', self._next_sequence())
        return super().create(**kwargs)

    def _next_sequence(self) -> int:
        def _next_sequence():
            return self.db_session.execute(
                db.select(db.func.coalesce(db.func.max(Relationship.sequence), 0) + 1)
            ).scalar_one()

        return self.safe_query(_next_sequence, "next relationship sequence")

    def _owned(self, owner_id: str):
        return db.select(Relationship).join(
            Member, Relationship.member_a_id == Member.id
        ).where(Member.owner_id == owner_id)

    def list_for_owner(self, owner_id: str) -> list[Relationship]:
        """List relationships in insertion order"""
        def _list_for_owner():
            return self.db_session.execute(
                self._owned(owner_id).order_by(Relationship.sequence, Relationship.id)
            ).scalars().all()

        return self.safe_query(_list_for_owner, "list relationships for owner")

    def get_for_owner(self, owner_id: str, relationship_id: uuid.UUID) -> Relationship | None:
        def _get_for_owner():
            return self.db_session.execute(
                self._owned(owner_id).where(Relationship.id == relationship_id)
            ).scalar_one_or_none()

        return self.safe_query(_get_for_owner, "get relationship for owner")

    def find_existing(self, member_a_id: uuid.UUID, member_b_id: uuid.UUID,
                      relationship_type: str) -> Relationship | None:
        """Find a relationship of this type between the pair, in either order"""
        def _find_existing():
            return self.db_session.execute(
                db.select(Relationship).where(
                    Relationship.relationship_type == relationship_type,
                    or_(
                        and_(Relationship.member_a_id == member_a_id, Relationship.member_b_id == member_b_id),
                        and_(Relationship.member_a_id == member_b_id, Relationship.member_b_id == member_a_id),
                    )
                )
            ).scalars().first()

        return self.safe_query(_find_existing, "find existing relationship")

    def count_by_type(self, owner_id: str) -> dict[str, int]:
        """Relationship counts per type for an owner"""
        def _count_by_type():
            rows = self.db_session.execute(
                db.select(Relationship.relationship_type, db.func.count(Relationship.id))
                .join(Member, Relationship.member_a_id == Member.id)
                .where(Member.owner_id == owner_id)
                .group_by(Relationship.relationship_type)
            ).all()
            return {relationship_type: count for relationship_type, count in rows}

        return self.safe_query(_count_by_type, "count relationships by type")
