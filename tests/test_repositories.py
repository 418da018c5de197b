"""
Tests for the repository layer
"""

import uuid
from datetime import datetime
from unittest.mock import Mock

import pytest

from family_tree.database.models import Member
from family_tree.repositories import MemberRepository, RelationshipRepository
from family_tree.repositories.base_repository import BaseRepository


@pytest.fixture
def member_repository(db):
    return MemberRepository()


@pytest.fixture
def relationship_repository(db):
    return RelationshipRepository()


def create_members(repository, *first_names, owner_id='test-owner'):
    return [repository.create(owner_id=owner_id, first_name=name, last_name='Test') for name in first_names]


class TestBaseRepository:
    """Test shared error handling"""

    def test_safe_operation_flushes(self, member_repository, db):
        result = member_repository.safe_operation(
            lambda: db.session.add(Member(owner_id='o', first_name='A', last_name='B')) or 'done',
            "add member"
        )

        assert result == 'done'
        assert member_repository.count() == 1

    def test_safe_operation_rolls_back_and_reraises(self):
        session = Mock()
        repository = BaseRepository(session)

        def failing():
            raise RuntimeError("write failed")

        with pytest.raises(RuntimeError, match="write failed"):
            repository.safe_operation(failing, "failing write")

        session.rollback.assert_called_once()
        session.flush.assert_not_called()

    def test_safe_query_reraises_without_rollback(self):
        session = Mock()
        repository = BaseRepository(session)

        def failing():
            raise LookupError("read failed")

        with pytest.raises(LookupError):
            repository.safe_query(failing, "failing read")

        session.rollback.assert_not_called()


class TestMemberRepository:
    """Test owner-scoped member queries"""

    def test_crud(self, member_repository):
        (member,) = create_members(member_repository, 'Ada')

        assert member_repository.get_by_id(member.id) is member
        member_repository.update(member, occupation='Mathematician', not_a_column='ignored')
        assert member.occupation == 'Mathematician'
        assert not hasattr(member, 'not_a_column')

        member_repository.delete(member)
        assert member_repository.get_all() == []

    def test_get_for_owner(self, member_repository):
        (member,) = create_members(member_repository, 'Ada')

        assert member_repository.get_for_owner('test-owner', member.id) is member
        assert member_repository.get_for_owner('someone-else', member.id) is None
        assert member_repository.get_for_owner('test-owner', uuid.uuid4()) is None

    def test_count_for_owner(self, member_repository):
        create_members(member_repository, 'A', 'B')
        create_members(member_repository, 'C', owner_id='someone-else')

        assert member_repository.count_for_owner('test-owner') == 2
        assert member_repository.count() == 3


class TestRelationshipRepository:
    """Test relationship queries"""

    def test_find_existing_in_either_order(self, member_repository, relationship_repository):
        a, b, c = create_members(member_repository, 'A', 'B', 'C')
        rel = relationship_repository.create(member_a_id=a.id, member_b_id=b.id, relationship_type='spouse')

        assert relationship_repository.find_existing(a.id, b.id, 'spouse') is rel
        assert relationship_repository.find_existing(b.id, a.id, 'spouse') is rel
        assert relationship_repository.find_existing(a.id, b.id, 'sibling') is None
        assert relationship_repository.find_existing(a.id, c.id, 'spouse') is None

    def test_list_and_count_for_owner(self, member_repository, relationship_repository):
        a, b, c = create_members(member_repository, 'A', 'B', 'C')
        x, y = create_members(member_repository, 'X', 'Y', owner_id='someone-else')
        first = relationship_repository.create(member_a_id=a.id, member_b_id=b.id, relationship_type='spouse')
        second = relationship_repository.create(member_a_id=a.id, member_b_id=c.id, relationship_type='parent-child')
        relationship_repository.create(member_a_id=x.id, member_b_id=y.id, relationship_type='sibling')

        assert relationship_repository.list_for_owner('test-owner') == [first, second]
        assert relationship_repository.get_for_owner('someone-else', first.id) is None
        assert relationship_repository.count_by_type('test-owner') == {'spouse': 1, 'parent-child': 1}

    def test_list_for_owner_keeps_insertion_order_when_timestamps_tie(self, member_repository,
                                                                       relationship_repository):
        a, b, c, d = create_members(member_repository, 'A', 'B', 'C', 'D')
        same_moment = datetime(2024, 1, 1, 12, 0, 0)
        created = [
            relationship_repository.create(member_a_id=first.id, member_b_id=second.id,
                                           relationship_type='sibling', created_at=same_moment)
            for first, second in [(c, d), (a, b), (b, c), (a, d)]
        ]

        assert [rel.sequence for rel in created] == [1, 2, 3, 4]
        assert relationship_repository.list_for_owner('test-owner') == created
