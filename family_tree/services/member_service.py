"""
Service for managing family members and their relationships
"""

import uuid
from datetime import date

from family_tree.database.models import Member, Relationship
from family_tree.repositories import MemberRepository, RelationshipRepository
from family_tree.services.base_service import BaseService
from family_tree.services.exceptions import (
    ConflictError,
    NotFoundError,
    ValidationError,
    handle_service_exceptions,
)
from family_tree.shared.logging_config import get_project_logger
from family_tree.shared.models import Gender, RelationshipType


logger = get_project_logger(__name__)

NAME_FIELDS = ('first_name', 'last_name')
DATE_FIELDS = ('birth_date', 'death_date')
OPTIONAL_TEXT_FIELDS = ('birth_place', 'occupation', 'bio', 'photo_url')
MEMBER_FIELDS = frozenset(NAME_FIELDS + DATE_FIELDS + OPTIONAL_TEXT_FIELDS + ('gender',))


def parse_uuid(value, field_name: str = 'id') -> uuid.UUID:
    """Parse an identifier, raising ValidationError on malformed input"""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError) as e:
        raise ValidationError(f"Invalid {field_name}: {value}") from e


def parse_date(value, field_name: str) -> date | None:
    """Parse an ISO YYYY-MM-DD date; empty values become None"""
    if value is None or value == '':
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as e:
        raise ValidationError(f"Invalid {field_name}: expected YYYY-MM-DD, got {value!r}") from e


class MemberService(BaseService):
    """Owner-scoped member and relationship management"""

    def __init__(self, db_session=None):
        super().__init__(db_session)
        self.member_repository = MemberRepository(self.db_session)
        self.relationship_repository = RelationshipRepository(self.db_session)

    # Members

    @handle_service_exceptions(logger)
    def list_members(self, owner_id: str) -> list[Member]:
        return self.member_repository.list_for_owner(owner_id)

    @handle_service_exceptions(logger)
    def get_member(self, owner_id: str, member_id) -> Member:
        """Get a member, raising NotFoundError when absent or owned by someone else"""
        member = self.member_repository.get_for_owner(owner_id, parse_uuid(member_id, 'member id'))
        if member is None:
            raise NotFoundError(f"Member not found: {member_id}")
        return member

    @handle_service_exceptions(logger)
    def create_member(self, owner_id: str, data: dict) -> Member:
        values = self._clean_member_data(data, partial=False)
        self._check_life_dates(values.get('birth_date'), values.get('death_date'))

        member = self.member_repository.create(owner_id=owner_id, **values)
        self.commit()
        logger.info(f"Created member {member.full_name} ({member.id}) for owner {owner_id}")
        return member

    @handle_service_exceptions(logger)
    def update_member(self, owner_id: str, member_id, data: dict) -> Member:
        member = self.get_member(owner_id, member_id)
        values = self._clean_member_data(data, partial=True)
        self._check_life_dates(values.get('birth_date', member.birth_date),
                               values.get('death_date', member.death_date))

        self.member_repository.update(member, **values)
        self.commit()
        logger.info(f"Updated member {member.id}: {sorted(values)}")
        return member

    @handle_service_exceptions(logger)
    def delete_member(self, owner_id: str, member_id) -> int:
        """Delete a member and every relationship referencing it

        Returns:
            Number of relationships removed with the member
        """
        member = self.get_member(owner_id, member_id)
        removed = len(member.all_relationships)

        self.member_repository.delete(member)
        self.commit()
        logger.info(f"Deleted member {member_id} and {removed} relationships")
        return removed

    def _clean_member_data(self, data: dict, partial: bool) -> dict:
        """Validate member fields; empty optional values are stored as NULL"""
        if not isinstance(data, dict):
            raise ValidationError("Member data must be an object")

        unknown = set(data) - MEMBER_FIELDS
        if unknown:
            raise ValidationError(f"Unknown member fields: {', '.join(sorted(unknown))}")

        values = {}
        for field_name in NAME_FIELDS:
            if field_name not in data and partial:
                continue
            value = str(data.get(field_name) or '').strip()
            if not value:
                raise ValidationError(f"Missing required field: {field_name}")
            values[field_name] = value

        if 'gender' in data or not partial:
            gender = data.get('gender') or Gender.OTHER.value
            try:
                values['gender'] = Gender(gender).value
            except ValueError as e:
                raise ValidationError(f"Invalid gender: {gender}") from e

        for field_name in DATE_FIELDS:
            if field_name in data:
                values[field_name] = parse_date(data[field_name], field_name)

        for field_name in OPTIONAL_TEXT_FIELDS:
            if field_name in data:
                value = data[field_name]
                values[field_name] = (str(value).strip() or None) if value is not None else None

        return values

    @staticmethod
    def _check_life_dates(birth_date: date | None, death_date: date | None):
        if birth_date and death_date and death_date < birth_date:
            raise ValidationError("Death date cannot be before birth date")

    # Relationships

    @handle_service_exceptions(logger)
    def list_relationships(self, owner_id: str) -> list[Relationship]:
        return self.relationship_repository.list_for_owner(owner_id)

    @handle_service_exceptions(logger)
    def add_relationship(self, owner_id: str, member_a_id, member_b_id, relationship_type: str) -> Relationship:
        """Add a relationship, rejecting self-links and duplicates in either order"""
        relationship = self._add_relationship(owner_id, member_a_id, member_b_id, relationship_type)
        self.commit()
        logger.info(f"Added {relationship.relationship_type} relationship {relationship.id}")
        return relationship

    @handle_service_exceptions(logger)
    def add_relationships_bulk(self, owner_id: str, entries: list[dict]) -> list[Relationship]:
        """Add several relationships in one transaction; any failure adds none"""
        if not isinstance(entries, list) or not entries:
            raise ValidationError("No relationships provided")
        if not all(isinstance(entry, dict) for entry in entries):
            raise ValidationError("Each relationship must be an object")

        try:
            created = [
                self._add_relationship(owner_id, entry['member_a_id'], entry['member_b_id'],
                                       entry['relationship_type'])
                for entry in entries
            ]
        except Exception:
            self.db_session.rollback()
            raise

        self.commit()
        logger.info(f"Added {len(created)} relationships in bulk for owner {owner_id}")
        return created

    def _add_relationship(self, owner_id: str, member_a_id, member_b_id, relationship_type: str) -> Relationship:
        try:
            relationship_type = RelationshipType(relationship_type).value
        except ValueError as e:
            raise ValidationError(f"Invalid relationship type: {relationship_type}") from e

        member_a_uuid = parse_uuid(member_a_id, 'member_a_id')
        member_b_uuid = parse_uuid(member_b_id, 'member_b_id')
        if member_a_uuid == member_b_uuid:
            raise ValidationError("A member cannot be related to itself")

        self.get_member(owner_id, member_a_uuid)
        self.get_member(owner_id, member_b_uuid)

        if self.relationship_repository.find_existing(member_a_uuid, member_b_uuid, relationship_type):
            raise ConflictError("This relationship already exists")

        return self.relationship_repository.create(
            member_a_id=member_a_uuid,
            member_b_id=member_b_uuid,
            relationship_type=relationship_type,
        )

    @handle_service_exceptions(logger)
    def delete_relationship(self, owner_id: str, relationship_id) -> None:
        relationship = self.relationship_repository.get_for_owner(
            owner_id, parse_uuid(relationship_id, 'relationship id'))
        if relationship is None:
            raise NotFoundError(f"Relationship not found: {relationship_id}")

        self.relationship_repository.delete(relationship)
        self.commit()
        logger.info(f"Deleted relationship {relationship_id}")

    @handle_service_exceptions(logger)
    def get_stats(self, owner_id: str) -> dict:
        by_type = self.relationship_repository.count_by_type(owner_id)
        return {
            'total_members': self.member_repository.count_for_owner(owner_id),
            'total_relationships': sum(by_type.values()),
            'relationships_by_type': {t.value: by_type.get(t.value, 0) for t in RelationshipType},
        }


member_service = MemberService()
