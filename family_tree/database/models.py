"""
SQLAlchemy models for family members and the relationships between them
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy.dialects.postgresql import UUID as POSTGRESQL_UUID
from sqlalchemy.types import CHAR, TypeDecorator

from family_tree.shared import models as snapshots

from . import db


class UUID(TypeDecorator):
    """Platform-independent UUID type.

    Uses PostgreSQL's UUID type when available, otherwise uses CHAR(36)
    to store the UUID string.
    """
    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(POSTGRESQL_UUID())
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if not isinstance(value, uuid.UUID):
            value = uuid.UUID(str(value))
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


GENDERS = tuple(g.value for g in snapshots.Gender)
RELATIONSHIP_TYPES = tuple(t.value for t in snapshots.RelationshipType)


class Member(db.Model):
    """Model for people in the family tree"""
    __tablename__ = 'members'

    id = db.Column(UUID(), primary_key=True, default=uuid.uuid4)

    # Owning account; authentication lives outside this application
    owner_id = db.Column(db.String(255), nullable=False, index=True)

    # Name fields
    first_name = db.Column(db.String(255), nullable=False)
    last_name = db.Column(db.String(255), nullable=False)
    gender = db.Column(db.String(10), nullable=False, default='other')

    # Life events
    birth_date = db.Column(db.Date)
    death_date = db.Column(db.Date)
    birth_place = db.Column(db.String(255))

    # Additional information
    occupation = db.Column(db.String(255))
    bio = db.Column(db.Text)
    photo_url = db.Column(db.String(500))

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(UTC))
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))

    # Deleting a member removes every relationship that references it
    relationships_as_a = db.relationship('Relationship', foreign_keys='Relationship.member_a_id',
                                         back_populates='member_a', cascade='all, delete-orphan')
    relationships_as_b = db.relationship('Relationship', foreign_keys='Relationship.member_b_id',
                                         back_populates='member_b', cascade='all, delete-orphan')

    __table_args__ = (
        db.CheckConstraint(f"gender IN {GENDERS}", name='ck_member_gender'),
    )

    @property
    def full_name(self):
        return " ".join(filter(None, [self.first_name, self.last_name]))

    @property
    def all_relationships(self):
        return self.relationships_as_a + self.relationships_as_b

    def to_snapshot(self) -> snapshots.Member:
        """Immutable copy for the tree builder and relationship resolver"""
        return snapshots.Member(
            id=str(self.id),
            first_name=self.first_name,
            last_name=self.last_name,
            gender=snapshots.Gender(self.gender or 'other'),
            birth_date=self.birth_date,
            death_date=self.death_date,
            birth_place=self.birth_place,
            occupation=self.occupation,
            bio=self.bio,
            photo_url=self.photo_url,
        )

    def __repr__(self):
        return f'<Member {self.full_name}>'


class Relationship(db.Model):
    """Model for undirected typed relationships between two members"""
    __tablename__ = 'relationships'

    id = db.Column(UUID(), primary_key=True, default=uuid.uuid4)
    member_a_id = db.Column(UUID(), db.ForeignKey('members.id', ondelete='CASCADE'), nullable=False)
    member_b_id = db.Column(UUID(), db.ForeignKey('members.id', ondelete='CASCADE'), nullable=False)
    relationship_type = db.Column(db.String(20), nullable=False)  # parent-child, spouse, sibling

    # Insertion order, assigned by RelationshipRepository.create
    sequence = db.Column(db.Integer, nullable=False)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(UTC))

    member_a = db.relationship('Member', foreign_keys=[member_a_id], back_populates='relationships_as_a')
    member_b = db.relationship('Member', foreign_keys=[member_b_id], back_populates='relationships_as_b')

    __table_args__ = (
        db.CheckConstraint('member_a_id <> member_b_id', name='ck_relationship_distinct_members'),
        db.CheckConstraint(f"relationship_type IN {RELATIONSHIP_TYPES}", name='ck_relationship_type'),
        db.Index('idx_relationship_member_a', 'member_a_id'),
        db.Index('idx_relationship_member_b', 'member_b_id'),
        db.Index('idx_relationship_sequence', 'sequence'),
    )

    def to_snapshot(self) -> snapshots.Relationship:
        return snapshots.Relationship(
            id=str(self.id),
            member_a_id=str(self.member_a_id),
            member_b_id=str(self.member_b_id),
            relationship_type=snapshots.RelationshipType(self.relationship_type),
        )

    def __repr__(self):
        return f'<Relationship {self.member_a_id} {self.relationship_type} {self.member_b_id}>'
