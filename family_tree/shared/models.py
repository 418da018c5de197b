"""
Shared data models for family tree processing

These are immutable snapshots handed to the tree builder and the
relationship resolver. Database rows are converted with ``to_snapshot()``.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class Gender(str, Enum):
    """Gender of a family member"""
    MALE = 'male'
    FEMALE = 'female'
    OTHER = 'other'


class RelationshipType(str, Enum):
    """Type of an undirected relationship record"""
    PARENT_CHILD = 'parent-child'
    SPOUSE = 'spouse'
    SIBLING = 'sibling'


@dataclass(frozen=True)
class Member:
    """Represents a person in the family tree"""
    id: str
    first_name: str = ""
    last_name: str = ""
    gender: Gender = Gender.OTHER

    # Life events
    birth_date: date | None = None
    death_date: date | None = None
    birth_place: str | None = None

    # Additional info
    occupation: str | None = None
    bio: str | None = None
    photo_url: str | None = None

    @property
    def full_name(self) -> str:
        """Get full name"""
        return " ".join(filter(None, [self.first_name, self.last_name]))

    @property
    def birth_year(self) -> int | None:
        return self.birth_date.year if self.birth_date else None


@dataclass(frozen=True)
class Relationship:
    """An undirected, typed edge between two members

    For parent-child records the direction is not stored; see
    ``family_tree.shared.kinship.infer_parent_child``.
    """
    id: str
    member_a_id: str
    member_b_id: str
    relationship_type: RelationshipType

    def involves(self, member_id: str) -> bool:
        return member_id in (self.member_a_id, self.member_b_id)

    def other(self, member_id: str) -> str:
        """Get the endpoint opposite to member_id"""
        return self.member_b_id if member_id == self.member_a_id else self.member_a_id


@dataclass(frozen=True)
class TreeNode:
    """One member placed in a rendered hierarchy"""
    member: Member
    spouse: Member | None = None
    children: tuple['TreeNode', ...] = field(default_factory=tuple)
    generation: int = 0

    def iter_nodes(self):
        """Yield this node and all descendants depth-first"""
        yield self
        for child in self.children:
            yield from child.iter_nodes()


@dataclass(frozen=True)
class RelationshipPath:
    """Result of resolving kinship between two members

    ``relationship`` describes what ``member_b`` is to ``member_a``.
    """
    member_a: Member
    member_b: Member
    path: tuple[Member, ...]
    degree: int
    relationship: str
