"""
Repository layer for data access
"""

from .member_repository import MemberRepository
from .relationship_repository import RelationshipRepository


__all__ = [
    'MemberRepository',
    'RelationshipRepository'
]
