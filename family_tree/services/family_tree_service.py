"""
Family tree service: loads a consistent snapshot and runs the tree builder or relationship resolver
"""

from flask import current_app, has_app_context

from family_tree.repositories import MemberRepository, RelationshipRepository
from family_tree.services.base_service import BaseService
from family_tree.services.exceptions import NotFoundError, handle_service_exceptions
from family_tree.services.member_service import parse_uuid
from family_tree.shared.hierarchy_builder import HierarchyBuilder
from family_tree.shared.kinship import DEFAULT_SETTINGS, KinshipSettings
from family_tree.shared.logging_config import get_project_logger
from family_tree.shared.models import Member, Relationship, RelationshipPath, TreeNode
from family_tree.shared.relationship_resolver import RelationshipResolver


logger = get_project_logger(__name__)


class FamilyTreeService(BaseService):
    """Derived views over an owner's members and relationships

    Nothing derived here is persisted; every call reads a fresh snapshot.
    """

    def __init__(self, db_session=None, settings: KinshipSettings | None = None):
        super().__init__(db_session)
        self.member_repository = MemberRepository(self.db_session)
        self.relationship_repository = RelationshipRepository(self.db_session)
        self._settings = settings

    @property
    def settings(self) -> KinshipSettings:
        """Explicit settings, else the app's KINSHIP_SETTINGS, else defaults"""
        if self._settings is not None:
            return self._settings
        if has_app_context():
            return current_app.config.get('KINSHIP_SETTINGS') or DEFAULT_SETTINGS
        return DEFAULT_SETTINGS

    def load_snapshot(self, owner_id: str) -> tuple[list[Member], list[Relationship]]:
        """Immutable copies of the owner's members and relationships"""
        members = [m.to_snapshot() for m in self.member_repository.list_for_owner(owner_id)]
        relationships = [r.to_snapshot() for r in self.relationship_repository.list_for_owner(owner_id)]
        return members, relationships

    @handle_service_exceptions(logger)
    def build_tree(self, owner_id: str) -> list[TreeNode]:
        members, relationships = self.load_snapshot(owner_id)
        forest = HierarchyBuilder(self.settings).build(members, relationships)
        logger.debug(f"Tree for owner {owner_id}: {len(forest)} roots, {len(members)} members")
        return forest

    @handle_service_exceptions(logger)
    def resolve(self, owner_id: str, member_a_id, member_b_id) -> RelationshipPath:
        """Resolve how member_b is related to member_a

        Raises:
            NotFoundError: unknown member, or no path connects the two
        """
        member_a_key = str(parse_uuid(member_a_id, 'member id'))
        member_b_key = str(parse_uuid(member_b_id, 'member id'))

        resolver = self._resolver(owner_id)
        for key in (member_a_key, member_b_key):
            if key not in resolver.members_by_id:
                raise NotFoundError(f"Member not found: {key}")

        result = resolver.resolve(member_a_key, member_b_key)
        if result is None:
            raise NotFoundError("No relationship found between these members")
        return result

    @handle_service_exceptions(logger)
    def resolve_all(self, owner_id: str, member_id) -> list[RelationshipPath]:
        """All members related to member_id, closest first"""
        member_key = str(parse_uuid(member_id, 'member id'))

        resolver = self._resolver(owner_id)
        if member_key not in resolver.members_by_id:
            raise NotFoundError(f"Member not found: {member_key}")
        return resolver.resolve_all(member_key)

    def _resolver(self, owner_id: str) -> RelationshipResolver:
        members, relationships = self.load_snapshot(owner_id)
        if not members:
            raise NotFoundError("No family members recorded")
        return RelationshipResolver(members, relationships, self.settings)


family_tree_service = FamilyTreeService()
