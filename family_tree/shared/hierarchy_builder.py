"""
Hierarchy builder: turns flat members + relationships into a forest of tree nodes
"""

from collections.abc import Iterable, Mapping
from datetime import date

from .kinship import DEFAULT_SETTINGS, KinshipSettings, infer_parent_child
from .logging_config import get_project_logger
from .models import Member, Relationship, RelationshipType, TreeNode


logger = get_project_logger(__name__)


class HierarchyBuilder:
    """Build rooted family trees for top-down rendering

    Relationship records carry no parent/child direction and no notion of
    which spouse is the "main" one, so both are inferred here:

    - parent/child direction via ``infer_parent_child``
    - of two spouses, the one with children stays a root candidate and the
      other is attached to it as ``spouse``

    Every member is placed at most once, at the first root (in root order)
    that reaches it. Spouse attachments do not count as placements.
    """

    def __init__(self, settings: KinshipSettings | None = None):
        self.settings = settings or DEFAULT_SETTINGS

    def build(self, members: Iterable[Member], relationships: Iterable[Relationship]) -> list[TreeNode]:
        """
        Build the forest

        Args:
            members: All members (order decides root order)
            relationships: All relationship records (order decides child order)

        Returns:
            Root tree nodes; empty when there are no members
        """
        members_by_id: dict[str, Member] = {}
        for member in members:
            members_by_id.setdefault(member.id, member)

        if not members_by_id:
            return []

        parent_child_rels, spouse_rels = self._partition(relationships, members_by_id)

        children_map: dict[str, list[str]] = {}
        parent_map: dict[str, list[str]] = {}
        for rel in parent_child_rels:
            parent_id, child_id = infer_parent_child(rel, members_by_id, self.settings)
            children_map.setdefault(parent_id, []).append(child_id)
            parent_map.setdefault(child_id, []).append(parent_id)

        secondary_ids: set[str] = set()
        spouse_of: dict[str, str] = {}
        for rel in spouse_rels:
            primary_id, secondary_id = self._resolve_spouses(rel, members_by_id, children_map)
            secondary_ids.add(secondary_id)
            spouse_of.setdefault(primary_id, secondary_id)
            spouse_of.setdefault(secondary_id, primary_id)

        root_ids = [
            member_id for member_id in members_by_id
            if member_id not in parent_map and member_id not in secondary_ids
        ]
        if not root_ids:
            oldest = self._oldest_member(members_by_id.values())
            logger.info(f"No natural roots among {len(members_by_id)} members, using oldest member {oldest.id}")
            root_ids = [oldest.id]

        visited: set[str] = set()
        forest = []
        for root_id in root_ids:
            node = self._build_node(root_id, 0, visited, members_by_id, children_map, spouse_of)
            if node is not None:
                forest.append(node)

        logger.debug(f"Built {len(forest)} root trees from {len(members_by_id)} members")
        return forest

    def _partition(self, relationships: Iterable[Relationship],
                   members_by_id: Mapping[str, Member]) -> tuple[list[Relationship], list[Relationship]]:
        """Split usable records into parent-child and spouse lists; siblings do not shape the tree"""
        parent_child_rels = []
        spouse_rels = []
        for rel in relationships:
            if rel.member_a_id not in members_by_id or rel.member_b_id not in members_by_id:
                logger.debug(f"Skipping relationship {rel.id}: references unknown member")
                continue
            if rel.member_a_id == rel.member_b_id:
                logger.debug(f"Skipping relationship {rel.id}: member related to itself")
                continue

            if rel.relationship_type == RelationshipType.PARENT_CHILD:
                parent_child_rels.append(rel)
            elif rel.relationship_type == RelationshipType.SPOUSE:
                spouse_rels.append(rel)
        return parent_child_rels, spouse_rels

    def _resolve_spouses(self, relationship: Relationship, members_by_id: Mapping[str, Member],
                         children_map: Mapping[str, list[str]]) -> tuple[str, str]:
        """Return (primary_id, secondary_id) for a spouse record"""
        first_id, second_id = relationship.member_a_id, relationship.member_b_id
        first_has_children = first_id in children_map
        second_has_children = second_id in children_map

        if first_has_children and not second_has_children:
            return first_id, second_id
        if second_has_children and not first_has_children:
            return second_id, first_id

        preferred = self.settings.primary_spouse_gender
        if members_by_id[first_id].gender == preferred:
            return first_id, second_id
        if members_by_id[second_id].gender == preferred:
            return second_id, first_id
        return first_id, second_id

    @staticmethod
    def _oldest_member(members: Iterable[Member]) -> Member:
        """Oldest by birth date; undated members sort last, ties keep input order"""
        return min(members, key=lambda m: (m.birth_date is None, m.birth_date or date.min))

    def _build_node(self, member_id: str, generation: int, visited: set[str],
                    members_by_id: Mapping[str, Member], children_map: Mapping[str, list[str]],
                    spouse_of: Mapping[str, str]) -> TreeNode | None:
        if member_id in visited:
            return None
        visited.add(member_id)

        child_ids = children_map.get(member_id, [])
        children = []
        if generation >= self.settings.max_tree_depth:
            if child_ids:
                logger.warning(f"Tree depth limit {self.settings.max_tree_depth} reached at member {member_id}")
        else:
            for child_id in child_ids:
                node = self._build_node(child_id, generation + 1, visited,
                                        members_by_id, children_map, spouse_of)
                if node is not None:
                    children.append(node)

        spouse_id = spouse_of.get(member_id)
        return TreeNode(
            member=members_by_id[member_id],
            spouse=members_by_id[spouse_id] if spouse_id else None,
            children=tuple(children),
            generation=generation,
        )


def build_family_forest(members: Iterable[Member], relationships: Iterable[Relationship],
                        settings: KinshipSettings | None = None) -> list[TreeNode]:
    """Convenience wrapper around HierarchyBuilder.build"""
    return HierarchyBuilder(settings).build(members, relationships)
