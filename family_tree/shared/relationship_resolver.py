"""
Relationship resolver: shortest kinship paths and labels between members
"""

from collections import deque
from collections.abc import Iterable

from .kinship import DEFAULT_SETTINGS, InvalidArgumentError, KinshipSettings, infer_parent_child, ordinal
from .logging_config import get_project_logger
from .models import Gender, Member, Relationship, RelationshipPath, RelationshipType


logger = get_project_logger(__name__)

SELF = 'self'
PARENT = 'parent'
CHILD = 'child'
SPOUSE = 'spouse'
SIBLING = 'sibling'
UNKNOWN = 'unknown'


class RelationshipResolver:
    """Resolve how two members are related

    Every relationship is treated as an undirected edge regardless of type.
    Paths are found breadth-first from whichever endpoint comes first in
    member order, and reversed when the caller asked the other way round.
    Among equally short paths the one whose edges were discovered first
    wins, so A to B and B to A always share one path.

    Labels describe what the second member is to the first, e.g.
    ``resolve(parent_id, child_id).relationship == 'child'``.
    """

    def __init__(self, members: Iterable[Member], relationships: Iterable[Relationship],
                 settings: KinshipSettings | None = None):
        if members is None or relationships is None:
            raise InvalidArgumentError("Members and relationships are required")

        self.settings = settings or DEFAULT_SETTINGS
        self.members_by_id: dict[str, Member] = {}
        for member in members:
            self.members_by_id.setdefault(member.id, member)
        self._position = {member_id: index for index, member_id in enumerate(self.members_by_id)}

        self.relationships = [
            rel for rel in relationships
            if rel.member_a_id in self.members_by_id
            and rel.member_b_id in self.members_by_id
            and rel.member_a_id != rel.member_b_id
        ]
        self._graph = self._build_graph()
        self._edges = self._index_edges()

    def _build_graph(self) -> dict[str, list[str]]:
        """Adjacency list; neighbour order follows relationship order"""
        graph: dict[str, list[str]] = {member_id: [] for member_id in self.members_by_id}
        for rel in self.relationships:
            graph[rel.member_a_id].append(rel.member_b_id)
            graph[rel.member_b_id].append(rel.member_a_id)
        return graph

    def _index_edges(self) -> dict[frozenset, Relationship]:
        """First relationship record for each unordered pair"""
        edges: dict[frozenset, Relationship] = {}
        for rel in self.relationships:
            edges.setdefault(frozenset((rel.member_a_id, rel.member_b_id)), rel)
        return edges

    def _require_members(self):
        if not self.members_by_id:
            raise InvalidArgumentError("Cannot resolve relationships without any members")

    def resolve(self, member_a_id: str, member_b_id: str) -> RelationshipPath | None:
        """
        Resolve the relationship between two members

        Returns:
            RelationshipPath, or None when either member is unknown or no path connects them
        """
        self._require_members()
        if member_a_id not in self.members_by_id or member_b_id not in self.members_by_id:
            logger.debug(f"Cannot resolve {member_a_id} -> {member_b_id}: unknown member")
            return None

        path_ids = self._path_between(member_a_id, member_b_id)
        if path_ids is None:
            return None
        return self._make_path(path_ids)

    def resolve_all(self, member_id: str) -> list[RelationshipPath]:
        """
        Resolve a member against every other member

        Returns:
            Paths for connected members, closest first
        """
        self._require_members()
        if member_id not in self.members_by_id:
            return []

        reachable = self._breadth_first(member_id)
        paths = []
        for other_id in self.members_by_id:
            if other_id == member_id or other_id not in reachable:
                continue
            if self._position[other_id] < self._position[member_id]:
                path_ids = self._path_between(member_id, other_id)
            else:
                path_ids = self._reconstruct(reachable, other_id)
            paths.append(self._make_path(path_ids))
        return sorted(paths, key=lambda p: p.degree)

    def _path_between(self, member_a_id: str, member_b_id: str) -> list[str] | None:
        """Shortest path of ids from member_a to member_b, searched from the earlier member"""
        reverse = self._position[member_b_id] < self._position[member_a_id]
        source_id, target_id = (member_b_id, member_a_id) if reverse else (member_a_id, member_b_id)

        predecessors = self._breadth_first(source_id, stop_at=target_id)
        if target_id not in predecessors:
            return None

        path = self._reconstruct(predecessors, target_id)
        if reverse:
            path.reverse()
        return path

    def _breadth_first(self, source_id: str, stop_at: str | None = None) -> dict[str, str | None]:
        """Predecessor map of every member reached from source_id"""
        predecessors: dict[str, str | None] = {source_id: None}
        queue = deque([source_id])
        while queue:
            current = queue.popleft()
            if current == stop_at:
                break
            for neighbour in self._graph[current]:
                if neighbour not in predecessors:
                    predecessors[neighbour] = current
                    queue.append(neighbour)
        return predecessors

    @staticmethod
    def _reconstruct(predecessors: dict[str, str | None], target_id: str) -> list[str]:
        path = []
        current = target_id
        while current is not None:
            path.append(current)
            current = predecessors[current]
        path.reverse()
        return path

    def _make_path(self, path_ids: list[str]) -> RelationshipPath:
        path = tuple(self.members_by_id[member_id] for member_id in path_ids)
        return RelationshipPath(
            member_a=path[0],
            member_b=path[-1],
            path=path,
            degree=max(0, len(path) - 2),
            relationship=self.classify(path_ids),
        )

    def classify(self, path_ids: list[str]) -> str:
        """Label a path of member ids"""
        if len(path_ids) < 2:
            return SELF
        if len(path_ids) == 2:
            return self.direct_relationship(path_ids[0], path_ids[1])
        if len(path_ids) == 3:
            first_hop = self.direct_relationship(path_ids[0], path_ids[1])
            second_hop = self.direct_relationship(path_ids[1], path_ids[2])
            if (first_hop, second_hop) in ((PARENT, SIBLING), (SIBLING, CHILD)):
                return self._niece_or_nephew(path_ids[2])
            return 'first cousin'

        degree = (len(path_ids) - 2) // 2
        return f"{ordinal(degree)} cousin"

    def direct_relationship(self, member_a_id: str, member_b_id: str) -> str:
        """What member_b is to member_a across a single relationship record"""
        rel = self._edges.get(frozenset((member_a_id, member_b_id)))
        if rel is None:
            return UNKNOWN

        if rel.relationship_type == RelationshipType.SPOUSE:
            return SPOUSE
        if rel.relationship_type == RelationshipType.SIBLING:
            return SIBLING
        if rel.relationship_type == RelationshipType.PARENT_CHILD:
            parent_id, _ = infer_parent_child(rel, self.members_by_id, self.settings)
            return CHILD if parent_id == member_a_id else PARENT
        return UNKNOWN

    def _niece_or_nephew(self, member_id: str) -> str:
        # 'other' has no neutral word here and falls back to 'niece'
        return 'nephew' if self.members_by_id[member_id].gender == Gender.MALE else 'niece'


def resolve_relationship(members: Iterable[Member], relationships: Iterable[Relationship],
                         member_a_id: str, member_b_id: str,
                         settings: KinshipSettings | None = None) -> RelationshipPath | None:
    """Convenience wrapper around RelationshipResolver.resolve"""
    return RelationshipResolver(members, relationships, settings).resolve(member_a_id, member_b_id)
