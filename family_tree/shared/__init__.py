"""
Shared family tree utilities: snapshot models, kinship inference, tree building and path resolution
"""

from .hierarchy_builder import HierarchyBuilder, build_family_forest
from .kinship import InvalidArgumentError, KinshipSettings, infer_parent_child
from .models import Gender, Member, Relationship, RelationshipPath, RelationshipType, TreeNode
from .relationship_resolver import RelationshipResolver, resolve_relationship


__all__ = [
    'Gender', 'Member', 'Relationship', 'RelationshipPath', 'RelationshipType', 'TreeNode',
    'HierarchyBuilder', 'build_family_forest',
    'RelationshipResolver', 'resolve_relationship',
    'InvalidArgumentError', 'KinshipSettings', 'infer_parent_child'
]
