"""
Tree blueprint: rendered family tree, kinship lookups and statistics
"""

from flask import Blueprint, request

from family_tree.blueprints.blueprint_utils import get_owner_id
from family_tree.services.family_tree_service import family_tree_service
from family_tree.services.member_service import member_service
from family_tree.shared.api_response_formatter import (
    APIResponseFormatter,
    serialize_relationship_path,
    serialize_tree_node,
)
from family_tree.shared.logging_config import get_project_logger


logger = get_project_logger(__name__)

tree = Blueprint('tree', __name__, url_prefix='/api')


@tree.route('/tree')
def family_tree():
    """Forest of root tree nodes for top-down rendering"""
    forest = family_tree_service.build_tree(get_owner_id())
    return APIResponseFormatter.success({
        'roots': [serialize_tree_node(node) for node in forest]
    })


@tree.route('/kinship')
def kinship():
    """How member `to` is related to member `from`"""
    member_a_id = request.args.get('from', '').strip()
    member_b_id = request.args.get('to', '').strip()
    if not member_a_id or not member_b_id:
        return APIResponseFormatter.error("Both 'from' and 'to' member ids are required")

    result = family_tree_service.resolve(get_owner_id(), member_a_id, member_b_id)
    return APIResponseFormatter.success({'result': serialize_relationship_path(result)})


@tree.route('/stats')
def stats():
    return APIResponseFormatter.success({'stats': member_service.get_stats(get_owner_id())})
