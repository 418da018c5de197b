"""
Relationships blueprint: link members as parent-child, spouse or sibling
"""

from flask import Blueprint

from family_tree.blueprints.blueprint_utils import get_json_body, get_owner_id
from family_tree.services.member_service import member_service
from family_tree.shared.api_response_formatter import APIResponseFormatter, serialize_relationship
from family_tree.shared.logging_config import get_project_logger


logger = get_project_logger(__name__)

relationships = Blueprint('relationships', __name__, url_prefix='/api/relationships')

REQUIRED_FIELDS = ['member_a_id', 'member_b_id', 'relationship_type']


@relationships.route('', methods=['GET'])
def list_relationships():
    relationship_list = member_service.list_relationships(get_owner_id())
    return APIResponseFormatter.success({
        'relationships': [serialize_relationship(r.to_snapshot()) for r in relationship_list]
    })


@relationships.route('', methods=['POST'])
def create_relationship():
    """Create a relationship; duplicates in either direction are rejected with 409"""
    data = get_json_body()
    error_response = APIResponseFormatter.validate_json_request(data, REQUIRED_FIELDS)
    if error_response:
        return error_response

    relationship = member_service.add_relationship(
        get_owner_id(), data['member_a_id'], data['member_b_id'], data['relationship_type']
    )
    return APIResponseFormatter.success(
        {'relationship': serialize_relationship(relationship.to_snapshot())},
        message='Relationship created',
        status_code=201
    )


@relationships.route('/bulk', methods=['POST'])
def create_relationships_bulk():
    """Create several relationships at once; all or nothing"""
    data = get_json_body()
    error_response = APIResponseFormatter.validate_json_request(data, ['relationships'])
    if error_response:
        return error_response

    created = member_service.add_relationships_bulk(get_owner_id(), data['relationships'])
    return APIResponseFormatter.success(
        {'relationships': [serialize_relationship(r.to_snapshot()) for r in created]},
        message=f'{len(created)} relationships created',
        status_code=201
    )


@relationships.route('/<relationship_id>', methods=['DELETE'])
def delete_relationship(relationship_id):
    member_service.delete_relationship(get_owner_id(), relationship_id)
    return APIResponseFormatter.success(message='Relationship deleted')
