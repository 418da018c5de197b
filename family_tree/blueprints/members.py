"""
Members blueprint: create, read, update and delete family members
"""

from flask import Blueprint

from family_tree.blueprints.blueprint_utils import get_json_body, get_owner_id
from family_tree.services.family_tree_service import family_tree_service
from family_tree.services.member_service import member_service
from family_tree.shared.api_response_formatter import (
    APIResponseFormatter,
    serialize_member,
    serialize_relationship_path,
)
from family_tree.shared.logging_config import get_project_logger


logger = get_project_logger(__name__)

members = Blueprint('members', __name__, url_prefix='/api/members')


@members.route('', methods=['GET'])
def list_members():
    """List all members of the current owner"""
    member_list = member_service.list_members(get_owner_id())
    return APIResponseFormatter.success({
        'members': [serialize_member(m.to_snapshot()) for m in member_list]
    })


@members.route('', methods=['POST'])
def create_member():
    """Create a new member"""
    data = get_json_body()
    error_response = APIResponseFormatter.validate_json_request(data, ['first_name', 'last_name'])
    if error_response:
        return error_response

    member = member_service.create_member(get_owner_id(), data)
    return APIResponseFormatter.success(
        {'member': serialize_member(member.to_snapshot())},
        message='Member created',
        status_code=201
    )


@members.route('/<member_id>', methods=['GET'])
def get_member(member_id):
    member = member_service.get_member(get_owner_id(), member_id)
    return APIResponseFormatter.success({'member': serialize_member(member.to_snapshot())})


@members.route('/<member_id>', methods=['PATCH'])
def update_member(member_id):
    """Partially update a member"""
    data = get_json_body()
    if not data:
        return APIResponseFormatter.error('No data provided')

    member = member_service.update_member(get_owner_id(), member_id, data)
    return APIResponseFormatter.success(
        {'member': serialize_member(member.to_snapshot())},
        message='Member updated'
    )


@members.route('/<member_id>', methods=['DELETE'])
def delete_member(member_id):
    """Delete a member together with all of its relationships"""
    removed = member_service.delete_member(get_owner_id(), member_id)
    return APIResponseFormatter.success(
        {'relationships_removed': removed},
        message='Member deleted'
    )


@members.route('/<member_id>/relatives', methods=['GET'])
def relatives(member_id):
    """Every member related to this one, closest first"""
    paths = family_tree_service.resolve_all(get_owner_id(), member_id)
    return APIResponseFormatter.success({
        'relatives': [serialize_relationship_path(p) for p in paths]
    })
