"""
API response formatting utilities for consistent API responses across blueprints
"""

from typing import Any

from flask import jsonify

from .models import Member, Relationship, RelationshipPath, TreeNode


class APIResponseFormatter:
    """Utility class for formatting consistent API responses"""

    @staticmethod
    def success(data: Any = None, message: str = "", status_code: int = 200) -> tuple:
        """Format a successful API response"""
        response = {
            'success': True,
            'message': message
        }

        if data is not None:
            if isinstance(data, dict):
                response.update(data)
            else:
                response['data'] = data

        return jsonify(response), status_code

    @staticmethod
    def error(error_message: str, status_code: int = 400, details: dict | None = None) -> tuple:
        """Format an error API response"""
        response = {
            'success': False,
            'error': error_message
        }

        if details:
            response['details'] = details

        return jsonify(response), status_code

    @staticmethod
    def validate_json_request(request_data: dict, required_fields: list) -> tuple | None:
        """Validate JSON request data and return error response if invalid"""
        if not request_data:
            return APIResponseFormatter.error('No data provided')

        missing_fields = [field for field in required_fields if not request_data.get(field)]
        if missing_fields:
            return APIResponseFormatter.error(
                f"Missing required fields: {', '.join(missing_fields)}"
            )

        return None


def serialize_member(member: Member | None) -> dict | None:
    if member is None:
        return None
    return {
        'id': member.id,
        'first_name': member.first_name,
        'last_name': member.last_name,
        'full_name': member.full_name,
        'gender': member.gender.value,
        'birth_date': member.birth_date.isoformat() if member.birth_date else None,
        'death_date': member.death_date.isoformat() if member.death_date else None,
        'birth_place': member.birth_place,
        'occupation': member.occupation,
        'bio': member.bio,
        'photo_url': member.photo_url,
    }


def serialize_relationship(relationship: Relationship) -> dict:
    return {
        'id': relationship.id,
        'member_a_id': relationship.member_a_id,
        'member_b_id': relationship.member_b_id,
        'relationship_type': relationship.relationship_type.value,
    }


def serialize_tree_node(node: TreeNode) -> dict:
    """Serialize a tree node and its descendants"""
    return {
        'member': serialize_member(node.member),
        'spouse': serialize_member(node.spouse),
        'generation': node.generation,
        'children': [serialize_tree_node(child) for child in node.children],
    }


def serialize_relationship_path(result: RelationshipPath) -> dict:
    return {
        'member_a': serialize_member(result.member_a),
        'member_b': serialize_member(result.member_b),
        'path': [serialize_member(member) for member in result.path],
        'degree': result.degree,
        'relationship': result.relationship,
    }
