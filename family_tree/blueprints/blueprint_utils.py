"""
Helpers shared by the API blueprints
"""

from flask import current_app, request


OWNER_HEADER = 'X-Owner-Id'


def get_owner_id() -> str:
    """Owning account for this request: X-Owner-Id header, else DEFAULT_OWNER_ID"""
    owner_id = request.headers.get(OWNER_HEADER, '').strip()
    return owner_id or current_app.config['DEFAULT_OWNER_ID']


def get_json_body():
    """Request JSON body, or None when missing or malformed"""
    return request.get_json(silent=True)
