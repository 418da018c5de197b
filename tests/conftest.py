"""
Pytest configuration and fixtures for the family tree project
"""

import shutil
import sys
import tempfile
from datetime import date
from pathlib import Path

import pytest


# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from app import create_app  # noqa: E402
from family_tree.database import db as _db  # noqa: E402
from family_tree.shared.kinship import KinshipSettings  # noqa: E402
from family_tree.shared.models import Gender, Member, Relationship, RelationshipType  # noqa: E402


class BaseTestConfig:
    """Test configuration backed by an in-memory SQLite database"""
    def __init__(self):
        self.secret_key = 'test-secret-key'
        self.sqlalchemy_database_uri = 'sqlite:///:memory:'
        self.sqlalchemy_track_modifications = False
        self.default_owner_id = 'test-owner'
        self.kinship_settings = KinshipSettings()
        self.testing = True


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def app():
    """Create Flask app for testing"""
    return create_app(BaseTestConfig())


@pytest.fixture
def db(app):
    """Fresh tables for every test"""
    with app.app_context():
        _db.create_all()
        try:
            yield _db
        finally:
            _db.session.remove()
            _db.drop_all()


@pytest.fixture
def client(app, db):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def runner(app, db):
    """Create CLI test runner"""
    return app.test_cli_runner()


def make_member(member_id, first_name=None, birth=None, gender=Gender.OTHER, last_name='Test'):
    """Build a snapshot member; birth may be a year or a date"""
    if isinstance(birth, int):
        birth = date(birth, 1, 1)
    return Member(id=member_id, first_name=first_name or member_id.capitalize(),
                  last_name=last_name, gender=gender, birth_date=birth)


def make_relationship(member_a_id, member_b_id, relationship_type, rel_id=None):
    return Relationship(
        id=rel_id or f"{member_a_id}-{member_b_id}-{relationship_type}",
        member_a_id=member_a_id,
        member_b_id=member_b_id,
        relationship_type=RelationshipType(relationship_type),
    )


@pytest.fixture
def nuclear_family():
    """Alice (1950) married to Bob (1952), both parents of Carol (1980)"""
    members = [
        make_member('alice', birth=1950, gender=Gender.FEMALE),
        make_member('bob', birth=1952, gender=Gender.MALE),
        make_member('carol', birth=1980, gender=Gender.FEMALE),
    ]
    relationships = [
        make_relationship('alice', 'bob', 'spouse'),
        make_relationship('alice', 'carol', 'parent-child'),
        make_relationship('bob', 'carol', 'parent-child'),
    ]
    return members, relationships


@pytest.fixture
def three_generations():
    """Dave (1920) -> Erin (1950) -> Frank (1985)"""
    members = [
        make_member('dave', birth=1920, gender=Gender.MALE),
        make_member('erin', birth=1950, gender=Gender.FEMALE),
        make_member('frank', birth=1985, gender=Gender.MALE),
    ]
    relationships = [
        make_relationship('dave', 'erin', 'parent-child'),
        make_relationship('erin', 'frank', 'parent-child'),
    ]
    return members, relationships


OWNER_ID = 'test-owner'


@pytest.fixture
def stored_family(db):
    """Alice and Bob Smith with daughter Carol, persisted for the default test owner

    Returns:
        Member ids as strings, keyed by lower-case first name
    """
    from family_tree.services.member_service import member_service

    people = {
        'alice': {'first_name': 'Alice', 'gender': 'female', 'birth_date': '1950-03-01'},
        'bob': {'first_name': 'Bob', 'gender': 'male', 'birth_date': '1952-07-15'},
        'carol': {'first_name': 'Carol', 'gender': 'female', 'birth_date': '1980-11-30'},
    }
    ids = {
        key: str(member_service.create_member(OWNER_ID, {'last_name': 'Smith', **data}).id)
        for key, data in people.items()
    }
    member_service.add_relationships_bulk(OWNER_ID, [
        {'member_a_id': ids['alice'], 'member_b_id': ids['bob'], 'relationship_type': 'spouse'},
        {'member_a_id': ids['alice'], 'member_b_id': ids['carol'], 'relationship_type': 'parent-child'},
        {'member_a_id': ids['bob'], 'member_b_id': ids['carol'], 'relationship_type': 'parent-child'},
    ])
    return ids
