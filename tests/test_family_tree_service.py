"""
Tests for the family tree service (tree building and kinship over stored data)
"""

import uuid

import pytest

from conftest import OWNER_ID
from family_tree.services.exceptions import NotFoundError, ValidationError
from family_tree.services.family_tree_service import FamilyTreeService
from family_tree.services.member_service import member_service
from family_tree.shared.kinship import DEFAULT_SETTINGS, KinshipSettings
from family_tree.shared.models import Gender


@pytest.fixture
def service(db):
    return FamilyTreeService()


class TestSettings:
    """Test where kinship settings come from"""

    def test_explicit_settings_win(self, app):
        settings = KinshipSettings(parent_min_age_gap=20)
        with app.app_context():
            assert FamilyTreeService(settings=settings).settings is settings

    def test_app_settings_used_inside_app_context(self, app):
        settings = KinshipSettings(primary_spouse_gender=Gender.FEMALE)
        app.config['KINSHIP_SETTINGS'] = settings
        with app.app_context():
            assert FamilyTreeService().settings is settings

    def test_defaults_outside_app_context(self):
        assert FamilyTreeService().settings is DEFAULT_SETTINGS


class TestBuildTree:
    """Test building the forest from stored data"""

    def test_empty_owner_gives_empty_forest(self, service):
        assert service.build_tree(OWNER_ID) == []

    def test_stored_family(self, service, stored_family):
        forest = service.build_tree(OWNER_ID)

        assert len(forest) == 1
        root = forest[0]
        assert root.member.id == stored_family['bob']
        assert root.spouse.id == stored_family['alice']
        assert [child.member.id for child in root.children] == [stored_family['carol']]

    def test_configured_spouse_gender_changes_root(self, db, stored_family):
        service = FamilyTreeService(settings=KinshipSettings(primary_spouse_gender=Gender.FEMALE))

        forest = service.build_tree(OWNER_ID)

        assert forest[0].member.id == stored_family['alice']
        assert forest[0].spouse.id == stored_family['bob']

    def test_other_owner_sees_nothing(self, service, stored_family):
        assert service.build_tree('someone-else') == []

    def test_deleted_member_is_gone_from_tree(self, service, stored_family):
        member_service.delete_member(OWNER_ID, stored_family['carol'])

        forest = service.build_tree(OWNER_ID)

        ids = [node.member.id for root in forest for node in root.iter_nodes()]
        assert stored_family['carol'] not in ids
        assert forest[0].children == ()

    def test_load_snapshot_returns_immutable_copies(self, service, stored_family):
        members, relationships = service.load_snapshot(OWNER_ID)

        assert {m.id for m in members} == set(stored_family.values())
        assert len(relationships) == 3
        assert all(isinstance(r.member_a_id, str) for r in relationships)


class TestResolve:
    """Test kinship lookups over stored data"""

    def test_resolve_parent_and_child(self, service, stored_family):
        result = service.resolve(OWNER_ID, stored_family['alice'], stored_family['carol'])

        assert result.relationship == 'child'
        assert result.degree == 0
        assert service.resolve(OWNER_ID, stored_family['carol'], stored_family['bob']).relationship == 'parent'

    def test_resolve_self(self, service, stored_family):
        result = service.resolve(OWNER_ID, stored_family['bob'], stored_family['bob'])

        assert result.relationship == 'self'

    def test_no_path_is_not_found(self, service, stored_family):
        loner = member_service.create_member(OWNER_ID, {'first_name': 'Lone', 'last_name': 'Wolf'})

        with pytest.raises(NotFoundError, match="No relationship found"):
            service.resolve(OWNER_ID, stored_family['alice'], str(loner.id))

    def test_unknown_member_is_not_found(self, service, stored_family):
        with pytest.raises(NotFoundError, match="Member not found"):
            service.resolve(OWNER_ID, stored_family['alice'], str(uuid.uuid4()))

    def test_malformed_id_is_validation_error(self, service, stored_family):
        with pytest.raises(ValidationError):
            service.resolve(OWNER_ID, stored_family['alice'], 'nope')

    def test_no_members_is_not_found(self, service):
        with pytest.raises(NotFoundError, match="No family members recorded"):
            service.resolve(OWNER_ID, str(uuid.uuid4()), str(uuid.uuid4()))

    def test_resolve_all(self, service, stored_family):
        results = service.resolve_all(OWNER_ID, stored_family['carol'])

        assert {r.member_b.id: r.relationship for r in results} == {
            stored_family['alice']: 'parent',
            stored_family['bob']: 'parent',
        }

    def test_resolve_all_unknown_member(self, service, stored_family):
        with pytest.raises(NotFoundError):
            service.resolve_all(OWNER_ID, str(uuid.uuid4()))
