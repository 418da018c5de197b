"""
Kinship inference rules shared by the tree builder and the relationship resolver

Relationship records do not say which side of a parent-child pair is the
parent, so both components call ``infer_parent_child`` and therefore
always agree on direction.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from .models import Gender, Member, Relationship


class InvalidArgumentError(ValueError):
    """Raised when the kinship core is called with unusable input"""
    pass


@dataclass(frozen=True)
class KinshipSettings:
    """Tunable constants for direction and tie-break inference"""

    # Earlier-born endpoint is the parent when the birth years differ by at least this much
    parent_min_age_gap: int = 10

    # With only one endpoint dated, it is the parent when born before this year
    reference_birth_year: int = 1970

    # Spouse tie-break: a partner of this gender is kept as the primary tree node
    primary_spouse_gender: Gender = Gender.MALE

    max_tree_depth: int = 256


DEFAULT_SETTINGS = KinshipSettings()


def infer_parent_child(relationship: Relationship, members_by_id: Mapping[str, Member],
                       settings: KinshipSettings = DEFAULT_SETTINGS) -> tuple[str, str]:
    """
    Decide which endpoint of a parent-child record is the parent

    Args:
        relationship: A parent-child relationship record
        members_by_id: Member lookup; missing endpoints count as undated
        settings: Thresholds to apply

    Returns:
        (parent_id, child_id)
    """
    parent_id = _infer_parent(relationship, members_by_id, settings)
    return parent_id, relationship.other(parent_id)


def _infer_parent(relationship: Relationship, members_by_id: Mapping[str, Member],
                  settings: KinshipSettings) -> str:
    first_id, second_id = relationship.member_a_id, relationship.member_b_id
    first, second = members_by_id.get(first_id), members_by_id.get(second_id)
    first_year = first.birth_year if first else None
    second_year = second.birth_year if second else None

    if first_year is not None and second_year is not None:
        if second_year - first_year >= settings.parent_min_age_gap:
            return first_id
        if first_year - second_year >= settings.parent_min_age_gap:
            return second_id
        # Too close in age to tell, keep record order
        return first_id

    if first_year is not None:
        return first_id if first_year < settings.reference_birth_year else second_id

    if second_year is not None:
        return second_id if second_year < settings.reference_birth_year else first_id

    return first_id


ORDINAL_WORDS = ('first', 'second', 'third', 'fourth', 'fifth')


def ordinal(number: int) -> str:
    """Spell out 1-5, numeric ordinal beyond (6th, 21st, 112th)"""
    if 1 <= number <= len(ORDINAL_WORDS):
        return ORDINAL_WORDS[number - 1]
    if 10 <= number % 100 <= 20:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(number % 10, 'th')
    return f"{number}{suffix}"
