"""Create members and relationships tables

Revision ID: c4e1a7d2b9f3
Revises:
Create Date: 2026-10-17 12:00:00.000000

"""
import sqlalchemy as sa
from alembic import op

from family_tree.database.models import UUID


# revision identifiers, used by Alembic.
revision = 'c4e1a7d2b9f3'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'members',
        sa.Column('id', UUID(), nullable=False),
        sa.Column('owner_id', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=255), nullable=False),
        sa.Column('last_name', sa.String(length=255), nullable=False),
        sa.Column('gender', sa.String(length=10), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('death_date', sa.Date(), nullable=True),
        sa.Column('birth_place', sa.String(length=255), nullable=True),
        sa.Column('occupation', sa.String(length=255), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('photo_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("gender IN ('male', 'female', 'other')", name='ck_member_gender'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_members_owner_id', 'members', ['owner_id'])

    op.create_table(
        'relationships',
        sa.Column('id', UUID(), nullable=False),
        sa.Column('member_a_id', UUID(), nullable=False),
        sa.Column('member_b_id', UUID(), nullable=False),
        sa.Column('relationship_type', sa.String(length=20), nullable=False),
        sa.Column('sequence', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('member_a_id <> member_b_id', name='ck_relationship_distinct_members'),
        sa.CheckConstraint("relationship_type IN ('parent-child', 'spouse', 'sibling')",
                           name='ck_relationship_type'),
        sa.ForeignKeyConstraint(['member_a_id'], ['members.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['member_b_id'], ['members.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_relationship_member_a', 'relationships', ['member_a_id'])
    op.create_index('idx_relationship_member_b', 'relationships', ['member_b_id'])
    op.create_index('idx_relationship_sequence', 'relationships', ['sequence'])


def downgrade():
    op.drop_index('idx_relationship_sequence', table_name='relationships')
    op.drop_index('idx_relationship_member_b', table_name='relationships')
    op.drop_index('idx_relationship_member_a', table_name='relationships')
    op.drop_table('relationships')
    op.drop_index('ix_members_owner_id', table_name='members')
    op.drop_table('members')
