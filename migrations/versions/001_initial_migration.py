"""Initial migration - all models

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

Evidence Manager database schema:
- Officers
- Cases
- Evidences
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Officers first (referenced by cases)
    op.create_table(
        'officers',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('username', sa.String(150), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('officer_type', sa.Enum('INVESTIGATOR', 'ADMINISTRATOR',
                                          name='officertype'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username')
    )

    op.create_table(
        'cases',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(500), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('officer_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['officer_id'], ['officers.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_cases_officer_id', 'cases', ['officer_id'])
    op.create_index('ix_cases_officer_created', 'cases', ['officer_id', 'created_at'])

    # Evidences are removed explicitly before their case, no ON DELETE CASCADE
    op.create_table(
        'evidences',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(500), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('case_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('image_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('image_extension', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['case_id'], ['cases.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_evidences_case_id', 'evidences', ['case_id'])


def downgrade() -> None:
    op.drop_index('ix_evidences_case_id', table_name='evidences')
    op.drop_table('evidences')

    op.drop_index('ix_cases_officer_created', table_name='cases')
    op.drop_index('ix_cases_officer_id', table_name='cases')
    op.drop_table('cases')

    op.drop_table('officers')

    sa.Enum(name='officertype').drop(op.get_bind(), checkfirst=True)
