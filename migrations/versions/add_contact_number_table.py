"""Add contact number table

Revision ID: add_contact_number_table
Revises:
Create Date: 2026-10-12
"""
from alembic import op
import sqlalchemy as sa

revision = 'add_contact_number_table'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'contact_number',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('contact_id', sa.Integer(), nullable=False),
        sa.Column('number', sa.String(length=64), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=True),
        sa.Column('location', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_contact_number_contact_id', 'contact_number', ['contact_id'])


def downgrade():
    op.drop_index('ix_contact_number_contact_id', table_name='contact_number')
    op.drop_table('contact_number')
