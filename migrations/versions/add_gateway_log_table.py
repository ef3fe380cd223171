"""Add gateway log table

Revision ID: add_gateway_log_table
Revises: add_contact_number_table
Create Date: 2026-10-12
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

revision = 'add_gateway_log_table'
down_revision = 'add_contact_number_table'
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    inspector = inspect(bind)
    if 'gateway_log' in inspector.get_table_names():
        # Table already created in a prior partial run; skip.
        return
    op.create_table(
        'gateway_log',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('source', sa.String(length=50), nullable=False),
        sa.Column('external_id', sa.String(length=255), nullable=True),
        sa.Column('payload_json', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
    )
    op.create_index('ix_gateway_log_external_id', 'gateway_log', ['external_id'])


def downgrade():
    bind = op.get_bind()
    inspector = inspect(bind)
    if 'gateway_log' in inspector.get_table_names():
        op.drop_index('ix_gateway_log_external_id', table_name='gateway_log')
        op.drop_table('gateway_log')
