"""Add max_users limit to agencies

Revision ID: 003
Revises: 002
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '003'
down_revision = '002'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column('agencies', sa.Column('max_users', sa.Integer(), nullable=False, server_default='5'))


def downgrade() -> None:
    op.drop_column('agencies', 'max_users')
