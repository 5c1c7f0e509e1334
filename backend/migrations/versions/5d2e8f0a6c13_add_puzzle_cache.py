"""add puzzle_cache table for fetched GroupThem puzzles

Revision ID: 5d2e8f0a6c13
Revises: 1a7c3e9d2b40
Create Date: 2026-10-18 10:30:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5d2e8f0a6c13'
down_revision = '1a7c3e9d2b40'
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if 'puzzle_cache' in set(insp.get_table_names()):
        return
    op.create_table(
        'puzzle_cache',
        sa.Column('puzzle_date', sa.String(length=10), primary_key=True),
        sa.Column('payload', sa.Text(), nullable=False),
        sa.Column('fetched_at', sa.DateTime(timezone=True), nullable=False),
    )


def downgrade():
    op.drop_table('puzzle_cache')
