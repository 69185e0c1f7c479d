"""create kanji table

Revision ID: 4f1c2a9d7e10
Revises:
Create Date: 2026-10-12 10:15:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4f1c2a9d7e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the kanji table with scalar and reading columns."""
    string_list = sa.JSON().with_variant(postgresql.ARRAY(sa.Text()), 'postgresql')
    op.create_table('kanji',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('kanji', sa.String(length=10), nullable=False),
        sa.Column('level', sa.String(length=10), nullable=True),
        sa.Column('korean_meaning', sa.Text(), nullable=True),
        sa.Column('onyomi', string_list, nullable=True),
        sa.Column('kunyomi', string_list, nullable=True),
        sa.Column('strokes', sa.Integer(), nullable=True),
        sa.Column('radical', sa.String(length=10), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('kanji')
    )


def downgrade() -> None:
    """Drop the kanji table."""
    op.drop_table('kanji')
