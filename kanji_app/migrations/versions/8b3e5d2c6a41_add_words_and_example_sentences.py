"""add words and example_sentences to kanji

Revision ID: 8b3e5d2c6a41
Revises: 4f1c2a9d7e10
Create Date: 2026-10-14 09:40:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '8b3e5d2c6a41'
down_revision: Union[str, Sequence[str], None] = '4f1c2a9d7e10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Add nested word / example sentence documents to kanji."""
    document = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')
    op.add_column('kanji', sa.Column('words', document, nullable=True))
    op.add_column('kanji', sa.Column('example_sentences', document, nullable=True))


def downgrade() -> None:
    """Remove nested document columns from kanji."""
    with op.batch_alter_table('kanji') as batch_op:
        batch_op.drop_column('example_sentences')
        batch_op.drop_column('words')
