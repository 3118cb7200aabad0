"""create mahasiswa

Revision ID: 4b2d1e7c9a10
Revises: 
Create Date: 2026-10-19 09:12:41.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b2d1e7c9a10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "mahasiswa",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("nim", sa.String(), nullable=False),
        sa.Column("nama", sa.String(), nullable=False),
        sa.Column("jurusan", sa.String(), nullable=False),
        sa.Column("angkatan", sa.String(), nullable=False),
        sa.UniqueConstraint("nim", name="mahasiswa_nim_key"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("mahasiswa")
