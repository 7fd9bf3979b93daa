"""Add map layers, tags and memory capsule fields

Revision ID: 002
Revises: 001
Create Date: 2025-07-02 00:00:00.000000+00:00

What:  Region/layer placement, category and bucket-list tags, the memory
       capsule text fields, footprints.updated_at and users.is_paid.

Additive only: every new column is nullable or has a server default, so
rows written under 001 stay valid and older clients keep working.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MEMORY_CAPSULE_COLUMNS = (
    "purpose",
    "companions",
    "cost",
    "transport_mode",
    "pois",
    "highlight",
    "pets",
    "bad_experience",
    "new_friends",
)


def upgrade() -> None:
    op.add_column("footprints", sa.Column("region_id", sa.String(64), nullable=True))
    op.add_column("footprints", sa.Column("layer_type", sa.String(32), nullable=True))
    op.add_column("footprints", sa.Column("category", sa.String(64), nullable=True))
    op.add_column(
        "footprints",
        sa.Column(
            "is_bucket_list",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
    )
    for name in MEMORY_CAPSULE_COLUMNS:
        op.add_column("footprints", sa.Column(name, sa.Text(), nullable=True))
    op.add_column(
        "footprints",
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    )

    op.add_column(
        "users",
        sa.Column(
            "is_paid",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_column("users", "is_paid")
    op.drop_column("footprints", "updated_at")
    for name in reversed(MEMORY_CAPSULE_COLUMNS):
        op.drop_column("footprints", name)
    op.drop_column("footprints", "is_bucket_list")
    op.drop_column("footprints", "category")
    op.drop_column("footprints", "layer_type")
    op.drop_column("footprints", "region_id")
