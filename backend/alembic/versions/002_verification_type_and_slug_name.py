"""Add verification_type to username_bindings and name to slug_bindings.

Revision ID: 002_verification_type_and_slug_name
Revises: 001_initial
Create Date: 2025-03-16

verification_type drives the badge (standard, staff, contributor); existing
rows default to standard. name keeps the display name a slug was generated from.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_verification_type_and_slug_name"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column(
        "username_bindings",
        sa.Column("verification_type", sa.String(20), nullable=False, server_default="standard"),
    )
    op.add_column("slug_bindings", sa.Column("name", sa.Text, nullable=True))


def downgrade() -> None:
    op.drop_column("slug_bindings", "name")
    op.drop_column("username_bindings", "verification_type")
