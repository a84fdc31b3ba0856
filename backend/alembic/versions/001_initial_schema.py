"""Initial schema — owners, username_bindings, topics, slug_bindings, asset_versions.

Revision ID: 001_initial
Revises: None
Create Date: 2025-03-14

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "owners",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("pubkey", sa.String(128), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "username_bindings",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("username", sa.String(30), nullable=False, unique=True),
        sa.Column("owner_key", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_username_bindings_owner_key", "username_bindings", ["owner_key"])

    op.create_table(
        "topics",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("pubkey", sa.String(128), nullable=False),
        sa.Column("moderators", sa.JSON, nullable=True),
        sa.Column("image", sa.Text, nullable=True),
        sa.Column("banner", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "slug_bindings",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("slug", sa.String(200), nullable=False, unique=True),
        sa.Column("entity_id", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "asset_versions",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("entity_id", sa.Text, nullable=False),
        sa.Column("slot", sa.String(10), nullable=False),
        sa.Column("path", sa.Text, nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("slot IN ('icon', 'banner')", name="ck_asset_versions_slot"),
    )
    op.create_index("ix_asset_versions_entity_slot", "asset_versions", ["entity_id", "slot"])


def downgrade() -> None:
    op.drop_index("ix_asset_versions_entity_slot", table_name="asset_versions")
    op.drop_table("asset_versions")
    op.drop_table("slug_bindings")
    op.drop_table("topics")
    op.drop_index("ix_username_bindings_owner_key", table_name="username_bindings")
    op.drop_table("username_bindings")
    op.drop_table("owners")
