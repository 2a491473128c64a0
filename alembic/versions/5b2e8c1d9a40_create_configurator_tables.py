"""create configurator tables

Revision ID: 5b2e8c1d9a40
Revises:
Create Date: 2026-10-17 09:12:41.508213

Catalog (platforms, options, option_relations, materials), saved
configurations and quote requests. Idempotent — tables created earlier by
Base.metadata.create_all() are left alone.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b2e8c1d9a40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _table_exists(table_name):
    """Check if a table exists."""
    bind = op.get_bind()
    insp = sa.inspect(bind)
    return table_name in insp.get_table_names()


def upgrade() -> None:
    if not _table_exists("platforms"):
        op.create_table(
            "platforms",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("base_price", sa.Float(), nullable=False),
            sa.Column("default_asset_path", sa.String(), nullable=True),
            sa.Column("is_active", sa.Boolean(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )

    if not _table_exists("options"):
        op.create_table(
            "options",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("platform_id", sa.String(), nullable=True),
            sa.Column("category", sa.String(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("part_price", sa.Float(), nullable=True),
            sa.Column("labor_hours", sa.Float(), nullable=True),
            sa.Column("asset_path", sa.String(), nullable=True),
            sa.Column("is_active", sa.Boolean(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(["platform_id"], ["platforms.id"]),
            sa.PrimaryKeyConstraint("id"),
        )

    if not _table_exists("option_relations"):
        op.create_table(
            "option_relations",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("option_id", sa.String(), nullable=False),
            sa.Column("related_id", sa.String(), nullable=False),
            sa.Column("type", sa.String(), nullable=False),
            sa.Column("reason", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(["option_id"], ["options.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_option_relations_id", "option_relations", ["id"])

    if not _table_exists("materials"):
        op.create_table(
            "materials",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("zone", sa.String(), nullable=False),
            sa.Column("type", sa.String(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("color", sa.String(), nullable=True),
            sa.Column("finish", sa.String(), nullable=True),
            sa.Column("price_multiplier", sa.Float(), nullable=False),
            sa.Column("is_active", sa.Boolean(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )

    if not _table_exists("configurations"):
        op.create_table(
            "configurations",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("platform_id", sa.String(), nullable=False),
            sa.Column("selected_options", sa.JSON(), nullable=True),
            sa.Column("material_selections", sa.JSON(), nullable=True),
            sa.Column("build_notes", sa.Text(), nullable=True),
            sa.Column("grand_total", sa.Float(), nullable=True),
            sa.Column("pricing_json", sa.JSON(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )

    if not _table_exists("quotes"):
        op.create_table(
            "quotes",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("configuration_id", sa.String(), nullable=False),
            sa.Column("customer_name", sa.String(), nullable=False),
            sa.Column("customer_email", sa.String(), nullable=False),
            sa.Column("customer_phone", sa.String(), nullable=True),
            sa.Column("message", sa.Text(), nullable=True),
            sa.Column("status", sa.String(), nullable=True),
            sa.Column("submitted_at", sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(["configuration_id"], ["configurations.id"]),
            sa.PrimaryKeyConstraint("id"),
        )


def downgrade() -> None:
    for table_name in ["quotes", "configurations", "materials", "option_relations", "options", "platforms"]:
        if _table_exists(table_name):
            op.drop_table(table_name)
