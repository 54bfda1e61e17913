"""Create stores, vehicles and product_vehicles

Revision ID: 3c41b7e0d9a2
Revises:
Create Date: 2026-10-19 10:02:11.418305

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c41b7e0d9a2"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "bigcommerce_stores",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("store_hash", sa.String(length=64), nullable=False),
        sa.Column("store_name", sa.String(length=255), nullable=True),
        sa.Column("access_token", sa.Text(), nullable=False),
        sa.Column("active", sa.Boolean(), server_default="true", nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("store_hash"),
    )

    op.create_table(
        "vehicles",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("store_hash", sa.String(length=64), nullable=True),
        sa.Column("year_start", sa.Integer(), nullable=False),
        sa.Column("year_end", sa.Integer(), nullable=False),
        sa.Column("make", sa.String(length=255), nullable=False),
        sa.Column("model", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default="true", nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_vehicles_store_hash", "vehicles", ["store_hash"])
    op.create_index("ix_vehicles_make", "vehicles", ["make"])
    op.create_index("ix_vehicles_model", "vehicles", ["model"])
    op.create_index("ix_vehicles_is_active", "vehicles", ["is_active"])
    op.create_index("ix_vehicles_year_start_year_end", "vehicles", ["year_start", "year_end"])
    op.create_index("ix_vehicles_make_model", "vehicles", ["make", "model"])

    op.create_table(
        "product_vehicles",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("bigcommerce_product_id", sa.String(length=64), nullable=False),
        sa.Column("vehicle_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.ForeignKeyConstraint(["vehicle_id"], ["vehicles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "bigcommerce_product_id",
            "vehicle_id",
            name="uq_product_vehicles_product_vehicle",
        ),
    )
    op.create_index(
        "ix_product_vehicles_bigcommerce_product_id",
        "product_vehicles",
        ["bigcommerce_product_id"],
    )
    op.create_index("ix_product_vehicles_vehicle_id", "product_vehicles", ["vehicle_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_product_vehicles_vehicle_id", table_name="product_vehicles")
    op.drop_index("ix_product_vehicles_bigcommerce_product_id", table_name="product_vehicles")
    op.drop_table("product_vehicles")

    op.drop_index("ix_vehicles_make_model", table_name="vehicles")
    op.drop_index("ix_vehicles_year_start_year_end", table_name="vehicles")
    op.drop_index("ix_vehicles_is_active", table_name="vehicles")
    op.drop_index("ix_vehicles_model", table_name="vehicles")
    op.drop_index("ix_vehicles_make", table_name="vehicles")
    op.drop_index("ix_vehicles_store_hash", table_name="vehicles")
    op.drop_table("vehicles")

    op.drop_table("bigcommerce_stores")
