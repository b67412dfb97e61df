"""Initial schema: users, cities, restaurants, reservations.

Revision ID: 20250301000000
Revises:
Create Date: 2025-03-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20250301000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=30), nullable=False),
        sa.Column("last_name", sa.String(length=30), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("is_banned", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("token_validity_threshold", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    op.create_table(
        "cities",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("latitude", sa.Numeric(precision=8, scale=6), nullable=False),
        sa.Column("longitude", sa.Numeric(precision=9, scale=6), nullable=False),
        sa.Column("name", sa.String(length=30), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("latitude", "longitude", "name", name="uq_cities_lat_lng_name"),
    )

    op.create_table(
        "restaurants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=30), nullable=False),
        sa.Column("description", sa.String(length=300), nullable=False),
        sa.Column("street_address", sa.String(length=100), nullable=False),
        sa.Column("website_url", sa.String(length=2048), nullable=False),
        sa.Column("city_id", sa.Integer(), nullable=False),
        sa.Column("restaurant_manager_id", sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(["city_id"], ["cities.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["restaurant_manager_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "city_id", "name", "street_address", name="uq_restaurants_city_name_street"
        ),
    )
    op.create_index(op.f("ix_restaurants_city_id"), "restaurants", ["city_id"])
    op.create_index(
        op.f("ix_restaurants_restaurant_manager_id"), "restaurants", ["restaurant_manager_id"]
    )

    op.create_table(
        "reservations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.Time(), nullable=False),
        sa.Column("party_size", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="Pending"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("restaurant_id", sa.Integer(), nullable=False),
        sa.Column("reserving_user_id", sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(["restaurant_id"], ["restaurants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reserving_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("party_size > 0", name="ck_reservations_party_size_positive"),
    )
    op.create_index(op.f("ix_reservations_restaurant_id"), "reservations", ["restaurant_id"])
    op.create_index(
        op.f("ix_reservations_reserving_user_id"), "reservations", ["reserving_user_id"]
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_reservations_reserving_user_id"), table_name="reservations")
    op.drop_index(op.f("ix_reservations_restaurant_id"), table_name="reservations")
    op.drop_table("reservations")
    op.drop_index(op.f("ix_restaurants_restaurant_manager_id"), table_name="restaurants")
    op.drop_index(op.f("ix_restaurants_city_id"), table_name="restaurants")
    op.drop_table("restaurants")
    op.drop_table("cities")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
