"""init userv schema

Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "is_deleted",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
    ]


def upgrade() -> None:
    # ============ users ============
    op.create_table(
        "users",
        *_base_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("birthday", sa.Date(), nullable=True),
        sa.Column(
            "is_staff",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "staff_permissions",
            sa.JSON(),
            nullable=False,
            server_default=sa.text("'[]'"),
        ),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_name", "users", ["name"])
    op.create_index("ix_users_is_staff", "users", ["is_staff"])

    # ============ applications ============
    op.create_table(
        "applications",
        *_base_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(1024), nullable=True),
    )
    op.create_index(
        "uq_applications_name_live",
        "applications",
        ["name"],
        unique=True,
        postgresql_where=sa.text("NOT is_deleted"),
    )

    # ============ application_staff ============
    op.create_table(
        "application_staff",
        *_base_columns(),
        sa.Column(
            "application_id",
            sa.String(),
            sa.ForeignKey("applications.id"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "permissions",
            postgresql.ARRAY(sa.String()),
            nullable=False,
            server_default=sa.text("'{}'"),
        ),
        sa.UniqueConstraint(
            "application_id", "user_id", name="uq_application_staff_app_user"
        ),
    )
    op.create_index(
        "ix_application_staff_application_id",
        "application_staff",
        ["application_id"],
    )
    op.create_index(
        "ix_application_staff_user_id",
        "application_staff",
        ["user_id"],
    )

    # ============ api_keys ============
    op.create_table(
        "api_keys",
        *_base_columns(),
        sa.Column("value", sa.String(64), nullable=False),
        sa.Column("activated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("lifetime", sa.Integer(), nullable=False),
        sa.Column(
            "is_banned",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "application_id",
            sa.String(),
            sa.ForeignKey("applications.id"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "created_by_user_id",
            sa.String(),
            sa.ForeignKey("users.id"),
            nullable=False,
        ),
        sa.CheckConstraint("lifetime >= 0", name="ck_api_keys_lifetime_non_negative"),
    )
    op.create_index("ix_api_keys_value", "api_keys", ["value"], unique=True)
    op.create_index("ix_api_keys_application_id", "api_keys", ["application_id"])
    op.create_index("ix_api_keys_user_id", "api_keys", ["user_id"])
    op.create_index(
        "ix_api_keys_created_by_user_id", "api_keys", ["created_by_user_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_api_keys_created_by_user_id", table_name="api_keys")
    op.drop_index("ix_api_keys_user_id", table_name="api_keys")
    op.drop_index("ix_api_keys_application_id", table_name="api_keys")
    op.drop_index("ix_api_keys_value", table_name="api_keys")
    op.drop_table("api_keys")

    op.drop_index("ix_application_staff_user_id", table_name="application_staff")
    op.drop_index(
        "ix_application_staff_application_id", table_name="application_staff"
    )
    op.drop_table("application_staff")

    op.drop_index("uq_applications_name_live", table_name="applications")
    op.drop_table("applications")

    op.drop_index("ix_users_is_staff", table_name="users")
    op.drop_index("ix_users_name", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
