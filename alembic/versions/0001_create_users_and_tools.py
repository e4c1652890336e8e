"""create users and tools

Revision ID: 0001
Revises:
Create Date: 2025-09-01 09:00:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(length=64), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_created_at", "users", ["created_at"])

    op.create_table(
        "tools",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("description_vi", sa.Text(), nullable=True),
        sa.Column("url", sa.String(length=500), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            server_default=sa.text("'active'"),
        ),
        sa.Column(
            "featured",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column("image", sa.String(length=500), nullable=True),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("url"),
    )
    op.create_index("ix_tools_id", "tools", ["id"])
    op.create_index("ix_tools_category", "tools", ["category"])
    op.create_index("ix_tools_status", "tools", ["status"])
    op.create_index("ix_tools_featured", "tools", ["featured"])
    op.create_index("ix_tools_created_by", "tools", ["created_by"])
    op.create_index("ix_tools_created_at", "tools", ["created_at"])
    op.create_index("ix_tools_status_created_at", "tools", ["status", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_tools_status_created_at", table_name="tools")
    op.drop_index("ix_tools_created_at", table_name="tools")
    op.drop_index("ix_tools_created_by", table_name="tools")
    op.drop_index("ix_tools_featured", table_name="tools")
    op.drop_index("ix_tools_status", table_name="tools")
    op.drop_index("ix_tools_category", table_name="tools")
    op.drop_index("ix_tools_id", table_name="tools")
    op.drop_table("tools")

    op.drop_index("ix_users_created_at", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")
