"""create_teams_users_and_pull_request_tables

Revision ID: a3c91e5f27b4
Revises:
Create Date: 2025-11-12 10:41:08.213907

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a3c91e5f27b4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "teams",
        sa.Column("team_name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("team_name"),
    )

    op.create_table(
        "users",
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("team_name", sa.String(length=255), nullable=False),
        sa.Column("team_position", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["team_name"], ["teams.team_name"]),
        sa.PrimaryKeyConstraint("user_id"),
    )
    op.create_index(
        "ix_users_team_name_position", "users", ["team_name", "team_position"]
    )

    op.create_table(
        "pull_requests",
        sa.Column("pull_request_id", sa.String(length=255), nullable=False),
        sa.Column("pull_request_name", sa.String(length=500), nullable=False),
        sa.Column("author_id", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("merged_at", sa.DateTime(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.ForeignKeyConstraint(["author_id"], ["users.user_id"]),
        sa.PrimaryKeyConstraint("pull_request_id"),
    )
    op.create_index(
        "ix_pull_requests_author_id", "pull_requests", ["author_id"]
    )

    # Reviewer slots; slot order is the assigned_reviewers order
    op.create_table(
        "pull_request_reviewers",
        sa.Column("pull_request_id", sa.String(length=255), nullable=False),
        sa.Column("slot", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(
            ["pull_request_id"],
            ["pull_requests.pull_request_id"],
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.user_id"]),
        sa.PrimaryKeyConstraint("pull_request_id", "slot"),
    )
    op.create_index(
        "ix_pull_request_reviewers_user_id", "pull_request_reviewers", ["user_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_pull_request_reviewers_user_id", "pull_request_reviewers")
    op.drop_table("pull_request_reviewers")
    op.drop_index("ix_pull_requests_author_id", "pull_requests")
    op.drop_table("pull_requests")
    op.drop_index("ix_users_team_name_position", "users")
    op.drop_table("users")
    op.drop_table("teams")
