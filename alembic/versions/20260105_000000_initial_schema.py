"""Initial schema for Lock In

Revision ID: 20260105_000000
Revises: None
Create Date: 2026-01-05 00:00:00.000000

Creates the server tables:
- users
- goals, goal_todos, study_sessions
- todos
- accountability_partners, partner_invites
- shared_videos

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260105_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

goal_status = sa.Enum("active", "completed", "paused", name="goalstatus")
goal_todo_type = sa.Enum("simple", "hours", name="goaltodotype")
todo_frequency = sa.Enum("none", "daily", "weekly", name="todofrequency")
partner_status = sa.Enum("pending", "active", "declined", name="partnerstatus")
invite_status = sa.Enum("pending", "accepted", "declined", "expired", name="invitestatus")


def upgrade() -> None:
    """Create all tables."""

    op.create_table(
        "users",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("token_identifier", sa.String(512), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("name", sa.String(256), nullable=True),
        sa.Column("picture_url", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_token_identifier", "users", ["token_identifier"], unique=True)
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "goals",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(512), nullable=False),
        sa.Column("title", sa.String(256), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("target_hours", sa.Float(), nullable=False),
        sa.Column("completed_hours", sa.Float(), nullable=False),
        sa.Column("status", goal_status, nullable=False),
        sa.Column("is_archived", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_goals_user_id", "goals", ["user_id"])
    op.create_index("ix_goals_created_at", "goals", ["created_at"])
    op.create_index("ix_goals_user_status", "goals", ["user_id", "status"])
    op.create_index("ix_goals_user_archived", "goals", ["user_id", "is_archived"])

    op.create_table(
        "goal_todos",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(512), nullable=False),
        sa.Column("goal_id", sa.String(32), nullable=False),
        sa.Column("title", sa.String(256), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("todo_type", goal_todo_type, nullable=False),
        sa.Column("estimated_hours", sa.Float(), nullable=True),
        sa.Column("completed_hours", sa.Float(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.Column("is_archived", sa.Boolean(), nullable=False),
        sa.Column("frequency", todo_frequency, nullable=False),
        sa.Column("last_reset_at", sa.DateTime(), nullable=True),
        sa.Column("local_video_path", sa.String(), nullable=True),
        sa.Column("local_thumbnail_path", sa.String(), nullable=True),
        sa.Column("video_duration_minutes", sa.Float(), nullable=True),
        sa.Column("video_notes", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["goal_id"], ["goals.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_goal_todos_user_id", "goal_todos", ["user_id"])
    op.create_index("ix_goal_todos_goal_id", "goal_todos", ["goal_id"])

    op.create_table(
        "study_sessions",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(512), nullable=False),
        sa.Column("goal_id", sa.String(32), nullable=False),
        sa.Column("goal_todo_id", sa.String(32), nullable=True),
        sa.Column("local_video_path", sa.String(), nullable=False),
        sa.Column("local_thumbnail_path", sa.String(), nullable=True),
        sa.Column("duration_minutes", sa.Float(), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["goal_id"], ["goals.id"]),
        sa.ForeignKeyConstraint(["goal_todo_id"], ["goal_todos.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_study_sessions_user_id", "study_sessions", ["user_id"])
    op.create_index("ix_study_sessions_goal_id", "study_sessions", ["goal_id"])
    op.create_index("ix_study_sessions_goal_todo_id", "study_sessions", ["goal_todo_id"])
    op.create_index("ix_study_sessions_created_at", "study_sessions", ["created_at"])

    op.create_table(
        "todos",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(512), nullable=False),
        sa.Column("title", sa.String(256), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.Column("is_archived", sa.Boolean(), nullable=False),
        sa.Column("local_video_path", sa.String(), nullable=True),
        sa.Column("local_thumbnail_path", sa.String(), nullable=True),
        sa.Column("video_notes", sa.String(), nullable=True),
        sa.Column("speed_segments_json", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_todos_user_id", "todos", ["user_id"])
    op.create_index("ix_todos_created_at", "todos", ["created_at"])
    op.create_index("ix_todos_user_completed", "todos", ["user_id", "is_completed"])
    op.create_index("ix_todos_user_archived", "todos", ["user_id", "is_archived"])

    op.create_table(
        "accountability_partners",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(512), nullable=False),
        sa.Column("partner_id", sa.String(512), nullable=False),
        sa.Column("partner_email", sa.String(320), nullable=False),
        sa.Column("partner_name", sa.String(256), nullable=True),
        sa.Column("status", partner_status, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_accountability_partners_user_id", "accountability_partners", ["user_id"])
    op.create_index("ix_accountability_partners_partner_id", "accountability_partners", ["partner_id"])

    op.create_table(
        "partner_invites",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("code", sa.String(16), nullable=False),
        sa.Column("from_user_id", sa.String(512), nullable=False),
        sa.Column("from_user_email", sa.String(320), nullable=False),
        sa.Column("from_user_name", sa.String(256), nullable=True),
        sa.Column("to_email", sa.String(320), nullable=True),
        sa.Column("to_user_id", sa.String(512), nullable=True),
        sa.Column("status", invite_status, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_partner_invites_code", "partner_invites", ["code"], unique=True)
    op.create_index("ix_partner_invites_from_user_id", "partner_invites", ["from_user_id"])
    op.create_index("ix_partner_invites_to_email", "partner_invites", ["to_email"])

    op.create_table(
        "shared_videos",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(512), nullable=False),
        sa.Column("r2_key", sa.String(), nullable=False),
        sa.Column("thumbnail_r2_key", sa.String(), nullable=True),
        sa.Column("duration_minutes", sa.Float(), nullable=False),
        sa.Column("goal_title", sa.String(), nullable=True),
        sa.Column("todo_title", sa.String(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("shared_with_partner_ids", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_shared_videos_user_id", "shared_videos", ["user_id"])
    op.create_index("ix_shared_videos_created_at", "shared_videos", ["created_at"])


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("shared_videos")
    op.drop_table("partner_invites")
    op.drop_table("accountability_partners")
    op.drop_table("todos")
    op.drop_table("study_sessions")
    op.drop_table("goal_todos")
    op.drop_table("goals")
    op.drop_table("users")

    bind = op.get_bind()
    for enum_type in (invite_status, partner_status, todo_frequency, goal_todo_type, goal_status):
        enum_type.drop(bind, checkfirst=True)
