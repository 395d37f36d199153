"""Tests for entity defaults, table layout and column round-trips."""

from datetime import datetime, timedelta

from lockin.core.database.entities import (
    SERVER_TABLES,
    AccountabilityPartner,
    Goal,
    GoalTodo,
    PartnerInvite,
    SharedVideo,
    StudySession,
    Todo,
    User,
)
from lockin.core.models.enums import GoalStatus, GoalTodoType, InviteStatus, PartnerStatus, TodoFrequency


class TestEntityDefaults:
    def test_ids_are_opaque_hex(self):
        first, second = Goal(user_id="u", title="A", target_hours=1), Goal(user_id="u", title="B", target_hours=1)

        assert len(first.id) == 32
        assert int(first.id, 16) >= 0
        assert first.id != second.id

    def test_goal_defaults(self):
        goal = Goal(user_id="u", title="Calculus", target_hours=10)

        assert goal.completed_hours == 0.0
        assert goal.status == GoalStatus.active
        assert goal.is_archived is False
        assert goal.description == ""
        assert goal.created_at.tzinfo is None

    def test_goal_todo_defaults(self):
        todo = GoalTodo(user_id="u", goal_id="g", title="Read")

        assert todo.todo_type == GoalTodoType.simple
        assert todo.frequency == TodoFrequency.none
        assert todo.is_completed is False
        assert todo.last_reset_at is None
        assert todo.local_video_path is None

    def test_partner_defaults(self):
        partner = AccountabilityPartner(user_id="u", partner_id="p", partner_email="p@example.com")
        invite = PartnerInvite(
            code="ABCD2345",
            from_user_id="u",
            from_user_email="u@example.com",
            expires_at=datetime(2026, 1, 12),
        )

        assert partner.status == PartnerStatus.pending
        assert invite.status == InviteStatus.pending
        assert invite.to_email is None

    def test_todo_and_user_defaults(self):
        todo = Todo(user_id="u", title="Buy notebook")
        user = User(token_identifier="lockin-dev|u")

        assert todo.is_completed is False
        assert todo.is_archived is False
        assert todo.speed_segments_json is None
        assert user.email is None

    def test_repr(self):
        goal = Goal(id="abc", user_id="u", title="Calculus", target_hours=10)

        assert "Calculus" in repr(goal)
        assert "abc" in repr(goal)


class TestTableLayout:
    def test_server_tables(self):
        assert [table.name for table in SERVER_TABLES] == [
            "users",
            "goals",
            "goal_todos",
            "study_sessions",
            "todos",
            "accountability_partners",
            "partner_invites",
            "shared_videos",
        ]

    def test_goal_composite_indexes(self):
        indexes = {index.name: [c.name for c in index.columns] for index in Goal.__table__.indexes}

        assert indexes["ix_goals_user_status"] == ["user_id", "status"]
        assert indexes["ix_goals_user_archived"] == ["user_id", "is_archived"]

    def test_unique_columns(self):
        assert PartnerInvite.__table__.c.code.unique
        assert User.__table__.c.token_identifier.unique


class TestRoundTrips:
    async def test_shared_with_partner_ids_is_stored_as_json(self, repos):
        video = await repos.shared_videos.create(
            SharedVideo(user_id="u", r2_key="videos/a.mp4", duration_minutes=3, shared_with_partner_ids=["p1", "p2"])
        )

        repos.session.expunge_all()
        stored = await repos.shared_videos.get_by_id(video.id)

        assert stored is not video
        assert stored.shared_with_partner_ids == ["p1", "p2"]

    async def test_session_with_optional_todo(self, repos, make_goal):
        goal = await make_goal()
        created = datetime(2026, 1, 5, 9, 0)
        session = await repos.study_sessions.create(
            StudySession(
                user_id="u",
                goal_id=goal.id,
                local_video_path="/videos/a.mp4",
                duration_minutes=25,
                created_at=created,
            )
        )

        repos.session.expunge_all()
        stored = await repos.study_sessions.get_by_id(session.id)

        assert stored.goal_todo_id is None
        assert stored.created_at == created
        assert stored.created_at + timedelta(minutes=stored.duration_minutes) == datetime(2026, 1, 5, 9, 25)

    async def test_default_timestamps_are_naive_utc(self, repos):
        goal = await repos.goals.create(Goal(user_id="u", title="Calculus", target_hours=10))

        repos.session.expunge_all()
        stored = await repos.goals.get_by_id(goal.id)

        assert stored.created_at.tzinfo is None
        assert stored.created_at == goal.created_at
