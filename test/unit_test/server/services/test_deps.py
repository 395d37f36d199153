"""Unit tests for server services dependencies.

Tests verify that each service dependency is an ``Annotated`` alias wired to
its provider, and that providers build services over the request's repos.
"""

import pytest

from lockin.server.services import deps
from lockin.server.services.goal_todos import GoalTodoService
from lockin.server.services.goals import GoalService
from lockin.server.services.partners import PartnerService
from lockin.server.services.shared_videos import SharedVideoService
from lockin.server.services.storage import ObjectStorage, get_object_storage
from lockin.server.services.study_sessions import StudySessionService
from lockin.server.services.todos import TodoService
from lockin.server.services.users import UserService

SERVICE_DEPS = [
    (deps.GoalServiceDep, deps.get_goal_service, GoalService),
    (deps.GoalTodoServiceDep, deps.get_goal_todo_service, GoalTodoService),
    (deps.StudySessionServiceDep, deps.get_study_session_service, StudySessionService),
    (deps.TodoServiceDep, deps.get_todo_service, TodoService),
    (deps.PartnerServiceDep, deps.get_partner_service, PartnerService),
    (deps.SharedVideoServiceDep, deps.get_shared_video_service, SharedVideoService),
    (deps.UserServiceDep, deps.get_user_service, UserService),
]


class TestServiceDeps:
    @pytest.mark.parametrize("alias, provider, service_type", SERVICE_DEPS)
    def test_alias_wires_provider(self, alias, provider, service_type):
        assert alias.__origin__ is service_type
        assert alias.__metadata__[0].dependency is provider

    def test_storage_dep(self):
        assert deps.StorageDep.__origin__ is ObjectStorage
        assert deps.StorageDep.__metadata__[0].dependency is get_object_storage

    @pytest.mark.parametrize("alias, provider, service_type", SERVICE_DEPS)
    def test_provider_builds_service(self, alias, provider, service_type, repos, storage):
        service = provider(repos, storage) if service_type is SharedVideoService else provider(repos)

        assert isinstance(service, service_type)
        assert service.repos is repos

    def test_goal_todo_service_uses_configured_timezone(self, repos):
        service = deps.get_goal_todo_service(repos)

        assert service.reset_timezone == deps.settings.scheduler.reset_timezone

    def test_get_repos_binds_session(self, session):
        assert deps.get_repos(session).session is session
