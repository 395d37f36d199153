"""Tests for shared videos, object storage, to-dos and user services."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from lockin.core.database.entities import Goal, SharedVideo, Todo
from lockin.core.errors import InvalidOperationError, NotAuthorizedError, NotFoundError
from lockin.core.models.io import ShareVideoRequest, TodoCreate, TodoUpdate, TodoVideoAttach
from lockin.server.core.config import ObjectStorageConfig
from lockin.server.services.partners import PartnerService
from lockin.server.services.shared_videos import SharedVideoService, can_view
from lockin.server.services.storage import ObjectStorage
from lockin.server.services.todos import TodoService
from lockin.server.services.users import DELETE_ALL_MESSAGE, UserService


@pytest.fixture
def videos(repos, storage) -> SharedVideoService:
    return SharedVideoService(repos, storage)


@pytest.fixture
def todos(repos) -> TodoService:
    return TodoService(repos)


@pytest.fixture
def users(repos) -> UserService:
    return UserService(repos)


def _share(*partner_ids, **kwargs) -> ShareVideoRequest:
    return ShareVideoRequest(
        r2_key="videos/abc.mp4",
        thumbnail_r2_key=kwargs.pop("thumbnail_r2_key", "thumbnails/abc.jpg"),
        duration_minutes=30,
        goal_title="Calculus",
        partner_ids=list(partner_ids),
        **kwargs,
    )


class TestObjectStorage:
    def test_new_object_key(self, storage):
        key = storage.new_object_key("video", "video/mp4")
        assert key.startswith("videos/") and key.endswith(".mp4")
        assert storage.new_object_key("thumbnail", "image/jpeg").endswith(".jpg")
        assert storage.new_object_key("video", "application/x-unknown").endswith(".bin")

    def test_presigned_urls(self, storage):
        get_url = storage.presigned_get_url("videos/abc.mp4")
        put_url = storage.presigned_put_url("videos/abc.mp4", "video/mp4")

        for url in (get_url, put_url):
            assert url.startswith("https://")
            assert "videos/abc.mp4" in url
            assert "X-Amz-Expires=600" in url
        assert storage.presigned_get_url(None) is None
        assert storage.presigned_get_url("") is None
        assert storage.expires_in == 600

    def test_uses_injected_client(self):
        client = MagicMock()
        client.generate_presigned_url.return_value = "https://signed"
        storage = ObjectStorage(ObjectStorageConfig(bucket="b", url_expiry_seconds=60), client=client)

        assert storage.presigned_get_url("k") == "https://signed"
        client.generate_presigned_url.assert_called_once_with(
            "get_object", Params={"Bucket": "b", "Key": "k"}, ExpiresIn=60
        )


class TestSharedVideoService:
    async def test_share_keeps_only_active_partners(self, videos, alice, bob, carol, make_partners):
        await make_partners(alice, bob)

        video = await videos.share(alice.token_identifier, _share(bob.token_identifier, carol.token_identifier, bob.token_identifier))

        assert video.shared_with_partner_ids == [bob.token_identifier]
        assert video.user_id == alice.token_identifier

    async def test_share_without_valid_partners(self, videos, alice, carol):
        with pytest.raises(InvalidOperationError, match="No valid partners to share with"):
            await videos.share(alice.token_identifier, _share(carol.token_identifier))

    async def test_shared_with_me_and_mine(self, videos, alice, bob, make_partners):
        await make_partners(alice, bob)
        video = await videos.share(alice.token_identifier, _share(bob.token_identifier))

        shared = await videos.list_shared_with_me(bob.token_identifier)
        assert [(v.id, p.partner_name) for v, p in shared] == [(video.id, "Alice Smith")]
        assert await videos.list_shared_with_me(alice.token_identifier) == []
        assert [v.id for v in await videos.list_my_shared(alice.token_identifier)] == [video.id]

    async def test_view_urls(self, videos, alice, bob, carol, make_partners):
        await make_partners(alice, bob)
        video = await videos.share(alice.token_identifier, _share(bob.token_identifier))

        for viewer in (alice, bob):
            view = await videos.view_url(viewer.token_identifier, video.id)
            assert "videos/abc.mp4" in view.url
            assert view.expires_in == 600
            thumb = await videos.thumbnail_url(viewer.token_identifier, video.id)
            assert "thumbnails/abc.jpg" in thumb.url

        with pytest.raises(NotAuthorizedError, match="Not authorized to view this video"):
            await videos.view_url(carol.token_identifier, video.id)
        with pytest.raises(NotFoundError, match="Video not found"):
            await videos.get(alice.token_identifier, "missing")

    async def test_thumbnail_url_without_thumbnail(self, videos, alice, bob, make_partners):
        await make_partners(alice, bob)
        video = await videos.share(alice.token_identifier, _share(bob.token_identifier, thumbnail_r2_key=None))

        thumb = await videos.thumbnail_url(bob.token_identifier, video.id)

        assert thumb.url is None

    async def test_delete(self, videos, alice, bob, make_partners):
        await make_partners(alice, bob)
        video = await videos.share(alice.token_identifier, _share(bob.token_identifier))

        with pytest.raises(NotAuthorizedError):
            await videos.delete(bob.token_identifier, video.id)
        assert await videos.delete(alice.token_identifier, video.id) == "deleted"
        with pytest.raises(NotFoundError, match="Video not found"):
            await videos.delete(alice.token_identifier, video.id)

    def test_can_view(self):
        video = SharedVideo(user_id="a", r2_key="k", duration_minutes=1, shared_with_partner_ids=["b"])
        assert can_view(video, "a") and can_view(video, "b")
        assert not can_view(video, "c")


class TestTodoService:
    async def test_crud_and_ownership(self, todos, alice, bob):
        owner = alice.token_identifier
        todo = await todos.create(owner, TodoCreate(title="Buy notebook"))
        assert todo.is_completed is False

        todo = await todos.toggle(owner, todo.id, True)
        assert todo.is_completed is True

        todo = await todos.update(owner, todo.id, TodoUpdate(title="Buy two notebooks", description="A4"))
        assert (todo.title, todo.description) == ("Buy two notebooks", "A4")

        assert await todos.get_todo(owner, "missing") is None
        with pytest.raises(NotAuthorizedError):
            await todos.get_todo(bob.token_identifier, todo.id)
        with pytest.raises(NotFoundError, match="Todo not found"):
            await todos.toggle(owner, "missing", True)

        await todos.delete(owner, todo.id)
        assert await todos.get_todo(owner, todo.id) is None

    async def test_archive(self, todos, alice):
        owner = alice.token_identifier
        todo = await todos.create(owner, TodoCreate(title="Read"))

        await todos.set_archived(owner, todo.id, True)

        assert await todos.list_todos(owner) == []
        assert [t.id for t in await todos.list_archived(owner)] == [todo.id]

    async def test_attach_video_completes(self, todos, alice):
        owner = alice.token_identifier
        todo = await todos.create(owner, TodoCreate(title="Read"))

        todo = await todos.attach_video(
            owner, todo.id, TodoVideoAttach(local_video_path="/v.mp4", speed_segments_json='[{"speed": 6}]')
        )

        assert todo.is_completed is True
        assert todo.local_video_path == "/v.mp4"
        assert todo.speed_segments_json == '[{"speed": 6}]'

    async def test_attach_video_to_multiple_skips_foreign(self, repos, todos, alice, bob):
        first = await todos.create(alice.token_identifier, TodoCreate(title="A"))
        second = await todos.create(alice.token_identifier, TodoCreate(title="B"))
        foreign = await todos.create(bob.token_identifier, TodoCreate(title="Bob's"))

        updated = await todos.attach_video_to_multiple(
            alice.token_identifier,
            [first.id, "missing", foreign.id, second.id],
            TodoVideoAttach(local_video_path="/v.mp4"),
        )

        assert [t.id for t in updated] == [first.id, second.id]
        assert all(t.is_completed for t in updated)
        assert (await repos.todos.get_by_id(foreign.id)).local_video_path is None


class TestUserService:
    async def test_store_current_user_upserts(self, users, alice):
        created = await users.store_current_user(alice)
        assert created.token_identifier == "lockin-dev|alice"
        assert created.email == "alice@example.com"
        assert created.name == "Alice Smith"

        renamed = alice.model_copy(update={"name": "Alice S.", "email": "ALICE@Example.com"})
        updated = await users.store_current_user(renamed)

        assert updated.id == created.id
        assert updated.name == "Alice S."
        assert updated.email == "alice@example.com"
        assert (await users.get_current_user(alice)).id == created.id

    async def test_get_current_user_unknown(self, users, bob):
        assert await users.get_current_user(bob) is None

    async def test_delete_all_data(self, repos, users, alice, bob, make_partners):
        me = alice.token_identifier
        await users.store_current_user(alice)
        goal = await repos.goals.create(Goal(user_id=me, title="Calculus", target_hours=10))
        await repos.todos.create(Todo(user_id=me, title="Read"))
        await make_partners(alice, bob)
        await PartnerService(repos).send_invite(alice, "carol@example.com")
        await repos.shared_videos.create(
            SharedVideo(user_id=me, r2_key="k", duration_minutes=1, shared_with_partner_ids=[bob.token_identifier])
        )
        bob_goal = await repos.goals.create(Goal(user_id=bob.token_identifier, title="Bob's", target_hours=1))

        assert await users.delete_all_data(alice) == DELETE_ALL_MESSAGE

        assert await repos.goals.get_by_id(goal.id) is None
        assert await repos.todos.list_for_user(me) == []
        assert await repos.partners.list_for_user(me) == []
        assert await repos.partners.list_for_user(bob.token_identifier) == []
        assert await repos.invites.list(filters={"from_user_id": me}) == []
        assert await repos.shared_videos.list_by_owner(me) == []
        assert await users.get_current_user(alice) is not None
        assert (await repos.goals.get_by_id(bob_goal.id)) is not None
