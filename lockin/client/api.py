"""Async HTTP client for the Lock In REST API.

Every method maps to one endpoint under ``/api/v1`` and returns the same
pydantic read models the server responds with. Non-2xx responses raise
:class:`~lockin.client.errors.LockInApiError`.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx

from lockin.core.models.enums import GoalStatus, GoalTodoType, TodoFrequency
from lockin.core.models.io import (
    CursorPage,
    GoalProgressRead,
    GoalRead,
    GoalTodoProgressRead,
    GoalTodoRead,
    GoalTodoWithGoalRead,
    InviteLinkRead,
    PartnerInviteRead,
    PartnerRead,
    PresignedUrlRead,
    SharedVideoRead,
    SharedVideoWithSenderRead,
    StudySessionRead,
    TodoRead,
    UploadUrlRead,
    UserRead,
)
from lockin.server.core.constant import API_V1_STR

from .errors import LockInApiError

TokenProvider = Callable[[], Awaitable[Optional[str]]]


class LockInClient:
    """Thin async client over the Lock In API.

    - Authenticates with a static bearer ``token`` or an async ``token_provider``
      called before every request (so refreshed identity tokens are picked up).
    - Anonymous queries get the server's empty results; anonymous mutations
      raise ``LockInApiError`` with status 401.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._token = token
        self._token_provider = token_provider
        self._http = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=transport)
        self._logger = logging.getLogger(__name__)

    async def __aenter__(self) -> "LockInClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _headers(self) -> Dict[str, str]:
        """Build JSON headers with the current bearer token, if any."""
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        token = await self._token_provider() if self._token_provider else self._token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None for empty bodies).

        Raises:
            LockInApiError: If the response status is not 2xx.
            httpx.TransportError: For transport-level HTTP issues.
        """
        url = f"{self.base_url}{API_V1_STR}{path}"
        if params:
            params = {key: value for key, value in params.items() if value is not None}
        self._logger.debug("LockInClient: %s %s", method, url)
        response = await self._http.request(method, url, json=json, params=params, headers=await self._headers())
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            details = body.get("detail") if isinstance(body, dict) else body
            raise LockInApiError(response.status_code, details)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def store_current_user(self) -> UserRead:
        return UserRead.model_validate(await self._request("POST", "/users/me"))

    async def get_current_user(self) -> Optional[UserRead]:
        data = await self._request("GET", "/users/me")
        return UserRead.model_validate(data) if data else None

    async def delete_all_data(self) -> str:
        return (await self._request("DELETE", "/users/me/data"))["message"]

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    async def list_goals(self) -> List[GoalRead]:
        return [GoalRead.model_validate(item) for item in await self._request("GET", "/goals")]

    async def list_archived_goals(self, *, limit: int = 20, cursor: Optional[str] = None) -> CursorPage[GoalRead]:
        data = await self._request("GET", "/goals/archived", params={"limit": limit, "cursor": cursor})
        return CursorPage[GoalRead].model_validate(data)

    async def get_goal(self, goal_id: str) -> Optional[GoalRead]:
        data = await self._request("GET", f"/goals/{goal_id}")
        return GoalRead.model_validate(data) if data else None

    async def create_goal(self, title: str, target_hours: float, description: str = "") -> GoalRead:
        payload = {"title": title, "description": description, "target_hours": target_hours}
        return GoalRead.model_validate(await self._request("POST", "/goals", json=payload))

    async def update_goal_progress(self, goal_id: str, additional_hours: float) -> GoalProgressRead:
        data = await self._request("POST", f"/goals/{goal_id}/progress", json={"additional_hours": additional_hours})
        return GoalProgressRead.model_validate(data)

    async def update_goal(
        self, goal_id: str, *, title: Optional[str] = None, status: Optional[GoalStatus] = None
    ) -> GoalRead:
        payload = {"title": title, "status": status.value if status else None}
        return GoalRead.model_validate(await self._request("PATCH", f"/goals/{goal_id}", json=payload))

    async def archive_goal(self, goal_id: str) -> GoalRead:
        return GoalRead.model_validate(await self._request("POST", f"/goals/{goal_id}/archive"))

    async def unarchive_goal(self, goal_id: str) -> GoalRead:
        return GoalRead.model_validate(await self._request("POST", f"/goals/{goal_id}/unarchive"))

    async def delete_goal(self, goal_id: str) -> None:
        await self._request("DELETE", f"/goals/{goal_id}")

    # ------------------------------------------------------------------
    # Goal to-dos
    # ------------------------------------------------------------------

    async def list_goal_todos(self, goal_id: str) -> List[GoalTodoRead]:
        data = await self._request("GET", "/goal-todos", params={"goal_id": goal_id})
        return [GoalTodoRead.model_validate(item) for item in data]

    async def list_all_goal_todos(self) -> List[GoalTodoWithGoalRead]:
        return [GoalTodoWithGoalRead.model_validate(item) for item in await self._request("GET", "/goal-todos/all")]

    async def list_archived_goal_todos(self) -> List[GoalTodoRead]:
        return [GoalTodoRead.model_validate(item) for item in await self._request("GET", "/goal-todos/archived")]

    async def create_goal_todo(
        self,
        goal_id: str,
        title: str,
        *,
        description: Optional[str] = None,
        todo_type: GoalTodoType = GoalTodoType.simple,
        estimated_hours: Optional[float] = None,
        frequency: TodoFrequency = TodoFrequency.none,
    ) -> GoalTodoRead:
        payload = {
            "goal_id": goal_id,
            "title": title,
            "description": description,
            "todo_type": todo_type.value,
            "estimated_hours": estimated_hours,
            "frequency": frequency.value,
        }
        return GoalTodoRead.model_validate(await self._request("POST", "/goal-todos", json=payload))

    async def toggle_goal_todo(self, todo_id: str, is_completed: bool) -> GoalTodoRead:
        data = await self._request("POST", f"/goal-todos/{todo_id}/toggle", json={"is_completed": is_completed})
        return GoalTodoRead.model_validate(data)

    async def update_goal_todo_progress(self, todo_id: str, additional_hours: float) -> GoalTodoProgressRead:
        data = await self._request(
            "POST", f"/goal-todos/{todo_id}/progress", json={"additional_hours": additional_hours}
        )
        return GoalTodoProgressRead.model_validate(data)

    async def attach_goal_todo_video(
        self,
        todo_id: str,
        local_video_path: str,
        *,
        local_thumbnail_path: Optional[str] = None,
        video_duration_minutes: Optional[float] = None,
        video_notes: Optional[str] = None,
    ) -> GoalTodoRead:
        payload = {
            "local_video_path": local_video_path,
            "local_thumbnail_path": local_thumbnail_path,
            "video_duration_minutes": video_duration_minutes,
            "video_notes": video_notes,
        }
        return GoalTodoRead.model_validate(await self._request("PUT", f"/goal-todos/{todo_id}/video", json=payload))

    async def update_goal_todo_video_notes(self, todo_id: str, video_notes: Optional[str]) -> GoalTodoRead:
        data = await self._request("PATCH", f"/goal-todos/{todo_id}/video", json={"video_notes": video_notes})
        return GoalTodoRead.model_validate(data)

    async def remove_goal_todo_video(self, todo_id: str) -> GoalTodoRead:
        return GoalTodoRead.model_validate(await self._request("DELETE", f"/goal-todos/{todo_id}/video"))

    async def archive_goal_todo(self, todo_id: str) -> GoalTodoRead:
        return GoalTodoRead.model_validate(await self._request("POST", f"/goal-todos/{todo_id}/archive"))

    async def unarchive_goal_todo(self, todo_id: str) -> GoalTodoRead:
        return GoalTodoRead.model_validate(await self._request("POST", f"/goal-todos/{todo_id}/unarchive"))

    async def delete_goal_todo(self, todo_id: str) -> None:
        await self._request("DELETE", f"/goal-todos/{todo_id}")

    async def check_and_reset_recurring(self, goal_id: str) -> int:
        data = await self._request("POST", "/goal-todos/reset-recurring", params={"goal_id": goal_id})
        return data["reset_count"]

    # ------------------------------------------------------------------
    # Study sessions
    # ------------------------------------------------------------------

    async def list_study_sessions(
        self, *, goal_id: Optional[str] = None, goal_todo_id: Optional[str] = None
    ) -> List[StudySessionRead]:
        data = await self._request("GET", "/study-sessions", params={"goal_id": goal_id, "goal_todo_id": goal_todo_id})
        return [StudySessionRead.model_validate(item) for item in data]

    async def create_study_session(
        self,
        goal_id: str,
        local_video_path: str,
        duration_minutes: float,
        *,
        goal_todo_id: Optional[str] = None,
        local_thumbnail_path: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> StudySessionRead:
        payload = {
            "goal_id": goal_id,
            "goal_todo_id": goal_todo_id,
            "local_video_path": local_video_path,
            "local_thumbnail_path": local_thumbnail_path,
            "duration_minutes": duration_minutes,
            "notes": notes,
        }
        return StudySessionRead.model_validate(await self._request("POST", "/study-sessions", json=payload))

    async def update_study_session_notes(self, session_id: str, notes: Optional[str]) -> StudySessionRead:
        data = await self._request("PATCH", f"/study-sessions/{session_id}", json={"notes": notes})
        return StudySessionRead.model_validate(data)

    async def delete_study_session(self, session_id: str) -> None:
        await self._request("DELETE", f"/study-sessions/{session_id}")

    # ------------------------------------------------------------------
    # To-dos
    # ------------------------------------------------------------------

    async def list_todos(self) -> List[TodoRead]:
        return [TodoRead.model_validate(item) for item in await self._request("GET", "/todos")]

    async def list_archived_todos(self) -> List[TodoRead]:
        return [TodoRead.model_validate(item) for item in await self._request("GET", "/todos/archived")]

    async def get_todo(self, todo_id: str) -> Optional[TodoRead]:
        data = await self._request("GET", f"/todos/{todo_id}")
        return TodoRead.model_validate(data) if data else None

    async def create_todo(self, title: str, description: Optional[str] = None) -> TodoRead:
        data = await self._request("POST", "/todos", json={"title": title, "description": description})
        return TodoRead.model_validate(data)

    async def toggle_todo(self, todo_id: str, is_completed: bool) -> TodoRead:
        data = await self._request("POST", f"/todos/{todo_id}/toggle", json={"is_completed": is_completed})
        return TodoRead.model_validate(data)

    async def update_todo(self, todo_id: str, title: str, description: Optional[str] = None) -> TodoRead:
        data = await self._request("PATCH", f"/todos/{todo_id}", json={"title": title, "description": description})
        return TodoRead.model_validate(data)

    async def attach_todo_video(self, todo_id: str, local_video_path: str, **fields: Optional[str]) -> TodoRead:
        """Attach a recording; extra fields: ``local_thumbnail_path``, ``video_notes``, ``speed_segments_json``."""
        payload = {"local_video_path": local_video_path, **fields}
        return TodoRead.model_validate(await self._request("PUT", f"/todos/{todo_id}/video", json=payload))

    async def attach_video_to_todos(
        self, todo_ids: List[str], local_video_path: str, **fields: Optional[str]
    ) -> List[TodoRead]:
        payload = {"todo_ids": todo_ids, "local_video_path": local_video_path, **fields}
        return [TodoRead.model_validate(item) for item in await self._request("POST", "/todos/attach-video", json=payload)]

    async def archive_todo(self, todo_id: str) -> TodoRead:
        return TodoRead.model_validate(await self._request("POST", f"/todos/{todo_id}/archive"))

    async def unarchive_todo(self, todo_id: str) -> TodoRead:
        return TodoRead.model_validate(await self._request("POST", f"/todos/{todo_id}/unarchive"))

    async def delete_todo(self, todo_id: str) -> None:
        await self._request("DELETE", f"/todos/{todo_id}")

    # ------------------------------------------------------------------
    # Partners and invites
    # ------------------------------------------------------------------

    async def list_partners(self) -> List[PartnerRead]:
        return [PartnerRead.model_validate(item) for item in await self._request("GET", "/partners")]

    async def list_sent_invites(self) -> List[PartnerInviteRead]:
        return [PartnerInviteRead.model_validate(item) for item in await self._request("GET", "/partners/invites/sent")]

    async def list_received_invites(self) -> List[PartnerInviteRead]:
        data = await self._request("GET", "/partners/invites/received")
        return [PartnerInviteRead.model_validate(item) for item in data]

    async def pending_invite_count(self) -> int:
        return (await self._request("GET", "/partners/invites/received/count"))["count"]

    async def find_invite_by_code(self, code: str) -> Optional[PartnerInviteRead]:
        data = await self._request("GET", f"/partners/invites/code/{code}")
        return PartnerInviteRead.model_validate(data) if data else None

    async def send_invite(self, email: str) -> PartnerInviteRead:
        return PartnerInviteRead.model_validate(await self._request("POST", "/partners/invites", json={"email": email}))

    async def create_invite_link(self) -> InviteLinkRead:
        return InviteLinkRead.model_validate(await self._request("POST", "/partners/invites/link"))

    async def accept_invite(self, invite_id: str) -> str:
        return (await self._request("POST", f"/partners/invites/{invite_id}/accept"))["status"]

    async def accept_invite_by_code(self, code: str) -> str:
        return (await self._request("POST", "/partners/invites/accept", json={"code": code}))["status"]

    async def decline_invite(self, invite_id: str) -> str:
        return (await self._request("POST", f"/partners/invites/{invite_id}/decline"))["status"]

    async def cancel_invite(self, invite_id: str) -> str:
        return (await self._request("DELETE", f"/partners/invites/{invite_id}"))["status"]

    async def remove_partner(self, record_id: str) -> str:
        return (await self._request("DELETE", f"/partners/{record_id}"))["status"]

    async def partner_activity(self, partner_id: str) -> List[SharedVideoRead]:
        data = await self._request("GET", "/partners/activity", params={"partner_id": partner_id})
        return [SharedVideoRead.model_validate(item) for item in data]

    # ------------------------------------------------------------------
    # Shared videos and storage
    # ------------------------------------------------------------------

    async def create_upload_url(self, *, kind: str = "video", content_type: str = "video/mp4") -> UploadUrlRead:
        payload = {"kind": kind, "content_type": content_type}
        return UploadUrlRead.model_validate(await self._request("POST", "/storage/upload-url", json=payload))

    async def share_video(
        self,
        r2_key: str,
        duration_minutes: float,
        partner_ids: List[str],
        *,
        thumbnail_r2_key: Optional[str] = None,
        goal_title: Optional[str] = None,
        todo_title: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> SharedVideoRead:
        payload = {
            "r2_key": r2_key,
            "thumbnail_r2_key": thumbnail_r2_key,
            "duration_minutes": duration_minutes,
            "goal_title": goal_title,
            "todo_title": todo_title,
            "notes": notes,
            "partner_ids": partner_ids,
        }
        return SharedVideoRead.model_validate(await self._request("POST", "/shared-videos", json=payload))

    async def list_shared_with_me(self) -> List[SharedVideoWithSenderRead]:
        data = await self._request("GET", "/shared-videos/shared-with-me")
        return [SharedVideoWithSenderRead.model_validate(item) for item in data]

    async def list_my_shared_videos(self) -> List[SharedVideoRead]:
        return [SharedVideoRead.model_validate(item) for item in await self._request("GET", "/shared-videos/mine")]

    async def get_shared_video(self, video_id: str) -> SharedVideoRead:
        return SharedVideoRead.model_validate(await self._request("GET", f"/shared-videos/{video_id}"))

    async def get_video_url(self, video_id: str) -> PresignedUrlRead:
        return PresignedUrlRead.model_validate(await self._request("GET", f"/shared-videos/{video_id}/url"))

    async def get_thumbnail_url(self, video_id: str) -> PresignedUrlRead:
        data = await self._request("GET", f"/shared-videos/{video_id}/thumbnail-url")
        return PresignedUrlRead.model_validate(data)

    async def delete_shared_video(self, video_id: str) -> str:
        return (await self._request("DELETE", f"/shared-videos/{video_id}"))["status"]
