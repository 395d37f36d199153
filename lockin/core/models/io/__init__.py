"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- common: Pagination and status results
- goals: Goal I/O models
- goal_todos: Goal to-do I/O models
- study_sessions: Study session I/O models
- todos: Standalone to-do I/O models
- partners: Partner and invite I/O models
- shared_videos: Shared video and storage URL I/O models
- users: User profile I/O models
"""

from .common import CursorPage, MessageResult, StatusResult
from .goal_todos import (
    GoalTodoCreate,
    GoalTodoProgressRead,
    GoalTodoProgressUpdate,
    GoalTodoRead,
    GoalTodoToggle,
    GoalTodoVideoAttach,
    GoalTodoWithGoalRead,
    RecurringResetResult,
    VideoNotesUpdate,
)
from .goals import GoalCreate, GoalProgressRead, GoalProgressUpdate, GoalRead, GoalUpdate
from .partners import (
    AcceptInviteByCodeRequest,
    InviteLinkRead,
    PartnerInviteRead,
    PartnerRead,
    PendingInviteCount,
    SendInviteRequest,
)
from .shared_videos import (
    PresignedUrlRead,
    SharedVideoRead,
    SharedVideoWithSenderRead,
    ShareVideoRequest,
    UploadUrlRead,
    UploadUrlRequest,
)
from .study_sessions import StudySessionCreate, StudySessionNotesUpdate, StudySessionRead
from .todos import TodoCreate, TodoRead, TodoToggle, TodoUpdate, TodoVideoAttach, TodoVideoAttachMany
from .users import UserRead

__all__ = [
    "AcceptInviteByCodeRequest",
    "CursorPage",
    "GoalCreate",
    "GoalProgressRead",
    "GoalProgressUpdate",
    "GoalRead",
    "GoalTodoCreate",
    "GoalTodoProgressRead",
    "GoalTodoProgressUpdate",
    "GoalTodoRead",
    "GoalTodoToggle",
    "GoalTodoVideoAttach",
    "GoalTodoWithGoalRead",
    "GoalUpdate",
    "InviteLinkRead",
    "MessageResult",
    "PartnerInviteRead",
    "PartnerRead",
    "PendingInviteCount",
    "PresignedUrlRead",
    "RecurringResetResult",
    "SendInviteRequest",
    "ShareVideoRequest",
    "SharedVideoRead",
    "SharedVideoWithSenderRead",
    "StatusResult",
    "StudySessionCreate",
    "StudySessionNotesUpdate",
    "StudySessionRead",
    "TodoCreate",
    "TodoRead",
    "TodoToggle",
    "TodoUpdate",
    "TodoVideoAttach",
    "TodoVideoAttachMany",
    "UploadUrlRead",
    "UploadUrlRequest",
    "UserRead",
]
