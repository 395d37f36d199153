"""
Database entity models.

This package contains all database entity models organized by business domain
and table relationships. Each module represents either:

1. A single database table and its related logic
2. A business domain that spans multiple related tables

Modules:
- users: User profiles keyed by identity token
- goals: Study goals with target and completed hours
- goal_todos: Tasks within goals, optionally hours-tracked and recurring
- study_sessions: Recorded study videos contributing hours to goals
- todos: Standalone to-do items
- partners: Accountability partner records and invites
- shared_videos: Videos shared with accountability partners
"""

from . import (
    goal_todos,
    goals,
    partners,
    shared_videos,
    study_sessions,
    todos,
    users,
)
from .goal_todos import GoalTodo
from .goals import Goal
from .partners import AccountabilityPartner, PartnerInvite
from .shared_videos import SharedVideo
from .study_sessions import StudySession
from .todos import Todo
from .users import User

# Tables owned by the server schema; the client cache registers its own.
SERVER_TABLES = [
    User.__table__,
    Goal.__table__,
    GoalTodo.__table__,
    StudySession.__table__,
    Todo.__table__,
    AccountabilityPartner.__table__,
    PartnerInvite.__table__,
    SharedVideo.__table__,
]

__all__ = [
    "AccountabilityPartner",
    "Goal",
    "GoalTodo",
    "PartnerInvite",
    "SERVER_TABLES",
    "SharedVideo",
    "StudySession",
    "Todo",
    "User",
    "goal_todos",
    "goals",
    "partners",
    "shared_videos",
    "study_sessions",
    "todos",
    "users",
]
