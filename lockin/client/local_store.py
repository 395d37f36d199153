"""
On-device SQLite mirror of the user's data.

Each ``Local*`` table mirrors one API read model. Rows are keyed by the
server id (``remote_id``) and stamped with ``last_synced_at`` whenever a sync
writes them. Reads return the API read models so views can't tell whether a
record came from the cache or the network.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.pool import StaticPool
from sqlmodel import Field, Session, SQLModel, col, create_engine, select

from lockin.core.models.enums import GoalStatus, GoalTodoType, PartnerStatus, TodoFrequency
from lockin.core.models.io import GoalRead, GoalTodoRead, PartnerRead, StudySessionRead, TodoRead
from lockin.core.utils import utc_now

logger = logging.getLogger(__name__)

LocalType = TypeVar("LocalType", bound="LocalRecord")
RemoteType = TypeVar("RemoteType", bound=BaseModel)


class LocalRecord(SQLModel):
    """Columns and conversions shared by every cached table."""

    id: Optional[int] = Field(default=None, primary_key=True)
    remote_id: str = Field(index=True, unique=True, max_length=32)
    last_synced_at: datetime = Field(default_factory=utc_now)

    # API read model this table mirrors
    remote_model: ClassVar[Type[BaseModel]]

    @classmethod
    def _remote_fields(cls, record: BaseModel) -> Dict[str, Any]:
        # Fields of our read model only: computed fields and subclass extras
        # such as goal_title are not stored
        return {name: getattr(record, name) for name in cls.remote_model.model_fields if name != "id"}

    @classmethod
    def from_remote(cls: Type[LocalType], record: BaseModel) -> LocalType:
        return cls(remote_id=record.id, **cls._remote_fields(record))

    def update_from_remote(self, record: BaseModel) -> None:
        for name, value in self._remote_fields(record).items():
            setattr(self, name, value)
        self.last_synced_at = utc_now()

    def to_remote(self) -> BaseModel:
        model = self.remote_model
        values = {name: getattr(self, name) for name in model.model_fields if name != "id"}
        return model.model_validate({"id": self.remote_id, **values})


class LocalGoal(LocalRecord, table=True):
    __tablename__ = "local_goals"

    user_id: str
    title: str
    description: str = ""
    target_hours: float
    completed_hours: float = 0.0
    status: GoalStatus = GoalStatus.active
    is_archived: bool = False
    created_at: datetime

    remote_model = GoalRead


class LocalGoalTodo(LocalRecord, table=True):
    __tablename__ = "local_goal_todos"

    user_id: str
    goal_id: str = Field(index=True)
    title: str
    description: Optional[str] = None
    todo_type: GoalTodoType = GoalTodoType.simple
    estimated_hours: Optional[float] = None
    completed_hours: Optional[float] = None
    is_completed: bool = False
    is_archived: bool = False
    frequency: TodoFrequency = TodoFrequency.none
    last_reset_at: Optional[datetime] = None
    local_video_path: Optional[str] = None
    local_thumbnail_path: Optional[str] = None
    video_duration_minutes: Optional[float] = None
    video_notes: Optional[str] = None
    created_at: datetime

    remote_model = GoalTodoRead


class LocalTodo(LocalRecord, table=True):
    __tablename__ = "local_todos"

    user_id: str
    title: str
    description: Optional[str] = None
    is_completed: bool = False
    is_archived: bool = False
    local_video_path: Optional[str] = None
    local_thumbnail_path: Optional[str] = None
    video_notes: Optional[str] = None
    speed_segments_json: Optional[str] = None
    created_at: datetime

    remote_model = TodoRead


class LocalStudySession(LocalRecord, table=True):
    __tablename__ = "local_study_sessions"

    user_id: str
    goal_id: str = Field(index=True)
    goal_todo_id: Optional[str] = None
    local_video_path: str
    local_thumbnail_path: Optional[str] = None
    duration_minutes: float
    notes: Optional[str] = None
    created_at: datetime

    remote_model = StudySessionRead


class LocalPartner(LocalRecord, table=True):
    __tablename__ = "local_partners"

    user_id: str
    partner_id: str
    partner_email: str
    partner_name: Optional[str] = None
    status: PartnerStatus = PartnerStatus.active
    created_at: datetime

    remote_model = PartnerRead


LOCAL_MODELS: List[Type[LocalRecord]] = [LocalGoal, LocalGoalTodo, LocalTodo, LocalStudySession, LocalPartner]
LOCAL_TABLES = [model.__table__ for model in LOCAL_MODELS]  # type: ignore[attr-defined]


class LocalStore:
    """SQLite cache of goals, goal to-dos, to-dos, study sessions and partners.

    Args:
        url: SQLAlchemy SQLite URL; ``"sqlite://"`` keeps the cache in memory.
    """

    def __init__(self, url: str = "sqlite:///lockin-cache.db") -> None:
        kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        self.engine = create_engine(url, **kwargs)
        # Shares SQLModel.metadata with the server entities; only create ours
        SQLModel.metadata.create_all(self.engine, tables=LOCAL_TABLES)

    def _sync(self, model: Type[LocalRecord], records: Sequence[BaseModel], *conditions: Any) -> int:
        """Upsert ``records`` and delete cached rows (matching ``conditions``) that are absent from them."""
        incoming = {record.id: record for record in records}
        with Session(self.engine) as session:
            existing = session.exec(select(model).where(*conditions)).all()
            for row in existing:
                record = incoming.pop(row.remote_id, None)
                if record is None:
                    session.delete(row)
                else:
                    row.update_from_remote(record)
                    session.add(row)
            for record in incoming.values():
                session.add(model.from_remote(record))
            session.commit()
        logger.debug(f"Synced {len(records)} {model.__tablename__} rows")
        return len(records)

    def _fetch(self, model: Type[LocalRecord], *conditions: Any) -> List[Any]:
        with Session(self.engine) as session:
            statement = select(model).where(*conditions).order_by(col(model.created_at).desc())  # type: ignore
            return [row.to_remote() for row in session.exec(statement).all()]

    def sync_goals(self, goals: Sequence[GoalRead]) -> int:
        return self._sync(LocalGoal, goals)

    def fetch_goals(self) -> List[GoalRead]:
        return self._fetch(LocalGoal)

    def sync_goal_todos(self, todos: Sequence[GoalTodoRead], *, goal_id: Optional[str] = None) -> int:
        """Mirror goal to-dos; with ``goal_id`` only that goal's cached rows are replaced."""
        conditions = [LocalGoalTodo.goal_id == goal_id] if goal_id else []
        return self._sync(LocalGoalTodo, todos, *conditions)

    def fetch_goal_todos(self, goal_id: Optional[str] = None) -> List[GoalTodoRead]:
        conditions = [LocalGoalTodo.goal_id == goal_id] if goal_id else []
        return self._fetch(LocalGoalTodo, *conditions)

    def sync_todos(self, todos: Sequence[TodoRead]) -> int:
        return self._sync(LocalTodo, todos)

    def fetch_todos(self) -> List[TodoRead]:
        return self._fetch(LocalTodo)

    def sync_study_sessions(self, sessions: Sequence[StudySessionRead], *, goal_id: Optional[str] = None) -> int:
        conditions = [LocalStudySession.goal_id == goal_id] if goal_id else []
        return self._sync(LocalStudySession, sessions, *conditions)

    def fetch_study_sessions(self, goal_id: str) -> List[StudySessionRead]:
        return self._fetch(LocalStudySession, LocalStudySession.goal_id == goal_id)

    def sync_partners(self, partners: Sequence[PartnerRead]) -> int:
        return self._sync(LocalPartner, partners)

    def fetch_partners(self) -> List[PartnerRead]:
        return self._fetch(LocalPartner)

    def last_synced_at(self, remote_id: str) -> Optional[datetime]:
        """When the cached row for ``remote_id`` was last written by a sync, if it is cached."""
        with Session(self.engine) as session:
            for model in LOCAL_MODELS:
                row = session.exec(select(model).where(model.remote_id == remote_id)).first()
                if row is not None:
                    return row.last_synced_at
        return None

    def clear_all(self) -> None:
        """Drop every cached row, e.g. on sign-out."""
        with Session(self.engine) as session:
            for model in LOCAL_MODELS:
                for row in session.exec(select(model)).all():
                    session.delete(row)
            session.commit()
        logger.info("Local cache cleared")
