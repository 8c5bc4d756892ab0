from sqlmodel import SQLModel, Field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from ..config import DEFAULT_TASK_DURATION

class Task(SQLModel, table=True):
    """A fixed-duration unit of work.

    A task is pending while ``completed_at`` is None. ``completed_date`` is
    the calendar day (YYYY-MM-DD) of ``completed_at`` and is set and cleared
    together with it.
    """
    __tablename__ = "tasks"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    user_id: str = Field(index=True, foreign_key="users.id")
    project_id: str = Field(index=True, foreign_key="projects.id")
    feature_id: str = Field(index=True, foreign_key="features.id")
    description: str
    duration: int = Field(default=DEFAULT_TASK_DURATION)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None
    completed_date: Optional[str] = Field(default=None, index=True)

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def mark_completed(self, when: Optional[datetime] = None) -> None:
        when = when or datetime.utcnow()
        self.completed_at = when
        self.completed_date = to_date_string(when)

    def mark_pending(self) -> None:
        self.completed_at = None
        self.completed_date = None


def to_date_string(timestamp: datetime) -> str:
    """Convert a timestamp to YYYY-MM-DD."""
    return timestamp.date().isoformat()
