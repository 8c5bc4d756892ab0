from sqlmodel import SQLModel, Field
from datetime import datetime
from uuid import uuid4

class Streak(SQLModel, table=True):
    """Streak tracked with a partner.

    Nothing advances a streak yet; rows are only created and listed.
    """
    __tablename__ = "streaks"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    user_id: str = Field(index=True, foreign_key="users.id")
    partner_id: str = Field(default_factory=lambda: str(uuid4()))
    partner_name: str
    current_streak: int = Field(default=0)
    longest_streak: int = Field(default=0)
    last_completed_date: str = Field(default="")
    created_at: datetime = Field(default_factory=datetime.utcnow)


class SharedTask(SQLModel, table=True):
    """Record that a task was shared with someone. There is no delivery."""
    __tablename__ = "shared_tasks"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    user_id: str = Field(index=True, foreign_key="users.id")
    task_id: str = Field(index=True)
    task_description: str
    shared_with: str
    shared_at: datetime = Field(default_factory=datetime.utcnow)
