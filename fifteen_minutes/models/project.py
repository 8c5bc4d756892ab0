from sqlmodel import SQLModel, Field
from datetime import datetime
from uuid import uuid4

class Project(SQLModel, table=True):
    """Top-level unit of work owned by a user.

    ``tasks_completed`` is a denormalized counter kept in step with task
    completions by the stats maintainer; it is never recomputed on read.
    """
    __tablename__ = "projects"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    user_id: str = Field(index=True, foreign_key="users.id")
    name: str
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
    tasks_completed: int = Field(default=0)
