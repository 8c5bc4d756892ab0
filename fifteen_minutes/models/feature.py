from sqlmodel import SQLModel, Field
from datetime import datetime
from uuid import uuid4

GENERAL_FEATURE_NAME = "General"

class Feature(SQLModel, table=True):
    """Named group of tasks inside a project."""
    __tablename__ = "features"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    user_id: str = Field(index=True, foreign_key="users.id")
    project_id: str = Field(index=True, foreign_key="projects.id")
    name: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
    tasks_completed: int = Field(default=0)
