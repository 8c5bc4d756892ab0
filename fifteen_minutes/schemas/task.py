from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from ..config import DEFAULT_TASK_DURATION

class TaskCreate(BaseModel):
    """Schema for creating new tasks.

    Without a ``feature_id`` the task goes to the project's General feature.
    """
    project_id: str
    feature_id: Optional[str] = None
    description: str = Field(min_length=1)
    duration: int = Field(default=DEFAULT_TASK_DURATION, gt=0)

class TaskUpdate(BaseModel):
    """Schema for toggling a task between pending and completed."""
    completed: bool

class Task(BaseModel):
    """Complete task schema with all fields."""
    id: str
    project_id: str
    feature_id: str
    description: str
    duration: int
    created_at: datetime
    completed_at: Optional[datetime] = None
    completed_date: Optional[str] = None

    class Config:
        from_attributes = True

class TaskStats(BaseModel):
    completed_count: int
    pending_count: int
    total_count: int
