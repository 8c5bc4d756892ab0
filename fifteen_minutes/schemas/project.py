from pydantic import BaseModel
from datetime import datetime

class ProjectCreate(BaseModel):
    """Schema for creating a project."""
    name: str

class Project(BaseModel):
    """Project as returned by the API."""
    id: str
    name: str
    created_at: datetime
    tasks_completed: int

    class Config:
        from_attributes = True
