from pydantic import BaseModel
from datetime import datetime

class FeatureCreate(BaseModel):
    """Schema for creating a feature inside a project."""
    project_id: str
    name: str

class Feature(BaseModel):
    """Feature as returned by the API."""
    id: str
    project_id: str
    name: str
    created_at: datetime
    tasks_completed: int

    class Config:
        from_attributes = True
