from pydantic import BaseModel
from datetime import datetime

class Streak(BaseModel):
    id: str
    partner_id: str
    partner_name: str
    current_streak: int
    longest_streak: int
    last_completed_date: str

    class Config:
        from_attributes = True

class SharedTask(BaseModel):
    id: str
    task_id: str
    task_description: str
    shared_with: str
    shared_at: datetime

    class Config:
        from_attributes = True
