from pydantic import BaseModel
from datetime import datetime

class UserStats(BaseModel):
    total_completed: int
    total_pending: int
    last_updated: datetime

    class Config:
        from_attributes = True

class DailyStat(BaseModel):
    date: str
    count: int
    updated_at: datetime

    class Config:
        from_attributes = True
