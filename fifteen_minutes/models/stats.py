from sqlmodel import SQLModel, Field
from datetime import datetime

class UserStats(SQLModel, table=True):
    """Summary counters for a user, one row per user."""
    __tablename__ = "user_stats"

    user_id: str = Field(primary_key=True, foreign_key="users.id")
    total_completed: int = Field(default=0)
    total_pending: int = Field(default=0)
    last_updated: datetime = Field(default_factory=datetime.utcnow)


class DailyStat(SQLModel, table=True):
    """Completions per user per calendar day."""
    __tablename__ = "daily_stats"

    # "<user_id>_<YYYY-MM-DD>"
    id: str = Field(primary_key=True)
    user_id: str = Field(index=True, foreign_key="users.id")
    date: str = Field(index=True)
    count: int = Field(default=0)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @staticmethod
    def key_for(user_id: str, date: str) -> str:
        return f"{user_id}_{date}"
