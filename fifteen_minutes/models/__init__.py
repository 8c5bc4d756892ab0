from .user import User
from .project import Project
from .feature import Feature, GENERAL_FEATURE_NAME
from .task import Task, to_date_string
from .stats import DailyStat, UserStats
from .social import SharedTask, Streak

# Export all models for easy importing
__all__ = [
    "User",
    "Project",
    "Feature",
    "GENERAL_FEATURE_NAME",
    "Task",
    "to_date_string",
    "UserStats",
    "DailyStat",
    "Streak",
    "SharedTask",
]
