from sqlmodel import SQLModel, Field
from datetime import datetime
from uuid import uuid4

class User(SQLModel, table=True):
    """User model for authentication and user management."""
    __tablename__ = "users"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    email: str = Field(unique=True, index=True)
    hashed_password: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
