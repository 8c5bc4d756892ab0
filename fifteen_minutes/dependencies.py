from fastapi import Depends
from sqlalchemy.orm import Session

from .database import get_db
from .models import User
from .routers.auth import get_current_user
from .store import EntityStore


def get_store(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> EntityStore:
    """Entity store scoped to the authenticated user."""
    return EntityStore(db, str(current_user.id))
