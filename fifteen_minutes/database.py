from sqlmodel import SQLModel, create_engine
from sqlalchemy import event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from contextlib import contextmanager

from .config import DATABASE_URL

# Every table must be registered before create_all
from .models import DailyStat, Feature, Project, SharedTask, Streak, Task, User, UserStats  # noqa: F401

def enforce_sqlite_foreign_keys(engine):
    """Turn on foreign key checks for each new SQLite connection."""
    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine

def _create_engine(url: str = DATABASE_URL):
    if url.startswith("sqlite"):
        return enforce_sqlite_foreign_keys(create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
        ))

    # Postgres: no pooling, pre-ping each checkout
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        poolclass=NullPool,
    )

engine = _create_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
    """Request-scoped session for FastAPI dependencies."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@contextmanager
def get_session():
    """Session for scripts such as ``add_user.py``."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

def create_tables():
    SQLModel.metadata.create_all(bind=engine)
