"""Shared fixtures: an in-memory database, a user, a store and an API client."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from fifteen_minutes.commands import execute_command
from fifteen_minutes.database import enforce_sqlite_foreign_keys, get_db
from fifteen_minutes.main import app
from fifteen_minutes.models import User, UserStats
from fifteen_minutes.routers.auth import create_access_token
from fifteen_minutes.schemas.command import CommandContext
from fifteen_minutes.store import EntityStore


@pytest.fixture
def engine():
    engine = enforce_sqlite_foreign_keys(create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    ))
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def _make_user(db, email):
    # bcrypt is exercised by the auth tests; a placeholder hash keeps the rest fast
    user = User(email=email, hashed_password="not-a-real-hash")
    db.add(user)
    db.flush()
    db.add(UserStats(user_id=user.id))
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def user(db):
    return _make_user(db, "jelly@example.com")


@pytest.fixture
def other_user(db):
    return _make_user(db, "bean@example.com")


@pytest.fixture
def store(db, user):
    return EntityStore(db, user.id)


class Terminal:
    """Runs command lines the way the chat widget does.

    Adopts ``data.project`` from successful results as the active project.
    """

    def __init__(self, store):
        self.store = store
        self.context = CommandContext()

    def run(self, line):
        result = execute_command(line, self.context, self.store)
        project = (result.data or {}).get("project")
        if result.success and project:
            self.context = CommandContext(current_project_id=project["id"])
        return result


@pytest.fixture
def terminal(store):
    return Terminal(store)


@pytest.fixture
def client(session_factory, user):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app)
    token = create_access_token(data={"sub": user.email})
    test_client.headers["Authorization"] = f"Bearer {token}"
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
