"""Create a demo account with a starter project, e.g. for local UI work."""
from fifteen_minutes.database import create_tables, get_session
from fifteen_minutes.models import User
from fifteen_minutes.routers.auth import create_user
from fifteen_minutes.store import EntityStore

EMAIL = "test@example.com"
PASSWORD = "password"

# Create tables if not exist
create_tables()

with get_session() as db:
    if db.query(User).filter(User.email == EMAIL).first():
        print("User already exists")
    else:
        user = create_user(db, EMAIL, PASSWORD)
        store = EntityStore(db, user.id)
        project = store.create_project("Getting Started")
        feature = store.get_or_create_general_feature(project.id)
        store.create_task(project.id, feature.id, "Try the help command")
        print(f"Test user created: {EMAIL} / {PASSWORD}")
