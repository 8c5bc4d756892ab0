from typing import Any, Callable, List, Optional, Type

from pydantic import BaseModel

from ..models import Project
from ..schemas.command import CommandContext, CommandResult
from ..store import EntityStore

CommandHandler = Callable[[List[str], CommandContext, EntityStore], CommandResult]

NO_ACTIVE_PROJECT = "No active project. Create or switch to a project first."


def ok(message: str, **data: Any) -> CommandResult:
    return CommandResult(success=True, message=message, data=data or None)


def fail(message: str) -> CommandResult:
    return CommandResult(success=False, message=message)


def dump(schema: Type[BaseModel], obj) -> dict:
    """Serialize an ORM row through its API schema into JSON-ready data."""
    return schema.model_validate(obj).model_dump(mode="json")


def active_project(context: CommandContext, store: EntityStore) -> Optional[Project]:
    if not context.current_project_id:
        return None
    return store.get_project(context.current_project_id)
