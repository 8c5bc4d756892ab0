"""Command line surface: parse a raw line and run its handler."""
import logging
from typing import Dict

from ..schemas.command import CommandContext, CommandResult
from ..store import EntityStore
from .common import CommandHandler
from .core import add_command, clear, help_command, new_command, stats
from .features import list_features
from .parser import parse_command_line
from .projects import list_projects, switch_project
from .social import share, streak
from .tasks import complete_task, list_tasks, uncomplete_task

logger = logging.getLogger(__name__)

COMMANDS: Dict[str, CommandHandler] = {
    "new": new_command,
    "switch": switch_project,
    "projects": list_projects,
    "features": list_features,
    "add": add_command,
    "tasks": list_tasks,
    "complete": complete_task,
    "uncomplete": uncomplete_task,
    "stats": stats,
    "streak": streak,
    "share": share,
    "help": help_command,
    "clear": clear,
}


def execute_command(line: str, context: CommandContext, store: EntityStore) -> CommandResult:
    """Run one command line; never raises."""
    parsed = parse_command_line(line)
    if parsed is None:
        return CommandResult(success=False, message="")

    handler = COMMANDS.get(parsed.name)
    if handler is None:
        return CommandResult(
            success=False,
            message=f"Command not found: {parsed.name}. Type 'help' for available commands.",
        )

    try:
        return handler(parsed.args, context, store)
    except Exception as e:
        logger.exception("Command %r failed for user %s", parsed.name, store.user_id)
        store.rollback()
        return CommandResult(success=False, message=f"Error executing command: {e}")


__all__ = ["COMMANDS", "execute_command"]
