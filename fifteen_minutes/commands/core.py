from typing import List

from ..schemas.command import CommandContext, CommandResult
from ..store import EntityStore
from .common import fail, ok
from .features import new_feature
from .projects import new_project
from .tasks import ADD_TASK_USAGE, add_task

NEW_USAGE = "Usage: new project [name] or new feature [name]"

HELP_TEXT = """
╔══════════════════════════════════════╗
║        15 MINUTES - COMMANDS         ║
╚══════════════════════════════════════╝

PROJECT MANAGEMENT:
  new project [name]        Create a new project
  switch [project]          Switch to a project
  projects                  List all projects

FEATURE MANAGEMENT:
  new feature [name]        Create a feature in current project
  features                  List all features in current project

TASK MANAGEMENT:
  add task [desc] [id]      Add a 15min task to a feature
                            Example: add task "implement login" 1
                            Add --30 for a 30min task
  tasks                     List pending tasks (grouped by feature)
  complete [feature.task]   Complete a task
                            Example: complete 1.2
  uncomplete [feature.task] Reopen a completed task of a feature

SOCIAL:
  streak with @[name]       Start a streak
  streak                    View streaks
  share [feature.task] with @[name]
                            Share a pending task

OTHER:
  stats                     View statistics
  help                      Show this help
  clear                     Clear terminal

Pro tip: Keep every task to 15 minutes. Stay focused!
"""

STATS_TEMPLATE = """
╔══════════════════════════════════════╗
║          YOUR STATISTICS             ║
╚══════════════════════════════════════╝

Total Projects: {total_projects}
Total Tasks Completed: {total_tasks}
Total Time Invested: {hours}h {minutes}m
Jelly Beans Earned: {total_tasks}
"""


def new_command(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    """new project [name] or new feature [name]"""
    if not args:
        return fail(NEW_USAGE)
    if args[0] == "project":
        return new_project(args[1:], context, store)
    if args[0] == "feature":
        return new_feature(args[1:], context, store)
    return fail(NEW_USAGE)


def add_command(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    """add task [description] [feature_id]"""
    if not args or args[0] != "task":
        return fail(ADD_TASK_USAGE)
    return add_task(args[1:], context, store)


def stats(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    """Read-only summary; time invested sums the actual task durations."""
    total_tasks = store.count_tasks(completed=True)
    total_projects = store.count_projects()
    total_minutes = store.sum_completed_minutes()

    message = STATS_TEMPLATE.format(
        total_projects=total_projects,
        total_tasks=total_tasks,
        hours=total_minutes // 60,
        minutes=total_minutes % 60,
    )
    return ok(
        message,
        total_tasks=total_tasks,
        total_projects=total_projects,
        total_minutes=total_minutes,
    )


def help_command(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    return ok(HELP_TEXT)


def clear(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    return ok("", clear=True)
