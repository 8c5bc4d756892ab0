"""Streak and share bookkeeping. Neither advances or delivers anything."""
from typing import List

from ..schemas.command import CommandContext, CommandResult
from ..schemas.social import SharedTask as SharedTaskSchema, Streak as StreakSchema
from ..store import EntityStore
from .common import active_project, dump, fail, ok
from .tasks import resolve_task

STREAK_USAGE = "Usage: streak with @[partner name]"
SHARE_USAGE = "Usage: share [feature.task] with @[person]"


def _partner_name(token: str) -> str:
    return token[1:] if token.startswith("@") else ""


def streak(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    """streak, or streak with @[name]"""
    if args:
        if len(args) != 2 or args[0] != "with" or not _partner_name(args[1]):
            return fail(STREAK_USAGE)
        partner_name = _partner_name(args[1])
        new_streak = store.create_streak(partner_name)
        return ok(f"Started tracking streak with @{partner_name}", streak=dump(StreakSchema, new_streak))

    streaks = store.list_streaks()
    if not streaks:
        return ok("No streaks yet. Start one with: streak with @[name]")

    streak_list = "\n".join(
        f"@{s.partner_name}: {s.current_streak} days (longest: {s.longest_streak})"
        for s in streaks
    )
    return ok(
        f"Your streaks:\n{streak_list}",
        streaks=[dump(StreakSchema, s) for s in streaks],
    )


def share(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    """share [feature.task] with @[name], using the same addressing as complete."""
    project = active_project(context, store)
    if not project:
        return fail("No active project.")

    if len(args) != 3 or args[1] != "with" or not _partner_name(args[2]):
        return fail(SHARE_USAGE)

    resolved = resolve_task(args[0], project.id, store)
    if isinstance(resolved, str):
        return fail(resolved)
    _, task = resolved

    partner_name = _partner_name(args[2])
    shared_task = store.share_task(task, partner_name)
    return ok(
        f'Shared "{task.description}" with @{partner_name}',
        shared_task=dump(SharedTaskSchema, shared_task),
    )
