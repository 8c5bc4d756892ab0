from typing import List, Tuple, Union

from ..config import DEFAULT_TASK_DURATION, LONG_TASK_DURATION
from ..models import Task
from ..schemas.command import CommandContext, CommandResult
from ..schemas.feature import Feature as FeatureSchema
from ..schemas.task import Task as TaskSchema
from ..store import EntityStore
from .common import NO_ACTIVE_PROJECT, active_project, dump, fail, ok
from .parser import parse_ordinal, parse_task_address, pop_flag

ADD_TASK_USAGE = 'Usage: add task [description] [feature_id] [--30]\nExample: add task "implement login" 1'
COMPLETE_USAGE = "Usage: complete [feature.task] (e.g., complete 1.2)"
UNCOMPLETE_USAGE = "Usage: uncomplete [feature.task] (e.g., uncomplete 1.1)"
LONG_TASK_FLAG = f"--{LONG_TASK_DURATION}"


def resolve_task(
    token: str,
    project_id: str,
    store: EntityStore,
    completed: bool = False,
) -> Union[Tuple[str, Task], str]:
    """Find the task addressed by ``<feature>.<task>``.

    The task ordinal counts the feature's pending tasks in creation order,
    or its completed tasks when ``completed`` is set. Returns the address
    and the task, or an error message.
    """
    address = parse_task_address(token)
    if address is None:
        return "Invalid task number. Use format: feature.task (e.g., 1.2)"
    feature_num, task_num = address

    feature = store.get_feature_by_ordinal(project_id, feature_num)
    if not feature:
        return f"Feature #{feature_num} not found"

    if completed:
        tasks = store.list_completed_feature_tasks(feature.id)
    else:
        tasks = store.list_feature_tasks(feature.id)
    if task_num > len(tasks):
        label = "Completed task" if completed else "Task"
        return f"{label} {feature_num}.{task_num} not found"

    return f"{feature_num}.{task_num}", tasks[task_num - 1]


def add_task(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    """add task [description] [feature_id] [--30]"""
    project = active_project(context, store)
    if not project:
        return fail(NO_ACTIVE_PROJECT)

    is_long, args = pop_flag(args, LONG_TASK_FLAG)
    duration = LONG_TASK_DURATION if is_long else DEFAULT_TASK_DURATION

    if len(args) < 2:
        return fail(ADD_TASK_USAGE)

    feature_num = parse_ordinal(args[-1])
    if feature_num is None:
        return fail("Feature ID must be a positive number")

    description = " ".join(args[:-1])
    if not description:
        return fail("Task description is required")

    feature = store.get_feature_by_ordinal(project.id, feature_num)
    if not feature:
        return fail(f"Feature #{feature_num} not found. Use 'features' to see available features.")

    task = store.create_task(project.id, feature.id, description, duration=duration)
    pending_ids = [t.id for t in store.list_feature_tasks(feature.id)]
    task_num = pending_ids.index(task.id) + 1

    return ok(
        f"Added task: {description} ({feature_num}.{task_num}) [{duration}min]",
        task=dump(TaskSchema, task),
    )


def list_tasks(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    """Pending tasks grouped by feature, addressed as feature.task."""
    project = active_project(context, store)
    if not project:
        return fail(NO_ACTIVE_PROJECT)

    features = store.list_features(project.id)
    if not features:
        return ok("No features yet. Create one with: new feature [name]")

    sections = []
    all_tasks = []
    for feature_num, feature in enumerate(features, start=1):
        tasks = store.list_feature_tasks(feature.id)
        if not tasks:
            sections.append(f"[{feature_num}] {feature.name} (no tasks)")
            continue

        lines = [f"[{feature_num}] {feature.name}"]
        for task_num, task in enumerate(tasks, start=1):
            address = f"{feature_num}.{task_num}"
            lines.append(f"  [{address}] {task.description} [{task.duration}min]")
            all_tasks.append({**dump(TaskSchema, task), "address": address})
        sections.append("\n".join(lines))

    if not all_tasks:
        return ok("No pending tasks. Add one with: add task [description] [feature_id]")

    section_text = "\n\n".join(sections)
    return ok(
        f"Pending tasks:\n{section_text}",
        features=[dump(FeatureSchema, f) for f in features],
        tasks=all_tasks,
    )


def complete_task(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    """complete [feature.task]"""
    project = active_project(context, store)
    if not project:
        return fail("No active project.")

    if len(args) != 1:
        return fail(COMPLETE_USAGE)

    resolved = resolve_task(args[0], project.id, store)
    if isinstance(resolved, str):
        return fail(resolved)
    _, task = resolved

    task = store.complete_task(task)
    return ok(
        f"Task completed: {task.description}",
        task=dump(TaskSchema, task),
        celebrate=True,
    )


def uncomplete_task(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    """uncomplete [feature.task], counting the feature's completed tasks."""
    project = active_project(context, store)
    if not project:
        return fail("No active project.")

    if len(args) != 1:
        return fail(UNCOMPLETE_USAGE)

    resolved = resolve_task(args[0], project.id, store, completed=True)
    if isinstance(resolved, str):
        return fail(resolved)
    _, task = resolved

    task = store.uncomplete_task(task)
    return ok(f"Task reopened: {task.description}", task=dump(TaskSchema, task))
