from typing import List

from ..schemas.command import CommandContext, CommandResult
from ..schemas.project import Project as ProjectSchema
from ..store import EntityStore
from .common import dump, fail, ok


def new_project(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    """new project [name]"""
    project_name = " ".join(args)
    if not project_name:
        return fail("Project name is required")

    if store.get_project_by_name(project_name):
        return fail(f'Project "{project_name}" already exists')

    project = store.create_project(project_name)
    return ok(f"Created project: {project_name}", project=dump(ProjectSchema, project))


def switch_project(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    """switch [project name]

    The caller adopts ``data.project`` as its new active project.
    """
    project_name = " ".join(args)
    if not project_name:
        return fail("Usage: switch [project name]")

    project = store.get_project_by_name(project_name)
    if not project:
        return fail(f'Project "{project_name}" not found')

    return ok(f"Switched to project: {project.name}", project=dump(ProjectSchema, project))


def list_projects(args: List[str], context: CommandContext, store: EntityStore) -> CommandResult:
    projects = store.list_projects()
    if not projects:
        return ok("No projects yet. Create one with: new project [name]")

    project_list = "\n".join(
        f"[{i}] {p.name} ({p.tasks_completed} tasks completed)"
        for i, p in enumerate(projects, start=1)
    )
    return ok(
        f"Your projects:\n{project_list}",
        projects=[dump(ProjectSchema, p) for p in projects],
    )
