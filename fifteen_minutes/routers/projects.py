from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_store
from ..schemas.project import Project as ProjectSchema, ProjectCreate
from ..store import EntityStore

router = APIRouter()


def _get_project_or_404(project_id: str, store: EntityStore):
    project = store.get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.get("/projects", response_model=List[ProjectSchema])
def get_projects(store: EntityStore = Depends(get_store)):
    """Get all projects for the user, newest first."""
    return store.list_projects()


@router.post("/projects", response_model=ProjectSchema, status_code=status.HTTP_201_CREATED)
def create_project(project: ProjectCreate, store: EntityStore = Depends(get_store)):
    """Create a new project."""
    name = project.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Project name is required")
    if store.get_project_by_name(name):
        raise HTTPException(status_code=409, detail=f'Project "{name}" already exists')
    return store.create_project(name)


@router.get("/projects/{project_id}", response_model=ProjectSchema)
def get_project(project_id: str, store: EntityStore = Depends(get_store)):
    return _get_project_or_404(project_id, store)


@router.delete("/projects/{project_id}")
def delete_project(project_id: str, store: EntityStore = Depends(get_store)):
    """Delete a project along with its features and tasks."""
    project = _get_project_or_404(project_id, store)
    store.delete_project(project)
    return {"message": "Project deleted successfully"}
