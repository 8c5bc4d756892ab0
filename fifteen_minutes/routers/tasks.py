from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_store
from ..schemas.task import Task as TaskSchema, TaskCreate, TaskStats, TaskUpdate
from ..store import EntityStore

router = APIRouter()


def _get_task_or_404(task_id: str, store: EntityStore):
    task = store.get_task(task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.get("/tasks", response_model=List[TaskSchema])
def get_tasks(
    feature_id: Optional[str] = None,
    project_id: Optional[str] = None,
    include_completed: bool = False,
    store: EntityStore = Depends(get_store),
):
    """Get the tasks of a feature or a project in creation order.

    Only pending tasks are returned unless ``include_completed`` is set.
    """
    if feature_id:
        return store.list_feature_tasks(feature_id, include_completed=include_completed)
    if project_id:
        return store.list_project_tasks(project_id, include_completed=include_completed)
    raise HTTPException(status_code=400, detail="feature_id or project_id is required")


@router.post("/tasks", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
def create_task(task: TaskCreate, store: EntityStore = Depends(get_store)):
    """Create a pending task; without a feature it goes to the General feature."""
    if not store.get_project(task.project_id):
        raise HTTPException(status_code=404, detail="Project not found")

    if task.feature_id:
        feature = store.get_feature(task.feature_id)
        if not feature or feature.project_id != task.project_id:
            raise HTTPException(status_code=404, detail="Feature not found")
    else:
        feature = store.get_or_create_general_feature(task.project_id)

    description = task.description.strip()
    if not description:
        raise HTTPException(status_code=400, detail="Task description is required")
    return store.create_task(task.project_id, feature.id, description, duration=task.duration)


@router.get("/tasks/stats", response_model=TaskStats)
def get_task_stats(project_id: Optional[str] = None, store: EntityStore = Depends(get_store)):
    """Task counts.

    Without a filter the user's stat counters are read directly; with a
    ``project_id`` the tasks are counted.
    """
    if project_id:
        completed_count = store.count_tasks(project_id=project_id, completed=True)
        pending_count = store.count_tasks(project_id=project_id, completed=False)
    else:
        stats = store.get_user_stats()
        completed_count = stats.total_completed if stats else 0
        pending_count = stats.total_pending if stats else 0

    return TaskStats(
        completed_count=completed_count,
        pending_count=pending_count,
        total_count=completed_count + pending_count,
    )


@router.get("/tasks/{task_id}", response_model=TaskSchema)
def get_task(task_id: str, store: EntityStore = Depends(get_store)):
    return _get_task_or_404(task_id, store)


@router.patch("/tasks/{task_id}", response_model=TaskSchema)
def update_task(task_id: str, task_update: TaskUpdate, store: EntityStore = Depends(get_store)):
    """Complete or reopen a task. Setting the state it already has is a no-op."""
    task = _get_task_or_404(task_id, store)

    if task_update.completed and not task.is_completed:
        return store.complete_task(task)
    if not task_update.completed and task.is_completed:
        return store.uncomplete_task(task)
    return task


@router.delete("/tasks/{task_id}")
def delete_task(task_id: str, store: EntityStore = Depends(get_store)):
    task = _get_task_or_404(task_id, store)
    store.delete_task(task)
    return {"message": "Task deleted successfully"}
