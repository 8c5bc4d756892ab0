"""User-scoped persistence for projects, features, tasks and their stats.

An ``EntityStore`` wraps one SQLAlchemy session and one user id. Every
query is filtered by that user id, and every write commits exactly once so
that a task change and its counter deltas land in the same transaction.
"""
import logging
from collections import Counter
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from .config import DEFAULT_TASK_DURATION
from .models import (
    GENERAL_FEATURE_NAME,
    DailyStat,
    Feature,
    Project,
    SharedTask,
    Streak,
    Task,
    UserStats,
)
from .services.stats import StatsMaintainer

logger = logging.getLogger(__name__)


def _match_name(rows, name: str):
    # SQL lower() only folds ASCII on SQLite, so names are compared here
    key = name.casefold()
    return next((row for row in rows if row.name.casefold() == key), None)


class EntityStore:
    def __init__(self, db: Session, user_id: str):
        self.db = db
        self.user_id = user_id
        self.stats = StatsMaintainer(db, user_id)

    def _commit(self, *instances) -> None:
        self.db.commit()
        for instance in instances:
            self.db.refresh(instance)

    def rollback(self) -> None:
        self.db.rollback()

    # Projects

    def create_project(self, name: str) -> Project:
        project = Project(user_id=self.user_id, name=name)
        self.db.add(project)
        self._commit(project)
        logger.info("Created project %s (%s) for user %s", project.name, project.id, self.user_id)
        return project

    def list_projects(self) -> List[Project]:
        """All projects, newest first."""
        return (
            self.db.query(Project)
            .filter(Project.user_id == self.user_id)
            .order_by(Project.created_at.desc())
            .all()
        )

    def get_project(self, project_id: str) -> Optional[Project]:
        return (
            self.db.query(Project)
            .filter(Project.id == project_id, Project.user_id == self.user_id)
            .first()
        )

    def get_project_by_name(self, name: str) -> Optional[Project]:
        return _match_name(self.list_projects(), name)

    def delete_project(self, project: Project) -> None:
        """Delete a project with its features and tasks."""
        tasks = self.db.query(Task).filter(Task.project_id == project.id, Task.user_id == self.user_id).all()
        self._reverse_tasks(tasks)
        for task in tasks:
            self.db.delete(task)
        # No ORM relationships, so children must reach the database first
        self.db.flush()
        for feature in self.db.query(Feature).filter(Feature.project_id == project.id, Feature.user_id == self.user_id):
            self.db.delete(feature)
        self.db.flush()
        project_id = project.id
        self.db.delete(project)
        self.db.commit()
        logger.info("Deleted project %s with %d tasks", project_id, len(tasks))

    # Features

    def create_feature(self, project_id: str, name: str) -> Feature:
        feature = Feature(user_id=self.user_id, project_id=project_id, name=name)
        self.db.add(feature)
        self._commit(feature)
        logger.info("Created feature %s (%s) in project %s", feature.name, feature.id, project_id)
        return feature

    def list_features(self, project_id: str) -> List[Feature]:
        """Features of a project in creation order; position + 1 is the ordinal."""
        return (
            self.db.query(Feature)
            .filter(Feature.project_id == project_id, Feature.user_id == self.user_id)
            .order_by(Feature.created_at.asc())
            .all()
        )

    def get_feature(self, feature_id: str) -> Optional[Feature]:
        return (
            self.db.query(Feature)
            .filter(Feature.id == feature_id, Feature.user_id == self.user_id)
            .first()
        )

    def get_feature_by_name(self, project_id: str, name: str) -> Optional[Feature]:
        return _match_name(self.list_features(project_id), name)

    def get_feature_by_ordinal(self, project_id: str, ordinal: int) -> Optional[Feature]:
        features = self.list_features(project_id)
        if 1 <= ordinal <= len(features):
            return features[ordinal - 1]
        return None

    def get_or_create_general_feature(self, project_id: str) -> Feature:
        feature = self.get_feature_by_name(project_id, GENERAL_FEATURE_NAME)
        if feature is None:
            feature = self.create_feature(project_id, GENERAL_FEATURE_NAME)
        return feature

    def delete_feature(self, feature: Feature) -> None:
        """Delete a feature with its tasks."""
        tasks = self.db.query(Task).filter(Task.feature_id == feature.id, Task.user_id == self.user_id).all()
        self._reverse_tasks(tasks, project_id=feature.project_id)
        for task in tasks:
            self.db.delete(task)
        self.db.flush()
        feature_id = feature.id
        self.db.delete(feature)
        self.db.commit()
        logger.info("Deleted feature %s with %d tasks", feature_id, len(tasks))

    # Tasks

    def create_task(
        self,
        project_id: str,
        feature_id: str,
        description: str,
        duration: int = DEFAULT_TASK_DURATION,
    ) -> Task:
        feature = self.get_feature(feature_id)
        if feature is None or feature.project_id != project_id:
            raise ValueError(f"Feature {feature_id} does not belong to project {project_id}")
        if duration < 1:
            raise ValueError("Task duration must be positive")

        task = Task(
            user_id=self.user_id,
            project_id=project_id,
            feature_id=feature_id,
            description=description,
            duration=duration,
        )
        self.db.add(task)
        self.stats.task_created()
        self._commit(task)
        logger.info("Created task %s in feature %s [%dmin]", task.id, feature_id, duration)
        return task

    def get_task(self, task_id: str) -> Optional[Task]:
        return (
            self.db.query(Task)
            .filter(Task.id == task_id, Task.user_id == self.user_id)
            .first()
        )

    def list_feature_tasks(self, feature_id: str, include_completed: bool = False) -> List[Task]:
        """Tasks of a feature in creation order, pending only by default."""
        query = self.db.query(Task).filter(Task.feature_id == feature_id, Task.user_id == self.user_id)
        if not include_completed:
            query = query.filter(Task.completed_at.is_(None))
        return query.order_by(Task.created_at.asc()).all()

    def list_completed_feature_tasks(self, feature_id: str) -> List[Task]:
        return (
            self.db.query(Task)
            .filter(
                Task.feature_id == feature_id,
                Task.user_id == self.user_id,
                Task.completed_at.is_not(None),
            )
            .order_by(Task.created_at.asc())
            .all()
        )

    def list_project_tasks(self, project_id: str, include_completed: bool = False) -> List[Task]:
        query = self.db.query(Task).filter(Task.project_id == project_id, Task.user_id == self.user_id)
        if not include_completed:
            query = query.filter(Task.completed_at.is_(None))
        return query.order_by(Task.created_at.asc()).all()

    def complete_task(self, task: Task) -> Task:
        """Pending -> Completed, with the counter increments in the same commit."""
        if task.is_completed:
            raise ValueError(f"Task {task.id} is already completed")
        task.mark_completed()
        self.stats.task_completed(task)
        self._commit(task)
        logger.info("Completed task %s on %s", task.id, task.completed_date)
        return task

    def uncomplete_task(self, task: Task) -> Task:
        """Completed -> Pending, reversing the counters of the original completion day."""
        if not task.is_completed:
            raise ValueError(f"Task {task.id} is not completed")
        previous_date = task.completed_date
        task.mark_pending()
        self.stats.task_uncompleted(task, previous_date)
        self._commit(task)
        logger.info("Reopened task %s (was completed on %s)", task.id, previous_date)
        return task

    def delete_task(self, task: Task) -> None:
        task_id = task.id
        self.stats.task_deleted(task)
        self.db.delete(task)
        self.db.commit()
        logger.info("Deleted task %s", task_id)

    def _reverse_tasks(self, tasks: List[Task], project_id: Optional[str] = None) -> None:
        completed = [task for task in tasks if task.is_completed]
        days = Counter(task.completed_date for task in completed)
        self.stats.tasks_removed(
            completed=len(completed),
            pending=len(tasks) - len(completed),
            days=dict(days),
            project_id=project_id,
        )

    # Aggregates

    def count_projects(self) -> int:
        return self.db.query(func.count(Project.id)).filter(Project.user_id == self.user_id).scalar()

    def count_tasks(self, project_id: Optional[str] = None, completed: Optional[bool] = None) -> int:
        query = self.db.query(func.count(Task.id)).filter(Task.user_id == self.user_id)
        if project_id is not None:
            query = query.filter(Task.project_id == project_id)
        if completed is True:
            query = query.filter(Task.completed_at.is_not(None))
        elif completed is False:
            query = query.filter(Task.completed_at.is_(None))
        return query.scalar()

    def sum_completed_minutes(self) -> int:
        total = (
            self.db.query(func.sum(Task.duration))
            .filter(Task.user_id == self.user_id, Task.completed_at.is_not(None))
            .scalar()
        )
        return int(total or 0)

    def get_user_stats(self) -> Optional[UserStats]:
        return self.db.get(UserStats, self.user_id)

    def init_user_stats(self) -> UserStats:
        stats = self.stats.get_or_create_user_stats()
        self._commit(stats)
        return stats

    def list_daily_stats(self, days: int = 30) -> List[DailyStat]:
        """Most recent daily buckets, newest first."""
        return (
            self.db.query(DailyStat)
            .filter(DailyStat.user_id == self.user_id)
            .order_by(DailyStat.date.desc())
            .limit(days)
            .all()
        )

    def recount_stats(self) -> UserStats:
        stats = self.stats.recount()
        self._commit(stats)
        return stats

    # Streaks and shares

    def create_streak(self, partner_name: str) -> Streak:
        streak = Streak(user_id=self.user_id, partner_name=partner_name)
        self.db.add(streak)
        self._commit(streak)
        return streak

    def list_streaks(self) -> List[Streak]:
        return (
            self.db.query(Streak)
            .filter(Streak.user_id == self.user_id)
            .order_by(Streak.created_at.asc())
            .all()
        )

    def share_task(self, task: Task, partner_name: str) -> SharedTask:
        shared = SharedTask(
            user_id=self.user_id,
            task_id=task.id,
            task_description=task.description,
            shared_with=partner_name,
            shared_at=datetime.utcnow(),
        )
        self.db.add(shared)
        self._commit(shared)
        return shared

    def list_shared_tasks(self) -> List[SharedTask]:
        return (
            self.db.query(SharedTask)
            .filter(SharedTask.user_id == self.user_id)
            .order_by(SharedTask.shared_at.desc())
            .all()
        )

