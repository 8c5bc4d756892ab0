"""Denormalized counter maintenance.

Counters live on ``Project.tasks_completed``, ``Feature.tasks_completed``,
``UserStats`` and ``DailyStat``. Every change is issued as an
``UPDATE ... SET col = col + delta`` statement on the caller's session and
is committed together with the task change that triggered it, so a batch
either applies completely or not at all.

The maintainer never commits; the owning ``EntityStore`` does.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from ..models import DailyStat, Feature, Project, Task, UserStats

logger = logging.getLogger(__name__)


class StatsMaintainer:
    def __init__(self, db: Session, user_id: str):
        self.db = db
        self.user_id = user_id

    # Task lifecycle hooks

    def task_created(self) -> None:
        """A new pending task exists."""
        self._bump_user(pending=1)

    def task_completed(self, task: Task) -> None:
        """Pending -> Completed. ``task.completed_date`` must already be set."""
        self._bump_scopes(task, 1)
        self._bump_user(completed=1, pending=-1)
        self._bump_day(task.completed_date, 1)

    def task_uncompleted(self, task: Task, previous_date: str) -> None:
        """Completed -> Pending, keyed by the day it had been completed on."""
        self._bump_scopes(task, -1)
        self._bump_user(completed=-1, pending=1)
        self._bump_day(previous_date, -1)

    def task_deleted(self, task: Task) -> None:
        """Reverse whatever the task's current state contributed."""
        if task.is_completed:
            self._bump_scopes(task, -1)
            self._bump_user(completed=-1)
            self._bump_day(task.completed_date, -1)
        else:
            self._bump_user(pending=-1)

    def tasks_removed(
        self,
        completed: int,
        pending: int,
        days: Optional[dict] = None,
        project_id: Optional[str] = None,
    ) -> None:
        """Reverse a bulk removal of tasks (feature or project cascade).

        ``days`` maps a completion date to the number of removed tasks
        completed on it. When ``project_id`` is given the project survives
        the removal and its counter is reduced by ``completed``.
        """
        if project_id and completed:
            self.db.execute(
                update(Project)
                .where(Project.id == project_id, Project.user_id == self.user_id)
                .values(tasks_completed=Project.tasks_completed - completed)
            )
        if completed or pending:
            self._bump_user(completed=-completed, pending=-pending)
        for date, count in (days or {}).items():
            self._bump_day(date, -count)

    # Maintenance

    def recount(self) -> UserStats:
        """Recompute every counter for the user from the tasks table.

        This is the only place counters are written as absolute values.
        """
        completed_filter = (Task.user_id == self.user_id, Task.completed_at.is_not(None))

        per_feature = dict(
            self.db.query(Task.feature_id, func.count(Task.id))
            .filter(*completed_filter)
            .group_by(Task.feature_id)
            .all()
        )
        for feature in self.db.query(Feature).filter(Feature.user_id == self.user_id):
            feature.tasks_completed = per_feature.get(feature.id, 0)

        per_project = dict(
            self.db.query(Task.project_id, func.count(Task.id))
            .filter(*completed_filter)
            .group_by(Task.project_id)
            .all()
        )
        for project in self.db.query(Project).filter(Project.user_id == self.user_id):
            project.tasks_completed = per_project.get(project.id, 0)

        per_day = dict(
            self.db.query(Task.completed_date, func.count(Task.id))
            .filter(*completed_filter)
            .group_by(Task.completed_date)
            .all()
        )
        now = datetime.utcnow()
        for daily in self.db.query(DailyStat).filter(DailyStat.user_id == self.user_id):
            daily.count = per_day.pop(daily.date, 0)
            daily.updated_at = now
        for date, count in per_day.items():
            self.db.add(DailyStat(
                id=DailyStat.key_for(self.user_id, date),
                user_id=self.user_id,
                date=date,
                count=count,
                updated_at=now,
            ))

        stats = self.get_or_create_user_stats()
        stats.total_completed = sum(per_project.values())
        stats.total_pending = (
            self.db.query(func.count(Task.id))
            .filter(Task.user_id == self.user_id, Task.completed_at.is_(None))
            .scalar()
        )
        stats.last_updated = now

        logger.info(
            "Recounted stats for user %s: %d completed, %d pending",
            self.user_id, stats.total_completed, stats.total_pending,
        )
        return stats

    def get_or_create_user_stats(self) -> UserStats:
        stats = self.db.get(UserStats, self.user_id)
        if stats is None:
            stats = UserStats(user_id=self.user_id)
            self.db.add(stats)
            self.db.flush()
        return stats

    # Delta primitives

    def _bump_scopes(self, task: Task, delta: int) -> None:
        self.db.execute(
            update(Project)
            .where(Project.id == task.project_id, Project.user_id == self.user_id)
            .values(tasks_completed=Project.tasks_completed + delta)
        )
        self.db.execute(
            update(Feature)
            .where(Feature.id == task.feature_id, Feature.user_id == self.user_id)
            .values(tasks_completed=Feature.tasks_completed + delta)
        )
        logger.debug("project %s / feature %s tasks_completed %+d", task.project_id, task.feature_id, delta)

    def _bump_user(self, completed: int = 0, pending: int = 0) -> None:
        self.get_or_create_user_stats()
        self.db.execute(
            update(UserStats)
            .where(UserStats.user_id == self.user_id)
            .values(
                total_completed=UserStats.total_completed + completed,
                total_pending=UserStats.total_pending + pending,
                last_updated=datetime.utcnow(),
            )
        )
        logger.debug("user %s stats completed %+d pending %+d", self.user_id, completed, pending)

    def _bump_day(self, date: Optional[str], delta: int) -> None:
        if not date:
            return
        key = DailyStat.key_for(self.user_id, date)
        if self.db.get(DailyStat, key) is None:
            self.db.add(DailyStat(id=key, user_id=self.user_id, date=date, count=0))
            self.db.flush()
        self.db.execute(
            update(DailyStat)
            .where(DailyStat.id == key)
            .values(count=DailyStat.count + delta, updated_at=datetime.utcnow())
        )
        logger.debug("daily stat %s %+d", key, delta)
