"""
dashboard_service.py — Task dashboard state & user actions
Holds one user's task collection plus the ephemeral list settings (filters,
sort key), dispatches create/edit/status/delete intents to the repository and
refetches the whole collection after every successful mutation.

Persistence failures never escape an action: they are logged, kept as a
user-facing notice, and the in-memory collection stays as it was. A write
that succeeded stays a success even if the reload after it fails.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from models.task import Status, Task, TaskCreate, TaskUpdate
from services.filter_service import FilterConfig, apply_filters_and_sort
from services.lifecycle_service import (
    classify_dueness,
    due_label,
    is_overdue,
    status_change_fields,
    toggle_target,
    utcnow,
)
from services.stats_service import TaskStats, compute_stats
from services.task_service import TaskNotFoundError, TaskService, TaskServiceError

logger = logging.getLogger(__name__)


class TaskDashboard:
    def __init__(
        self,
        repo: TaskService,
        user_id: str,
        config: Optional[FilterConfig] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repo = repo
        self.user_id = user_id
        self.config = config or FilterConfig()
        self.clock = clock
        self.tasks: list[Task] = []
        self.notice: str | None = None
        self.last_error: TaskServiceError | None = None

    # ------------------------------------------------------------------
    def _fail(self, message: str, error: TaskServiceError) -> bool:
        logger.error(f"{message}: {error}")
        self.notice = f"{message}. Please try again."
        self.last_error = error
        return False

    def _ok(self) -> bool:
        self.notice = None
        self.last_error = None
        return True

    def find(self, task_id: str) -> Task | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    # ── Actions ────────────────────────────────────────────────────────
    def refresh(self) -> bool:
        """Replace the collection with a fresh server read."""
        try:
            tasks = self.repo.list_tasks(self.user_id)
        except TaskServiceError as e:
            return self._fail("Could not load tasks", e)
        self.tasks = tasks
        return self._ok()

    def create_task(self, data: TaskCreate) -> bool:
        fields = data.model_dump()
        if data.status == Status.COMPLETED:
            fields["completed_at"] = self.clock()
        try:
            created = self.repo.create_task(self.user_id, fields)
        except TaskServiceError as e:
            return self._fail("Could not create task", e)
        logger.info(f"Created task {created.id} for user {self.user_id}")
        return self._reload_after_write()

    def update_task(self, task_id: str, data: TaskUpdate) -> bool:
        """Apply an edit. A status change in the edit follows the completion rule."""
        now = self.clock()
        fields = data.model_dump(exclude_unset=True)
        if "status" in fields:
            current = self.find(task_id)
            if current is None:
                return self._fail("Could not update task", TaskNotFoundError(task_id))
            fields.update(status_change_fields(current, fields["status"], now))
        fields["updated_at"] = now
        return self._update(task_id, fields, "Could not update task")

    def change_status(self, task_id: str, new_status: Status) -> bool:
        current = self.find(task_id)
        if current is None:
            return self._fail("Could not update task", TaskNotFoundError(task_id))
        fields = status_change_fields(current, new_status, self.clock())
        return self._update(task_id, fields, "Could not update task")

    def toggle_complete(self, task_id: str) -> bool:
        current = self.find(task_id)
        if current is None:
            return self._fail("Could not update task", TaskNotFoundError(task_id))
        return self.change_status(task_id, toggle_target(current))

    def delete_task(self, task_id: str) -> bool:
        try:
            self.repo.delete_task(task_id, self.user_id)
        except TaskServiceError as e:
            return self._fail("Could not delete task", e)
        logger.info(f"Deleted task {task_id} for user {self.user_id}")
        return self._reload_after_write()

    def _update(self, task_id: str, fields: dict, message: str) -> bool:
        try:
            self.repo.update_task(task_id, self.user_id, fields)
        except TaskServiceError as e:
            return self._fail(message, e)
        logger.info(f"Updated task {task_id}: {sorted(fields)}")
        return self._reload_after_write()

    def _reload_after_write(self) -> bool:
        """The write is already stored, so a failed reload is only a warning."""
        self._ok()
        if not self.refresh():
            self.notice = "Your change was saved, but the task list could not be reloaded. Please refresh."
        return True

    # ── Read side ──────────────────────────────────────────────────────
    def visible_tasks(self) -> list[Task]:
        return apply_filters_and_sort(self.tasks, self.config)

    def card(self, task: Task, now: datetime | None = None) -> dict:
        now = now or self.clock()
        dueness = classify_dueness(task, now)
        card = task.model_dump(mode="json")
        card.update({
            "dueness": dueness.kind.value,
            "days_until_due": dueness.days,
            # the card hides the day count once a task is done
            "due_label": None if task.is_completed else due_label(dueness),
            "is_overdue": is_overdue(task, now),
        })
        return card

    def cards(self, now: datetime | None = None) -> list[dict]:
        now = now or self.clock()
        return [self.card(t, now) for t in self.visible_tasks()]

    def stats(self, now: datetime | None = None) -> TaskStats:
        return compute_stats(self.tasks, now or self.clock())

    def snapshot(self, now: datetime | None = None) -> dict:
        now = now or self.clock()
        return {
            "tasks": self.cards(now),
            "stats": self.stats(now).to_dict(),
            "filters": self.config.model_dump(mode="json"),
            "notice": self.notice,
        }
