"""
task_service.py — Task persistence
Thin repository over the Supabase `tasks` table. Every call is scoped to the
owning user and carries that user's access token, so row-level security
applies on the server as well.
"""

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from config import TASKS_TABLE
from models.task import Task
from supabase_rest import sb_select, sb_insert, sb_update, sb_delete

logger = logging.getLogger(__name__)

# Columns the server owns; never sent in an update.
IMMUTABLE_FIELDS = ("id", "user_id", "created_at")


class TaskServiceError(Exception):
    """Any failure reported by the persistence service."""


class TaskNotFoundError(TaskServiceError):
    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


_payload = TypeAdapter(dict[str, Any])


def _to_json(fields: dict) -> dict:
    """Writable columns only, serialized with pydantic's JSON mode."""
    return _payload.dump_python(
        {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}, mode="json"
    )


class TaskService:
    def __init__(self, access_token: str | None = None, table: str = TASKS_TABLE):
        self.access_token = access_token
        self.table = table

    # ------------------------------------------------------------------
    def _call(self, action: str, fn, *args, **kwargs):
        try:
            return fn(*args, token=self.access_token, **kwargs)
        except httpx.HTTPStatusError as e:
            raise TaskServiceError(
                f"Error {action}: HTTP {e.response.status_code} {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise TaskServiceError(f"Error {action}: {e}") from e

    @staticmethod
    def _parse(row: dict) -> Task:
        try:
            return Task.model_validate(row)
        except ValidationError as e:
            raise TaskServiceError(f"Malformed task row {row.get('id')!r}: {e}") from e

    # ------------------------------------------------------------------
    def list_tasks(self, user_id: str) -> list[Task]:
        """All of the user's tasks, newest first."""
        rows = self._call(
            "fetching tasks", sb_select, self.table,
            filters={"user_id": user_id}, order="created_at.desc",
        )
        return [self._parse(row) for row in rows]

    def create_task(self, user_id: str, fields: dict) -> Task:
        """Insert a task. The server assigns id, created_at and updated_at."""
        data = _to_json(fields)
        data["user_id"] = user_id
        row = self._call("creating task", sb_insert, self.table, data)
        if not row:
            raise TaskServiceError("Error creating task: empty response")
        return self._parse(row)

    def update_task(self, task_id: str, user_id: str, fields: dict) -> None:
        data = _to_json(fields)
        rows = self._call(
            "updating task", sb_update, self.table,
            {"id": task_id, "user_id": user_id}, data,
        )
        if not rows:
            raise TaskNotFoundError(task_id)

    def delete_task(self, task_id: str, user_id: str) -> None:
        rows = self._call("deleting task", sb_delete, self.table, {"id": task_id, "user_id": user_id})
        if not rows:
            raise TaskNotFoundError(task_id)
