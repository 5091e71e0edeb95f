"""
lifecycle_service.py — Task lifecycle rules
Completion-timestamp side effect of status changes, plus the derived
due-date classification shown on every task card.

All calendar dates are compared in UTC: a due date means 00:00 UTC of that day.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import Enum

from models.task import Status, Task

SECONDS_PER_DAY = 24 * 60 * 60


class DueKind(str, Enum):
    ON_TRACK = "OnTrack"
    DUE_TODAY = "DueToday"
    OVERDUE = "Overdue"
    NO_DUE_DATE = "NoDueDate"


@dataclass(frozen=True)
class Dueness:
    kind: DueKind
    days: int | None = None  # whole days until due; negative when past


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _due_moment(due: date) -> datetime:
    return datetime.combine(due, time.min, tzinfo=timezone.utc)


# ------------------------------------------------------------------
def status_change_fields(task: Task, new_status: Status, now: datetime | None = None) -> dict:
    """Partial update payload produced by moving `task` to `new_status`."""
    now = _as_utc(now or utcnow())
    fields = {"status": new_status, "updated_at": now}

    if new_status == Status.COMPLETED and task.status != Status.COMPLETED:
        fields["completed_at"] = now
    elif new_status != Status.COMPLETED and task.completed_at is not None:
        fields["completed_at"] = None
    return fields


def apply_status_change(task: Task, new_status: Status, now: datetime | None = None) -> Task:
    """Return a copy of `task` moved to `new_status`. The input is not modified."""
    return task.model_copy(update=status_change_fields(task, new_status, now))


def toggle_target(task: Task) -> Status:
    """Quick-complete: a completed task goes back to Pending, anything else completes."""
    return Status.PENDING if task.status == Status.COMPLETED else Status.COMPLETED


# ------------------------------------------------------------------
def days_until_due(task: Task, now: datetime | None = None) -> int | None:
    if task.due_date is None:
        return None
    now = _as_utc(now or utcnow())
    diff = (_due_moment(task.due_date) - now).total_seconds()
    return math.ceil(diff / SECONDS_PER_DAY)


def classify_dueness(task: Task, now: datetime | None = None) -> Dueness:
    days = days_until_due(task, now)
    if days is None:
        return Dueness(DueKind.NO_DUE_DATE)
    if days == 0:
        return Dueness(DueKind.DUE_TODAY, 0)
    if days < 0 and not task.is_completed:
        return Dueness(DueKind.OVERDUE, days)
    # completed tasks are never overdue
    return Dueness(DueKind.ON_TRACK, days)


def is_overdue(task: Task, now: datetime | None = None) -> bool:
    """Not completed and the due date lies strictly before `now`."""
    if task.is_completed or task.due_date is None:
        return False
    return _due_moment(task.due_date) < _as_utc(now or utcnow())


# ------------------------------------------------------------------
def due_label(dueness: Dueness) -> str | None:
    if dueness.kind == DueKind.NO_DUE_DATE:
        return None
    if dueness.days == 0:
        return "Today"
    if dueness.days > 0:
        return f"{dueness.days}d left"
    return f"{abs(dueness.days)}d overdue"


def format_date(value: date | datetime | None) -> str:
    if value is None:
        return "No date"
    return f"{value.strftime('%b')} {value.day}, {value.year}"
