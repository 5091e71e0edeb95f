"""
stats_service.py — Task summary statistics
Counts by status, overdue count and completion rate over the full
(unfiltered) collection. Recomputed on every call.
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from models.task import Status, Task
from services.lifecycle_service import is_overdue, utcnow


@dataclass(frozen=True)
class TaskStats:
    total: int = 0
    completed: int = 0
    pending: int = 0
    in_progress: int = 0
    overdue: int = 0
    completion_rate: int = 0

    @property
    def progress_label(self) -> str:
        return f"{self.completed} of {self.total} tasks completed"

    def to_dict(self) -> dict:
        data = asdict(self)
        data["progress_label"] = self.progress_label
        return data


def completion_rate(completed: int, total: int) -> int:
    """Whole-number percentage, halves rounded up; 0 for an empty list."""
    if total <= 0:
        return 0
    pct = Decimal(completed * 100) / Decimal(total)
    return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_stats(tasks: Iterable[Task], now: datetime | None = None) -> TaskStats:
    tasks = list(tasks)
    now = now or utcnow()
    completed = sum(1 for t in tasks if t.status == Status.COMPLETED)

    return TaskStats(
        total=len(tasks),
        completed=completed,
        pending=sum(1 for t in tasks if t.status == Status.PENDING),
        in_progress=sum(1 for t in tasks if t.status == Status.IN_PROGRESS),
        overdue=sum(1 for t in tasks if is_overdue(t, now)),
        completion_rate=completion_rate(completed, len(tasks)),
    )
