# tests/test_models.py

from __future__ import annotations

import pytest
from pydantic import ValidationError

from models.task import Category, Priority, Status, Task, TaskCreate, TaskUpdate


def test_create_defaults():
    data = TaskCreate(title="  Lab report ")
    assert data.title == "Lab report"
    assert data.status == Status.PENDING
    assert data.priority == Priority.MEDIUM
    assert data.category == Category.ASSIGNMENT
    assert data.due_date is None


@pytest.mark.parametrize("title", ["", "   "])
def test_create_rejects_empty_title(title):
    with pytest.raises(ValidationError):
        TaskCreate(title=title)


def test_create_rejects_unknown_enum_values():
    with pytest.raises(ValidationError):
        TaskCreate(title="x", category="Homework")
    with pytest.raises(ValidationError):
        TaskCreate(title="x", priority="Urgent")
    with pytest.raises(ValidationError):
        TaskCreate(title="x", status="Done")


def test_update_only_reports_sent_fields():
    update = TaskUpdate(priority="High")
    assert update.model_dump(exclude_unset=True) == {"priority": Priority.HIGH}


def test_update_rejects_blank_title_and_null_enums():
    with pytest.raises(ValidationError):
        TaskUpdate(title=" ")
    with pytest.raises(ValidationError):
        TaskUpdate(status=None)


def test_update_allows_clearing_due_date():
    assert TaskUpdate(due_date=None).model_dump(exclude_unset=True) == {"due_date": None}


def test_task_parses_server_row():
    task = Task.model_validate({
        "id": "9f1c",
        "user_id": "user-1",
        "title": "Revise",
        "description": None,
        "subject": "Physics",
        "category": "Personal Study",
        "priority": "Low",
        "status": "In Progress",
        "start_date": None,
        "due_date": "2026-03-12",
        "completed_at": None,
        "created_at": "2026-03-01T10:00:00+00:00",
        "updated_at": "2026-03-01T10:00:00+00:00",
    })
    assert task.category == Category.PERSONAL_STUDY
    assert task.status == Status.IN_PROGRESS
    assert task.due_date.isoformat() == "2026-03-12"
    assert not task.is_completed


def test_priority_ordinal():
    assert [p.ordinal for p in (Priority.HIGH, Priority.MEDIUM, Priority.LOW)] == [0, 1, 2]
