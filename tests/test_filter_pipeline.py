# tests/test_filter_pipeline.py

from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from models.task import Category, Priority, Status
from services.filter_service import (
    FilterConfig,
    SortKey,
    apply_filters_and_sort,
    filter_tasks,
    sort_tasks,
)

from .fakes import NOW, TODAY, make_task


@pytest.fixture()
def mixed():
    return [
        make_task(id="a", category=Category.EXAM, priority=Priority.LOW, status=Status.PENDING),
        make_task(id="b", category=Category.PROJECT, priority=Priority.HIGH, status=Status.COMPLETED),
        make_task(id="c", category=Category.EXAM, priority=Priority.HIGH, status=Status.IN_PROGRESS),
        make_task(id="d", category=Category.PERSONAL_STUDY, priority=Priority.MEDIUM, status=Status.PENDING),
        make_task(id="e", category=Category.EXAM, priority=Priority.MEDIUM, status=Status.COMPLETED),
    ]


def ids(tasks):
    return [t.id for t in tasks]


def test_category_filter_keeps_original_order(mixed):
    config = FilterConfig(category="Exam", status="All", priority="All")
    assert ids(filter_tasks(mixed, config)) == ["a", "c", "e"]


def test_wildcards_are_a_no_op(mixed):
    assert ids(filter_tasks(mixed, FilterConfig())) == ids(mixed)


def test_filters_are_conjunctive(mixed):
    config = FilterConfig(category=Category.EXAM, status=Status.COMPLETED)
    assert ids(filter_tasks(mixed, config)) == ["e"]
    config = FilterConfig(category=Category.EXAM, priority=Priority.HIGH, status=Status.PENDING)
    assert filter_tasks(mixed, config) == []


@pytest.mark.parametrize(
    "config",
    [
        FilterConfig(status="Pending"),
        FilterConfig(priority="High"),
        FilterConfig(category="Exam", priority="Medium"),
    ],
)
def test_filter_output_is_a_matching_subset(mixed, config):
    out = filter_tasks(mixed, config)
    assert set(ids(out)) <= set(ids(mixed))
    for t in out:
        assert config.category == "All" or t.category == config.category
        assert config.status == "All" or t.status == config.status
        assert config.priority == "All" or t.priority == config.priority


def test_invalid_filter_value_is_rejected():
    with pytest.raises(ValidationError):
        FilterConfig(category="Homework")
    with pytest.raises(ValidationError):
        FilterConfig(sort_by="title")


def test_sort_by_due_date_puts_undated_last():
    tasks = [
        make_task(id="none1"),
        make_task(id="late", due_date=TODAY + timedelta(days=9)),
        make_task(id="none2"),
        make_task(id="early", due_date=TODAY - timedelta(days=1)),
        make_task(id="mid", due_date=TODAY + timedelta(days=2)),
    ]
    out = sort_tasks(tasks, SortKey.DUE_DATE)
    assert ids(out) == ["early", "mid", "late", "none1", "none2"]
    for a, b in zip(out, out[1:]):
        assert b.due_date is None or (a.due_date is not None and a.due_date <= b.due_date)


def test_sort_by_priority_is_high_first_and_stable():
    tasks = [
        make_task(id="l1", priority=Priority.LOW),
        make_task(id="h1", priority=Priority.HIGH),
        make_task(id="m1", priority=Priority.MEDIUM),
        make_task(id="h2", priority=Priority.HIGH),
    ]
    out = sort_tasks(tasks, "priority")
    assert ids(out) == ["h1", "h2", "m1", "l1"]
    for a, b in zip(out, out[1:]):
        assert a.priority.ordinal <= b.priority.ordinal


def test_sort_by_created_is_newest_first():
    t1 = make_task(id="t1", created_at=NOW - timedelta(days=3))
    t2 = make_task(id="t2", created_at=NOW - timedelta(days=2))
    t3 = make_task(id="t3", created_at=NOW - timedelta(days=1))
    assert ids(sort_tasks([t1, t2, t3], SortKey.CREATED)) == ["t3", "t2", "t1"]


def test_sort_by_created_keeps_ties_in_input_order():
    a = make_task(id="a", created_at=NOW)
    b = make_task(id="b", created_at=NOW)
    assert ids(sort_tasks([a, b], SortKey.CREATED)) == ["a", "b"]


def test_unknown_sort_key_keeps_order(mixed, caplog):
    out = sort_tasks(mixed, "alphabetical")
    assert ids(out) == ids(mixed)
    assert out is not mixed
    assert "Unknown sort key" in caplog.text


def test_pipeline_filters_then_sorts_without_mutating_input(mixed):
    before = ids(mixed)
    out = apply_filters_and_sort(mixed, FilterConfig(category="Exam", sort_by="priority"))
    assert ids(out) == ["c", "e", "a"]
    assert ids(mixed) == before


def test_pipeline_is_deterministic(mixed):
    config = FilterConfig(sort_by=SortKey.PRIORITY)
    assert ids(apply_filters_and_sort(mixed, config)) == ids(apply_filters_and_sort(mixed, config))
