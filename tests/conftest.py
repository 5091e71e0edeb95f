# tests/conftest.py

from __future__ import annotations

import pytest

from .fakes import FakeTaskRepo


@pytest.fixture()
def repo() -> FakeTaskRepo:
    """Empty in-memory repo whose clock is pinned to NOW."""
    return FakeTaskRepo()
