from __future__ import annotations

import pytest

from src.timekeeper.timekeeper.container import wire_services
from src.timekeeper.timekeeper.core.enums import Role

from tests.fakes import InMemoryAdjustments, InMemoryAttendance, InMemoryLeaves, InMemoryUsers, MemoryStore


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def users(store):
    return InMemoryUsers(store)


@pytest.fixture
def attendance_repo(store):
    return InMemoryAttendance(store)


@pytest.fixture
def adjustments_repo(store):
    return InMemoryAdjustments(store)


@pytest.fixture
def leaves_repo(store):
    return InMemoryLeaves(store)


@pytest.fixture
def alice(users):
    return users.add("alice")


@pytest.fixture
def admin(users):
    return users.add("boss", role=Role.ADMIN)


@pytest.fixture
def container(store, users, attendance_repo, adjustments_repo, leaves_repo):
    return wire_services(
        users_repo=users,
        attendance_repo=attendance_repo,
        adjustments_repo=adjustments_repo,
        leaves_repo=leaves_repo,
        transaction=store.transaction,
    )
