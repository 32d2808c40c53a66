from __future__ import annotations

from datetime import date, datetime

import pytest

from src.timekeeper.timekeeper.core.enums import Role
from src.timekeeper.timekeeper.core.exceptions import (
    AuthenticationError,
    DataAccessError,
    UsernameAlreadyExistsError,
    UserNotFoundError,
    ValidationError,
)
from src.timekeeper.timekeeper.users.model import ProfileUpdate


def test_register_hashes_password_and_defaults_role(container):
    user = container.user_service.register(username="carol", password="secret1")

    assert user.role == Role.EMPLOYEE
    assert user.password_hash != "secret1"
    assert container.auth_service.authenticate("carol", "secret1").user_id == user.user_id


def test_register_duplicate_username(container, alice):
    with pytest.raises(UsernameAlreadyExistsError, match="Username 'alice' already exists"):
        container.user_service.register(username="alice", password="secret1")


@pytest.mark.parametrize("username, password", [("", "secret1"), ("dave", "123")])
def test_register_validation(container, username, password):
    with pytest.raises(ValidationError):
        container.user_service.register(username=username, password=password)


def test_authenticate_rejects_bad_credentials(container):
    container.user_service.register(username="carol", password="secret1")

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("carol", "wrong-pass")
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("nobody", "secret1")


def test_authenticate_with_placeholder_hash(container, users):
    users.add("seeded", password_hash="CHANGE_ME")

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("seeded", "anything")


def test_update_profile_keeps_unset_fields(container):
    user = container.user_service.register(
        username="carol", password="secret1", profile=ProfileUpdate(first_name="Carol", email="c@example.com")
    )

    updated = container.user_service.update_profile("carol", ProfileUpdate(mobile="555-0100"))

    assert updated.first_name == "Carol"
    assert updated.email == "c@example.com"
    assert updated.mobile == "555-0100"
    assert container.user_service.update_profile_by_id(user.user_id, ProfileUpdate(last_name="Lee")).last_name == "Lee"


def _populate(container, user):
    container.attendance_repo.create_session(user_id=user.user_id, check_in_time=datetime(2024, 3, 4, 9, 0))
    container.adjustments_repo.create(
        user_id=user.user_id,
        requested_check_in=datetime(2024, 3, 1, 9, 0),
        requested_check_out=datetime(2024, 3, 1, 17, 0),
        reason="Missed",
    )
    container.leaves_repo.create(
        user_id=user.user_id,
        start_date=date(2024, 3, 10),
        end_date=date(2024, 3, 10),
        reason=None,
        number_of_days=1,
    )


def test_delete_user_removes_owned_records(container, store, users, alice):
    bob = users.add("bob")
    _populate(container, alice)
    _populate(container, bob)

    container.user_service.delete_user(alice.user_id)

    assert not users.exists_by_id(alice.user_id)
    assert container.attendance_repo.list_for_user(alice.user_id) == []
    assert container.adjustments_repo.list_for_user(alice.user_id) == []
    assert container.leaves_repo.list_for_user(alice.user_id) == []
    assert len(container.attendance_repo.list_for_user(bob.user_id)) == 1
    assert len(container.leaves_repo.list_for_user(bob.user_id)) == 1
    assert store.commits == 1


def test_delete_unknown_user(container):
    with pytest.raises(UserNotFoundError):
        container.user_service.delete_user(404)


def test_delete_user_is_all_or_nothing(container, store, users, alice, monkeypatch):
    _populate(container, alice)

    def broken(user_id):
        raise DataAccessError("connection lost")

    monkeypatch.setattr(container.attendance_repo, "delete_all_for_user", broken)

    with pytest.raises(DataAccessError):
        container.user_service.delete_user(alice.user_id)

    assert users.exists_by_id(alice.user_id)
    assert len(container.leaves_repo.list_for_user(alice.user_id)) == 1
    assert len(container.adjustments_repo.list_for_user(alice.user_id)) == 1
    assert store.rollbacks == 1
