from __future__ import annotations

from datetime import date

import pytest

from src.timekeeper.timekeeper.core.enums import LeaveStatus
from src.timekeeper.timekeeper.core.exceptions import InvalidLeaveRequestError, NotFoundError, UserNotFoundError
from src.timekeeper.timekeeper.leaves.model import LeaveDraft
from src.timekeeper.timekeeper.leaves.service import LeaveService

TODAY = date(2024, 3, 1)


@pytest.fixture
def service(store, leaves_repo, users):
    return LeaveService(leaves_repo, users, monthly_quota=3, transaction=store.transaction)


def _apply(service, start, end, username="alice", reason="Family"):
    return service.apply(username, LeaveDraft(start_date=start, end_date=end, reason=reason), today=TODAY)


def test_apply_creates_pending_leave_with_day_count(service, alice):
    leave = _apply(service, date(2024, 3, 10), date(2024, 3, 11))

    assert leave.status == LeaveStatus.PENDING
    assert leave.number_of_days == 2
    assert leave.user_id == alice.user_id
    assert leave.admin_comment is None


def test_single_day_leave_counts_as_one(service, alice):
    assert _apply(service, TODAY, TODAY).number_of_days == 1


@pytest.mark.parametrize(
    "start, end, message",
    [
        (None, date(2024, 3, 5), "Start date cannot be null"),
        (date(2024, 3, 5), None, "End date cannot be null"),
        (date(2024, 2, 29), date(2024, 3, 2), "Leave cannot be applied for past dates"),
        (date(2024, 3, 6), date(2024, 3, 5), "End date cannot be before start date"),
    ],
)
def test_invalid_drafts(service, alice, start, end, message):
    with pytest.raises(InvalidLeaveRequestError, match=message):
        _apply(service, start, end)


def test_monthly_quota(service, alice):
    first = _apply(service, date(2024, 3, 10), date(2024, 3, 11))
    service.process(first.leave_id, LeaveStatus.APPROVED)

    with pytest.raises(InvalidLeaveRequestError, match="Available: 1, Requested: 2"):
        _apply(service, date(2024, 3, 20), date(2024, 3, 21))

    assert _apply(service, date(2024, 3, 25), date(2024, 3, 25)).number_of_days == 1
    with pytest.raises(InvalidLeaveRequestError, match="Available: 0, Requested: 1"):
        _apply(service, date(2024, 3, 28), date(2024, 3, 28))


def test_rejected_leaves_free_the_quota(service, alice):
    first = _apply(service, date(2024, 3, 10), date(2024, 3, 12))
    service.process(first.leave_id, LeaveStatus.REJECTED, "Busy period")

    assert _apply(service, date(2024, 3, 20), date(2024, 3, 22)).number_of_days == 3


def test_quota_is_per_start_month(service, alice):
    _apply(service, date(2024, 3, 10), date(2024, 3, 12))

    assert _apply(service, date(2024, 4, 1), date(2024, 4, 3)).number_of_days == 3


def test_leave_longer_than_quota_is_refused(service, alice):
    with pytest.raises(InvalidLeaveRequestError, match="Available: 3, Requested: 4"):
        _apply(service, date(2024, 3, 30), date(2024, 4, 2))


def test_quota_is_per_user(service, users, alice):
    users.add("bob")
    _apply(service, date(2024, 3, 10), date(2024, 3, 12))

    assert _apply(service, date(2024, 3, 10), date(2024, 3, 12), username="bob").number_of_days == 3


def test_apply_for_unknown_user(service):
    with pytest.raises(UserNotFoundError):
        _apply(service, date(2024, 3, 10), date(2024, 3, 10), username="ghost")


def test_process_sets_status_and_comment(service, alice):
    leave = _apply(service, date(2024, 3, 10), date(2024, 3, 10))

    processed = service.process(leave.leave_id, LeaveStatus.APPROVED, "Enjoy")

    assert processed.status == LeaveStatus.APPROVED
    assert processed.admin_comment == "Enjoy"
    assert service.list_for_user("alice")[0].status == LeaveStatus.APPROVED
    assert service.list_pending() == []


def test_decided_leave_can_be_processed_again(service, alice):
    leave = _apply(service, date(2024, 3, 10), date(2024, 3, 10))
    service.process(leave.leave_id, LeaveStatus.APPROVED)

    again = service.process(leave.leave_id, LeaveStatus.REJECTED, "Changed plans")

    assert again.status == LeaveStatus.REJECTED
    assert again.admin_comment == "Changed plans"


def test_process_unknown_leave(service):
    with pytest.raises(NotFoundError, match="Leave request with ID 77 not found"):
        service.process(77, LeaveStatus.APPROVED)


def test_list_pending_spans_users(service, users, alice):
    users.add("bob")
    _apply(service, date(2024, 3, 10), date(2024, 3, 10))
    _apply(service, date(2024, 3, 11), date(2024, 3, 11), username="bob")

    assert len(service.list_pending()) == 2
    assert len(service.list_for_user("bob")) == 1


def test_pending_leaves_count_against_the_quota(service, alice):
    _apply(service, date(2024, 3, 10), date(2024, 3, 11))

    with pytest.raises(InvalidLeaveRequestError, match="Available: 1, Requested: 2"):
        _apply(service, date(2024, 3, 20), date(2024, 3, 21))


def test_apply_locks_the_user_before_reading_the_quota(store, service, leaves_repo, alice, monkeypatch):
    read = leaves_repo.list_for_user_starting_between

    def checked_read(user_id, start, end):
        assert store.locked_users == [alice.user_id]
        return read(user_id, start, end)

    monkeypatch.setattr(leaves_repo, "list_for_user_starting_between", checked_read)

    _apply(service, date(2024, 3, 10), date(2024, 3, 10))

    assert store.locked_users == [alice.user_id]
    assert store.commits == 1
