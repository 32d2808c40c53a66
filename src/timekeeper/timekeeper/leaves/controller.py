from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, current_username, json_body, login_required
from ..core.enums import LeaveStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .model import LeaveDraft


def _optional_date(data: dict, key: str):
    value: Optional[str] = data.get(key)
    if not value:
        return None
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"{key} must be a date (YYYY-MM-DD)")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/v1/leaves/apply", methods=["POST"], endpoint="apply_leave")
    @login_required
    def apply_leave():
        data = json_body()
        draft = LeaveDraft(
            start_date=_optional_date(data, "startDate"),
            end_date=_optional_date(data, "endDate"),
            reason=data.get("reason"),
        )
        return jsonify(container.leave_service.apply(current_username(), draft).to_dict())

    @app.route("/api/v1/leaves/my-leaves", methods=["GET"], endpoint="my_leaves")
    @login_required
    def my_leaves():
        return jsonify([lv.to_dict() for lv in container.leave_service.list_for_user(current_username())])

    @app.route("/api/v1/leaves/pending", methods=["GET"], endpoint="pending_leaves")
    @admin_required
    def pending_leaves():
        return jsonify([lv.to_dict() for lv in container.leave_service.list_pending()])

    @app.route("/api/v1/leaves/<int:leave_id>", methods=["PUT"], endpoint="process_leave")
    @admin_required
    def process_leave(leave_id: int):
        raw = (request.args.get("status") or "").upper()
        try:
            status = LeaveStatus(raw)
        except ValueError:
            raise ValidationError(f"Unknown leave status: {raw or '<missing>'}")
        leave = container.leave_service.process(leave_id, status, request.args.get("adminComment"))
        return jsonify(leave.to_dict())
