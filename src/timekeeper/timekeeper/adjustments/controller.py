from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_datetime
from ..common.http import admin_required, current_username, json_body, login_required
from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)

_REQUIRED = ("requestedCheckIn", "requestedCheckOut", "reason")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/v1/attendance/adjustments/request", methods=["POST"], endpoint="request_adjustment")
    @login_required
    def request_adjustment():
        data = json_body()
        missing = [k for k in _REQUIRED if k not in data]
        if missing:
            logger.warning("Bad adjustment request: missing %s", ", ".join(missing))
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        try:
            check_in = parse_iso_datetime(str(data["requestedCheckIn"]))
            check_out = parse_iso_datetime(str(data["requestedCheckOut"]))
        except ValueError:
            raise ValidationError("Timestamps must be ISO-8601 (YYYY-MM-DDTHH:MM:SS)")

        adjustment = container.adjustment_service.request_adjustment(
            current_username(),
            requested_check_in=check_in,
            requested_check_out=check_out,
            reason=data.get("reason"),
        )
        return jsonify(adjustment.to_dict())

    @app.route("/api/v1/attendance/adjustments/pending", methods=["GET"], endpoint="pending_adjustments")
    @admin_required
    def pending_adjustments():
        return jsonify([a.to_dict() for a in container.adjustment_service.list_pending()])

    @app.route("/api/v1/attendance/adjustments/mine", methods=["GET"], endpoint="my_adjustments")
    @login_required
    def my_adjustments():
        return jsonify([a.to_dict() for a in container.adjustment_service.list_my_adjustments(current_username())])

    # Role is enforced by the service, which resolves the caller's stored role.
    @app.route("/api/v1/attendance/adjustments/<int:adjustment_id>/approve", methods=["PUT"], endpoint="approve_adjustment")
    @login_required
    def approve_adjustment(adjustment_id: int):
        return jsonify(container.adjustment_service.approve(current_username(), adjustment_id).to_dict())

    @app.route("/api/v1/attendance/adjustments/<int:adjustment_id>/reject", methods=["PUT"], endpoint="reject_adjustment")
    @login_required
    def reject_adjustment(adjustment_id: int):
        return jsonify(container.adjustment_service.reject(current_username(), adjustment_id).to_dict())
