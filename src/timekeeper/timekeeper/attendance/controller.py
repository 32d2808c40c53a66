from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.http import admin_required, current_username, login_required
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/v1/attendance/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        logger.info("Received request for user %s to check in", current_username())
        attendance = container.attendance_service.check_in(current_username())
        return jsonify(attendance.to_dict()), 201

    @app.route("/api/v1/attendance/checkout", methods=["PUT"], endpoint="checkout")
    @login_required
    def checkout():
        logger.info("Received request for user %s to check out", current_username())
        attendance = container.attendance_service.check_out(current_username())
        return jsonify(attendance.to_dict())

    @app.route("/api/v1/attendance/my-all", methods=["GET"], endpoint="my_sessions")
    @login_required
    def my_sessions():
        sessions = container.attendance_service.list_my_sessions(current_username())
        return jsonify([s.to_dict() for s in sessions])

    @app.route("/api/v1/attendance/user/<int:user_id>/all", methods=["GET"], endpoint="user_sessions")
    @admin_required
    def user_sessions(user_id: int):
        logger.info("Admin request to get all attendances for user ID: %s", user_id)
        sessions = container.attendance_service.list_sessions_for_user(user_id)
        return jsonify([s.to_dict() for s in sessions])
