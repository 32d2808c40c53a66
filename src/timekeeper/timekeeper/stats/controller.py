from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, current_username, int_arg, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/v1/attendance/my-stats/weekly", methods=["GET"], endpoint="my_weekly_stats")
    @login_required
    def my_weekly_stats():
        stats = container.stats_service.my_weekly_stats(
            current_username(), year=int_arg("year"), week_of_year=int_arg("weekOfYear")
        )
        return jsonify(stats.to_dict())

    @app.route("/api/v1/attendance/my-stats/monthly", methods=["GET"], endpoint="my_monthly_stats")
    @login_required
    def my_monthly_stats():
        stats = container.stats_service.my_monthly_stats(current_username(), year=int_arg("year"), month=int_arg("month"))
        return jsonify(stats.to_dict())

    @app.route("/api/v1/attendance/user/<int:user_id>/stats/weekly", methods=["GET"], endpoint="user_weekly_stats")
    @admin_required
    def user_weekly_stats(user_id: int):
        stats = container.stats_service.weekly_stats(user_id, year=int_arg("year"), week_of_year=int_arg("weekOfYear"))
        return jsonify(stats.to_dict())

    @app.route("/api/v1/attendance/user/<int:user_id>/stats/monthly", methods=["GET"], endpoint="user_monthly_stats")
    @admin_required
    def user_monthly_stats(user_id: int):
        stats = container.stats_service.monthly_stats(user_id, year=int_arg("year"), month=int_arg("month"))
        return jsonify(stats.to_dict())
