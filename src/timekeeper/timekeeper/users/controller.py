from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.http import admin_required, current_username, json_body, login_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from .model import ProfileUpdate

logger = logging.getLogger(__name__)


def _profile_from(data: dict) -> ProfileUpdate:
    mobile = data.get("mobile")
    return ProfileUpdate(
        first_name=data.get("first_name"),
        last_name=data.get("last_name"),
        email=data.get("email"),
        mobile=str(mobile) if mobile is not None else None,
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/v1/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        session.clear()
        session["user_id"] = user.user_id
        session["username"] = user.username
        session["role"] = user.role.value
        logger.info("User %s logged in", user.username)
        return jsonify(user.to_dict())

    @app.route("/api/v1/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/v1/users/register", methods=["POST"], endpoint="register_user")
    def register_user():
        data = json_body()
        role = data.get("role")
        try:
            role = Role(role) if role else None
        except ValueError:
            raise ValidationError(f"Unknown role: {role}")
        if role == Role.ADMIN and session.get("role") != Role.ADMIN.value:
            return jsonify({"message": "Only an admin can create admin accounts"}), 403

        user = container.user_service.register(
            username=data.get("username", ""),
            password=data.get("password", ""),
            role=role,
            profile=_profile_from(data),
        )
        return jsonify(user.to_dict()), 201

    @app.route("/api/v1/users", methods=["GET"], endpoint="list_users")
    @admin_required
    def list_users():
        return jsonify([u.to_dict() for u in container.user_service.list_users()])

    @app.route("/api/v1/users/me", methods=["GET"], endpoint="my_profile")
    @login_required
    def my_profile():
        return jsonify(container.user_service.get_user_by_username(current_username()).to_dict())

    @app.route("/api/v1/users/me", methods=["PUT"], endpoint="update_my_profile")
    @login_required
    def update_my_profile():
        user = container.user_service.update_profile(current_username(), _profile_from(json_body()))
        return jsonify(user.to_dict())

    @app.route("/api/v1/users/<int:user_id>", methods=["GET"], endpoint="get_user")
    @admin_required
    def get_user(user_id: int):
        return jsonify(container.user_service.get_user(user_id).to_dict())

    @app.route("/api/v1/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    @admin_required
    def update_user(user_id: int):
        user = container.user_service.update_profile_by_id(user_id, _profile_from(json_body()))
        return jsonify(user.to_dict())

    @app.route("/api/v1/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: int):
        container.user_service.delete_user(user_id)
        return "", 204
