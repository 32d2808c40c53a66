from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import Callable, ContextManager, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..adjustments.repository import AdjustmentRepository
from ..attendance.repository import AttendanceRepository
from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, UsernameAlreadyExistsError, UserNotFoundError
from ..leaves.repository import LeaveRepository
from .model import ProfileUpdate, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

TransactionFactory = Callable[[], ContextManager]


def require_user_by_username(users: UserRepository, username: str) -> User:
    user = users.get_by_username(username)
    if user is None:
        logger.warning("User not found: %s", username)
        raise UserNotFoundError(f"User not found: {username}")
    return user


def require_user_by_id(users: UserRepository, user_id: int) -> User:
    user = users.get_by_id(int(user_id))
    if user is None:
        logger.warning("User not found with ID: %s", user_id)
        raise UserNotFoundError(f"User not found with ID: {user_id}")
    return user


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> User:
        user = self._users.get_by_username((username or "").strip())
        if not user:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")
        return user


class UserService:
    def __init__(
        self,
        users: UserRepository,
        attendance: AttendanceRepository,
        adjustments: AdjustmentRepository,
        leaves: LeaveRepository,
        *,
        transaction: Optional[TransactionFactory] = None,
    ):
        self._users = users
        self._attendance = attendance
        self._adjustments = adjustments
        self._leaves = leaves
        self._transaction = transaction or nullcontext

    def list_users(self) -> Sequence[User]:
        logger.info("Finding all users")
        return self._users.list_all()

    def get_user(self, user_id: int) -> User:
        return require_user_by_id(self._users, user_id)

    def get_user_by_username(self, username: str) -> User:
        return require_user_by_username(self._users, username)

    def register(
        self,
        *,
        username: str,
        password: str,
        role: Optional[Role] = None,
        profile: Optional[ProfileUpdate] = None,
    ) -> User:
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", 6)
        logger.info("Saving new user with username: %s", username)

        if self._users.get_by_username(username):
            logger.warning("Save failed: username '%s' already exists", username)
            raise UsernameAlreadyExistsError(username)

        profile = profile or ProfileUpdate()
        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            role=role or Role.EMPLOYEE,
            first_name=profile.first_name,
            last_name=profile.last_name,
            email=profile.email,
            mobile=profile.mobile,
        )
        logger.info("User saved successfully with id: %s", user_id)
        return require_user_by_id(self._users, user_id)

    def update_profile(self, username: str, update: ProfileUpdate) -> User:
        logger.info("Updating profile for user: %s", username)
        return self._apply_profile_update(require_user_by_username(self._users, username), update)

    def update_profile_by_id(self, user_id: int, update: ProfileUpdate) -> User:
        logger.info("Updating profile for user with ID: %s", user_id)
        return self._apply_profile_update(require_user_by_id(self._users, user_id), update)

    def _apply_profile_update(self, user: User, update: ProfileUpdate) -> User:
        self._users.update_profile(
            user_id=user.user_id,
            first_name=update.first_name if update.first_name is not None else user.first_name,
            last_name=update.last_name if update.last_name is not None else user.last_name,
            email=update.email if update.email is not None else user.email,
            mobile=update.mobile if update.mobile is not None else user.mobile,
        )
        logger.info("Profile updated successfully for user: %s", user.username)
        return require_user_by_id(self._users, user.user_id)

    def delete_user(self, user_id: int) -> None:
        """Delete a user together with every record they own.

        Leaves, adjustments and sessions go first, then the user row, all in
        one transaction.
        """
        logger.info("Deleting user with id: %s", user_id)
        with self._transaction():
            if not self._users.exists_by_id(int(user_id)):
                logger.warning("Deletion failed: user with id %s not found", user_id)
                raise UserNotFoundError(f"User not found with ID: {user_id}")

            logger.debug("Deleting leave records for user: %s", user_id)
            self._leaves.delete_all_for_user(int(user_id))
            logger.debug("Deleting attendance adjustment records for user: %s", user_id)
            self._adjustments.delete_all_for_user(int(user_id))
            logger.debug("Deleting attendance records for user: %s", user_id)
            self._attendance.delete_all_for_user(int(user_id))
            self._users.delete_by_id(int(user_id))
        logger.info("User deleted successfully: %s", user_id)
