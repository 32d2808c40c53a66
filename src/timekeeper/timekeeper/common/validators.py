from __future__ import annotations

import logging

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError

logger = logging.getLogger(__name__)


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_role(user, role: Role, message: str):
    """Pre-condition for role-restricted operations."""
    if user.role != role:
        logger.warning("Unauthorized action by %s (role %s, needs %s)", user.username, user.role.value, role.value)
        raise AuthorizationError(message)
    return user
