from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def exists_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def lock_by_id(self, user_id: int) -> bool:
        """Row-lock the user until the enclosing transaction ends."""
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
        mobile: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_profile(
        self,
        *,
        user_id: int,
        first_name: Optional[str],
        last_name: Optional[str],
        email: Optional[str],
        mobile: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError
