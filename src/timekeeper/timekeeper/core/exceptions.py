class DomainError(Exception):
    """Base exception for business rule violations."""


class UserNotFoundError(DomainError):
    """Raised when an identity does not resolve to a stored user."""


class UsernameAlreadyExistsError(DomainError):
    def __init__(self, username: str):
        super().__init__(f"Username '{username}' already exists")
        self.username = username


class ActiveSessionExistsError(DomainError):
    """Raised on check-in while an open session exists for the user."""


class NoActiveSessionError(DomainError):
    """Raised on check-out when the user has no open session."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidRangeError(ValidationError):
    """Raised when a requested check-out precedes the requested check-in."""


class InvalidLeaveRequestError(ValidationError):
    """Raised when a leave application breaks a date or quota rule."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class InvalidStateError(DomainError):
    """Raised when a request is no longer in a state that allows the action."""


class NotFoundError(DomainError):
    """Raised when a referenced adjustment or leave does not exist."""


class DataAccessError(Exception):
    """Storage failure wrapped so driver details never reach the caller."""
