"""
Domain Exceptions

Errors raised by services when an operation cannot proceed.
The API layer maps each type to an HTTP status code.
"""


class PulihError(Exception):
    """Base class for all domain errors."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(PulihError):
    """Input failed a domain rule."""

    status_code = 422


class NotAuthenticatedError(PulihError):
    """No authenticated user for an operation that requires one."""

    status_code = 401

    def __init__(self, message: str = "User not authenticated") -> None:
        super().__init__(message)


class InvalidCredentialsError(PulihError):
    """Username/password combination rejected."""

    status_code = 401

    def __init__(self, message: str = "Invalid username or password") -> None:
        super().__init__(message)


class PermissionDeniedError(PulihError):
    """Authenticated user lacks the required role."""

    status_code = 403


class EntryAccessDeniedError(PermissionDeniedError):
    """Journal entry belongs to another user."""

    def __init__(self, action: str = "access") -> None:
        super().__init__(f"You don't have permission to {action} this entry")


class EntryNotFoundError(PulihError):
    """Journal entry does not exist."""

    status_code = 404

    def __init__(self, entry_id: object) -> None:
        super().__init__(f"Journal entry {entry_id} not found")
        self.entry_id = entry_id


class UserNotFoundError(PulihError):
    """User account does not exist."""

    status_code = 404

    def __init__(self, user_id: object) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class DuplicateUserError(PulihError):
    """Username or email already taken."""

    status_code = 409
