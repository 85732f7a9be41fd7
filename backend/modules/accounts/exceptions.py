"""
Accounts module exceptions.

These exceptions are raised by the accounts service and carry a
human-readable message plus a machine code, so callers can turn any of
them into an error result with ``to_dict()``.
"""

from typing import Optional

from shared.exceptions import (
    AccountsError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
)


class AccountError(AccountsError):
    """Base exception for account lifecycle errors."""

    pass


class AccountNotFoundError(AccountError, NotFoundError):
    """Raised when no account matches the requested key or email."""

    def __init__(self, key: Optional[str] = None, message: Optional[str] = None):
        super().__init__(
            message or f"User with id={key} not found",
            code="ACCOUNT_NOT_FOUND",
            details={"id": key} if key is not None else {},
        )


class InvalidResetTokenError(AccountError, NotFoundError):
    """Raised when a reset token does not match any pending reset."""

    def __init__(self, message: str = "Invalid or expired reset token"):
        super().__init__(message, code="INVALID_RESET_TOKEN")


class AlreadyRegisteredError(AccountError, ConflictError):
    """Raised when the account key is already registered."""

    def __init__(self, key: str):
        super().__init__(
            f"User with id={key} is already registered",
            code="ALREADY_REGISTERED",
            details={"id": key},
        )


class UnauthorizedError(AccountError, AuthorizationError):
    """Raised when the caller may not perform the operation."""

    def __init__(self, message: str = "Caller is not authorized", caller: Optional[str] = None):
        super().__init__(
            message,
            code="UNAUTHORIZED",
            details={"caller": caller} if caller is not None else {},
        )


class InvalidCredentialsError(AccountError, AuthenticationError):
    """
    Raised when a username/password pair or a reclaim secret does not match.

    The message never reveals whether the account exists.
    """

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class NotLoggedInError(AccountError, InvalidStateError):
    """Raised when a session operation runs without an open session."""

    def __init__(self, key: str):
        super().__init__(
            f"User with id={key} is not logged in",
            code="NOT_LOGGED_IN",
            details={"id": key},
        )


class SessionExpiredError(AccountError, InvalidStateError):
    """Raised when a lazily checked session has passed its expiry."""

    def __init__(self, key: str, expired_at: int):
        super().__init__(
            f"Session for user with id={key} has expired",
            code="SESSION_EXPIRED",
            details={"id": key, "expired_at": expired_at},
        )
