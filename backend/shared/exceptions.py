"""
Base exception classes for the accounts backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class AccountsError(Exception):
    """
    Base exception for all backend errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(AccountsError):
    """Resource not found."""

    pass


class ConflictError(AccountsError):
    """Resource already exists."""

    pass


class InvalidStateError(AccountsError):
    """Operation not allowed in the resource's current state."""

    pass


class AuthenticationError(AccountsError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(AccountsError):
    """Authorization failed (insufficient permissions)."""

    pass


class StorageError(AccountsError):
    """
    Fatal error raised by the persistence layer.

    Not a business-logic error: the operation was aborted and nothing
    was written.
    """

    def __init__(
        self,
        message: str,
        operation: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code or "STORAGE_ERROR", details)
        self.operation = operation
        self.details["operation"] = operation
