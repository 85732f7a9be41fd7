"""
Accounts module.

Handles account registration, login sessions, password resets, deletion
and account reclaim.

Public API:
- IAccountService: Interface for account lifecycle operations
- IAccountStore: Interface for the durable account store
- Account, UserPayload, UpdateUserPayload: Data models
- SqlAlchemyAccountStore: Durable account store (importing the package
  registers its table for shared.database.init_db)
- Account exceptions: AccountNotFoundError, AlreadyRegisteredError, etc.
"""

from .interfaces import IAccountService, IAccountStore
from .models import Account, UserPayload, UpdateUserPayload
from .store import AccountRow, SqlAlchemyAccountStore  # registers the accounts table on Base
from .exceptions import (
    AccountError,
    AccountNotFoundError,
    AlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    NotLoggedInError,
    SessionExpiredError,
    UnauthorizedError,
)

__all__ = [
    # Interfaces
    "IAccountService",
    "IAccountStore",
    # Models
    "Account",
    "UserPayload",
    "UpdateUserPayload",
    # Store
    "AccountRow",
    "SqlAlchemyAccountStore",
    # Exceptions
    "AccountError",
    "AccountNotFoundError",
    "AlreadyRegisteredError",
    "InvalidCredentialsError",
    "InvalidResetTokenError",
    "NotLoggedInError",
    "SessionExpiredError",
    "UnauthorizedError",
]
