"""
Shared infrastructure for the accounts backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: SQLAlchemy engine and session factory
- repository: Transactional base repository
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import Base, create_db_engine, get_engine, get_session_factory, reset_engine_cache
from .exceptions import (
    AccountsError,
    NotFoundError,
    ConflictError,
    InvalidStateError,
    AuthenticationError,
    AuthorizationError,
    StorageError,
)
from .repository import BaseRepository

__all__ = [
    "Settings",
    "get_settings",
    "Base",
    "create_db_engine",
    "get_engine",
    "get_session_factory",
    "reset_engine_cache",
    "AccountsError",
    "NotFoundError",
    "ConflictError",
    "InvalidStateError",
    "AuthenticationError",
    "AuthorizationError",
    "StorageError",
    "BaseRepository",
]
