"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
session handling and providing shared utilities for data operations.
"""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar, Generic

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .exceptions import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Session factory access via self._session_factory
    - Transaction scope via self._session()
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle row-to-Pydantic model mapping internally.

    Example:
        class AccountStore(BaseRepository[Account]):
            def get(self, key: str) -> Optional[Account]:
                with self._session("get") as session:
                    row = session.get(AccountRow, key)
                    return self._map_to_account(row) if row else None
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        """
        Initialize the repository with a session factory.

        Args:
            session_factory: Callable returning a new SQLAlchemy session.
        """
        self._session_factory = session_factory

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        """
        Open a session scoped to a single transaction.

        Commits on success. Any database failure rolls the transaction back
        and is re-raised as StorageError, so a failed call writes nothing.

        Args:
            operation: Name of the calling operation, used in errors and logs.
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            logger.exception("Storage failure during %s, rolling back", operation)
            session.rollback()
            raise StorageError(f"Storage failure during {operation}", operation=operation) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
