"""
Durable ordered account store.

A single table maps account key to the serialized account record. Keys are
the primary key, so inserts are upserts and ``values()`` comes back in key
order. Each call runs in its own committed transaction.
"""

import logging
from typing import Optional

from sqlalchemy import String, Text, select
from sqlalchemy.orm import Mapped, mapped_column

from shared.database import Base
from shared.repository import BaseRepository
from .models import Account

logger = logging.getLogger(__name__)


class AccountRow(Base):
    __tablename__ = "accounts"
    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    record: Mapped[str] = mapped_column(Text, nullable=False)


class SqlAlchemyAccountStore(BaseRepository[Account]):
    """
    Account store backed by SQLAlchemy.

    Records are stored as JSON produced by the Account model, so the store
    only deals in keys and opaque payloads.
    """

    def get(self, key: str) -> Optional[Account]:
        with self._session("get") as session:
            row = session.get(AccountRow, key)
            return self._map_to_account(row) if row else None

    def insert(self, key: str, record: Account) -> Optional[Account]:
        """Store record under key, returning the record it replaced."""
        with self._session("insert") as session:
            row = session.get(AccountRow, key)
            previous = self._map_to_account(row) if row else None
            payload = record.model_dump_json()
            if row is None:
                session.add(AccountRow(key=key, record=payload))
            else:
                row.record = payload
        logger.debug("store: %s key=%s", "replaced" if previous else "inserted", key)
        return previous

    def remove(self, key: str) -> Optional[Account]:
        with self._session("remove") as session:
            row = session.get(AccountRow, key)
            if row is None:
                return None
            removed = self._map_to_account(row)
            session.delete(row)
        logger.debug("store: removed key=%s", key)
        return removed

    def values(self) -> list[Account]:
        """Return every record ordered by key."""
        with self._session("values") as session:
            rows = session.scalars(select(AccountRow).order_by(AccountRow.key.asc())).all()
            return [self._map_to_account(row) for row in rows]

    def move(self, old_key: str, new_key: str, record: Account) -> Optional[Account]:
        """
        Store record under new_key and delete old_key in one transaction.

        Returns the record previously stored under new_key, if any.
        """
        with self._session("move") as session:
            target = session.get(AccountRow, new_key)
            previous = self._map_to_account(target) if target else None
            payload = record.model_dump_json()
            if target is None:
                session.add(AccountRow(key=new_key, record=payload))
            else:
                target.record = payload
            source = session.get(AccountRow, old_key)
            if source is not None:
                session.delete(source)
        logger.debug("store: moved key=%s to key=%s", old_key, new_key)
        return previous

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_account(self, row: AccountRow) -> Account:
        return Account.model_validate_json(row.record)
