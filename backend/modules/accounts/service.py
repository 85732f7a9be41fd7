"""
Account lifecycle service implementation.

Registration, lookup, login sessions, password resets, deletion and
account reclaim on top of a durable account store.

Every public method is one atomic operation: it validates first and then
performs a single store write, so a raised error means nothing was written.
The one exception is check_session, which closes an expired session before
reporting it.
Email, username and reset-token lookups are linear scans over the store.
"""

import logging
import time
import uuid
from collections.abc import Callable
from typing import Optional

from shared.config import Settings, get_settings
from shared.database import get_session_factory

from .interfaces import IAccountService, IAccountStore
from .models import Account, UserPayload, UpdateUserPayload
from .store import SqlAlchemyAccountStore
from .tokens import generate_reset_token
from .exceptions import (
    AccountNotFoundError,
    AlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    NotLoggedInError,
    SessionExpiredError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

NANOS_PER_SECOND = 1_000_000_000


class AccountService(IAccountService):
    """
    Implementation of the account lifecycle.

    The admin identity, session length and reset-token length come from the
    settings passed in at construction. The clock returns nanoseconds since
    the epoch and defaults to ``time.time_ns``.
    """

    def __init__(
        self,
        store: IAccountStore,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self._store = store
        self._settings = settings or get_settings()
        self._clock = clock or time.time_ns
        self._admin_identity = self._settings.admin_identity

    @property
    def admin_identity(self) -> Optional[str]:
        return self._admin_identity

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_users(self) -> list[Account]:
        return self._store.values()

    def get_user(self, key: str) -> Account:
        return self._require(key)

    # -------------------------------------------------------------------------
    # Registration and profile
    # -------------------------------------------------------------------------

    def register_user(self, payload: UserPayload, caller: Optional[str] = None) -> Account:
        """
        Register an account.

        With a caller identity the account is keyed by that identity and the
        anonymous identity is refused. Without one a UUID key is generated.
        """
        if caller is not None:
            if caller == self._settings.anonymous_identity:
                logger.warning("Rejected registration from anonymous caller")
                raise UnauthorizedError("Anonymous callers cannot register", caller=caller)
            key = caller
        else:
            key = str(uuid.uuid4())

        if self._store.get(key) is not None:
            raise AlreadyRegisteredError(key)

        account = Account(
            id=key,
            username=payload.username,
            email=payload.email,
            password=payload.password,
            created_at=self._clock(),
        )
        self._store.insert(key, account)
        logger.info("Registered account %s", key)
        return account

    def update_user(self, key: str, payload: UpdateUserPayload) -> Account:
        account = self._require(key)
        updated = account.model_copy(update=payload.changes())
        self._store.insert(key, updated)
        logger.info("Updated profile of account %s", key)
        return updated

    def change_password(self, key: str, new_password: str) -> Account:
        account = self._require(key)
        updated = account.model_copy(update={"password": new_password})
        self._store.insert(key, updated)
        logger.info("Changed password of account %s", key)
        return updated

    # -------------------------------------------------------------------------
    # Authentication and sessions
    # -------------------------------------------------------------------------

    def login_caller(self, caller: str) -> Account:
        """
        Open a session for the caller's account.

        The caller identity is trusted as the credential. Logging in again
        while a session is open extends it.
        """
        account = self._require(caller)
        expiry = self._clock() + self._settings.session_duration_seconds * NANOS_PER_SECOND
        updated = account.model_copy(update={"logged_in": True, "session_expiry": expiry})
        self._store.insert(caller, updated)
        logger.info("Account %s logged in", caller)
        return updated

    def login_user(self, username: str, password: str) -> Account:
        """
        Find the account matching a username and password.

        Read-only. The error does not say whether the username exists.
        """
        for account in self._store.values():
            if account.username == username and account.password == password:
                return account
        logger.warning("Failed credential login")
        raise InvalidCredentialsError()

    def logout_user(self, caller: str) -> Account:
        account = self._require(caller)
        if not account.logged_in:
            raise NotLoggedInError(caller)
        updated = self._end_session(account)
        logger.info("Account %s logged out", caller)
        return updated

    def check_session(self, caller: str) -> Account:
        """
        Return the caller's account if its session is still open.

        Expiry is checked lazily here; an expired session is closed before
        SessionExpiredError is raised.
        """
        account = self._require(caller)
        if not account.logged_in:
            raise NotLoggedInError(caller)
        if account.session_expired(self._clock()):
            expired_at = account.session_expiry
            self._end_session(account)
            logger.info("Session of account %s expired", caller)
            raise SessionExpiredError(caller, expired_at)
        return account

    # -------------------------------------------------------------------------
    # Deletion and reclaim
    # -------------------------------------------------------------------------

    def delete_user(self, key: str, caller: str) -> Account:
        """
        Delete an account.

        Owners may delete their own account and the admin may delete any.
        Other callers are refused before the target is looked up.
        """
        if caller != key and (self._admin_identity is None or caller != self._admin_identity):
            logger.warning("Caller %s not authorized to delete account %s", caller, key)
            raise UnauthorizedError("Only the account owner or the admin can delete users", caller=caller)

        removed = self._store.remove(key)
        if removed is None:
            raise AccountNotFoundError(key)
        logger.info("Deleted account %s (by %s)", key, caller)
        return removed

    def reclaim_account(self, caller: str, target_key: str, secret: str) -> str:
        """
        Copy an account to the caller's key when the secret matches its password.

        The original record stays under its old key unless
        ``reclaim_removes_original`` is enabled.
        """
        if caller == self._settings.anonymous_identity:
            raise UnauthorizedError("Anonymous callers cannot reclaim accounts", caller=caller)

        target = self._require(target_key)
        if target.password != secret:
            logger.warning("Reclaim of account %s refused: secret mismatch", target_key)
            raise InvalidCredentialsError("Invalid reclaim secret")

        claimed = target.model_copy(update={"id": caller})
        if self._settings.reclaim_removes_original and caller != target_key:
            self._store.move(target_key, caller, claimed)
        else:
            self._store.insert(caller, claimed)
        logger.info("Account %s reclaimed by %s", target_key, caller)
        return f"Account {target_key} reclaimed by {caller}"

    # -------------------------------------------------------------------------
    # Password reset
    # -------------------------------------------------------------------------

    def request_password_reset(self, email: str) -> str:
        """
        Issue a reset token for the first account with this email.

        Any earlier token on the account is replaced. The token is returned
        to the requester directly.
        """
        account = next((u for u in self._store.values() if u.email == email), None)
        if account is None:
            raise AccountNotFoundError(message="User with the specified email not found")

        token = generate_reset_token(self._settings.reset_token_length)
        self._store.insert(account.id, account.model_copy(update={"reset_token": token}))
        logger.info("Issued password reset for account %s", account.id)
        return token

    def reset_password(self, token: str, new_password: str) -> Account:
        account = next(
            (u for u in self._store.values() if u.reset_token == token),
            None,
        )
        if account is None:
            raise InvalidResetTokenError()

        updated = account.model_copy(update={"password": new_password, "reset_token": None})
        self._store.insert(account.id, updated)
        logger.info("Password reset redeemed for account %s", account.id)
        return updated

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require(self, key: str) -> Account:
        account = self._store.get(key)
        if account is None:
            raise AccountNotFoundError(key)
        return account

    def _end_session(self, account: Account) -> Account:
        updated = account.model_copy(update={"logged_in": False, "session_expiry": None})
        self._store.insert(account.id, updated)
        return updated


# Module-level instance getter
_service_instance: Optional[AccountService] = None


def get_account_service() -> AccountService:
    """Get the account service singleton backed by the configured database."""
    global _service_instance
    if _service_instance is None:
        store = SqlAlchemyAccountStore(get_session_factory())
        _service_instance = AccountService(store, get_settings())
    return _service_instance


def reset_account_service() -> None:
    """Reset the account service singleton (for testing)."""
    global _service_instance
    _service_instance = None
