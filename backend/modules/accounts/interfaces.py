"""
Accounts module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with fakes and swapping the backing
store.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import Account, UserPayload, UpdateUserPayload


@runtime_checkable
class IAccountStore(Protocol):
    """
    Durable, key-ordered mapping from account key to account record.

    Every call is atomic and durable once it returns. The store never
    inspects record contents.
    """

    def get(self, key: str) -> Optional[Account]:
        """Return the record stored under key, or None."""
        ...

    def insert(self, key: str, record: Account) -> Optional[Account]:
        """Store record under key, returning the previous record if any."""
        ...

    def remove(self, key: str) -> Optional[Account]:
        """Delete the record under key, returning it if it existed."""
        ...

    def values(self) -> list[Account]:
        """Return all records ordered by key."""
        ...

    def move(self, old_key: str, new_key: str, record: Account) -> Optional[Account]:
        """Store record under new_key and delete old_key atomically."""
        ...


@runtime_checkable
class IAccountService(Protocol):
    """
    Interface for account lifecycle operations.

    Each method is a single atomic operation. Failures raise a subclass of
    AccountError and leave the store unchanged.
    """

    def get_users(self) -> list[Account]:
        """Return every account in key order. Never fails."""
        ...

    def get_user(self, key: str) -> Account:
        """
        Get an account by key.

        Raises:
            AccountNotFoundError: If no account has this key
        """
        ...

    def register_user(self, payload: UserPayload, caller: Optional[str] = None) -> Account:
        """
        Register an account.

        Args:
            payload: Username, email and password
            caller: Caller identity to use as the key; a fresh key is
                generated when omitted

        Raises:
            UnauthorizedError: If the caller is anonymous
            AlreadyRegisteredError: If the key is taken
        """
        ...

    def login_caller(self, caller: str) -> Account:
        """Open a session for the caller's own account."""
        ...

    def login_user(self, username: str, password: str) -> Account:
        """Return the account matching username and password."""
        ...

    def logout_user(self, caller: str) -> Account:
        """Close the caller's session."""
        ...

    def check_session(self, caller: str) -> Account:
        """Return the caller's account if its session is still valid."""
        ...

    def delete_user(self, key: str, caller: str) -> Account:
        """Delete an account as its owner or as the admin."""
        ...

    def update_user(self, key: str, payload: UpdateUserPayload) -> Account:
        """Update profile fields, keeping any left empty."""
        ...

    def change_password(self, key: str, new_password: str) -> Account:
        """Replace an account's password."""
        ...

    def request_password_reset(self, email: str) -> str:
        """Issue a reset token for the account with this email."""
        ...

    def reset_password(self, token: str, new_password: str) -> Account:
        """Redeem a reset token and set a new password."""
        ...

    def reclaim_account(self, caller: str, target_key: str, secret: str) -> str:
        """Take over an account by presenting its password."""
        ...
