"""
Accounts module data models.

These models define the account record persisted by the store and the
payloads callers submit to create or update an account.
"""

from typing import Optional
from pydantic import BaseModel, Field


class Account(BaseModel):
    """
    A registered account.

    Records are immutable; every state change produces a new copy via
    ``model_copy(update=...)`` that is written back under the same key.
    Timestamps are host-clock nanoseconds since the epoch.
    """

    id: str = Field(..., description="Account key (caller identity or generated UUID)")
    username: str = Field(..., description="Login handle")
    email: Optional[str] = Field(None, description="Contact and reset-request address")
    password: str = Field(..., description="Credential, compared by equality")
    created_at: int = Field(..., ge=0, description="Registration time in nanoseconds")

    # Session state
    logged_in: bool = Field(default=False, description="Whether a session is open")
    session_expiry: Optional[int] = Field(None, description="Session end in nanoseconds")

    # Password reset
    reset_token: Optional[str] = Field(None, description="Pending single-use reset token")

    model_config = {"frozen": True}

    def session_expired(self, now: int) -> bool:
        """True when a session is open but its expiry has passed."""
        return self.logged_in and self.session_expiry is not None and now >= self.session_expiry


class UserPayload(BaseModel):
    """Request to register a new account."""

    username: str = Field(..., min_length=1, description="Login handle")
    email: Optional[str] = Field(None, description="Contact address")
    password: str = Field(..., min_length=1, description="Credential")


class UpdateUserPayload(BaseModel):
    """
    Request to update an account's profile.

    Missing or empty fields keep the stored value.
    """

    username: Optional[str] = Field(None, description="New login handle")
    email: Optional[str] = Field(None, description="New contact address")
    password: Optional[str] = Field(None, description="New credential")

    def changes(self) -> dict[str, str]:
        """Return only the fields that carry a non-empty value."""
        return {key: value for key, value in self.model_dump().items() if value}
