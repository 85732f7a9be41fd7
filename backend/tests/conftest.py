"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest

from shared.config import Settings, get_settings
from shared.database import create_db_engine, get_session_factory, init_db, reset_engine_cache
from modules.accounts.service import AccountService, reset_account_service
from modules.accounts.store import SqlAlchemyAccountStore


ADMIN_IDENTITY = "admin-principal"
ANONYMOUS_IDENTITY = "2vxsx-fae"
SECOND = 1_000_000_000


class FakeClock:
    """Controllable nanosecond clock."""

    def __init__(self, start: int = 1_700_000_000 * SECOND):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(seconds * SECOND)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, engine and service before and after each test."""
    get_settings.cache_clear()
    reset_engine_cache()
    reset_account_service()
    yield
    get_settings.cache_clear()
    reset_engine_cache()
    reset_account_service()


@pytest.fixture
def engine():
    """Provide a fresh in-memory database with the schema created."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine) -> SqlAlchemyAccountStore:
    return SqlAlchemyAccountStore(get_session_factory(engine))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        admin_identity=ADMIN_IDENTITY,
        anonymous_identity=ANONYMOUS_IDENTITY,
        session_duration_seconds=30,
        reset_token_length=5,
    )


@pytest.fixture
def service(store, settings, clock) -> AccountService:
    """Provide an account service over an empty in-memory store."""
    return AccountService(store, settings=settings, clock=clock)
