"""Pytest fixtures for employee management tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import date
from typing import Callable

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from employee_mgmt.config import Settings
from employee_mgmt.database import Database
from employee_mgmt.models import Base, User, UserRole
from employee_mgmt.sample_data import load_sample_data
from employee_mgmt.services import UserSession, ValidationService
from employee_mgmt.services.passwords import hash_password

# In-memory SQLite shared across sessions through a single pooled connection
TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_PASSWORD = "Password123!"

# Fixed "today" so date-relative validation stays stable
TODAY = date(2024, 6, 15)


def make_settings() -> Settings:
    return Settings(
        database_url=TEST_DATABASE_URL,
        pool_size=1,
        max_overflow=0,
        pool_timeout=5,
        pool_recycle=600,
        echo_sql=False,
        host="127.0.0.1",
        port=8000,
        debug=False,
        log_level="WARNING",
    )


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def today() -> Callable[[], date]:
    return lambda: TODAY


@pytest.fixture
def validator(today) -> ValidationService:
    return ValidationService(today=today)


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database with every table created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def database(settings, engine) -> Database:
    return Database(settings, engine=engine)


@pytest_asyncio.fixture
async def seeded(database) -> dict[str, int]:
    """Commit the sample dataset plus hradmin, alice and emma logins.

    Returns emp_number → empid, with user ids under ``user:<username>``.
    """
    async with database.session() as session:
        ids = await load_sample_data(session)
        users = [
            User(
                username="hradmin",
                password_hash=hash_password(TEST_PASSWORD),
                user_role=UserRole.HR_ADMIN,
            ),
            User(
                username="alice",
                password_hash=hash_password(TEST_PASSWORD),
                user_role=UserRole.EMPLOYEE,
                empid=ids["E1001"],
            ),
            User(
                username="emma",
                password_hash=hash_password(TEST_PASSWORD),
                user_role=UserRole.EMPLOYEE,
                empid=ids["E1005"],
            ),
        ]
        session.add_all(users)
        await session.flush()
        ids.update({f"user:{u.username}": u.user_id for u in users})
    return ids


@pytest_asyncio.fixture
async def session(database, seeded) -> AsyncGenerator[AsyncSession, None]:
    """Session over the seeded database; uncommitted work is discarded."""
    async with database.session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def admin(seeded) -> UserSession:
    return UserSession(
        user_id=seeded["user:hradmin"],
        username="hradmin",
        role=UserRole.HR_ADMIN,
        full_name="hradmin",
    )


@pytest.fixture
def alice(seeded) -> UserSession:
    """EMPLOYEE login linked to E1001."""
    return UserSession(
        user_id=seeded["user:alice"],
        username="alice",
        role=UserRole.EMPLOYEE,
        employee_id=seeded["E1001"],
        full_name="Alice Johnson",
    )


@pytest.fixture
def emma(seeded) -> UserSession:
    """EMPLOYEE login linked to E1005."""
    return UserSession(
        user_id=seeded["user:emma"],
        username="emma",
        role=UserRole.EMPLOYEE,
        employee_id=seeded["E1005"],
        full_name="Emma Wilson",
    )
