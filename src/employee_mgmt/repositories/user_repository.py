"""Data access for login accounts."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import User
from employee_mgmt.repositories.base import translates_db_errors


def normalize_username(username: str) -> str:
    return username.strip().lower()


class UserRepository:
    """Queries over ``users``. Usernames are matched trimmed and lower-cased."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translates_db_errors
    async def get(self, user_id: int) -> User | None:
        return await self.session.get(User, user_id)

    @translates_db_errors
    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(
            select(User).where(func.lower(User.username) == normalize_username(username))
        )
        return result.scalar_one_or_none()

    @translates_db_errors
    async def get_active_by_username(self, username: str) -> User | None:
        result = await self.session.execute(
            select(User).where(
                func.lower(User.username) == normalize_username(username),
                User.is_active.is_(True),
            )
        )
        return result.scalar_one_or_none()

    @translates_db_errors
    async def username_exists(self, username: str) -> bool:
        stmt = (
            select(func.count())
            .select_from(User)
            .where(func.lower(User.username) == normalize_username(username))
        )
        return (await self.session.scalar(stmt) or 0) > 0

    @translates_db_errors
    async def list_all(self) -> Sequence[User]:
        result = await self.session.execute(select(User).order_by(User.username))
        return result.scalars().all()

    @translates_db_errors
    async def add(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user, attribute_names=["employee"])
        return user

    @translates_db_errors
    async def set_password_hash(self, user_id: int, password_hash: str) -> bool:
        result = await self.session.execute(
            update(User).where(User.user_id == user_id).values(password_hash=password_hash)
        )
        return result.rowcount > 0

    @translates_db_errors
    async def set_active(self, user_id: int, active: bool) -> bool:
        result = await self.session.execute(
            update(User).where(User.user_id == user_id).values(is_active=active)
        )
        return result.rowcount > 0

    @translates_db_errors
    async def touch_last_login(self, user_id: int, when: datetime) -> None:
        await self.session.execute(
            update(User).where(User.user_id == user_id).values(last_login=when)
        )
