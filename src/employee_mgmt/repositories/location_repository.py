"""Data access for the state and city lookup tables."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import City, State
from employee_mgmt.repositories.base import translates_db_errors


class StateRepository:
    """Queries over ``state``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translates_db_errors
    async def get(self, state_id: int) -> State | None:
        return await self.session.get(State, state_id)

    @translates_db_errors
    async def list_all(self) -> Sequence[State]:
        result = await self.session.execute(select(State).order_by(State.state_name))
        return result.scalars().all()


class CityRepository:
    """Queries over ``city``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translates_db_errors
    async def get(self, city_id: int) -> City | None:
        return await self.session.get(City, city_id)

    @translates_db_errors
    async def list_by_state(self, state_id: int) -> Sequence[City]:
        result = await self.session.execute(
            select(City).where(City.state_id == state_id).order_by(City.city_name)
        )
        return result.scalars().all()

    @translates_db_errors
    async def list_all(self) -> Sequence[City]:
        result = await self.session.execute(select(City).order_by(City.city_name))
        return result.scalars().all()
