"""Data access for divisions and job titles."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import Division, JobTitle
from employee_mgmt.repositories.base import translates_db_errors


class DivisionRepository:
    """Queries over ``division``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translates_db_errors
    async def get(self, div_id: int) -> Division | None:
        return await self.session.get(Division, div_id)

    @translates_db_errors
    async def get_by_code(self, code: str) -> Division | None:
        result = await self.session.execute(
            select(Division).where(Division.division_code == code.strip().upper())
        )
        return result.scalar_one_or_none()

    @translates_db_errors
    async def get_by_name(self, name: str) -> Division | None:
        result = await self.session.execute(
            select(Division).where(func.lower(Division.division_name) == name.strip().lower())
        )
        return result.scalar_one_or_none()

    @translates_db_errors
    async def list_all(self) -> Sequence[Division]:
        result = await self.session.execute(select(Division).order_by(Division.division_name))
        return result.scalars().all()

    @translates_db_errors
    async def add(self, division: Division) -> Division:
        self.session.add(division)
        await self.session.flush()
        return division


class JobTitleRepository:
    """Queries over ``job_titles``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translates_db_errors
    async def get(self, job_title_id: int) -> JobTitle | None:
        return await self.session.get(JobTitle, job_title_id)

    @translates_db_errors
    async def get_by_title(self, title: str) -> JobTitle | None:
        result = await self.session.execute(
            select(JobTitle).where(func.lower(JobTitle.job_title) == title.strip().lower())
        )
        return result.scalar_one_or_none()

    @translates_db_errors
    async def list_all(self) -> Sequence[JobTitle]:
        result = await self.session.execute(select(JobTitle).order_by(JobTitle.job_title))
        return result.scalars().all()

    @translates_db_errors
    async def add(self, job_title: JobTitle) -> JobTitle:
        self.session.add(job_title)
        await self.session.flush()
        return job_title
