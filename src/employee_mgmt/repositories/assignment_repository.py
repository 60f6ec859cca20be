"""Data access for division and job title assignment history."""

from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import EmployeeDivision, EmployeeJobTitle
from employee_mgmt.repositories.base import translates_db_errors


class AssignmentRepository:
    """Append-only history rows in ``employee_division`` and ``employee_job_titles``.

    A new assignment closes the current row (``end_date`` back-filled,
    ``is_current`` cleared) and appends a new current row. Nothing here
    enforces a single current row per employee beyond that discipline.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @translates_db_errors
    async def current_division(self, empid: int) -> EmployeeDivision | None:
        result = await self.session.execute(
            select(EmployeeDivision)
            .where(EmployeeDivision.empid == empid, EmployeeDivision.is_current.is_(True))
            .order_by(EmployeeDivision.start_date.desc())
        )
        return result.scalars().first()

    @translates_db_errors
    async def current_job_title(self, empid: int) -> EmployeeJobTitle | None:
        result = await self.session.execute(
            select(EmployeeJobTitle)
            .where(EmployeeJobTitle.empid == empid, EmployeeJobTitle.is_current.is_(True))
            .order_by(EmployeeJobTitle.start_date.desc())
        )
        return result.scalars().first()

    @translates_db_errors
    async def assign_division(self, empid: int, div_id: int, start: date) -> EmployeeDivision:
        current = await self.current_division(empid)
        if current is not None:
            current.end_date = start
            current.is_current = False
        row = EmployeeDivision(empid=empid, div_id=div_id, start_date=start, is_current=True)
        self.session.add(row)
        await self.session.flush()
        return row

    @translates_db_errors
    async def assign_job_title(self, empid: int, job_title_id: int, start: date) -> EmployeeJobTitle:
        current = await self.current_job_title(empid)
        if current is not None:
            current.end_date = start
            current.is_current = False
        row = EmployeeJobTitle(
            empid=empid,
            job_title_id=job_title_id,
            start_date=start,
            is_current=True,
        )
        self.session.add(row)
        await self.session.flush()
        return row
