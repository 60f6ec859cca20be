"""Data access for employees."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import Address, Employee, EmploymentStatus
from employee_mgmt.repositories.base import translates_db_errors


class EmployeeRepository:
    """Parameterized queries over the ``employees`` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translates_db_errors
    async def get(self, empid: int) -> Employee | None:
        result = await self.session.execute(
            select(Employee)
            .where(Employee.empid == empid)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @translates_db_errors
    async def get_by_number(self, emp_number: str) -> Employee | None:
        result = await self.session.execute(
            select(Employee).where(Employee.emp_number == emp_number.strip())
        )
        return result.scalar_one_or_none()

    @translates_db_errors
    async def get_by_ssn(self, ssn: str) -> Employee | None:
        result = await self.session.execute(select(Employee).where(Employee.ssn == ssn.strip()))
        return result.scalar_one_or_none()

    async def emp_number_taken(self, emp_number: str, exclude_empid: int | None = None) -> bool:
        return await self._taken(Employee.emp_number, emp_number, exclude_empid)

    async def email_taken(self, email: str, exclude_empid: int | None = None) -> bool:
        return await self._taken(func.lower(Employee.email), email.lower(), exclude_empid)

    async def ssn_taken(self, ssn: str, exclude_empid: int | None = None) -> bool:
        return await self._taken(Employee.ssn, ssn, exclude_empid)

    @translates_db_errors
    async def _taken(self, column, value: str, exclude_empid: int | None) -> bool:
        stmt = select(func.count()).select_from(Employee).where(column == value.strip())
        if exclude_empid is not None:
            stmt = stmt.where(Employee.empid != exclude_empid)
        return (await self.session.scalar(stmt) or 0) > 0

    @translates_db_errors
    async def add(self, employee: Employee) -> Employee:
        """Insert an employee (and any attached address) and assign its id."""
        self.session.add(employee)
        await self.session.flush()
        return employee

    @translates_db_errors
    async def save(self, employee: Employee) -> Employee:
        """Flush pending changes; ``updated_at`` is bumped by the mapper."""
        await self.session.flush()
        return employee

    @translates_db_errors
    async def flush(self) -> None:
        """Write every pending change in the session."""
        await self.session.flush()

    @translates_db_errors
    async def list_all(self) -> Sequence[Employee]:
        result = await self.session.execute(
            select(Employee).order_by(Employee.last_name, Employee.first_name)
        )
        return result.scalars().all()

    @translates_db_errors
    async def list_active(self) -> Sequence[Employee]:
        result = await self.session.execute(
            select(Employee)
            .where(Employee.employment_status == EmploymentStatus.ACTIVE)
            .order_by(Employee.last_name, Employee.first_name)
        )
        return result.scalars().all()

    @translates_db_errors
    async def search_by_name(self, fragment: str) -> Sequence[Employee]:
        """Match the fragment against first, last or full name."""
        fragment = fragment.strip()
        full_name = Employee.first_name + " " + Employee.last_name
        result = await self.session.execute(
            select(Employee)
            .where(
                or_(
                    Employee.first_name.icontains(fragment, autoescape=True),
                    Employee.last_name.icontains(fragment, autoescape=True),
                    full_name.icontains(fragment, autoescape=True),
                )
            )
            .order_by(Employee.last_name, Employee.first_name)
        )
        return result.scalars().all()

    @translates_db_errors
    async def find_by_date_of_birth(self, dob: date) -> Sequence[Employee]:
        result = await self.session.execute(
            select(Employee)
            .join(Address, Address.empid == Employee.empid)
            .where(Address.date_of_birth == dob)
            .order_by(Employee.last_name, Employee.first_name)
        )
        return result.scalars().all()

    @translates_db_errors
    async def find_active_in_salary_range(
        self,
        min_salary: Decimal,
        max_salary: Decimal,
    ) -> Sequence[Employee]:
        """ACTIVE employees with min <= current_salary <= max, lowest first."""
        result = await self.session.execute(
            select(Employee)
            .where(
                Employee.employment_status == EmploymentStatus.ACTIVE,
                Employee.current_salary >= min_salary,
                Employee.current_salary <= max_salary,
            )
            .order_by(Employee.current_salary, Employee.empid)
        )
        return result.scalars().all()
