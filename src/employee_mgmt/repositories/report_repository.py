"""Read-only reporting queries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Sequence

from sqlalchemy import Numeric, and_, case, extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import (
    Address,
    Division,
    Employee,
    EmployeeDivision,
    EmployeeJobTitle,
    EmploymentStatus,
    Gender,
    JobTitle,
)
from employee_mgmt.money import ZERO, coerce_money, round_to_cents, to_decimal
from employee_mgmt.repositories.base import translates_db_errors


@dataclass(frozen=True)
class HeadcountRow:
    """Active headcount and salary spread for one division or job title."""

    group_id: int
    group_name: str
    employee_count: int
    average_salary: Decimal
    min_salary: Decimal
    max_salary: Decimal


@dataclass(frozen=True)
class SalaryBandRow:
    """Active employees whose salary falls in one band."""

    salary_range: str
    employee_count: int
    min_salary: Decimal
    max_salary: Decimal
    average_salary: Decimal


@dataclass(frozen=True)
class TenureBandRow:
    """Active employees whose length of service falls in one band."""

    tenure_range: str
    employee_count: int
    average_salary: Decimal


@dataclass(frozen=True)
class DemographicsSummary:
    """Headline figures over ACTIVE employees."""

    total_employees: int
    male_count: int
    female_count: int
    other_gender_count: int
    prefer_not_to_say_count: int
    average_age: Decimal | None
    earliest_hire_date: date | None
    latest_hire_date: date | None
    average_salary: Decimal


# (upper bound exclusive, label); the last band is open-ended
SALARY_BANDS: tuple[tuple[Decimal | None, str], ...] = (
    (Decimal("40000"), "Under $40K"),
    (Decimal("60000"), "$40K - $60K"),
    (Decimal("80000"), "$60K - $80K"),
    (Decimal("100000"), "$80K - $100K"),
    (Decimal("120000"), "$100K - $120K"),
    (None, "$120K+"),
)

# (upper bound in days of service, exclusive; label)
TENURE_BANDS: tuple[tuple[int | None, str], ...] = (
    (365, "Less than 1 year"),
    (1095, "1-3 years"),
    (1825, "3-5 years"),
    (3650, "5-10 years"),
    (None, "10+ years"),
)


def band_for(value, bands) -> int:
    """Index of the first band whose upper bound exceeds ``value``."""
    for index, (upper, _label) in enumerate(bands):
        if upper is None or value < upper:
            return index
    return len(bands) - 1


def _average(values: list[Decimal]) -> Decimal:
    return round_to_cents(sum(values, ZERO) / len(values)) if values else ZERO


class ReportRepository:
    """Queries behind the hiring, headcount, salary, tenure and demographics reports."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translates_db_errors
    async def employees_hired_between(self, start: date, end: date) -> Sequence[Employee]:
        """Employees hired in [start, end], earliest first, then by name.

        Address, city, state and assignment history come along through the
        mapper's eager loaders.
        """
        result = await self.session.execute(
            select(Employee)
            .where(Employee.hire_date >= start, Employee.hire_date <= end)
            .order_by(Employee.hire_date, Employee.last_name, Employee.first_name)
        )
        return result.scalars().all()

    @translates_db_errors
    async def headcount_by_division(self) -> list[HeadcountRow]:
        employee_count = func.count(Employee.empid).label("employee_count")
        stmt = (
            select(
                Division.div_id,
                Division.division_name,
                employee_count,
                func.avg(Employee.current_salary),
                func.min(Employee.current_salary),
                func.max(Employee.current_salary),
            )
            .select_from(Division)
            .outerjoin(
                EmployeeDivision,
                and_(
                    EmployeeDivision.div_id == Division.div_id,
                    EmployeeDivision.is_current.is_(True),
                ),
            )
            .outerjoin(
                Employee,
                and_(
                    Employee.empid == EmployeeDivision.empid,
                    Employee.employment_status == EmploymentStatus.ACTIVE,
                ),
            )
            .group_by(Division.div_id, Division.division_name)
            .order_by(employee_count.desc(), Division.division_name)
        )
        return await self._headcount_rows(stmt)

    @translates_db_errors
    async def headcount_by_job_title(self) -> list[HeadcountRow]:
        employee_count = func.count(Employee.empid).label("employee_count")
        stmt = (
            select(
                JobTitle.job_title_id,
                JobTitle.job_title,
                employee_count,
                func.avg(Employee.current_salary),
                func.min(Employee.current_salary),
                func.max(Employee.current_salary),
            )
            .select_from(JobTitle)
            .outerjoin(
                EmployeeJobTitle,
                and_(
                    EmployeeJobTitle.job_title_id == JobTitle.job_title_id,
                    EmployeeJobTitle.is_current.is_(True),
                ),
            )
            .outerjoin(
                Employee,
                and_(
                    Employee.empid == EmployeeJobTitle.empid,
                    Employee.employment_status == EmploymentStatus.ACTIVE,
                ),
            )
            .group_by(JobTitle.job_title_id, JobTitle.job_title)
            .order_by(employee_count.desc(), JobTitle.job_title)
        )
        return await self._headcount_rows(stmt)

    async def _headcount_rows(self, stmt) -> list[HeadcountRow]:
        result = await self.session.execute(stmt)
        return [
            HeadcountRow(
                group_id=row[0],
                group_name=row[1],
                employee_count=int(row[2]),
                average_salary=coerce_money(row[3]),
                min_salary=coerce_money(row[4]),
                max_salary=coerce_money(row[5]),
            )
            for row in result.all()
        ]

    @translates_db_errors
    async def _active_salaries_and_hire_dates(self) -> list[tuple[Decimal, date]]:
        result = await self.session.execute(
            select(Employee.current_salary, Employee.hire_date).where(
                Employee.employment_status == EmploymentStatus.ACTIVE
            )
        )
        return [(coerce_money(salary), hire_date) for salary, hire_date in result.all()]

    async def salary_distribution(self) -> list[SalaryBandRow]:
        """ACTIVE employees bucketed by salary band, lowest band first.

        Bands with nobody in them are omitted.
        """
        buckets: dict[int, list[Decimal]] = {}
        for salary, _hire_date in await self._active_salaries_and_hire_dates():
            buckets.setdefault(band_for(salary, SALARY_BANDS), []).append(salary)
        return [
            SalaryBandRow(
                salary_range=SALARY_BANDS[index][1],
                employee_count=len(salaries),
                min_salary=min(salaries),
                max_salary=max(salaries),
                average_salary=_average(salaries),
            )
            for index, salaries in sorted(buckets.items())
        ]

    async def tenure_distribution(self, as_of: date) -> list[TenureBandRow]:
        """ACTIVE employees bucketed by days of service at ``as_of``, newest hires first."""
        buckets: dict[int, list[Decimal]] = {}
        for salary, hire_date in await self._active_salaries_and_hire_dates():
            days = (as_of - hire_date).days
            buckets.setdefault(band_for(days, TENURE_BANDS), []).append(salary)
        return [
            TenureBandRow(
                tenure_range=TENURE_BANDS[index][1],
                employee_count=len(salaries),
                average_salary=_average(salaries),
            )
            for index, salaries in sorted(buckets.items())
        ]

    @translates_db_errors
    async def demographics(self, as_of: date) -> DemographicsSummary:
        """Gender split, average age and hire-date span of ACTIVE employees.

        Age is the difference in calendar years, as an HR summary shows it.
        """
        stmt = (
            select(
                func.count(Employee.empid),
                func.count(case((Address.gender == Gender.M, 1))),
                func.count(case((Address.gender == Gender.F, 1))),
                func.count(case((Address.gender == Gender.OTHER, 1))),
                func.count(case((Address.gender == Gender.PREFER_NOT_TO_SAY, 1))),
                func.avg(extract("year", Address.date_of_birth), type_=Numeric(10, 2)),
                func.min(Employee.hire_date),
                func.max(Employee.hire_date),
                func.avg(Employee.current_salary),
            )
            .select_from(Employee)
            .outerjoin(Address, Address.empid == Employee.empid)
            .where(Employee.employment_status == EmploymentStatus.ACTIVE)
        )
        row = (await self.session.execute(stmt)).one()
        birth_year = to_decimal(row[5])
        return DemographicsSummary(
            total_employees=int(row[0]),
            male_count=int(row[1]),
            female_count=int(row[2]),
            other_gender_count=int(row[3]),
            prefer_not_to_say_count=int(row[4]),
            average_age=round_to_cents(as_of.year - birth_year) if birth_year is not None else None,
            earliest_hire_date=row[6],
            latest_hire_date=row[7],
            average_salary=coerce_money(row[8]),
        )
