"""HR reports: hiring by date range, monthly pay totals, headcount and workforce analysis."""

from __future__ import annotations

import calendar
import csv
import io
import logging
from datetime import date
from typing import Any, Iterable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.repositories import (
    DemographicsSummary,
    HeadcountRow,
    PayrollRepository,
    ReportRepository,
    SalaryBandRow,
    TenureBandRow,
)
from employee_mgmt.services.authorization import UserSession
from employee_mgmt.services.base import ServiceBase, service_operation
from employee_mgmt.services.results import ServiceResult
from employee_mgmt.services.types import HiringReport, HiringReportRow, MonthlyPayReport
from employee_mgmt.services.validation import ValidationService

logger = logging.getLogger(__name__)

HIRING_REPORT_HEADERS = (
    "empid",
    "emp_number",
    "first_name",
    "last_name",
    "email",
    "hire_date",
    "current_salary",
    "employment_status",
    "street",
    "city_name",
    "state_code",
    "zip",
    "division_name",
    "job_title",
)

MONTHLY_PAY_HEADERS = ("group_name", "total_gross_pay", "total_net_pay", "record_count")


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def to_csv(rows: Iterable[Any], headers: Sequence[str]) -> str:
    """Render report rows (dataclasses) as CSV with a header line."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(["" if getattr(row, h) is None else getattr(row, h) for h in headers])
    return buffer.getvalue()


class ReportService(ServiceBase):
    """Read-only reports, HR_ADMIN only.

    The role check happens before any query is issued.
    """

    def __init__(self, session: AsyncSession, validator: ValidationService | None = None):
        super().__init__(session, validator)
        self.reports = ReportRepository(session)
        self.payroll = PayrollRepository(session)

    @service_operation()
    async def hiring_report(
        self,
        user: UserSession,
        start: date | None,
        end: date | None,
    ) -> ServiceResult[HiringReport]:
        """Employees hired between start and end inclusive."""
        if not user.is_admin:
            return ServiceResult.denied()
        result = self.validator.validate_date_range(start, end)
        if not result:
            return ServiceResult.invalid(result.message)

        employees = await self.reports.employees_hired_between(start, end)
        rows = []
        for employee in employees:
            address = employee.address
            division = employee.current_division
            job_title = employee.current_job_title
            rows.append(
                HiringReportRow(
                    empid=employee.empid,
                    emp_number=employee.emp_number,
                    first_name=employee.first_name,
                    last_name=employee.last_name,
                    email=employee.email,
                    hire_date=employee.hire_date,
                    current_salary=employee.current_salary,
                    employment_status=employee.employment_status.value,
                    street=address.street if address else None,
                    city_name=address.city_name if address else None,
                    state_code=address.state_code if address else None,
                    zip=address.zip if address else None,
                    division_name=division.division_name if division else None,
                    job_title=job_title.job_title if job_title else None,
                )
            )
        report = HiringReport(start=start, end=end, rows=tuple(rows))
        logger.info("Hiring report %s..%s: %d employee(s)", start, end, report.total_employees)
        return ServiceResult.ok(report, f"Found {report.total_employees} employee(s) hired in range")

    @service_operation()
    async def monthly_pay_by_division(self, user: UserSession, year: int, month: int) -> ServiceResult[MonthlyPayReport]:
        """Gross/net totals for pay periods inside the month, by current division."""
        if not user.is_admin:
            return ServiceResult.denied()
        result = self.validator.validate_report_month(year, month)
        if not result:
            return ServiceResult.invalid(result.message)
        start, end = month_bounds(year, month)
        rows = await self.payroll.monthly_totals_by_division(start, end)
        report = MonthlyPayReport(year=year, month=month, grouping="division", rows=tuple(rows))
        return ServiceResult.ok(report, f"Monthly pay for {len(rows)} division(s)")

    @service_operation()
    async def monthly_pay_by_job_title(self, user: UserSession, year: int, month: int) -> ServiceResult[MonthlyPayReport]:
        """Gross/net totals for pay periods inside the month, by current job title."""
        if not user.is_admin:
            return ServiceResult.denied()
        result = self.validator.validate_report_month(year, month)
        if not result:
            return ServiceResult.invalid(result.message)
        start, end = month_bounds(year, month)
        rows = await self.payroll.monthly_totals_by_job_title(start, end)
        report = MonthlyPayReport(year=year, month=month, grouping="job_title", rows=tuple(rows))
        return ServiceResult.ok(report, f"Monthly pay for {len(rows)} job title(s)")

    @service_operation()
    async def headcount_by_division(self, user: UserSession) -> ServiceResult[list[HeadcountRow]]:
        if not user.is_admin:
            return ServiceResult.denied()
        rows = await self.reports.headcount_by_division()
        return ServiceResult.ok(rows, f"Headcount for {len(rows)} division(s)")

    @service_operation()
    async def headcount_by_job_title(self, user: UserSession) -> ServiceResult[list[HeadcountRow]]:
        if not user.is_admin:
            return ServiceResult.denied()
        rows = await self.reports.headcount_by_job_title()
        return ServiceResult.ok(rows, f"Headcount for {len(rows)} job title(s)")

    # ------------------------------------------------------------------
    # Workforce analysis
    # ------------------------------------------------------------------

    @service_operation()
    async def salary_distribution(self, user: UserSession) -> ServiceResult[list[SalaryBandRow]]:
        """Active employees per salary band, lowest band first."""
        if not user.is_admin:
            return ServiceResult.denied()
        rows = await self.reports.salary_distribution()
        return ServiceResult.ok(rows, f"Salary distribution across {len(rows)} band(s)")

    @service_operation()
    async def tenure_analysis(self, user: UserSession) -> ServiceResult[list[TenureBandRow]]:
        """Active employees per length-of-service band, as of today."""
        if not user.is_admin:
            return ServiceResult.denied()
        rows = await self.reports.tenure_distribution(self.validator.today())
        return ServiceResult.ok(rows, f"Tenure analysis across {len(rows)} band(s)")

    @service_operation()
    async def demographics_summary(self, user: UserSession) -> ServiceResult[DemographicsSummary]:
        """Dashboard figures: headcount, gender split, average age and salary."""
        if not user.is_admin:
            return ServiceResult.denied()
        summary = await self.reports.demographics(self.validator.today())
        logger.info("Demographics summary over %d active employee(s)", summary.total_employees)
        return ServiceResult.ok(summary, f"Summary of {summary.total_employees} active employee(s)")
