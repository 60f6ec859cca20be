"""Data access for payroll records and monthly pay aggregates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Sequence

from sqlalchemy import and_, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import (
    Division,
    EmployeeDivision,
    EmployeeJobTitle,
    JobTitle,
    PayrollRecord,
)
from employee_mgmt.money import coerce_money
from employee_mgmt.repositories.base import translates_db_errors


@dataclass(frozen=True)
class MonthlyPayRow:
    """Pay totals for one division or job title over one month."""

    group_id: int
    group_name: str
    total_gross_pay: Decimal
    total_net_pay: Decimal
    record_count: int

    @property
    def total_deductions(self) -> Decimal:
        return self.total_gross_pay - self.total_net_pay


class PayrollRepository:
    """Insert-only access to ``payroll``; rows are never updated."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translates_db_errors
    async def get(self, payroll_id: int) -> PayrollRecord | None:
        return await self.session.get(PayrollRecord, payroll_id)

    @translates_db_errors
    async def add(self, record: PayrollRecord) -> PayrollRecord:
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record, attribute_names=["employee"])
        return record

    @translates_db_errors
    async def list_for_employee(
        self,
        empid: int,
        start: date | None = None,
        end: date | None = None,
    ) -> Sequence[PayrollRecord]:
        """Pay history for one employee, newest pay date first."""
        stmt = select(PayrollRecord).where(PayrollRecord.empid == empid)
        if start is not None:
            stmt = stmt.where(PayrollRecord.pay_date >= start)
        if end is not None:
            stmt = stmt.where(PayrollRecord.pay_date <= end)
        result = await self.session.execute(
            stmt.order_by(PayrollRecord.pay_date.desc(), PayrollRecord.payroll_id.desc())
        )
        return result.scalars().all()

    @translates_db_errors
    async def list_in_range(self, start: date, end: date) -> Sequence[PayrollRecord]:
        """Every employee's records with start <= pay_date <= end."""
        result = await self.session.execute(
            select(PayrollRecord)
            .where(PayrollRecord.pay_date >= start, PayrollRecord.pay_date <= end)
            .order_by(PayrollRecord.pay_date.desc(), PayrollRecord.empid)
        )
        return result.scalars().all()

    @translates_db_errors
    async def monthly_totals_by_division(
        self,
        month_start: date,
        month_end: date,
    ) -> list[MonthlyPayRow]:
        """Sum pay for periods inside the month, grouped by current division."""
        gross = func.sum(PayrollRecord.gross_pay).label("total_gross_pay")
        stmt = (
            select(
                Division.div_id,
                Division.division_name,
                gross,
                func.sum(PayrollRecord.net_pay).label("total_net_pay"),
                func.count(PayrollRecord.payroll_id).label("record_count"),
            )
            .select_from(PayrollRecord)
            .join(
                EmployeeDivision,
                and_(
                    EmployeeDivision.empid == PayrollRecord.empid,
                    EmployeeDivision.is_current.is_(True),
                ),
            )
            .join(Division, Division.div_id == EmployeeDivision.div_id)
            .where(
                PayrollRecord.pay_period_start >= month_start,
                PayrollRecord.pay_period_end <= month_end,
            )
            .group_by(Division.div_id, Division.division_name)
            .order_by(desc(gross), Division.division_name)
        )
        return await self._monthly_rows(stmt)

    @translates_db_errors
    async def monthly_totals_by_job_title(
        self,
        month_start: date,
        month_end: date,
    ) -> list[MonthlyPayRow]:
        """Sum pay for periods inside the month, grouped by current job title."""
        gross = func.sum(PayrollRecord.gross_pay).label("total_gross_pay")
        stmt = (
            select(
                JobTitle.job_title_id,
                JobTitle.job_title,
                gross,
                func.sum(PayrollRecord.net_pay).label("total_net_pay"),
                func.count(PayrollRecord.payroll_id).label("record_count"),
            )
            .select_from(PayrollRecord)
            .join(
                EmployeeJobTitle,
                and_(
                    EmployeeJobTitle.empid == PayrollRecord.empid,
                    EmployeeJobTitle.is_current.is_(True),
                ),
            )
            .join(JobTitle, JobTitle.job_title_id == EmployeeJobTitle.job_title_id)
            .where(
                PayrollRecord.pay_period_start >= month_start,
                PayrollRecord.pay_period_end <= month_end,
            )
            .group_by(JobTitle.job_title_id, JobTitle.job_title)
            .order_by(desc(gross), JobTitle.job_title)
        )
        return await self._monthly_rows(stmt)

    async def _monthly_rows(self, stmt) -> list[MonthlyPayRow]:
        result = await self.session.execute(stmt)
        return [
            MonthlyPayRow(
                group_id=row[0],
                group_name=row[1],
                total_gross_pay=coerce_money(row[2]),
                total_net_pay=coerce_money(row[3]),
                record_count=int(row[4]),
            )
            for row in result.all()
        ]
