"""Pay statement retrieval and payroll record creation."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import PayrollRecord
from employee_mgmt.money import ZERO, round_to_cents
from employee_mgmt.repositories import EmployeeRepository, PayrollRepository
from employee_mgmt.services.authorization import UserSession
from employee_mgmt.services.base import ServiceBase, service_operation
from employee_mgmt.services.results import ServiceResult
from employee_mgmt.services.types import PayrollDraft
from employee_mgmt.services.validation import ValidationService

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = Decimal("12")
FEDERAL_TAX_RATE = Decimal("0.20")
STATE_TAX_RATE = Decimal("0.05")

PAY_ACCESS_DENIED = "Access denied: Cannot view this employee's pay statements"


class PayrollService(ServiceBase):
    """Read pay history and append payroll rows.

    Payroll rows are never updated once written, so there is no update
    operation here.
    """

    def __init__(self, session: AsyncSession, validator: ValidationService | None = None):
        super().__init__(session, validator)
        self.payroll = PayrollRepository(session)
        self.employees = EmployeeRepository(session)

    # ------------------------------------------------------------------
    # Pay statements
    # ------------------------------------------------------------------

    @service_operation()
    async def get_pay_history(self, user: UserSession, empid: int) -> ServiceResult[list[PayrollRecord]]:
        """Every pay statement for one employee, newest pay date first."""
        if not user.can_view_employee(empid):
            return ServiceResult.denied(PAY_ACCESS_DENIED)
        employee = await self.employees.get(empid)
        if employee is None:
            return ServiceResult.not_found(f"Employee not found with ID: {empid}")

        records = list(await self.payroll.list_for_employee(empid))
        if not records:
            return ServiceResult.ok([], "No pay statements found for this employee")
        return ServiceResult.ok(
            records,
            f"Retrieved {len(records)} pay statements for employee {employee.full_name}",
        )

    async def get_pay_history_for_current_user(self, user: UserSession) -> ServiceResult[list[PayrollRecord]]:
        if user.employee_id is None:
            return ServiceResult.not_found("No employee record is linked to this login")
        return await self.get_pay_history(user, user.employee_id)

    @service_operation()
    async def get_pay_history_by_date_range(
        self,
        user: UserSession,
        empid: int,
        start: date | None,
        end: date | None,
    ) -> ServiceResult[list[PayrollRecord]]:
        """Pay statements with start <= pay_date <= end, newest first."""
        if not user.can_view_employee(empid):
            return ServiceResult.denied(PAY_ACCESS_DENIED)
        result = self.validator.validate_date_range(start, end)
        if not result:
            return ServiceResult.invalid(result.message)

        if await self.employees.get(empid) is None:
            return ServiceResult.not_found(f"Employee not found with ID: {empid}")

        records = list(await self.payroll.list_for_employee(empid, start, end))
        if not records:
            return ServiceResult.ok([], "No pay statements found for this employee in the selected range")
        return ServiceResult.ok(records, f"Retrieved {len(records)} pay statements")

    @service_operation()
    async def get_payroll_by_date_range(
        self,
        user: UserSession,
        start: date | None,
        end: date | None,
    ) -> ServiceResult[list[PayrollRecord]]:
        """All employees' pay statements in a pay-date range (admin only)."""
        if not user.is_admin:
            return ServiceResult.denied()
        result = self.validator.validate_date_range(start, end)
        if not result:
            return ServiceResult.invalid(result.message)
        records = list(await self.payroll.list_in_range(start, end))
        return ServiceResult.ok(records, f"Retrieved {len(records)} payroll records")

    # ------------------------------------------------------------------
    # Payroll creation
    # ------------------------------------------------------------------

    @service_operation("Payroll record conflicts with existing data")
    async def create_payroll_record(self, user: UserSession, draft: PayrollDraft) -> ServiceResult[PayrollRecord]:
        """Validate and insert one pay period for one employee."""
        if not user.can_write:
            return ServiceResult.denied()
        result = self.validator.validate_payroll(draft)
        if not result:
            return ServiceResult.invalid(result.message)
        employee = await self.employees.get(draft.empid)
        if employee is None:
            return ServiceResult.not_found(f"Employee not found with ID: {draft.empid}")

        record = PayrollRecord(
            empid=draft.empid,
            pay_date=draft.pay_date,
            pay_period_start=draft.pay_period_start,
            pay_period_end=draft.pay_period_end,
            gross_pay=round_to_cents(draft.gross_pay),
            net_pay=round_to_cents(draft.net_pay),
            federal_tax=round_to_cents(draft.federal_tax),
            state_tax=round_to_cents(draft.state_tax),
            other_deductions=round_to_cents(draft.other_deductions),
        )
        await self.payroll.add(record)
        logger.info("Payroll record %s created for employee %s by %s", record.payroll_id, draft.empid, user.username)
        return ServiceResult.ok(record, "Payroll record created successfully")

    @service_operation("Payroll record conflicts with existing data")
    async def calculate_and_create_payroll(
        self,
        user: UserSession,
        empid: int,
        period_start: date,
        period_end: date,
        pay_date: date,
    ) -> ServiceResult[PayrollRecord]:
        """Monthly gross from annual salary; 20% federal and 5% state withholding."""
        if not user.can_write:
            return ServiceResult.denied()
        employee = await self.employees.get(empid)
        if employee is None:
            return ServiceResult.not_found(f"Employee not found with ID: {empid}")
        if not employee.is_active:
            return ServiceResult.invalid("Cannot run payroll for a terminated employee")

        gross = round_to_cents(employee.current_salary / MONTHS_PER_YEAR)
        federal = round_to_cents(gross * FEDERAL_TAX_RATE)
        state = round_to_cents(gross * STATE_TAX_RATE)
        draft = PayrollDraft(
            empid=empid,
            pay_date=pay_date,
            pay_period_start=period_start,
            pay_period_end=period_end,
            gross_pay=gross,
            net_pay=gross - federal - state,
            federal_tax=federal,
            state_tax=state,
            other_deductions=ZERO,
        )
        result = await self.create_payroll_record(user, draft)
        if not result.success:
            return result
        return ServiceResult.ok(
            result.data,
            f"Payroll calculated and created for employee {employee.full_name}",
        )
