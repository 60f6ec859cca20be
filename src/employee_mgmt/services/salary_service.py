"""Percentage salary adjustment over a salary band."""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import utcnow
from employee_mgmt.money import ZERO, round_to_cents, to_decimal
from employee_mgmt.repositories import AuditLogRepository, EmployeeRepository
from employee_mgmt.services.authorization import UserSession
from employee_mgmt.services.base import ServiceBase, service_operation
from employee_mgmt.services.results import ServiceResult
from employee_mgmt.services.types import SalaryAdjustmentSummary, SalaryChange
from employee_mgmt.services.validation import ValidationService

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def adjusted_salary(old: Decimal, percentage: Decimal) -> Decimal:
    """old * (1 + P/100), rounded half-up to cents."""
    return round_to_cents(old * (1 + percentage / HUNDRED))


class SalaryAdjustmentService(ServiceBase):
    """Applies a percentage raise (or cut) to ACTIVE employees in a salary band.

    The whole pass runs in the caller's session: either every matched
    employee is updated or, on failure, the session is rolled back and none
    are. Concurrent sessions are not serialized against each other.
    """

    def __init__(self, session: AsyncSession, validator: ValidationService | None = None):
        super().__init__(session, validator)
        self.employees = EmployeeRepository(session)
        self.audit = AuditLogRepository(session)

    def _parse_inputs(
        self,
        min_salary: object,
        max_salary: object,
        percentage: object,
    ) -> tuple[Decimal | None, Decimal | None, Decimal | None, str | None]:
        """Parse the band and percentage; the last item is the failure message, if any."""
        low, high, pct = to_decimal(min_salary), to_decimal(max_salary), to_decimal(percentage)
        if (min_salary is not None and low is None) or (max_salary is not None and high is None):
            return low, high, pct, "Salary range values must be numeric"
        if percentage is not None and pct is None:
            return low, high, pct, "Percentage must be numeric"
        result = self.validator.validate_salary_adjustment(low, high, pct)
        return low, high, pct, None if result else result.message

    @service_operation()
    async def adjust_salaries(
        self,
        user: UserSession,
        min_salary: object,
        max_salary: object,
        percentage: object,
    ) -> ServiceResult[SalaryAdjustmentSummary]:
        """Raise every ACTIVE salary in [min_salary, max_salary] by ``percentage``.

        Inputs may be Decimals, numbers or numeric strings. Validation runs
        before any query; an empty band still succeeds with zero totals.
        """
        if not user.can_write:
            return ServiceResult.denied()

        low, high, pct, failure = self._parse_inputs(min_salary, max_salary, percentage)
        if failure:
            return ServiceResult.invalid(failure)

        matched = await self.employees.find_active_in_salary_range(low, high)
        if not matched:
            logger.info("Salary adjustment %s%% matched no employees in %s-%s", pct, low, high)
            return ServiceResult.ok(
                SalaryAdjustmentSummary.empty(pct),
                "No active employees found in the specified salary range",
            )

        now = utcnow()
        changes: list[SalaryChange] = []
        for employee in matched:
            old = employee.current_salary
            new = adjusted_salary(old, pct)
            employee.current_salary = new
            employee.updated_at = now
            changes.append(
                SalaryChange(
                    empid=employee.empid,
                    emp_number=employee.emp_number,
                    full_name=employee.full_name,
                    old_salary=old,
                    new_salary=new,
                )
            )
        await self.employees.flush()

        for change in changes:
            await self.audit.record(
                "employees",
                "UPDATE",
                change.empid,
                user.username,
                old_values={"current_salary": change.old_salary},
                new_values={"current_salary": change.new_salary, "percentage": pct},
            )

        total_old = sum((c.old_salary for c in changes), ZERO)
        total_new = sum((c.new_salary for c in changes), ZERO)
        summary = SalaryAdjustmentSummary(
            employees_updated=len(changes),
            total_old_salary=total_old,
            total_new_salary=total_new,
            total_increase=total_new - total_old,
            percentage_applied=pct,
            changes=tuple(changes),
        )
        logger.info(
            "Salary adjustment of %s%% applied to %d employee(s) by %s",
            pct,
            summary.employees_updated,
            user.username,
        )
        return ServiceResult.ok(
            summary,
            f"Successfully updated {summary.employees_updated} employee salaries",
        )

    @service_operation()
    async def preview(
        self,
        user: UserSession,
        min_salary: object,
        max_salary: object,
        percentage: object,
    ) -> ServiceResult[SalaryAdjustmentSummary]:
        """Same computation as ``adjust_salaries`` without writing anything."""
        if not user.can_write:
            return ServiceResult.denied()
        low, high, pct, failure = self._parse_inputs(min_salary, max_salary, percentage)
        if failure:
            return ServiceResult.invalid(failure)

        matched = await self.employees.find_active_in_salary_range(low, high)
        changes = tuple(
            SalaryChange(e.empid, e.emp_number, e.full_name, e.current_salary, adjusted_salary(e.current_salary, pct))
            for e in matched
        )
        total_old = sum((c.old_salary for c in changes), ZERO)
        total_new = sum((c.new_salary for c in changes), ZERO)
        return ServiceResult.ok(
            SalaryAdjustmentSummary(len(changes), total_old, total_new, total_new - total_old, pct, changes),
            f"{len(changes)} employee(s) would be updated",
        )
