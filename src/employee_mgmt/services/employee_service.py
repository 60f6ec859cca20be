"""Employee CRUD, search, termination and assignment facade."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import Address, Employee, EmploymentStatus, utcnow
from employee_mgmt.money import round_to_cents, to_decimal
from employee_mgmt.repositories import (
    AddressRepository,
    AssignmentRepository,
    AuditLogRepository,
    CityRepository,
    DivisionRepository,
    EmployeeRepository,
    JobTitleRepository,
    StateRepository,
)
from employee_mgmt.services.authorization import UserSession
from employee_mgmt.services.base import ServiceBase, service_operation
from employee_mgmt.services.results import ServiceResult
from employee_mgmt.services.types import (
    EMPLOYEE_FIELDS,
    AddressDraft,
    EmployeeDraft,
    SearchCriteria,
)
from employee_mgmt.services.validation import ValidationResult, ValidationService

logger = logging.getLogger(__name__)

AUDITED_FIELDS = EMPLOYEE_FIELDS + ("employment_status",)


def _snapshot(employee: Employee, fields: Sequence[str] = AUDITED_FIELDS) -> dict[str, Any]:
    values = {name: getattr(employee, name) for name in fields}
    status = values.get("employment_status")
    if isinstance(status, EmploymentStatus):
        values["employment_status"] = status.value
    return values


def _clean(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class EmployeeService(ServiceBase):
    """Employee operations, checked against the caller's role first.

    Every mutation requires HR_ADMIN. The EMPLOYEE role may read only its
    own record. Results are wrapped in ServiceResult; nothing raises.
    """

    def __init__(self, session: AsyncSession, validator: ValidationService | None = None):
        super().__init__(session, validator)
        self.employees = EmployeeRepository(session)
        self.addresses = AddressRepository(session)
        self.assignments = AssignmentRepository(session)
        self.cities = CityRepository(session)
        self.states = StateRepository(session)
        self.divisions = DivisionRepository(session)
        self.job_titles = JobTitleRepository(session)
        self.audit = AuditLogRepository(session)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _normalize(self, draft: EmployeeDraft) -> EmployeeDraft:
        salary = draft.current_salary
        if salary is not None and not isinstance(salary, Decimal):
            salary = to_decimal(salary)
        return EmployeeDraft(
            emp_number=_clean(draft.emp_number),
            first_name=_clean(draft.first_name),
            last_name=_clean(draft.last_name),
            email=_clean(draft.email),
            ssn=self.validator.format_ssn(draft.ssn) if draft.ssn else draft.ssn,
            hire_date=draft.hire_date,
            current_salary=round_to_cents(salary) if salary is not None else None,
        )

    async def _check_unique(self, draft: EmployeeDraft, exclude_empid: int | None = None) -> ValidationResult:
        if await self.employees.emp_number_taken(draft.emp_number, exclude_empid):
            return ValidationResult(False, "Employee number already exists")
        if await self.employees.email_taken(draft.email, exclude_empid):
            return ValidationResult(False, "Email already exists")
        if await self.employees.ssn_taken(draft.ssn, exclude_empid):
            return ValidationResult(False, "SSN already exists in system")
        return ValidationResult(True, "Unique")

    async def _check_address(self, address: AddressDraft) -> ValidationResult:
        result = self.validator.validate_address(address)
        if not result:
            return result
        city = await self.cities.get(address.city_id)
        if city is None:
            return ValidationResult(False, "Valid city is required")
        if await self.states.get(address.state_id) is None:
            return ValidationResult(False, "Valid state is required")
        if city.state_id != address.state_id:
            return ValidationResult(False, "City does not belong to the selected state")
        return result

    @staticmethod
    def _address_values(address: AddressDraft) -> dict[str, Any]:
        values = {key: _clean(value) for key, value in address.to_dict().items()}
        for optional in ("zip", "race", "phone"):
            if values.get(optional) == "":
                values[optional] = None
        return values

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    @service_operation("Employee number, email or SSN already exists")
    async def create(
        self,
        user: UserSession,
        draft: EmployeeDraft,
        address: AddressDraft | None = None,
    ) -> ServiceResult[Employee]:
        """Insert an employee and optional address in one unit of work."""
        if not user.can_write:
            return ServiceResult.denied()

        draft = self._normalize(draft)
        result = self.validator.validate_employee(draft)
        if not result:
            return ServiceResult.invalid(result.message)
        if address is not None:
            result = await self._check_address(address)
            if not result:
                return ServiceResult.invalid(result.message)
        result = await self._check_unique(draft)
        if not result:
            return ServiceResult.invalid(result.message)

        employee = Employee(**draft.to_dict(), employment_status=EmploymentStatus.ACTIVE)
        if address is not None:
            employee.address = Address(**self._address_values(address))
        await self.employees.add(employee)
        await self.audit.record(
            "employees", "INSERT", employee.empid, user.username, new_values=_snapshot(employee)
        )
        logger.info("Employee %s created by %s", employee.emp_number, user.username)

        created = await self.employees.get(employee.empid)
        return ServiceResult.ok(created, "Employee created successfully")

    @service_operation()
    async def get(self, user: UserSession, empid: int) -> ServiceResult[Employee]:
        """Employee with address and current division and job title."""
        if not user.can_view_employee(empid):
            return ServiceResult.denied("Access denied: you may only view your own record")
        employee = await self.employees.get(empid)
        if employee is None:
            return ServiceResult.not_found(f"Employee not found: {empid}")
        return ServiceResult.ok(employee, "Employee found")

    @service_operation("Employee number, email or SSN already exists")
    async def update(
        self,
        user: UserSession,
        empid: int,
        changes: Mapping[str, Any],
        address: AddressDraft | None = None,
    ) -> ServiceResult[Employee]:
        """Apply field changes (and an optional address) to an employee."""
        if not user.can_write:
            return ServiceResult.denied()
        unknown = sorted(set(changes) - set(EMPLOYEE_FIELDS))
        if unknown:
            return ServiceResult.invalid(f"Unknown employee field: {unknown[0]}")

        employee = await self.employees.get(empid)
        if employee is None:
            return ServiceResult.not_found(f"Employee not found: {empid}")

        merged = {name: getattr(employee, name) for name in EMPLOYEE_FIELDS}
        merged.update(changes)
        draft = self._normalize(EmployeeDraft(**merged))
        result = self.validator.validate_employee(draft)
        if not result:
            return ServiceResult.invalid(result.message)
        if address is not None:
            result = await self._check_address(address)
            if not result:
                return ServiceResult.invalid(result.message)
        result = await self._check_unique(draft, exclude_empid=empid)
        if not result:
            return ServiceResult.invalid(result.message)

        before = _snapshot(employee)
        for name, value in draft.to_dict().items():
            setattr(employee, name, value)
        employee.updated_at = utcnow()
        await self.employees.save(employee)
        if address is not None:
            await self.addresses.upsert(employee, self._address_values(address))

        after = _snapshot(employee)
        changed = sorted(k for k in after if after[k] != before[k])
        await self.audit.record(
            "employees",
            "UPDATE",
            empid,
            user.username,
            old_values={k: before[k] for k in changed},
            new_values={k: after[k] for k in changed},
        )
        logger.info("Employee %s updated by %s (%s)", empid, user.username, ", ".join(changed) or "address")

        updated = await self.employees.get(empid)
        return ServiceResult.ok(updated, "Employee updated successfully")

    @service_operation()
    async def terminate(self, user: UserSession, empid: int) -> ServiceResult[Employee]:
        """Soft delete: flip status to TERMINATED, keep every history row."""
        if not user.can_write:
            return ServiceResult.denied()
        employee = await self.employees.get(empid)
        if employee is None:
            return ServiceResult.not_found(f"Employee not found: {empid}")
        if employee.employment_status == EmploymentStatus.TERMINATED:
            return ServiceResult.invalid("Employee is already terminated")

        employee.employment_status = EmploymentStatus.TERMINATED
        employee.updated_at = utcnow()
        await self.employees.save(employee)
        await self.audit.record(
            "employees",
            "UPDATE",
            empid,
            user.username,
            old_values={"employment_status": EmploymentStatus.ACTIVE.value},
            new_values={"employment_status": EmploymentStatus.TERMINATED.value},
        )
        logger.info("Employee %s terminated by %s", empid, user.username)
        return ServiceResult.ok(employee, "Employee terminated successfully")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @service_operation()
    async def search(self, user: UserSession, criteria: SearchCriteria) -> ServiceResult[list[Employee]]:
        """Search by id, SSN, employee number, date of birth or name, in that order.

        With no criteria an admin gets every ACTIVE employee. An EMPLOYEE
        caller only ever sees its own record.
        """
        if criteria.empid is not None and not user.can_view_employee(criteria.empid):
            return ServiceResult.denied("Access denied: you may only view your own record")

        if not user.is_admin:
            if user.employee_id is None:
                return ServiceResult.ok([], "No employees found")
            if criteria.is_empty:
                own = await self.employees.get(user.employee_id)
                found = [own] if own is not None else []
                return ServiceResult.ok(found, f"Found {len(found)} employee(s)")

        found = list(await self._run_search(criteria))
        if not user.is_admin:
            found = [e for e in found if e.empid == user.employee_id]
        if not found:
            return ServiceResult.ok([], "No employees found")
        return ServiceResult.ok(found, f"Found {len(found)} employee(s)")

    async def _run_search(self, criteria: SearchCriteria) -> Sequence[Employee]:
        if criteria.empid is not None:
            employee = await self.employees.get(criteria.empid)
            return [employee] if employee else []
        if criteria.ssn and criteria.ssn.strip():
            employee = await self.employees.get_by_ssn(self.validator.format_ssn(criteria.ssn))
            return [employee] if employee else []
        if criteria.emp_number and criteria.emp_number.strip():
            employee = await self.employees.get_by_number(criteria.emp_number)
            return [employee] if employee else []
        if criteria.date_of_birth is not None:
            return await self.employees.find_by_date_of_birth(criteria.date_of_birth)
        if criteria.name and criteria.name.strip():
            return await self.employees.search_by_name(criteria.name)
        return await self.employees.list_active()

    @service_operation()
    async def list_active(self, user: UserSession) -> ServiceResult[list[Employee]]:
        if not user.is_admin:
            return ServiceResult.denied()
        employees = list(await self.employees.list_active())
        return ServiceResult.ok(employees, f"Found {len(employees)} active employee(s)")

    # ------------------------------------------------------------------
    # Assignment history
    # ------------------------------------------------------------------

    @service_operation("Employee already has that assignment on that date")
    async def assign_division(
        self,
        user: UserSession,
        empid: int,
        div_id: int,
        start_date: date,
    ) -> ServiceResult[Employee]:
        """Close the current division row and append a new current one."""
        if not user.can_write:
            return ServiceResult.denied()
        employee = await self.employees.get(empid)
        if employee is None:
            return ServiceResult.not_found(f"Employee not found: {empid}")
        division = await self.divisions.get(div_id)
        if division is None:
            return ServiceResult.not_found(f"Division not found: {div_id}")
        current = await self.assignments.current_division(empid)
        if current is not None:
            if current.div_id == div_id:
                return ServiceResult.invalid(f"Employee is already assigned to {division.division_name}")
            if start_date < current.start_date:
                return ServiceResult.invalid("Start date cannot precede the current assignment")

        await self.assignments.assign_division(empid, div_id, start_date)
        await self.audit.record(
            "employee_division",
            "INSERT",
            empid,
            user.username,
            old_values={"div_id": current.div_id} if current else None,
            new_values={"div_id": div_id, "start_date": start_date},
        )
        logger.info("Employee %s assigned to division %s by %s", empid, div_id, user.username)
        return ServiceResult.ok(await self.employees.get(empid), "Division assigned successfully")

    @service_operation("Employee already has that assignment on that date")
    async def assign_job_title(
        self,
        user: UserSession,
        empid: int,
        job_title_id: int,
        start_date: date,
    ) -> ServiceResult[Employee]:
        """Close the current job title row and append a new current one."""
        if not user.can_write:
            return ServiceResult.denied()
        employee = await self.employees.get(empid)
        if employee is None:
            return ServiceResult.not_found(f"Employee not found: {empid}")
        job_title = await self.job_titles.get(job_title_id)
        if job_title is None:
            return ServiceResult.not_found(f"Job title not found: {job_title_id}")
        current = await self.assignments.current_job_title(empid)
        if current is not None:
            if current.job_title_id == job_title_id:
                return ServiceResult.invalid(f"Employee already holds {job_title.job_title}")
            if start_date < current.start_date:
                return ServiceResult.invalid("Start date cannot precede the current assignment")

        await self.assignments.assign_job_title(empid, job_title_id, start_date)
        await self.audit.record(
            "employee_job_titles",
            "INSERT",
            empid,
            user.username,
            old_values={"job_title_id": current.job_title_id} if current else None,
            new_values={"job_title_id": job_title_id, "start_date": start_date},
        )
        logger.info("Employee %s given job title %s by %s", empid, job_title_id, user.username)
        return ServiceResult.ok(await self.employees.get(empid), "Job title assigned successfully")
