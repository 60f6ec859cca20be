"""Input and output value types for the service facades."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from employee_mgmt.models import Gender
from employee_mgmt.money import ZERO

if TYPE_CHECKING:
    from employee_mgmt.repositories import MonthlyPayRow

EMPLOYEE_FIELDS = (
    "emp_number",
    "first_name",
    "last_name",
    "email",
    "ssn",
    "hire_date",
    "current_salary",
)


@dataclass(frozen=True)
class EmployeeDraft:
    """Employee fields as entered, before persistence."""

    emp_number: str | None
    first_name: str | None
    last_name: str | None
    email: str | None
    ssn: str | None
    hire_date: date | None
    current_salary: Decimal | None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AddressDraft:
    """Address and demographic fields as entered."""

    street: str | None
    city_id: int | None
    state_id: int | None
    date_of_birth: date | None
    zip: str | None = None
    gender: Gender | None = None
    race: str | None = None
    phone: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SearchCriteria:
    """Employee search inputs; the first populated field wins."""

    empid: int | None = None
    ssn: str | None = None
    emp_number: str | None = None
    date_of_birth: date | None = None
    name: str | None = None

    @property
    def is_empty(self) -> bool:
        return not any(
            (
                self.empid is not None,
                bool(self.ssn and self.ssn.strip()),
                bool(self.emp_number and self.emp_number.strip()),
                self.date_of_birth is not None,
                bool(self.name and self.name.strip()),
            )
        )


@dataclass(frozen=True)
class SalaryChange:
    """One employee's salary before and after an adjustment."""

    empid: int
    emp_number: str
    full_name: str
    old_salary: Decimal
    new_salary: Decimal

    @property
    def increase(self) -> Decimal:
        return self.new_salary - self.old_salary


@dataclass(frozen=True)
class SalaryAdjustmentSummary:
    """Totals for one salary adjustment pass."""

    employees_updated: int
    total_old_salary: Decimal
    total_new_salary: Decimal
    total_increase: Decimal
    percentage_applied: Decimal
    changes: tuple[SalaryChange, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls, percentage: Decimal) -> SalaryAdjustmentSummary:
        return cls(0, ZERO, ZERO, ZERO, percentage)


@dataclass(frozen=True)
class PayrollDraft:
    """A pay period to record for one employee."""

    empid: int
    pay_date: date | None
    pay_period_start: date | None
    pay_period_end: date | None
    gross_pay: Decimal | None
    net_pay: Decimal | None
    federal_tax: Decimal = ZERO
    state_tax: Decimal = ZERO
    other_deductions: Decimal = ZERO


@dataclass(frozen=True)
class HiringReportRow:
    """One employee line of the hiring-date-range report."""

    empid: int
    emp_number: str
    first_name: str
    last_name: str
    email: str
    hire_date: date
    current_salary: Decimal
    employment_status: str
    street: str | None
    city_name: str | None
    state_code: str | None
    zip: str | None
    division_name: str | None
    job_title: str | None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class HiringReport:
    start: date
    end: date
    rows: tuple[HiringReportRow, ...]

    @property
    def total_employees(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class MonthlyPayReport:
    """Monthly gross/net totals grouped by division or job title."""

    year: int
    month: int
    grouping: str
    rows: tuple[MonthlyPayRow, ...]

    @property
    def total_gross_pay(self) -> Decimal:
        return sum((r.total_gross_pay for r in self.rows), ZERO)

    @property
    def total_net_pay(self) -> Decimal:
        return sum((r.total_net_pay for r in self.rows), ZERO)

    @property
    def record_count(self) -> int:
        return sum(r.record_count for r in self.rows)
