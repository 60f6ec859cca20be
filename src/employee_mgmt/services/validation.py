"""Field and business-rule validation for employee, address and pay input."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable

from employee_mgmt.services.types import AddressDraft, EmployeeDraft, PayrollDraft

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})$")
PHONE_PATTERN = re.compile(r"^\+?1?[-.\s]?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}$")
SSN_PATTERN = re.compile(r"^\d{3}-?\d{2}-?\d{4}$")
ZIP_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")
NAME_PATTERN = re.compile(r"^[a-zA-Z\s'-]{2,50}$")

MIN_AGE = 16
MAX_AGE = 100
MAX_HIRE_YEARS_BACK = 50
MIN_SALARY = Decimal("0")
MAX_SALARY = Decimal("1000000")
MIN_ADJUSTMENT_PERCENT = Decimal("-50")
MAX_ADJUSTMENT_PERCENT = Decimal("100")
MIN_REPORT_YEAR = 2000


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: str

    def __bool__(self) -> bool:
        return self.valid


PASSED = ValidationResult(True, "Validation passed")


def _fail(message: str) -> ValidationResult:
    return ValidationResult(False, message)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _years_between(earlier: date, later: date) -> int:
    return later.year - earlier.year - ((later.month, later.day) < (earlier.month, earlier.day))


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return day.replace(year=day.year - years, day=28)


class ValidationService:
    """Stateless checks; every failure message names the offending field.

    ``today`` is injectable so date-relative rules stay testable.
    """

    def __init__(self, today: Callable[[], date] = date.today):
        self._today = today

    def today(self) -> date:
        return self._today()

    # ------------------------------------------------------------------
    # Employees
    # ------------------------------------------------------------------

    def validate_employee(self, draft: EmployeeDraft) -> ValidationResult:
        """Required fields, formats and business rules for an employee."""
        result = self._validate_required(draft)
        if not result:
            return result
        return self._validate_business_rules(draft)

    def _validate_required(self, draft: EmployeeDraft) -> ValidationResult:
        if _blank(draft.first_name):
            return _fail("First name is required")
        if not NAME_PATTERN.match(draft.first_name.strip()):
            return _fail("First name contains invalid characters or is too long")
        if _blank(draft.last_name):
            return _fail("Last name is required")
        if not NAME_PATTERN.match(draft.last_name.strip()):
            return _fail("Last name contains invalid characters or is too long")
        if _blank(draft.email):
            return _fail("Email is required")
        if not self.is_valid_email(draft.email):
            return _fail("Invalid email format")
        if _blank(draft.emp_number):
            return _fail("Employee number is required")
        if len(draft.emp_number.strip()) > 20:
            return _fail("Employee number cannot exceed 20 characters")
        if _blank(draft.ssn):
            return _fail("SSN is required")
        if not self.is_valid_ssn(draft.ssn):
            return _fail("Invalid SSN format (use XXX-XX-XXXX)")
        if draft.hire_date is None:
            return _fail("Hire date is required")
        if draft.current_salary is None:
            return _fail("Current salary is required")
        return PASSED

    def _validate_business_rules(self, draft: EmployeeDraft) -> ValidationResult:
        today = self.today()
        if draft.hire_date > today:
            return _fail("Hire date cannot be in the future")
        if draft.hire_date < _years_before(today, MAX_HIRE_YEARS_BACK):
            return _fail("Hire date cannot be more than 50 years ago")
        if draft.current_salary < MIN_SALARY:
            return _fail("Salary cannot be negative")
        if draft.current_salary > MAX_SALARY:
            return _fail(f"Salary cannot exceed ${MAX_SALARY:,}")
        if len(draft.email.strip()) > 100:
            return _fail("Email address cannot exceed 100 characters")
        return PASSED

    # ------------------------------------------------------------------
    # Addresses
    # ------------------------------------------------------------------

    def validate_address(self, address: AddressDraft) -> ValidationResult:
        if _blank(address.street):
            return _fail("Street address is required")
        if len(address.street.strip()) > 100:
            return _fail("Street address cannot exceed 100 characters")
        if address.city_id is None or address.city_id <= 0:
            return _fail("Valid city is required")
        if address.state_id is None or address.state_id <= 0:
            return _fail("Valid state is required")
        if not _blank(address.zip) and not ZIP_PATTERN.match(address.zip.strip()):
            return _fail("Invalid ZIP code format")
        if not _blank(address.phone) and not PHONE_PATTERN.match(address.phone.strip()):
            return _fail("Invalid phone number format")
        if address.date_of_birth is None:
            return _fail("Date of birth is required")
        return self.validate_date_of_birth(address.date_of_birth)

    def validate_date_of_birth(self, dob: date) -> ValidationResult:
        today = self.today()
        if dob > today:
            return _fail("Date of birth cannot be in the future")
        age = _years_between(dob, today)
        if age < MIN_AGE:
            return _fail(f"Employee must be at least {MIN_AGE} years old")
        if age > MAX_AGE:
            return _fail(f"Employee age cannot exceed {MAX_AGE} years")
        return PASSED

    # ------------------------------------------------------------------
    # Salary, dates and pay
    # ------------------------------------------------------------------

    def validate_salary_adjustment(
        self,
        min_salary: Decimal | None,
        max_salary: Decimal | None,
        percentage: Decimal | None,
    ) -> ValidationResult:
        if min_salary is None or max_salary is None:
            return _fail("Salary range values cannot be null")
        if min_salary < 0 or max_salary < 0:
            return _fail("Salary values cannot be negative")
        if min_salary > max_salary:
            return _fail("Minimum salary cannot be greater than maximum salary")
        if percentage is None:
            return _fail("Percentage is required")
        if not MIN_ADJUSTMENT_PERCENT <= percentage <= MAX_ADJUSTMENT_PERCENT:
            return _fail("Percentage must be between -50% and 100%")
        return PASSED

    def validate_date_range(self, start: date | None, end: date | None) -> ValidationResult:
        if start is None or end is None:
            return _fail("Start date and end date are required")
        if end < start:
            return _fail("End date cannot be before start date")
        return PASSED

    def validate_report_month(self, year: int | None, month: int | None) -> ValidationResult:
        max_year = self.today().year + 1
        if year is None or not MIN_REPORT_YEAR <= year <= max_year:
            return _fail(f"Year must be between {MIN_REPORT_YEAR} and {max_year}")
        if month is None or not 1 <= month <= 12:
            return _fail("Month must be between 1 and 12")
        return PASSED

    def validate_payroll(self, draft: PayrollDraft) -> ValidationResult:
        if draft.pay_date is None:
            return _fail("Pay date is required")
        if draft.pay_date > self.today():
            return _fail("Pay date cannot be in the future")
        result = self.validate_date_range(draft.pay_period_start, draft.pay_period_end)
        if not result:
            return _fail(f"Pay period: {result.message}")
        if draft.gross_pay is None or draft.net_pay is None:
            return _fail("Gross pay and net pay are required")
        if draft.gross_pay < 0 or draft.net_pay < 0:
            return _fail("Pay amounts cannot be negative")
        for label, amount in (
            ("Federal tax", draft.federal_tax),
            ("State tax", draft.state_tax),
            ("Other deductions", draft.other_deductions),
        ):
            if amount is None or amount < 0:
                return _fail(f"{label} cannot be negative")
        if draft.net_pay > draft.gross_pay:
            return _fail("Net pay cannot exceed gross pay")
        return PASSED

    # ------------------------------------------------------------------
    # Single-field checks
    # ------------------------------------------------------------------

    @staticmethod
    def is_valid_email(email: str | None) -> bool:
        return bool(email) and EMAIL_PATTERN.match(email.strip()) is not None

    @staticmethod
    def is_valid_ssn(ssn: str | None) -> bool:
        return bool(ssn) and SSN_PATTERN.match(ssn.strip()) is not None

    @staticmethod
    def is_valid_phone(phone: str | None) -> bool:
        return bool(phone) and PHONE_PATTERN.match(phone.strip()) is not None

    @staticmethod
    def is_valid_zip(zip_code: str | None) -> bool:
        return bool(zip_code) and ZIP_PATTERN.match(zip_code.strip()) is not None

    @staticmethod
    def format_ssn(ssn: str) -> str:
        """Normalize nine SSN digits to XXX-XX-XXXX."""
        digits = re.sub(r"\D", "", ssn)
        if len(digits) != 9:
            return ssn.strip()
        return f"{digits[:3]}-{digits[3:5]}-{digits[5:]}"
