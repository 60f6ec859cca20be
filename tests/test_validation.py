"""Tests for field and business-rule validation."""

from datetime import date
from decimal import Decimal

import pytest

from employee_mgmt.services import AddressDraft, EmployeeDraft, PayrollDraft, ValidationService

TODAY = date(2024, 6, 15)


@pytest.fixture
def validator() -> ValidationService:
    return ValidationService(today=lambda: TODAY)


def employee(**overrides) -> EmployeeDraft:
    values = dict(
        emp_number="E3001",
        first_name="Grace",
        last_name="O'Neil",
        email="grace@example.com",
        ssn="123-45-6789",
        hire_date=date(2024, 1, 2),
        current_salary=Decimal("50000.00"),
    )
    values.update(overrides)
    return EmployeeDraft(**values)


def address(**overrides) -> AddressDraft:
    values = dict(street="1 Main St", city_id=1, state_id=1, date_of_birth=date(1990, 6, 15))
    values.update(overrides)
    return AddressDraft(**values)


class TestEmployeeValidation:
    """Test employee field rules."""

    def test_valid(self, validator):
        result = validator.validate_employee(employee())

        assert result.valid is True
        assert bool(result) is True

    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"first_name": None}, "First name is required"),
            ({"first_name": "J"}, "First name contains invalid characters or is too long"),
            ({"last_name": "Smith3"}, "Last name contains invalid characters or is too long"),
            ({"email": "   "}, "Email is required"),
            ({"email": "a@b"}, "Invalid email format"),
            ({"emp_number": "X" * 21}, "Employee number cannot exceed 20 characters"),
            ({"ssn": None}, "SSN is required"),
            ({"hire_date": None}, "Hire date is required"),
            ({"current_salary": None}, "Current salary is required"),
            ({"hire_date": date(2024, 6, 16)}, "Hire date cannot be in the future"),
            ({"hire_date": date(1974, 6, 14)}, "Hire date cannot be more than 50 years ago"),
            ({"current_salary": Decimal("1000000.01")}, "Salary cannot exceed $1,000,000"),
        ],
    )
    def test_failures(self, validator, overrides, message):
        result = validator.validate_employee(employee(**overrides))

        assert result.valid is False
        assert result.message == message

    def test_hire_date_today_is_allowed(self, validator):
        assert validator.validate_employee(employee(hire_date=TODAY)).valid is True

    def test_zero_salary_is_allowed(self, validator):
        assert validator.validate_employee(employee(current_salary=Decimal("0"))).valid is True


class TestAddressValidation:
    """Test address and date-of-birth rules."""

    def test_valid(self, validator):
        assert validator.validate_address(address(zip="30303-1234", phone="(404) 555-0101")).valid is True

    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"street": ""}, "Street address is required"),
            ({"city_id": 0}, "Valid city is required"),
            ({"state_id": None}, "Valid state is required"),
            ({"zip": "3030"}, "Invalid ZIP code format"),
            ({"phone": "555-01"}, "Invalid phone number format"),
            ({"date_of_birth": None}, "Date of birth is required"),
            ({"date_of_birth": date(2025, 1, 1)}, "Date of birth cannot be in the future"),
        ],
    )
    def test_failures(self, validator, overrides, message):
        assert validator.validate_address(address(**overrides)).message == message

    def test_sixteenth_birthday_is_old_enough(self, validator):
        assert validator.validate_date_of_birth(date(2008, 6, 15)).valid is True
        assert validator.validate_date_of_birth(date(2008, 6, 16)).message == (
            "Employee must be at least 16 years old"
        )

    def test_too_old(self, validator):
        assert validator.validate_date_of_birth(date(1923, 6, 14)).message == (
            "Employee age cannot exceed 100 years"
        )


class TestRanges:
    """Test date range, report month and payroll rules."""

    def test_date_range(self, validator):
        assert validator.validate_date_range(date(2024, 1, 1), date(2024, 1, 1)).valid is True
        assert validator.validate_date_range(None, date(2024, 1, 1)).message == (
            "Start date and end date are required"
        )

    def test_report_month_allows_next_year(self, validator):
        assert validator.validate_report_month(2025, 12).valid is True
        assert validator.validate_report_month(2026, 1).valid is False

    def test_payroll_period_order(self, validator):
        draft = PayrollDraft(
            empid=1,
            pay_date=date(2024, 1, 31),
            pay_period_start=date(2024, 1, 31),
            pay_period_end=date(2024, 1, 1),
            gross_pay=Decimal("100"),
            net_pay=Decimal("80"),
        )

        assert validator.validate_payroll(draft).message == (
            "Pay period: End date cannot be before start date"
        )

    def test_payroll_future_pay_date(self, validator):
        draft = PayrollDraft(
            empid=1,
            pay_date=date(2024, 7, 1),
            pay_period_start=date(2024, 6, 1),
            pay_period_end=date(2024, 6, 30),
            gross_pay=Decimal("100"),
            net_pay=Decimal("80"),
        )

        assert validator.validate_payroll(draft).message == "Pay date cannot be in the future"


class TestFieldHelpers:
    """Test single-field checks."""

    @pytest.mark.parametrize("ssn", ["123-45-6789", "123456789"])
    def test_valid_ssn(self, ssn):
        assert ValidationService.is_valid_ssn(ssn) is True

    @pytest.mark.parametrize("ssn", [None, "", "12-345-6789", "abc-de-fghi"])
    def test_invalid_ssn(self, ssn):
        assert ValidationService.is_valid_ssn(ssn) is False

    def test_format_ssn(self):
        assert ValidationService.format_ssn("123456789") == "123-45-6789"
        assert ValidationService.format_ssn(" 123-45-6789 ") == "123-45-6789"
        assert ValidationService.format_ssn("12345") == "12345"

    def test_email_and_zip(self):
        assert ValidationService.is_valid_email("first.last+tag@mail.example.org") is True
        assert ValidationService.is_valid_email("first.last@") is False
        assert ValidationService.is_valid_zip("30303") is True
        assert ValidationService.is_valid_zip("303031") is False
        assert ValidationService.is_valid_phone("+1 404-555-0101") is True
