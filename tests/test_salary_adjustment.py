"""Tests for percentage salary adjustments over a salary band."""

from decimal import Decimal

import pytest

from employee_mgmt.models import EmploymentStatus
from employee_mgmt.repositories import AuditLogRepository, EmployeeRepository
from employee_mgmt.services import ErrorKind, SalaryAdjustmentService
from employee_mgmt.services.salary_service import adjusted_salary


class TestAdjustedSalary:
    """Test the per-employee rounding rule."""

    def test_five_percent(self):
        """Test 85000 * 1.05."""
        assert adjusted_salary(Decimal("85000.00"), Decimal("5")) == Decimal("89250.00")

    def test_rounds_half_up_to_cents(self):
        """Test that fractional cents round half up."""
        # 333.33 * 1.015 = 338.32995
        assert adjusted_salary(Decimal("333.33"), Decimal("1.5")) == Decimal("338.33")

    def test_negative_percentage_lowers_salary(self):
        """Test a pay cut."""
        assert adjusted_salary(Decimal("50000.00"), Decimal("-10")) == Decimal("45000.00")


class TestAdjustSalaries:
    """Test SalaryAdjustmentService.adjust_salaries against the sample data."""

    @pytest.mark.asyncio
    async def test_updates_only_employees_in_band(self, session, admin, seeded):
        """Test that 80000-90000 at 5% touches E1001 and not E1003."""
        service = SalaryAdjustmentService(session)

        result = await service.adjust_salaries(admin, Decimal("80000"), Decimal("90000"), 5.0)

        assert result.success is True
        summary = result.data
        assert summary.employees_updated == 1
        assert summary.total_increase == Decimal("4250.00")
        assert summary.total_old_salary == Decimal("85000.00")
        assert summary.total_new_salary == Decimal("89250.00")
        assert [c.emp_number for c in summary.changes] == ["E1001"]
        assert result.message == "Successfully updated 1 employee salaries"

        employees = EmployeeRepository(session)
        alice = await employees.get(seeded["E1001"])
        carol = await employees.get(seeded["E1003"])
        assert alice.current_salary == Decimal("89250.00")
        assert carol.current_salary == Decimal("78000.00")

    @pytest.mark.asyncio
    async def test_accepts_numeric_strings(self, session, admin):
        """Test that form-style string inputs are parsed."""
        service = SalaryAdjustmentService(session)

        result = await service.adjust_salaries(admin, "$80,000", "90000.00", "5")

        assert result.success is True
        assert result.data.employees_updated == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("low", "high"),
        [
            (Decimal("85000.00"), Decimal("90000.00")),
            (Decimal("80000.00"), Decimal("85000.00")),
            (Decimal("85000.00"), Decimal("85000.00")),
        ],
    )
    async def test_band_edges_are_inclusive(self, session, admin, seeded, low, high):
        """Test that a salary equal to either bound is adjusted."""
        service = SalaryAdjustmentService(session)

        result = await service.adjust_salaries(admin, low, high, Decimal("5"))

        assert result.success is True
        assert [c.emp_number for c in result.data.changes] == ["E1001"]
        alice = await EmployeeRepository(session).get(seeded["E1001"])
        assert alice.current_salary == Decimal("89250.00")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("low", "high"),
        [
            (Decimal("85000.01"), Decimal("90000.00")),
            (Decimal("80000.00"), Decimal("84999.99")),
        ],
    )
    async def test_salary_just_outside_band_is_unchanged(self, session, admin, seeded, low, high):
        """Test that a band one cent above or below 85000 leaves E1001 alone."""
        service = SalaryAdjustmentService(session)

        result = await service.adjust_salaries(admin, low, high, Decimal("5"))

        assert result.success is True
        assert result.data.employees_updated == 0
        alice = await EmployeeRepository(session).get(seeded["E1001"])
        assert alice.current_salary == Decimal("85000.00")

    @pytest.mark.asyncio
    async def test_terminated_employees_are_skipped(self, session, admin, seeded):
        """Test that E1004 (terminated, 68000) is not adjusted."""
        service = SalaryAdjustmentService(session)

        result = await service.adjust_salaries(admin, Decimal("60000"), Decimal("70000"), Decimal("10"))

        assert result.success is True
        assert result.data.employees_updated == 0
        david = await EmployeeRepository(session).get(seeded["E1004"])
        assert david.employment_status == EmploymentStatus.TERMINATED
        assert david.current_salary == Decimal("68000.00")

    @pytest.mark.asyncio
    async def test_empty_band_succeeds_with_zero_totals(self, session, admin):
        """Test that no matches is a success, not an error."""
        service = SalaryAdjustmentService(session)

        result = await service.adjust_salaries(admin, Decimal("200000"), Decimal("300000"), Decimal("5"))

        assert result.success is True
        assert result.message == "No active employees found in the specified salary range"
        assert result.data.employees_updated == 0
        assert result.data.total_increase == Decimal("0.00")
        assert result.data.changes == ()

    @pytest.mark.asyncio
    async def test_writes_audit_rows(self, session, admin, seeded):
        """Test that each changed salary is recorded in the audit log."""
        service = SalaryAdjustmentService(session)
        await service.adjust_salaries(admin, Decimal("80000"), Decimal("90000"), Decimal("5"))

        entries = await AuditLogRepository(session).list_for_employee(seeded["E1001"])

        assert len(entries) == 1
        assert entries[0].operation == "UPDATE"
        assert entries[0].changed_by == "hradmin"
        assert entries[0].old_values == {"current_salary": "85000.00"}

    @pytest.mark.asyncio
    async def test_employee_role_is_denied(self, session, alice, seeded):
        """Test that EMPLOYEE callers cannot adjust salaries."""
        service = SalaryAdjustmentService(session)

        result = await service.adjust_salaries(alice, Decimal("80000"), Decimal("90000"), Decimal("5"))

        assert result.success is False
        assert result.error is ErrorKind.ACCESS_DENIED
        assert result.message == "Access denied: HR Admin privileges required"
        alice_row = await EmployeeRepository(session).get(seeded["E1001"])
        assert alice_row.current_salary == Decimal("85000.00")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("low", "high", "pct", "message"),
        [
            (None, Decimal("90000"), Decimal("5"), "Salary range values cannot be null"),
            (Decimal("-1"), Decimal("90000"), Decimal("5"), "Salary values cannot be negative"),
            (Decimal("90000"), Decimal("80000"), Decimal("5"), "Minimum salary cannot be greater than maximum salary"),
            (Decimal("80000"), Decimal("90000"), Decimal("150"), "Percentage must be between -50% and 100%"),
            (Decimal("80000"), Decimal("90000"), Decimal("-60"), "Percentage must be between -50% and 100%"),
            ("abc", Decimal("90000"), Decimal("5"), "Salary range values must be numeric"),
            (Decimal("80000"), Decimal("90000"), "five", "Percentage must be numeric"),
        ],
    )
    async def test_invalid_input_is_rejected(self, session, admin, low, high, pct, message):
        """Test validation failures are reported before any update."""
        service = SalaryAdjustmentService(session)

        result = await service.adjust_salaries(admin, low, high, pct)

        assert result.success is False
        assert result.error is ErrorKind.VALIDATION
        assert result.message == message


class TestPreview:
    """Test dry-run previews."""

    @pytest.mark.asyncio
    async def test_preview_does_not_write(self, session, admin, seeded):
        """Test that preview reports changes but leaves salaries alone."""
        service = SalaryAdjustmentService(session)

        result = await service.preview(admin, Decimal("40000"), Decimal("90000"), Decimal("10"))

        assert result.success is True
        assert result.data.employees_updated == 3  # E1005, E1003, E1001
        assert [c.emp_number for c in result.data.changes] == ["E1005", "E1003", "E1001"]
        alice_row = await EmployeeRepository(session).get(seeded["E1001"])
        assert alice_row.current_salary == Decimal("85000.00")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("low", "high", "pct", "message"),
        [
            ("abc", Decimal("90000"), Decimal("5"), "Salary range values must be numeric"),
            (Decimal("80000"), Decimal("90000"), "five", "Percentage must be numeric"),
            (None, Decimal("90000"), Decimal("5"), "Salary range values cannot be null"),
        ],
    )
    async def test_preview_validates_like_adjust(self, session, admin, low, high, pct, message):
        """Test that a dry run reports the same validation messages."""
        service = SalaryAdjustmentService(session)

        result = await service.preview(admin, low, high, pct)

        assert result.success is False
        assert result.error is ErrorKind.VALIDATION
        assert result.message == message
