"""Tests for HR reports."""

from datetime import date
from decimal import Decimal

import pytest

from employee_mgmt.repositories.report_repository import SALARY_BANDS, TENURE_BANDS, band_for
from employee_mgmt.services import ErrorKind, ReportService
from employee_mgmt.services.report_service import (
    HIRING_REPORT_HEADERS,
    MONTHLY_PAY_HEADERS,
    month_bounds,
    to_csv,
)


class TestMonthBounds:
    """Test calendar month helper."""

    def test_leap_february(self):
        assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_december(self):
        assert month_bounds(2023, 12) == (date(2023, 12, 1), date(2023, 12, 31))


class TestHiringReport:
    """Test employees hired in a date range."""

    @pytest.mark.asyncio
    async def test_hired_in_range_ordered_by_hire_date(self, session, admin):
        """Test inclusive range and ordering."""
        result = await ReportService(session).hiring_report(admin, date(2019, 1, 1), date(2021, 12, 31))

        assert result.success is True
        report = result.data
        assert report.total_employees == 3
        assert [r.emp_number for r in report.rows] == ["E1002", "E1001", "E1003"]
        first = report.rows[0]
        assert first.full_name == "Bob Smith"
        assert first.city_name == "Miami"
        assert first.state_code == "FL"
        assert first.division_name == "Human Resources"
        assert first.job_title == "HR Manager"

    @pytest.mark.asyncio
    async def test_includes_terminated_without_current_assignment(self, session, admin):
        """Test that E1004 is listed with no current division."""
        result = await ReportService(session).hiring_report(admin, date(2018, 1, 8), date(2018, 1, 8))

        row = result.data.rows[0]
        assert row.emp_number == "E1004"
        assert row.employment_status == "TERMINATED"
        assert row.division_name is None
        assert row.job_title is None

    @pytest.mark.asyncio
    async def test_invalid_range(self, session, admin):
        result = await ReportService(session).hiring_report(admin, date(2024, 1, 2), date(2024, 1, 1))

        assert result.error is ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_employee_role_denied(self, session, alice):
        """Test that reports are HR_ADMIN only."""
        result = await ReportService(session).hiring_report(alice, date(2019, 1, 1), date(2021, 12, 31))

        assert result.error is ErrorKind.ACCESS_DENIED

    @pytest.mark.asyncio
    async def test_csv_export(self, session, admin):
        """Test CSV rendering of the hiring report."""
        result = await ReportService(session).hiring_report(admin, date(2022, 1, 1), date(2022, 12, 31))

        text = to_csv(result.data.rows, HIRING_REPORT_HEADERS)

        lines = text.splitlines()
        assert lines[0] == ",".join(HIRING_REPORT_HEADERS)
        assert len(lines) == 2
        assert ",E1005,Emma,Wilson," in lines[1]
        assert lines[1].endswith(",Operations,Customer Support Representative")


class TestMonthlyPay:
    """Test monthly pay totals."""

    @pytest.mark.asyncio
    async def test_by_division(self, session, admin, validator):
        """Test January 2024 totals grouped by current division."""
        result = await ReportService(session, validator).monthly_pay_by_division(admin, 2024, 1)

        assert result.success is True
        report = result.data
        assert [r.group_name for r in report.rows] == [
            "Human Resources",
            "Information Technology",
            "Finance",
            "Operations",
        ]
        assert report.rows[0].total_gross_pay == Decimal("7666.67")
        assert report.rows[0].total_net_pay == Decimal("5800.00")
        assert report.rows[0].total_deductions == Decimal("1866.67")
        assert report.total_gross_pay == Decimal("25000.00")
        assert report.total_net_pay == Decimal("19100.00")
        assert report.record_count == 4

    @pytest.mark.asyncio
    async def test_by_job_title(self, session, admin, validator):
        result = await ReportService(session, validator).monthly_pay_by_job_title(admin, 2024, 2)

        names = [r.group_name for r in result.data.rows]
        assert names == [
            "HR Manager",
            "Software Developer",
            "Financial Analyst",
            "Customer Support Representative",
        ]
        assert result.data.total_net_pay == Decimal("19300.00")

    @pytest.mark.asyncio
    async def test_month_without_payroll(self, session, admin, validator):
        """Test that an empty month yields no rows and zero totals."""
        result = await ReportService(session, validator).monthly_pay_by_division(admin, 2023, 6)

        assert result.success is True
        assert result.data.rows == ()
        assert result.data.total_gross_pay == Decimal("0.00")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("year", "month", "message"),
        [
            (2024, 13, "Month must be between 1 and 12"),
            (2024, 0, "Month must be between 1 and 12"),
            (1999, 1, "Year must be between 2000 and 2025"),
        ],
    )
    async def test_invalid_month(self, session, admin, validator, year, month, message):
        result = await ReportService(session, validator).monthly_pay_by_division(admin, year, month)

        assert result.error is ErrorKind.VALIDATION
        assert result.message == message

    @pytest.mark.asyncio
    async def test_csv_export(self, session, admin, validator):
        result = await ReportService(session, validator).monthly_pay_by_division(admin, 2024, 3)

        lines = to_csv(result.data.rows, MONTHLY_PAY_HEADERS).splitlines()

        assert lines[0] == "group_name,total_gross_pay,total_net_pay,record_count"
        assert lines[1] == "Human Resources,7666.67,5900.00,1"


class TestHeadcount:
    """Test active headcount reports."""

    @pytest.mark.asyncio
    async def test_by_division(self, session, admin):
        """Test that every division is listed and terminated staff are not counted."""
        result = await ReportService(session).headcount_by_division(admin)

        counts = {r.group_name: r.employee_count for r in result.data}
        assert counts == {
            "Finance": 1,
            "Human Resources": 1,
            "Information Technology": 1,
            "Marketing": 0,
            "Operations": 1,
        }
        marketing = next(r for r in result.data if r.group_name == "Marketing")
        assert marketing.average_salary == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_largest_groups_first(self, session, admin):
        """Test ordering by employee count, descending, then by name."""
        result = await ReportService(session).headcount_by_division(admin)

        assert [r.group_name for r in result.data] == [
            "Finance",
            "Human Resources",
            "Information Technology",
            "Operations",
            "Marketing",
        ]

    @pytest.mark.asyncio
    async def test_job_titles_with_staff_come_first(self, session, admin):
        result = await ReportService(session).headcount_by_job_title(admin)

        counts = [r.employee_count for r in result.data]
        assert counts == sorted(counts, reverse=True)
        assert counts[:4] == [1, 1, 1, 1]

    @pytest.mark.asyncio
    async def test_by_job_title(self, session, admin):
        result = await ReportService(session).headcount_by_job_title(admin)

        by_name = {r.group_name: r for r in result.data}
        assert len(by_name) == 10
        assert by_name["Software Developer"].employee_count == 1
        assert by_name["Software Developer"].max_salary == Decimal("85000.00")
        assert by_name["Marketing Specialist"].employee_count == 0

    @pytest.mark.asyncio
    async def test_requires_admin(self, session, emma):
        result = await ReportService(session).headcount_by_job_title(emma)

        assert result.error is ErrorKind.ACCESS_DENIED


class TestSalaryDistribution:
    """Test active employees per salary band."""

    @pytest.mark.asyncio
    async def test_bands_lowest_first(self, session, admin):
        """Test that empty bands are omitted and E1004 (terminated) is not counted."""
        result = await ReportService(session).salary_distribution(admin)

        assert result.success is True
        assert [(r.salary_range, r.employee_count) for r in result.data] == [
            ("$40K - $60K", 1),
            ("$60K - $80K", 1),
            ("$80K - $100K", 2),
        ]
        top = result.data[-1]
        assert top.min_salary == Decimal("85000.00")
        assert top.max_salary == Decimal("92000.00")
        assert top.average_salary == Decimal("88500.00")

    @pytest.mark.parametrize(
        ("salary", "label"),
        [
            (Decimal("39999.99"), "Under $40K"),
            (Decimal("40000.00"), "$40K - $60K"),
            (Decimal("119999.99"), "$100K - $120K"),
            (Decimal("120000.00"), "$120K+"),
        ],
    )
    def test_band_boundaries(self, salary, label):
        assert SALARY_BANDS[band_for(salary, SALARY_BANDS)][1] == label

    @pytest.mark.asyncio
    async def test_requires_admin(self, session, alice):
        result = await ReportService(session).salary_distribution(alice)

        assert result.error is ErrorKind.ACCESS_DENIED


class TestTenureAnalysis:
    """Test active employees per length-of-service band."""

    @pytest.mark.asyncio
    async def test_bands_as_of_today(self, session, admin, validator):
        """Test tenure measured against the injected date, 2024-06-15."""
        result = await ReportService(session, validator).tenure_analysis(admin)

        assert result.success is True
        assert [(r.tenure_range, r.employee_count, r.average_salary) for r in result.data] == [
            ("1-3 years", 2, Decimal("61500.00")),
            ("3-5 years", 2, Decimal("88500.00")),
        ]

    @pytest.mark.parametrize(
        ("days", "label"),
        [
            (0, "Less than 1 year"),
            (364, "Less than 1 year"),
            (365, "1-3 years"),
            (1824, "3-5 years"),
            (1825, "5-10 years"),
            (3650, "10+ years"),
        ],
    )
    def test_band_boundaries(self, days, label):
        assert TENURE_BANDS[band_for(days, TENURE_BANDS)][1] == label

    @pytest.mark.asyncio
    async def test_requires_admin(self, session, emma, validator):
        result = await ReportService(session, validator).tenure_analysis(emma)

        assert result.error is ErrorKind.ACCESS_DENIED


class TestDemographicsSummary:
    """Test the dashboard summary over active employees."""

    @pytest.mark.asyncio
    async def test_summary(self, session, admin, validator):
        result = await ReportService(session, validator).demographics_summary(admin)

        assert result.success is True
        summary = result.data
        assert summary.total_employees == 4
        assert (summary.male_count, summary.female_count) == (1, 3)
        assert summary.other_gender_count == 0
        assert summary.prefer_not_to_say_count == 0
        # Birth years 1990, 1985, 1992 and 1995 against 2024
        assert summary.average_age == Decimal("33.50")
        assert summary.earliest_hire_date == date(2019, 7, 1)
        assert summary.latest_hire_date == date(2022, 6, 10)
        assert summary.average_salary == Decimal("75000.00")

    @pytest.mark.asyncio
    async def test_requires_admin(self, session, alice):
        result = await ReportService(session).demographics_summary(alice)

        assert result.error is ErrorKind.ACCESS_DENIED
