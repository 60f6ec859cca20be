"""Tests for the lookup facade."""

from decimal import Decimal

import pytest

from employee_mgmt.services import ErrorKind, LookupService


class TestLookupLists:
    """Test reading reference data."""

    @pytest.mark.asyncio
    async def test_divisions_by_name(self, session, alice):
        """Test that any logged-in user can list divisions."""
        result = await LookupService(session).list_divisions(alice)

        assert result.success is True
        assert [d.division_name for d in result.data] == [
            "Finance",
            "Human Resources",
            "Information Technology",
            "Marketing",
            "Operations",
        ]

    @pytest.mark.asyncio
    async def test_job_titles(self, session, admin):
        result = await LookupService(session).list_job_titles(admin)

        assert len(result.data) == 10
        assert result.data[0].job_title == "Customer Support Representative"
        assert result.data[0].base_salary == Decimal("45000.00")

    @pytest.mark.asyncio
    async def test_states(self, session, emma):
        result = await LookupService(session).list_states(emma)

        assert [s.state_code for s in result.data] == ["AL", "FL", "GA", "TN"]

    @pytest.mark.asyncio
    async def test_cities_in_state(self, session, admin):
        """Test filtering cities to Georgia (state 1)."""
        result = await LookupService(session).list_cities(admin, 1)

        assert result.success is True
        assert [c.city_name for c in result.data] == ["Atlanta", "Savannah"]

    @pytest.mark.asyncio
    async def test_all_cities(self, session, admin):
        result = await LookupService(session).list_cities(admin)

        assert len(result.data) == 6
        assert result.message == "Found 6 city(ies)"

    @pytest.mark.asyncio
    async def test_cities_in_unknown_state(self, session, admin):
        result = await LookupService(session).list_cities(admin, 99)

        assert result.error is ErrorKind.NOT_FOUND
        assert result.message == "State not found with ID: 99"


class TestCreateDivision:
    """Test adding divisions."""

    @pytest.mark.asyncio
    async def test_create(self, session, admin):
        """Test that the code is stored upper-cased and names are trimmed."""
        service = LookupService(session)

        result = await service.create_division(admin, "  Legal ", "leg")

        assert result.success is True
        assert result.data.div_id is not None
        assert (result.data.division_name, result.data.division_code) == ("Legal", "LEG")
        assert len((await service.list_divisions(admin)).data) == 6

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("name", "code", "message"),
        [
            ("", "LEG", "Division name is required"),
            ("Legal", None, "Division code is required"),
            ("Legal", "X" * 21, "Division code cannot exceed 20 characters"),
            ("Legal", "it", "Division code already exists"),
            ("finance", "FIN2", "Division name already exists"),
        ],
    )
    async def test_rejected(self, session, admin, name, code, message):
        result = await LookupService(session).create_division(admin, name, code)

        assert result.error is ErrorKind.VALIDATION
        assert result.message == message

    @pytest.mark.asyncio
    async def test_requires_admin(self, session, alice):
        result = await LookupService(session).create_division(alice, "Legal", "LEG")

        assert result.error is ErrorKind.ACCESS_DENIED


class TestCreateJobTitle:
    """Test adding job titles."""

    @pytest.mark.asyncio
    async def test_create_with_base_salary(self, session, admin):
        result = await LookupService(session).create_job_title(admin, "Data Engineer", "97,500.005")

        assert result.success is True
        assert result.data.job_title_id is not None
        assert result.data.base_salary == Decimal("97500.01")

    @pytest.mark.asyncio
    async def test_base_salary_defaults_to_zero(self, session, admin):
        result = await LookupService(session).create_job_title(admin, "Intern")

        assert result.data.base_salary == Decimal("0.00")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("title", "salary", "message"),
        [
            ("  ", None, "Job title is required"),
            ("Data Engineer", "lots", "Base salary must be numeric"),
            ("Data Engineer", "-1", "Base salary cannot be negative"),
            ("hr manager", None, "Job title already exists"),
        ],
    )
    async def test_rejected(self, session, admin, title, salary, message):
        result = await LookupService(session).create_job_title(admin, title, salary)

        assert result.error is ErrorKind.VALIDATION
        assert result.message == message

    @pytest.mark.asyncio
    async def test_requires_admin(self, session, emma):
        result = await LookupService(session).create_job_title(emma, "Intern")

        assert result.error is ErrorKind.ACCESS_DENIED
