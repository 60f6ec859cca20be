"""Reference data: divisions, job titles, states and cities."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import City, Division, JobTitle, State
from employee_mgmt.money import ZERO, round_to_cents, to_decimal
from employee_mgmt.repositories import (
    CityRepository,
    DivisionRepository,
    JobTitleRepository,
    StateRepository,
)
from employee_mgmt.services.authorization import UserSession
from employee_mgmt.services.base import ServiceBase, service_operation
from employee_mgmt.services.results import ServiceResult
from employee_mgmt.services.validation import ValidationService

logger = logging.getLogger(__name__)

DIVISION_CODE_MAX = 20
NAME_MAX = 100


class LookupService(ServiceBase):
    """Lookup lists for any logged-in user; additions for HR_ADMIN only."""

    def __init__(self, session: AsyncSession, validator: ValidationService | None = None):
        super().__init__(session, validator)
        self.divisions = DivisionRepository(session)
        self.job_titles = JobTitleRepository(session)
        self.states = StateRepository(session)
        self.cities = CityRepository(session)

    @service_operation()
    async def list_divisions(self, user: UserSession) -> ServiceResult[Sequence[Division]]:
        divisions = await self.divisions.list_all()
        return ServiceResult.ok(divisions, f"Found {len(divisions)} division(s)")

    @service_operation()
    async def list_job_titles(self, user: UserSession) -> ServiceResult[Sequence[JobTitle]]:
        job_titles = await self.job_titles.list_all()
        return ServiceResult.ok(job_titles, f"Found {len(job_titles)} job title(s)")

    @service_operation()
    async def list_states(self, user: UserSession) -> ServiceResult[Sequence[State]]:
        states = await self.states.list_all()
        return ServiceResult.ok(states, f"Found {len(states)} state(s)")

    @service_operation()
    async def list_cities(self, user: UserSession, state_id: int | None = None) -> ServiceResult[Sequence[City]]:
        """All cities, or only those in ``state_id``."""
        if state_id is None:
            cities = await self.cities.list_all()
        else:
            if await self.states.get(state_id) is None:
                return ServiceResult.not_found(f"State not found with ID: {state_id}")
            cities = await self.cities.list_by_state(state_id)
        return ServiceResult.ok(cities, f"Found {len(cities)} city(ies)")

    @service_operation(conflict_message="Division already exists")
    async def create_division(
        self, user: UserSession, division_name: str | None, division_code: str | None
    ) -> ServiceResult[Division]:
        if not user.can_write:
            return ServiceResult.denied()
        name = (division_name or "").strip()
        code = (division_code or "").strip().upper()
        if not name:
            return ServiceResult.invalid("Division name is required")
        if len(name) > NAME_MAX:
            return ServiceResult.invalid(f"Division name cannot exceed {NAME_MAX} characters")
        if not code:
            return ServiceResult.invalid("Division code is required")
        if len(code) > DIVISION_CODE_MAX:
            return ServiceResult.invalid(f"Division code cannot exceed {DIVISION_CODE_MAX} characters")
        if await self.divisions.get_by_code(code) is not None:
            return ServiceResult.invalid("Division code already exists")
        if await self.divisions.get_by_name(name) is not None:
            return ServiceResult.invalid("Division name already exists")

        division = await self.divisions.add(Division(division_name=name, division_code=code))
        logger.info("Division %s created by %s", division.division_code, user.username)
        return ServiceResult.ok(division, f"Division {division.division_name} created")

    @service_operation(conflict_message="Job title already exists")
    async def create_job_title(
        self, user: UserSession, title: str | None, base_salary: Decimal | str | None = None
    ) -> ServiceResult[JobTitle]:
        if not user.can_write:
            return ServiceResult.denied()
        name = (title or "").strip()
        if not name:
            return ServiceResult.invalid("Job title is required")
        if len(name) > NAME_MAX:
            return ServiceResult.invalid(f"Job title cannot exceed {NAME_MAX} characters")
        salary = ZERO
        if base_salary is not None:
            parsed = to_decimal(base_salary)
            if parsed is None:
                return ServiceResult.invalid("Base salary must be numeric")
            salary = round_to_cents(parsed)
            if salary < ZERO:
                return ServiceResult.invalid("Base salary cannot be negative")
        if await self.job_titles.get_by_title(name) is not None:
            return ServiceResult.invalid("Job title already exists")

        job_title = await self.job_titles.add(JobTitle(job_title=name, base_salary=salary))
        logger.info("Job title %r created by %s", job_title.job_title, user.username)
        return ServiceResult.ok(job_title, f"Job title {job_title.job_title} created")
