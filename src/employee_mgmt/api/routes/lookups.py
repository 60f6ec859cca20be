"""Lookup endpoints: divisions, job titles, states and cities."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from employee_mgmt.api.dependencies import CurrentUser, DbSession
from employee_mgmt.api.errors import unwrap
from employee_mgmt.api.schemas import (
    CityResponse,
    DivisionCreate,
    DivisionResponse,
    ErrorResponse,
    JobTitleCreate,
    JobTitleResponse,
    StateResponse,
)
from employee_mgmt.services import LookupService

router = APIRouter(tags=["lookups"])

ERRORS = {400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}


@router.get("/divisions", response_model=list[DivisionResponse])
async def list_divisions(db: DbSession, user: CurrentUser) -> list[DivisionResponse]:
    divisions = unwrap(await LookupService(db).list_divisions(user))
    return [DivisionResponse.model_validate(d) for d in divisions]


@router.post(
    "/divisions",
    response_model=DivisionResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERRORS,
)
async def create_division(db: DbSession, user: CurrentUser, request: DivisionCreate) -> DivisionResponse:
    division = unwrap(
        await LookupService(db).create_division(user, request.division_name, request.division_code)
    )
    return DivisionResponse.model_validate(division)


@router.get("/job-titles", response_model=list[JobTitleResponse])
async def list_job_titles(db: DbSession, user: CurrentUser) -> list[JobTitleResponse]:
    job_titles = unwrap(await LookupService(db).list_job_titles(user))
    return [JobTitleResponse.model_validate(j) for j in job_titles]


@router.post(
    "/job-titles",
    response_model=JobTitleResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERRORS,
)
async def create_job_title(db: DbSession, user: CurrentUser, request: JobTitleCreate) -> JobTitleResponse:
    job_title = unwrap(
        await LookupService(db).create_job_title(user, request.job_title, request.base_salary)
    )
    return JobTitleResponse.model_validate(job_title)


@router.get("/states", response_model=list[StateResponse])
async def list_states(db: DbSession, user: CurrentUser) -> list[StateResponse]:
    states = unwrap(await LookupService(db).list_states(user))
    return [StateResponse.model_validate(s) for s in states]


@router.get("/cities", response_model=list[CityResponse], responses={404: {"model": ErrorResponse}})
async def list_cities(
    db: DbSession,
    user: CurrentUser,
    state_id: Annotated[int | None, Query()] = None,
) -> list[CityResponse]:
    cities = unwrap(await LookupService(db).list_cities(user, state_id))
    return [CityResponse.model_validate(c) for c in cities]
