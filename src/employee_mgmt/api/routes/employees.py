"""Employee endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from employee_mgmt.api.dependencies import CurrentUser, DbSession
from employee_mgmt.api.errors import unwrap
from employee_mgmt.api.schemas import (
    AssignmentRequest,
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdate,
    ErrorResponse,
)
from employee_mgmt.services import EmployeeService, SearchCriteria

router = APIRouter(prefix="/employees", tags=["employees"])

ERRORS = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERRORS,
)
async def create_employee(db: DbSession, user: CurrentUser, payload: EmployeeCreate) -> EmployeeResponse:
    """Create an employee with an optional address."""
    address = payload.address.to_draft() if payload.address else None
    employee = unwrap(await EmployeeService(db).create(user, payload.to_draft(), address))
    return EmployeeResponse.from_model(employee)


@router.get("", response_model=EmployeeListResponse, responses=ERRORS)
async def search_employees(
    db: DbSession,
    user: CurrentUser,
    empid: Annotated[int | None, Query()] = None,
    ssn: Annotated[str | None, Query()] = None,
    emp_number: Annotated[str | None, Query()] = None,
    date_of_birth: Annotated[date | None, Query()] = None,
    name: Annotated[str | None, Query()] = None,
) -> EmployeeListResponse:
    """Search employees; with no filters admins get every active employee."""
    criteria = SearchCriteria(
        empid=empid,
        ssn=ssn,
        emp_number=emp_number,
        date_of_birth=date_of_birth,
        name=name,
    )
    result = await EmployeeService(db).search(user, criteria)
    employees = unwrap(result)
    return EmployeeListResponse(
        items=[EmployeeResponse.from_model(e) for e in employees],
        total=len(employees),
        message=result.message,
    )


@router.get("/{empid}", response_model=EmployeeResponse, responses=ERRORS)
async def get_employee(
    db: DbSession,
    user: CurrentUser,
    empid: Annotated[int, Path()],
) -> EmployeeResponse:
    employee = unwrap(await EmployeeService(db).get(user, empid))
    return EmployeeResponse.from_model(employee)


@router.patch("/{empid}", response_model=EmployeeResponse, responses=ERRORS)
async def update_employee(
    db: DbSession,
    user: CurrentUser,
    empid: Annotated[int, Path()],
    payload: EmployeeUpdate,
) -> EmployeeResponse:
    """Change employee fields and/or replace the address."""
    address = payload.address.to_draft() if payload.address else None
    employee = unwrap(await EmployeeService(db).update(user, empid, payload.changes(), address))
    return EmployeeResponse.from_model(employee)


@router.post("/{empid}/terminate", response_model=EmployeeResponse, responses=ERRORS)
async def terminate_employee(
    db: DbSession,
    user: CurrentUser,
    empid: Annotated[int, Path()],
) -> EmployeeResponse:
    """Mark the employee TERMINATED; history is kept."""
    employee = unwrap(await EmployeeService(db).terminate(user, empid))
    return EmployeeResponse.from_model(employee)


@router.post("/{empid}/division", response_model=EmployeeResponse, responses=ERRORS)
async def assign_division(
    db: DbSession,
    user: CurrentUser,
    empid: Annotated[int, Path()],
    payload: AssignmentRequest,
) -> EmployeeResponse:
    employee = unwrap(
        await EmployeeService(db).assign_division(user, empid, payload.target_id, payload.start_date)
    )
    return EmployeeResponse.from_model(employee)


@router.post("/{empid}/job-title", response_model=EmployeeResponse, responses=ERRORS)
async def assign_job_title(
    db: DbSession,
    user: CurrentUser,
    empid: Annotated[int, Path()],
    payload: AssignmentRequest,
) -> EmployeeResponse:
    employee = unwrap(
        await EmployeeService(db).assign_job_title(user, empid, payload.target_id, payload.start_date)
    )
    return EmployeeResponse.from_model(employee)
