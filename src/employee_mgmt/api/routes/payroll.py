"""Pay statement, payroll and salary adjustment endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from employee_mgmt.api.dependencies import CurrentUser, DbSession
from employee_mgmt.api.errors import unwrap
from employee_mgmt.api.schemas import (
    ErrorResponse,
    PayrollCalculateRequest,
    PayrollCreate,
    PayrollRecordResponse,
    PayStatementListResponse,
    SalaryAdjustmentRequest,
    SalaryAdjustmentResponse,
)
from employee_mgmt.services import PayrollService, SalaryAdjustmentService

router = APIRouter(tags=["payroll"])

ERRORS = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get(
    "/employees/{empid}/pay-statements",
    response_model=PayStatementListResponse,
    responses=ERRORS,
)
async def list_pay_statements(
    db: DbSession,
    user: CurrentUser,
    empid: Annotated[int, Path()],
    start: Annotated[date | None, Query()] = None,
    end: Annotated[date | None, Query()] = None,
) -> PayStatementListResponse:
    """Pay history, optionally limited to a pay-date range."""
    service = PayrollService(db)
    if start is None and end is None:
        result = await service.get_pay_history(user, empid)
    else:
        result = await service.get_pay_history_by_date_range(user, empid, start, end)
    records = unwrap(result)
    return PayStatementListResponse(
        items=[PayrollRecordResponse.from_model(r) for r in records],
        total=len(records),
        message=result.message,
    )


@router.get("/payroll", response_model=PayStatementListResponse, responses=ERRORS)
async def list_payroll(
    db: DbSession,
    user: CurrentUser,
    start: Annotated[date, Query()],
    end: Annotated[date, Query()],
) -> PayStatementListResponse:
    result = await PayrollService(db).get_payroll_by_date_range(user, start, end)
    records = unwrap(result)
    return PayStatementListResponse(
        items=[PayrollRecordResponse.from_model(r) for r in records],
        total=len(records),
        message=result.message,
    )


@router.post(
    "/payroll",
    response_model=PayrollRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERRORS,
)
async def create_payroll(db: DbSession, user: CurrentUser, payload: PayrollCreate) -> PayrollRecordResponse:
    record = unwrap(await PayrollService(db).create_payroll_record(user, payload.to_draft()))
    return PayrollRecordResponse.from_model(record)


@router.post(
    "/payroll/calculate",
    response_model=PayrollRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERRORS,
)
async def calculate_payroll(
    db: DbSession,
    user: CurrentUser,
    payload: PayrollCalculateRequest,
) -> PayrollRecordResponse:
    """Create a payroll row from the employee's annual salary."""
    record = unwrap(
        await PayrollService(db).calculate_and_create_payroll(
            user,
            payload.empid,
            payload.pay_period_start,
            payload.pay_period_end,
            payload.pay_date,
        )
    )
    return PayrollRecordResponse.from_model(record)


@router.post("/salary-adjustments", response_model=SalaryAdjustmentResponse, responses=ERRORS)
async def adjust_salaries(
    db: DbSession,
    user: CurrentUser,
    payload: SalaryAdjustmentRequest,
) -> SalaryAdjustmentResponse:
    """Apply (or preview with ``dry_run``) a percentage change to a salary band."""
    service = SalaryAdjustmentService(db)
    operation = service.preview if payload.dry_run else service.adjust_salaries
    result = await operation(user, payload.min_salary, payload.max_salary, payload.percentage)
    summary = unwrap(result)
    response = SalaryAdjustmentResponse.model_validate(summary)
    response.message = result.message
    return response
