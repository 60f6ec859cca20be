"""Report endpoints (HR admin only)."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from employee_mgmt.api.dependencies import CurrentUser, DbSession
from employee_mgmt.api.errors import unwrap
from employee_mgmt.api.schemas import (
    DemographicsSummaryResponse,
    ErrorResponse,
    HeadcountRowResponse,
    HiringReportResponse,
    MonthlyPayReportResponse,
    SalaryBandRowResponse,
    TenureBandRowResponse,
)
from employee_mgmt.services import ReportService
from employee_mgmt.services.report_service import (
    HIRING_REPORT_HEADERS,
    MONTHLY_PAY_HEADERS,
    to_csv,
)

router = APIRouter(prefix="/reports", tags=["reports"])

ERRORS = {400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}

Year = Annotated[int, Query()]
Month = Annotated[int, Query()]


@router.get("/hiring", response_model=HiringReportResponse, responses=ERRORS)
async def hiring_report(
    db: DbSession,
    user: CurrentUser,
    start: Annotated[date, Query()],
    end: Annotated[date, Query()],
) -> HiringReportResponse:
    report = unwrap(await ReportService(db).hiring_report(user, start, end))
    return HiringReportResponse.model_validate(report)


@router.get("/hiring.csv", response_class=PlainTextResponse, responses=ERRORS)
async def hiring_report_csv(
    db: DbSession,
    user: CurrentUser,
    start: Annotated[date, Query()],
    end: Annotated[date, Query()],
) -> PlainTextResponse:
    report = unwrap(await ReportService(db).hiring_report(user, start, end))
    return PlainTextResponse(to_csv(report.rows, HIRING_REPORT_HEADERS), media_type="text/csv")


@router.get("/monthly-pay/division", response_model=MonthlyPayReportResponse, responses=ERRORS)
async def monthly_pay_by_division(
    db: DbSession,
    user: CurrentUser,
    year: Year,
    month: Month,
) -> MonthlyPayReportResponse:
    report = unwrap(await ReportService(db).monthly_pay_by_division(user, year, month))
    return MonthlyPayReportResponse.model_validate(report)


@router.get("/monthly-pay/job-title", response_model=MonthlyPayReportResponse, responses=ERRORS)
async def monthly_pay_by_job_title(
    db: DbSession,
    user: CurrentUser,
    year: Year,
    month: Month,
) -> MonthlyPayReportResponse:
    report = unwrap(await ReportService(db).monthly_pay_by_job_title(user, year, month))
    return MonthlyPayReportResponse.model_validate(report)


@router.get("/monthly-pay/{grouping}.csv", response_class=PlainTextResponse, responses=ERRORS)
async def monthly_pay_csv(
    db: DbSession,
    user: CurrentUser,
    grouping: str,
    year: Year,
    month: Month,
) -> PlainTextResponse:
    if grouping not in ("division", "job-title"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown grouping: {grouping}")
    service = ReportService(db)
    if grouping == "division":
        result = await service.monthly_pay_by_division(user, year, month)
    else:
        result = await service.monthly_pay_by_job_title(user, year, month)
    report = unwrap(result)
    return PlainTextResponse(to_csv(report.rows, MONTHLY_PAY_HEADERS), media_type="text/csv")


@router.get("/headcount/division", response_model=list[HeadcountRowResponse], responses=ERRORS)
async def headcount_by_division(db: DbSession, user: CurrentUser) -> list[HeadcountRowResponse]:
    rows = unwrap(await ReportService(db).headcount_by_division(user))
    return [HeadcountRowResponse.model_validate(r) for r in rows]


@router.get("/headcount/job-title", response_model=list[HeadcountRowResponse], responses=ERRORS)
async def headcount_by_job_title(db: DbSession, user: CurrentUser) -> list[HeadcountRowResponse]:
    rows = unwrap(await ReportService(db).headcount_by_job_title(user))
    return [HeadcountRowResponse.model_validate(r) for r in rows]


@router.get("/salary-distribution", response_model=list[SalaryBandRowResponse], responses=ERRORS)
async def salary_distribution(db: DbSession, user: CurrentUser) -> list[SalaryBandRowResponse]:
    rows = unwrap(await ReportService(db).salary_distribution(user))
    return [SalaryBandRowResponse.model_validate(r) for r in rows]


@router.get("/tenure", response_model=list[TenureBandRowResponse], responses=ERRORS)
async def tenure_analysis(db: DbSession, user: CurrentUser) -> list[TenureBandRowResponse]:
    rows = unwrap(await ReportService(db).tenure_analysis(user))
    return [TenureBandRowResponse.model_validate(r) for r in rows]


@router.get("/demographics", response_model=DemographicsSummaryResponse, responses=ERRORS)
async def demographics_summary(db: DbSession, user: CurrentUser) -> DemographicsSummaryResponse:
    summary = unwrap(await ReportService(db).demographics_summary(user))
    return DemographicsSummaryResponse.model_validate(summary)
