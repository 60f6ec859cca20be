"""Pydantic schemas for API request/response models."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from employee_mgmt.models import Employee, Gender, PayrollRecord, UserRole
from employee_mgmt.services import AddressDraft, EmployeeDraft, PayrollDraft, UserSession


class ErrorResponse(BaseModel):
    """Error body produced by failed service results."""

    detail: dict[str, str] | str


# ============================================================================
# Auth schemas
# ============================================================================


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class SessionResponse(BaseModel):
    """Authenticated caller."""

    user_id: int
    username: str
    role: str
    employee_id: int | None = None
    full_name: str
    login_time: datetime

    @classmethod
    def from_user(cls, user: UserSession) -> SessionResponse:
        return cls(
            user_id=user.user_id,
            username=user.username,
            role=user.role.value,
            employee_id=user.employee_id,
            full_name=user.full_name,
            login_time=user.login_time,
        )


class LoginResponse(SessionResponse):
    token: str
    message: str


class PasswordChangeRequest(BaseModel):
    old_password: str
    new_password: str


class UserCreateRequest(BaseModel):
    """New login; EMPLOYEE logins must name the employee they belong to."""

    username: str = ""
    password: str = ""
    role: str = "EMPLOYEE"
    empid: int | None = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    username: str
    user_role: UserRole
    empid: int | None = None
    is_active: bool
    last_login: datetime | None = None


# ============================================================================
# Employee schemas
# ============================================================================


class AddressPayload(BaseModel):
    """Address fields for create and update requests."""

    street: str | None = None
    city_id: int | None = None
    state_id: int | None = None
    date_of_birth: date | None = None
    zip: str | None = None
    gender: Gender | None = None
    race: str | None = None
    phone: str | None = None

    def to_draft(self) -> AddressDraft:
        return AddressDraft(**self.model_dump())


class EmployeeCreate(BaseModel):
    """Schema for creating an employee."""

    emp_number: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    ssn: str | None = None
    hire_date: date | None = None
    current_salary: Decimal | None = None
    address: AddressPayload | None = None

    def to_draft(self) -> EmployeeDraft:
        return EmployeeDraft(**self.model_dump(exclude={"address"}))


class EmployeeUpdate(BaseModel):
    """Partial update; only fields present in the body change."""

    emp_number: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    ssn: str | None = None
    hire_date: date | None = None
    current_salary: Decimal | None = None
    address: AddressPayload | None = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude={"address"})


class AddressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    street: str | None = None
    city_id: int
    city_name: str | None = None
    state_id: int
    state_code: str | None = None
    state_name: str | None = None
    zip: str | None = None
    gender: Gender | None = None
    race: str | None = None
    date_of_birth: date | None = None
    phone: str | None = None
    full_address: str


class EmployeeResponse(BaseModel):
    """Employee with address and current assignments."""

    empid: int
    emp_number: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    ssn: str
    hire_date: date
    current_salary: Decimal
    employment_status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    address: AddressResponse | None = None
    division: str | None = None
    job_title: str | None = None

    @classmethod
    def from_model(cls, employee: Employee) -> EmployeeResponse:
        division = employee.current_division
        job_title = employee.current_job_title
        return cls(
            empid=employee.empid,
            emp_number=employee.emp_number,
            first_name=employee.first_name,
            last_name=employee.last_name,
            full_name=employee.full_name,
            email=employee.email,
            ssn=employee.ssn,
            hire_date=employee.hire_date,
            current_salary=employee.current_salary,
            employment_status=employee.employment_status.value,
            created_at=employee.created_at,
            updated_at=employee.updated_at,
            address=AddressResponse.model_validate(employee.address) if employee.address else None,
            division=division.division_name if division else None,
            job_title=job_title.job_title if job_title else None,
        )


class EmployeeListResponse(BaseModel):
    items: list[EmployeeResponse]
    total: int
    message: str


class AssignmentRequest(BaseModel):
    """New division or job title assignment starting on ``start_date``."""

    target_id: int
    start_date: date


# ============================================================================
# Salary and payroll schemas
# ============================================================================


class SalaryAdjustmentRequest(BaseModel):
    min_salary: Decimal | None = None
    max_salary: Decimal | None = None
    percentage: Decimal | None = None
    dry_run: bool = False


class SalaryChangeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    empid: int
    emp_number: str
    full_name: str
    old_salary: Decimal
    new_salary: Decimal


class SalaryAdjustmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    employees_updated: int
    total_old_salary: Decimal
    total_new_salary: Decimal
    total_increase: Decimal
    percentage_applied: Decimal
    changes: list[SalaryChangeResponse] = Field(default_factory=list)
    message: str = ""


class PayrollCreate(BaseModel):
    empid: int
    pay_date: date | None = None
    pay_period_start: date | None = None
    pay_period_end: date | None = None
    gross_pay: Decimal | None = None
    net_pay: Decimal | None = None
    federal_tax: Decimal = Decimal("0.00")
    state_tax: Decimal = Decimal("0.00")
    other_deductions: Decimal = Decimal("0.00")

    def to_draft(self) -> PayrollDraft:
        return PayrollDraft(**self.model_dump())


class PayrollCalculateRequest(BaseModel):
    empid: int
    pay_period_start: date
    pay_period_end: date
    pay_date: date


class PayrollRecordResponse(BaseModel):
    """One pay statement."""

    model_config = ConfigDict(from_attributes=True)

    payroll_id: int
    empid: int
    employee_name: str
    pay_date: date
    pay_period_start: date
    pay_period_end: date
    gross_pay: Decimal
    net_pay: Decimal
    federal_tax: Decimal
    state_tax: Decimal
    other_deductions: Decimal
    total_deductions: Decimal
    effective_tax_rate: Decimal
    formatted_pay_period: str

    @classmethod
    def from_model(cls, record: PayrollRecord) -> PayrollRecordResponse:
        return cls.model_validate(record)


class PayStatementListResponse(BaseModel):
    items: list[PayrollRecordResponse]
    total: int
    message: str


# ============================================================================
# Report schemas
# ============================================================================


class HiringReportRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    empid: int
    emp_number: str
    full_name: str
    email: str
    hire_date: date
    current_salary: Decimal
    employment_status: str
    street: str | None = None
    city_name: str | None = None
    state_code: str | None = None
    zip: str | None = None
    division_name: str | None = None
    job_title: str | None = None


class HiringReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    start: date
    end: date
    total_employees: int
    rows: list[HiringReportRowResponse]


class MonthlyPayRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    group_id: int
    group_name: str
    total_gross_pay: Decimal
    total_net_pay: Decimal
    total_deductions: Decimal
    record_count: int


class MonthlyPayReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year: int
    month: int
    grouping: str
    total_gross_pay: Decimal
    total_net_pay: Decimal
    record_count: int
    rows: list[MonthlyPayRowResponse]


class HeadcountRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    group_id: int
    group_name: str
    employee_count: int
    average_salary: Decimal
    min_salary: Decimal
    max_salary: Decimal


class SalaryBandRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    salary_range: str
    employee_count: int
    min_salary: Decimal
    max_salary: Decimal
    average_salary: Decimal


class TenureBandRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tenure_range: str
    employee_count: int
    average_salary: Decimal


class DemographicsSummaryResponse(BaseModel):
    """Dashboard figures over active employees."""

    model_config = ConfigDict(from_attributes=True)

    total_employees: int
    male_count: int
    female_count: int
    other_gender_count: int
    prefer_not_to_say_count: int
    average_age: Decimal | None = None
    earliest_hire_date: date | None = None
    latest_hire_date: date | None = None
    average_salary: Decimal


# ============================================================================
# Lookup schemas
# ============================================================================


class DivisionCreate(BaseModel):
    division_name: str = ""
    division_code: str = ""


class DivisionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    div_id: int
    division_name: str
    division_code: str


class JobTitleCreate(BaseModel):
    job_title: str = ""
    base_salary: Decimal | None = None


class JobTitleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    job_title_id: int
    job_title: str
    base_salary: Decimal


class StateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    state_id: int
    state_code: str
    state_name: str


class CityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    city_id: int
    city_name: str
    state_id: int
