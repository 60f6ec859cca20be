"""Repositories: one class per table, each wrapping an AsyncSession."""

from employee_mgmt.repositories.address_repository import AddressRepository
from employee_mgmt.repositories.assignment_repository import AssignmentRepository
from employee_mgmt.repositories.audit_repository import AuditLogRepository
from employee_mgmt.repositories.employee_repository import EmployeeRepository
from employee_mgmt.repositories.location_repository import CityRepository, StateRepository
from employee_mgmt.repositories.organization_repository import (
    DivisionRepository,
    JobTitleRepository,
)
from employee_mgmt.repositories.payroll_repository import MonthlyPayRow, PayrollRepository
from employee_mgmt.repositories.report_repository import (
    DemographicsSummary,
    HeadcountRow,
    ReportRepository,
    SalaryBandRow,
    TenureBandRow,
)
from employee_mgmt.repositories.user_repository import UserRepository, normalize_username

__all__ = [
    "AddressRepository",
    "AssignmentRepository",
    "AuditLogRepository",
    "CityRepository",
    "DemographicsSummary",
    "DivisionRepository",
    "EmployeeRepository",
    "HeadcountRow",
    "JobTitleRepository",
    "MonthlyPayRow",
    "PayrollRepository",
    "ReportRepository",
    "SalaryBandRow",
    "StateRepository",
    "TenureBandRow",
    "UserRepository",
    "normalize_username",
]
