"""Business-logic facades."""

from employee_mgmt.services.auth_service import AuthService
from employee_mgmt.services.authorization import Permission, UserSession
from employee_mgmt.services.employee_service import EmployeeService
from employee_mgmt.services.lookup_service import LookupService
from employee_mgmt.services.payroll_service import PayrollService
from employee_mgmt.services.report_service import ReportService
from employee_mgmt.services.results import ErrorKind, ServiceResult
from employee_mgmt.services.salary_service import SalaryAdjustmentService
from employee_mgmt.services.session_state import (
    InvalidTransitionError,
    LoginSession,
    SessionState,
    SessionStateMachine,
)
from employee_mgmt.services.types import (
    AddressDraft,
    EmployeeDraft,
    PayrollDraft,
    SalaryAdjustmentSummary,
    SearchCriteria,
)
from employee_mgmt.services.validation import ValidationResult, ValidationService

__all__ = [
    "AddressDraft",
    "AuthService",
    "EmployeeDraft",
    "EmployeeService",
    "ErrorKind",
    "InvalidTransitionError",
    "LoginSession",
    "LookupService",
    "PayrollDraft",
    "PayrollService",
    "Permission",
    "ReportService",
    "SalaryAdjustmentService",
    "SalaryAdjustmentSummary",
    "SearchCriteria",
    "ServiceResult",
    "SessionState",
    "SessionStateMachine",
    "UserSession",
    "ValidationResult",
    "ValidationService",
]
