"""ORM models for the employee management schema."""

from employee_mgmt.models.base import Base, TimestampMixin, utcnow
from employee_mgmt.models.employee import (
    Address,
    Employee,
    EmployeeDivision,
    EmployeeJobTitle,
    EmploymentStatus,
    Gender,
)
from employee_mgmt.models.location import City, State
from employee_mgmt.models.organization import Division, JobTitle
from employee_mgmt.models.payroll import PayrollRecord
from employee_mgmt.models.user import AuditLog, User, UserRole

__all__ = [
    "Address",
    "AuditLog",
    "Base",
    "City",
    "Division",
    "Employee",
    "EmployeeDivision",
    "EmployeeJobTitle",
    "EmploymentStatus",
    "Gender",
    "JobTitle",
    "PayrollRecord",
    "State",
    "TimestampMixin",
    "User",
    "UserRole",
    "utcnow",
]
