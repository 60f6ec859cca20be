"""API route modules."""

from employee_mgmt.api.routes.auth import router as auth_router
from employee_mgmt.api.routes.employees import router as employees_router
from employee_mgmt.api.routes.health import router as health_router
from employee_mgmt.api.routes.lookups import router as lookups_router
from employee_mgmt.api.routes.payroll import router as payroll_router
from employee_mgmt.api.routes.reports import router as reports_router

__all__ = [
    "auth_router",
    "employees_router",
    "health_router",
    "lookups_router",
    "payroll_router",
    "reports_router",
]
