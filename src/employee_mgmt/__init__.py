"""Employee management system core: employees, payroll, reports and logins."""

__version__ = "1.0.0"
