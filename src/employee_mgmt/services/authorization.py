"""Authenticated caller context and role-based permission checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from employee_mgmt.models import User, UserRole, utcnow


class Permission(str, Enum):
    """Named actions checked by the presentation layer and facades."""

    CREATE_EMPLOYEE = "CREATE_EMPLOYEE"
    UPDATE_EMPLOYEE = "UPDATE_EMPLOYEE"
    DELETE_EMPLOYEE = "DELETE_EMPLOYEE"
    UPDATE_SALARY = "UPDATE_SALARY"
    GENERATE_REPORTS = "GENERATE_REPORTS"
    VIEW_ALL_EMPLOYEES = "VIEW_ALL_EMPLOYEES"
    MANAGE_PAYROLL = "MANAGE_PAYROLL"
    VIEW_OWN_DATA = "VIEW_OWN_DATA"
    VIEW_PAY_STATEMENTS = "VIEW_PAY_STATEMENTS"


EVERYONE = frozenset({Permission.VIEW_OWN_DATA, Permission.VIEW_PAY_STATEMENTS})

ROLE_PERMISSIONS: dict[UserRole, frozenset[Permission]] = {
    UserRole.HR_ADMIN: frozenset(Permission),
    UserRole.EMPLOYEE: EVERYONE,
}


@dataclass(frozen=True)
class UserSession:
    """Who is calling. Built by login, passed into every facade call."""

    user_id: int
    username: str
    role: UserRole
    employee_id: int | None = None
    full_name: str = ""
    login_time: datetime = field(default_factory=utcnow)

    @classmethod
    def from_user(cls, user: User) -> UserSession:
        return cls(
            user_id=user.user_id,
            username=user.username,
            role=user.user_role,
            employee_id=user.empid,
            full_name=user.full_name,
        )

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.HR_ADMIN

    @property
    def can_write(self) -> bool:
        return self.is_admin

    def can_view_employee(self, empid: int) -> bool:
        """Admins see everyone; employees only their own record."""
        return self.is_admin or (self.employee_id is not None and self.employee_id == empid)

    def has_permission(self, action: Permission | str) -> bool:
        try:
            permission = Permission(action)
        except ValueError:
            return False
        return permission in ROLE_PERMISSIONS.get(self.role, EVERYONE)
