"""Login accounts and audit trail."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from employee_mgmt.models.base import Base, TimestampMixin, utcnow

if TYPE_CHECKING:
    from employee_mgmt.models.employee import Employee


class UserRole(str, Enum):
    """Application roles."""

    HR_ADMIN = "HR_ADMIN"
    EMPLOYEE = "EMPLOYEE"

    @property
    def display_name(self) -> str:
        return "HR Administrator" if self is UserRole.HR_ADMIN else "Employee"

    @classmethod
    def from_string(cls, value: str) -> UserRole:
        """Parse by name or display name, case-insensitively."""
        needle = value.strip().upper().replace(" ", "_")
        for role in cls:
            if needle in (role.value, role.display_name.upper().replace(" ", "_")):
                return role
        raise ValueError(f"Unknown role: {value}")


class User(Base, TimestampMixin):
    """Login account, optionally linked to an employee."""

    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    user_role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    empid: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("employees.empid", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    last_login: Mapped[datetime | None] = mapped_column(DateTime(), nullable=True)

    employee: Mapped[Employee | None] = relationship(lazy="selectin")

    @property
    def full_name(self) -> str:
        """Linked employee's name, or the username for unlinked accounts."""
        if self.employee is not None:
            return self.employee.full_name
        return self.username

    def __repr__(self) -> str:
        return f"<User {self.user_id} {self.username} {self.user_role.value}>"


class AuditLog(Base):
    """Append-only change log written alongside employee mutations."""

    __tablename__ = "audit_log"

    log_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    table_name: Mapped[str] = mapped_column(String(50), nullable=False)
    operation: Mapped[str] = mapped_column(String(10), nullable=False)
    empid: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    changed_by: Mapped[str | None] = mapped_column(String(50), nullable=True)
    change_timestamp: Mapped[datetime] = mapped_column(
        DateTime(), default=utcnow, nullable=False, index=True
    )
    old_values: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    new_values: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
