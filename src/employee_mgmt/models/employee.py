"""Employee, address and assignment history models."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from employee_mgmt.models.base import MONEY, Base, utcnow
from employee_mgmt.money import format_currency

if TYPE_CHECKING:
    from employee_mgmt.models.location import City, State
    from employee_mgmt.models.organization import Division, JobTitle


def _enum_values(enum_cls: type[Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class EmploymentStatus(str, Enum):
    """Employment status values."""

    ACTIVE = "ACTIVE"
    TERMINATED = "TERMINATED"


class Gender(str, Enum):
    """Self-reported gender; stored by value."""

    M = "M"
    F = "F"
    OTHER = "Other"
    PREFER_NOT_TO_SAY = "Prefer not to say"

    @property
    def display_name(self) -> str:
        return {"M": "Male", "F": "Female"}.get(self.value, self.value)


class Employee(Base):
    """Employee record."""

    __tablename__ = "employees"

    empid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    emp_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    ssn: Mapped[str] = mapped_column(String(11), unique=True, nullable=False)
    hire_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    current_salary: Mapped[Decimal] = mapped_column(MONEY, nullable=False, index=True)
    employment_status: Mapped[EmploymentStatus] = mapped_column(
        SAEnum(
            EmploymentStatus,
            name="employment_status",
            values_callable=_enum_values,
        ),
        default=EmploymentStatus.ACTIVE,
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    # Relationships
    address: Mapped[Address | None] = relationship(
        back_populates="employee",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    division_history: Mapped[list[EmployeeDivision]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
        order_by="EmployeeDivision.start_date",
        lazy="selectin",
    )
    job_title_history: Mapped[list[EmployeeJobTitle]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
        order_by="EmployeeJobTitle.start_date",
        lazy="selectin",
    )

    @property
    def full_name(self) -> str:
        """Get full name."""
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self) -> bool:
        return self.employment_status == EmploymentStatus.ACTIVE

    @property
    def formatted_salary(self) -> str:
        return format_currency(self.current_salary)

    @property
    def current_division(self) -> Division | None:
        """Division from the current assignment row, if any."""
        for row in self.division_history:
            if row.is_current:
                return row.division
        return None

    @property
    def current_job_title(self) -> JobTitle | None:
        """Job title from the current assignment row, if any."""
        for row in self.job_title_history:
            if row.is_current:
                return row.job_title
        return None

    def __repr__(self) -> str:
        return f"<Employee {self.empid} {self.emp_number} {self.full_name}>"


class Address(Base):
    """Home address and demographics, one per employee."""

    __tablename__ = "address"

    empid: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.empid", ondelete="CASCADE"),
        primary_key=True,
    )
    street: Mapped[str | None] = mapped_column(String(100), nullable=True)
    city_id: Mapped[int] = mapped_column(Integer, ForeignKey("city.city_id"), nullable=False, index=True)
    state_id: Mapped[int] = mapped_column(Integer, ForeignKey("state.state_id"), nullable=False, index=True)
    zip: Mapped[str | None] = mapped_column(String(10), nullable=True)
    gender: Mapped[Gender | None] = mapped_column(
        SAEnum(Gender, name="gender", values_callable=_enum_values),
        nullable=True,
    )
    race: Mapped[str | None] = mapped_column(String(50), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="address")
    city: Mapped[City] = relationship(lazy="selectin")
    state: Mapped[State] = relationship(lazy="selectin")

    @property
    def city_name(self) -> str | None:
        return self.city.city_name if self.city is not None else None

    @property
    def state_code(self) -> str | None:
        return self.state.state_code if self.state is not None else None

    @property
    def state_name(self) -> str | None:
        return self.state.state_name if self.state is not None else None

    @property
    def full_address(self) -> str:
        """Street, city, state and zip joined with whatever parts are present."""
        parts = [p for p in (self.street, self.city_name, self.state_code) if p]
        text = ", ".join(parts)
        if self.zip:
            text = f"{text} {self.zip}" if text else self.zip
        return text


class EmployeeDivision(Base):
    """Time-ranged division assignment; rows are appended, never rewritten."""

    __tablename__ = "employee_division"

    empid: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.empid", ondelete="CASCADE"),
        primary_key=True,
    )
    div_id: Mapped[int] = mapped_column(Integer, ForeignKey("division.div_id"), primary_key=True)
    start_date: Mapped[date] = mapped_column(Date, primary_key=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_current: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    employee: Mapped[Employee] = relationship(back_populates="division_history")
    division: Mapped[Division] = relationship(lazy="selectin")


class EmployeeJobTitle(Base):
    """Time-ranged job title assignment; rows are appended, never rewritten."""

    __tablename__ = "employee_job_titles"

    empid: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.empid", ondelete="CASCADE"),
        primary_key=True,
    )
    job_title_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("job_titles.job_title_id"),
        primary_key=True,
    )
    start_date: Mapped[date] = mapped_column(Date, primary_key=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_current: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    employee: Mapped[Employee] = relationship(back_populates="job_title_history")
    job_title: Mapped[JobTitle] = relationship(lazy="selectin")
