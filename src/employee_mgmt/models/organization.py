"""Division and job title lookup tables."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from employee_mgmt.models.base import MONEY, Base


class Division(Base):
    """Organizational division."""

    __tablename__ = "division"

    div_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    division_name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    division_code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)

    def __str__(self) -> str:
        return f"{self.division_name} ({self.division_code})"


class JobTitle(Base):
    """Job title with a reference base salary."""

    __tablename__ = "job_titles"

    job_title_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    job_title: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    base_salary: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0.00"))

    @property
    def formatted_base_salary(self) -> str:
        return f"${self.base_salary:,.2f}"

    def __str__(self) -> str:
        return self.job_title
