"""Payroll record model."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from employee_mgmt.models.base import MONEY, Base
from employee_mgmt.money import ZERO, format_currency

if TYPE_CHECKING:
    from employee_mgmt.models.employee import Employee

DISPLAY_DATE = "%m/%d/%Y"


class PayrollRecord(Base):
    """One pay period for one employee. Rows are insert-only."""

    __tablename__ = "payroll"
    __table_args__ = (Index("idx_payroll_period", "pay_period_start", "pay_period_end"),)

    payroll_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    empid: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("employees.empid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    pay_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    pay_period_start: Mapped[date] = mapped_column(Date, nullable=False)
    pay_period_end: Mapped[date] = mapped_column(Date, nullable=False)
    gross_pay: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    net_pay: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    federal_tax: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=ZERO)
    state_tax: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=ZERO)
    other_deductions: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=ZERO)

    employee: Mapped[Employee] = relationship(lazy="selectin")

    @property
    def total_deductions(self) -> Decimal:
        """Federal tax + state tax + other deductions; never stored."""
        return (self.federal_tax or ZERO) + (self.state_tax or ZERO) + (self.other_deductions or ZERO)

    @property
    def effective_tax_rate(self) -> Decimal:
        """Income taxes as a percentage of gross pay."""
        if not self.gross_pay or self.gross_pay <= 0:
            return ZERO
        taxes = (self.federal_tax or ZERO) + (self.state_tax or ZERO)
        ratio = (taxes / self.gross_pay).quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)
        return (ratio * 100).quantize(Decimal("0.01"))

    @property
    def employee_name(self) -> str:
        return self.employee.full_name if self.employee is not None else ""

    @property
    def formatted_pay_period(self) -> str:
        return (
            f"{self.pay_period_start.strftime(DISPLAY_DATE)} - "
            f"{self.pay_period_end.strftime(DISPLAY_DATE)}"
        )

    @property
    def formatted_pay_date(self) -> str:
        return self.pay_date.strftime(DISPLAY_DATE)

    @property
    def formatted_gross_pay(self) -> str:
        return format_currency(self.gross_pay)

    @property
    def formatted_net_pay(self) -> str:
        return format_currency(self.net_pay)

    def __repr__(self) -> str:
        return f"<PayrollRecord {self.payroll_id} emp={self.empid} {self.pay_date}>"
