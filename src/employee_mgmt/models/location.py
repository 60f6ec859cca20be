"""State and city lookup tables."""

from __future__ import annotations

from sqlalchemy import CHAR, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from employee_mgmt.models.base import Base


class State(Base):
    """US state lookup."""

    __tablename__ = "state"

    state_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    state_code: Mapped[str] = mapped_column(CHAR(2), unique=True, nullable=False)
    state_name: Mapped[str] = mapped_column(String(50), nullable=False)

    cities: Mapped[list[City]] = relationship(back_populates="state")

    def __str__(self) -> str:
        return f"{self.state_name} ({self.state_code})"


class City(Base):
    """City lookup, owned by a state."""

    __tablename__ = "city"

    city_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    city_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    state_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("state.state_id"),
        nullable=False,
        index=True,
    )

    state: Mapped[State] = relationship(back_populates="cities", lazy="selectin")

    def __str__(self) -> str:
        return self.city_name
