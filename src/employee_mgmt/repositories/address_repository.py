"""Data access for employee addresses."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import Address, Employee
from employee_mgmt.repositories.base import translates_db_errors


class AddressRepository:
    """Queries over the ``address`` table (one row per employee)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translates_db_errors
    async def upsert(self, employee: Employee, values: dict) -> Address:
        """Update the employee's address in place, attaching one if missing."""
        address = employee.address
        if address is None:
            address = Address(**values)
            employee.address = address
        else:
            for key, value in values.items():
                setattr(address, key, value)
        await self.session.flush()
        # city/state ids may have changed; reload the lookups
        await self.session.refresh(address, attribute_names=["city", "state"])
        return address
