"""Data access for the audit trail."""

from __future__ import annotations

import json
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import AuditLog
from employee_mgmt.repositories.base import translates_db_errors


def _jsonable(values: dict[str, Any] | None) -> dict[str, Any] | None:
    # Decimal and date values round-trip as strings
    if values is None:
        return None
    return json.loads(json.dumps(values, default=str))


class AuditLogRepository:
    """Append-only writes to ``audit_log``."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translates_db_errors
    async def record(
        self,
        table_name: str,
        operation: str,
        empid: int | None,
        changed_by: str | None,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
    ) -> AuditLog:
        entry = AuditLog(
            table_name=table_name,
            operation=operation,
            empid=empid,
            changed_by=changed_by,
            old_values=_jsonable(old_values),
            new_values=_jsonable(new_values),
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    @translates_db_errors
    async def list_for_employee(self, empid: int) -> Sequence[AuditLog]:
        result = await self.session.execute(
            select(AuditLog)
            .where(AuditLog.empid == empid)
            .order_by(AuditLog.change_timestamp, AuditLog.log_id)
        )
        return result.scalars().all()
