"""Map failed ServiceResults onto HTTP errors."""

from __future__ import annotations

from typing import TypeVar

from fastapi import HTTPException, status

from employee_mgmt.services import ErrorKind, ServiceResult

T = TypeVar("T")

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unwrap(result: ServiceResult[T]) -> T:
    """Return the result's data or raise the matching HTTPException."""
    if result.success:
        return result.data
    kind = result.error or ErrorKind.INTERNAL
    raise HTTPException(
        status_code=STATUS_BY_KIND[kind],
        detail={"message": result.message, "code": kind.value},
    )
