"""Uniform result envelope returned by every facade operation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")

ACCESS_DENIED_MESSAGE = "Access denied: HR Admin privileges required"
DATABASE_ERROR_MESSAGE = "A database error occurred. Please try again."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class ErrorKind(str, Enum):
    """Why an operation failed."""

    VALIDATION = "VALIDATION"
    ACCESS_DENIED = "ACCESS_DENIED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL"


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Outcome of a facade call. Facades return these instead of raising."""

    success: bool
    message: str
    data: T | None = None
    error: ErrorKind | None = None

    @classmethod
    def ok(cls, data: T | None = None, message: str = "OK") -> ServiceResult[T]:
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, error: ErrorKind, message: str) -> ServiceResult[T]:
        return cls(success=False, message=message, error=error)

    @classmethod
    def invalid(cls, message: str) -> ServiceResult[T]:
        return cls.fail(ErrorKind.VALIDATION, message)

    @classmethod
    def denied(cls, message: str = ACCESS_DENIED_MESSAGE) -> ServiceResult[T]:
        return cls.fail(ErrorKind.ACCESS_DENIED, message)

    @classmethod
    def not_found(cls, message: str) -> ServiceResult[T]:
        return cls.fail(ErrorKind.NOT_FOUND, message)
