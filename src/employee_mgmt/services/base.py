"""Common behaviour for the service facades."""

from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.errors import ConstraintViolationError, DataAccessError
from employee_mgmt.services.results import (
    DATABASE_ERROR_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    ErrorKind,
    ServiceResult,
)
from employee_mgmt.services.validation import ValidationService

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[ServiceResult[Any]]])


class ServiceBase:
    """Holds the session and validator shared by every facade."""

    def __init__(self, session: AsyncSession, validator: ValidationService | None = None):
        self.session = session
        self.validator = validator or ValidationService()

    async def _rollback(self) -> None:
        try:
            await self.session.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback failed")


def service_operation(conflict_message: str = "Record conflicts with existing data") -> Callable[[F], F]:
    """Turn failures below the facade into failed ServiceResults.

    The session is rolled back so a partially applied unit of work never
    reaches commit. Full detail goes to the log; the caller only sees a
    generic message.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(self: ServiceBase, *args: Any, **kwargs: Any) -> ServiceResult[Any]:
            operation = f"{type(self).__name__}.{func.__name__}"
            try:
                return await func(self, *args, **kwargs)
            except ConstraintViolationError:
                logger.warning("Constraint violation in %s", operation, exc_info=True)
                await self._rollback()
                return ServiceResult.fail(ErrorKind.CONFLICT, conflict_message)
            except DataAccessError:
                logger.exception("Database error in %s", operation)
                await self._rollback()
                return ServiceResult.fail(ErrorKind.INTERNAL, DATABASE_ERROR_MESSAGE)
            except Exception:
                logger.exception("Unexpected error in %s", operation)
                await self._rollback()
                return ServiceResult.fail(ErrorKind.INTERNAL, UNEXPECTED_ERROR_MESSAGE)

        return wrapper  # type: ignore[return-value]

    return decorator
