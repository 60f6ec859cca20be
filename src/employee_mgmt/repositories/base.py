"""Shared plumbing for repositories."""

from __future__ import annotations

import functools
from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from employee_mgmt.errors import ConstraintViolationError, DataAccessError

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def translates_db_errors(func: F) -> F:
    """Re-raise SQLAlchemy failures from a repository method as DataAccessError.

    The original exception is kept as ``__cause__`` so the facade that
    eventually logs the failure still gets the driver traceback.
    """

    @functools.wraps(func)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        operation = f"{type(self).__name__}.{func.__name__}"
        try:
            return await func(self, *args, **kwargs)
        except IntegrityError as exc:
            raise ConstraintViolationError(operation, str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            raise DataAccessError(operation, type(exc).__name__) from exc

    return wrapper  # type: ignore[return-value]
