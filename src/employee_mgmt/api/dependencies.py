"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.api.errors import unwrap
from employee_mgmt.api.sessions import SessionRegistry
from employee_mgmt.database import Database
from employee_mgmt.services import AuthService, ErrorKind, UserSession

SESSION_HEADER = "X-Session-Token"


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


async def get_db_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """One unit of work per request: commit on success, roll back on error."""
    async with database.session() as session:
        yield session


async def get_session_token(
    x_session_token: Annotated[str | None, Header()] = None,
) -> str:
    """Extract the session token from header."""
    if not x_session_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"{SESSION_HEADER} header is required",
        )
    return x_session_token


async def get_current_user(
    token: Annotated[str, Depends(get_session_token)],
    registry: Annotated[SessionRegistry, Depends(get_registry)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserSession:
    """Resolve the token, dropping the account's sessions once it is deactivated."""
    user = registry.user(token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session is not authenticated",
        )
    result = await AuthService(db).verify_session(user)
    if result.error is ErrorKind.ACCESS_DENIED:
        registry.revoke_user(user.user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.message,
        )
    return unwrap(result)


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
SessionToken = Annotated[str, Depends(get_session_token)]
Registry = Annotated[SessionRegistry, Depends(get_registry)]
CurrentUser = Annotated[UserSession, Depends(get_current_user)]
