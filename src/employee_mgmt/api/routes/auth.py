"""Login, logout and account endpoints."""

from fastapi import APIRouter, HTTPException, status

from employee_mgmt.api.dependencies import CurrentUser, DbSession, Registry, SessionToken
from employee_mgmt.api.errors import unwrap
from employee_mgmt.api.schemas import (
    LoginRequest,
    LoginResponse,
    PasswordChangeRequest,
    SessionResponse,
    UserCreateRequest,
    UserResponse,
)
from employee_mgmt.models import UserRole
from employee_mgmt.services import AuthService, ErrorKind, LoginSession

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(db: DbSession, registry: Registry, payload: LoginRequest) -> LoginResponse:
    """Exchange username and password for a session token."""
    login_session = LoginSession()
    result = await AuthService(db).login(payload.username, payload.password, login_session)
    if not result.success and result.error is ErrorKind.ACCESS_DENIED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": result.message, "code": result.error.value},
        )
    user = unwrap(result)
    token = registry.open(login_session)
    return LoginResponse(
        token=token,
        message=result.message,
        **SessionResponse.from_user(user).model_dump(),
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(db: DbSession, registry: Registry, token: SessionToken) -> None:
    """End the session behind the token."""
    login_session = registry.get(token)
    if login_session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session is not authenticated",
        )
    AuthService(db).logout(login_session)
    registry.close(token)


@router.get("/me", response_model=SessionResponse)
async def me(user: CurrentUser) -> SessionResponse:
    return SessionResponse.from_user(user)


@router.post("/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(db: DbSession, user: CurrentUser, payload: PasswordChangeRequest) -> None:
    unwrap(await AuthService(db).change_password(user, payload.old_password, payload.new_password))


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(db: DbSession, user: CurrentUser, payload: UserCreateRequest) -> UserResponse:
    """Create a login (HR admin only)."""
    try:
        role = UserRole.from_string(payload.role)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "code": ErrorKind.VALIDATION.value},
        ) from exc
    created = unwrap(
        await AuthService(db).create_user(payload.username, payload.password, role, payload.empid, actor=user)
    )
    return UserResponse.model_validate(created)


@router.post("/users/{user_id}/deactivate", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_user(db: DbSession, registry: Registry, user: CurrentUser, user_id: int) -> None:
    """Deactivate a login and end every session it holds."""
    unwrap(await AuthService(db).deactivate_user(user, user_id))
    registry.revoke_user(user_id)
