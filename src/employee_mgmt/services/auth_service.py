"""Username/password login and account administration."""

from __future__ import annotations

import logging
import re

from sqlalchemy.ext.asyncio import AsyncSession

from employee_mgmt.models import User, UserRole, utcnow
from employee_mgmt.repositories import EmployeeRepository, UserRepository, normalize_username
from employee_mgmt.services.authorization import UserSession
from employee_mgmt.services.base import ServiceBase, service_operation
from employee_mgmt.services.passwords import (
    PASSWORD_REQUIREMENTS,
    hash_password,
    is_strong_password,
    verify_password,
)
from employee_mgmt.services.results import ErrorKind, ServiceResult
from employee_mgmt.services.session_state import LoginSession
from employee_mgmt.services.validation import ValidationService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"
USERNAME_PATTERN = re.compile(r"^[a-z0-9._-]{3,50}$")


class AuthService(ServiceBase):
    """Authenticates against the ``users`` table.

    Every credential failure (unknown user, wrong password, inactive
    account) produces the same message so callers cannot tell which
    usernames exist.
    """

    def __init__(self, session: AsyncSession, validator: ValidationService | None = None):
        super().__init__(session, validator)
        self.users = UserRepository(session)
        self.employees = EmployeeRepository(session)

    @service_operation()
    async def login(
        self,
        username: str | None,
        password: str | None,
        login_session: LoginSession | None = None,
    ) -> ServiceResult[UserSession]:
        """Verify credentials; on success move ``login_session`` to AUTHENTICATED."""
        if login_session is not None and login_session.is_authenticated:
            return ServiceResult.invalid("Already logged in; log out first")
        if not username or not username.strip():
            return ServiceResult.invalid("Username is required")
        if not password:
            return ServiceResult.invalid("Password is required")

        user = await self.users.get_active_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for %s", normalize_username(username))
            return ServiceResult.fail(ErrorKind.ACCESS_DENIED, INVALID_CREDENTIALS)

        now = utcnow()
        await self.users.touch_last_login(user.user_id, now)
        current = UserSession.from_user(user)
        if login_session is not None:
            login_session.authenticate(current)
        logger.info("User %s logged in as %s", current.username, current.role.value)
        return ServiceResult.ok(current, f"Welcome, {current.full_name}")

    def logout(self, login_session: LoginSession) -> ServiceResult[UserSession]:
        """Move the session back to ANONYMOUS.

        Raises InvalidTransitionError if the session is not authenticated.
        """
        user = login_session.logout()
        logger.info("User %s logged out", user.username)
        return ServiceResult.ok(user, "Logged out")

    @service_operation()
    async def verify_session(self, current: UserSession) -> ServiceResult[UserSession]:
        """Re-check that a logged-in account still exists and is active."""
        user = await self.users.get(current.user_id)
        if user is None or not user.is_active:
            logger.info("Rejecting session for inactive user %s", current.username)
            return ServiceResult.fail(ErrorKind.ACCESS_DENIED, "Account is no longer active")
        return ServiceResult.ok(current, "Session is valid")

    # ------------------------------------------------------------------
    # Account administration
    # ------------------------------------------------------------------

    @service_operation()
    async def is_username_available(self, username: str) -> ServiceResult[bool]:
        if not username or not username.strip():
            return ServiceResult.invalid("Username is required")
        taken = await self.users.username_exists(username)
        return ServiceResult.ok(not taken, "Username is taken" if taken else "Username is available")

    @service_operation("Username already exists")
    async def create_user(
        self,
        username: str,
        password: str,
        role: UserRole,
        empid: int | None = None,
        actor: UserSession | None = None,
    ) -> ServiceResult[User]:
        """Create a login. ``actor=None`` is the trusted bootstrap path used by the CLI."""
        if actor is not None and not actor.is_admin:
            return ServiceResult.denied()
        name = normalize_username(username or "")
        if not USERNAME_PATTERN.match(name):
            return ServiceResult.invalid(
                "Username must be 3-50 characters of letters, digits, '.', '_' or '-'"
            )
        if not is_strong_password(password):
            return ServiceResult.invalid(PASSWORD_REQUIREMENTS)
        if await self.users.username_exists(name):
            return ServiceResult.invalid("Username already exists")
        if role is UserRole.EMPLOYEE and empid is None:
            return ServiceResult.invalid("Employee logins must be linked to an employee")
        if empid is not None and await self.employees.get(empid) is None:
            return ServiceResult.not_found(f"Employee not found: {empid}")

        user = User(
            username=name,
            password_hash=hash_password(password),
            user_role=role,
            empid=empid,
            is_active=True,
        )
        await self.users.add(user)
        logger.info("User %s created with role %s", name, role.value)
        return ServiceResult.ok(user, "User created successfully")

    @service_operation()
    async def change_password(
        self,
        actor: UserSession,
        old_password: str,
        new_password: str,
    ) -> ServiceResult[bool]:
        """Change the caller's own password after re-checking the old one."""
        user = await self.users.get(actor.user_id)
        if user is None or not user.is_active:
            return ServiceResult.not_found("User account not found")
        if not verify_password(old_password or "", user.password_hash):
            return ServiceResult.invalid("Current password is incorrect")
        if not is_strong_password(new_password):
            return ServiceResult.invalid(PASSWORD_REQUIREMENTS)
        if old_password == new_password:
            return ServiceResult.invalid("New password must differ from the current password")

        await self.users.set_password_hash(user.user_id, hash_password(new_password))
        logger.info("Password changed for %s", user.username)
        return ServiceResult.ok(True, "Password changed successfully")

    @service_operation()
    async def deactivate_user(self, actor: UserSession, user_id: int) -> ServiceResult[bool]:
        if not actor.is_admin:
            return ServiceResult.denied()
        if actor.user_id == user_id:
            return ServiceResult.invalid("You cannot deactivate your own account")
        if not await self.users.set_active(user_id, False):
            return ServiceResult.not_found(f"User not found: {user_id}")
        logger.info("User %s deactivated by %s", user_id, actor.username)
        return ServiceResult.ok(True, "User deactivated")
