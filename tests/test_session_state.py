"""Tests for the login session state machine and the token registry."""

import pytest

from employee_mgmt.api.sessions import SessionRegistry
from employee_mgmt.models import UserRole
from employee_mgmt.services import (
    InvalidTransitionError,
    LoginSession,
    Permission,
    SessionState,
    SessionStateMachine,
    UserSession,
)


def make_user(role: UserRole = UserRole.HR_ADMIN, employee_id: int | None = None) -> UserSession:
    return UserSession(user_id=1, username="tester", role=role, employee_id=employee_id)


class TestSessionStateMachine:
    """Test state machine transitions."""

    def test_valid_transitions(self):
        """Test that login and logout are allowed."""
        assert SessionStateMachine.can_transition("anonymous", "authenticated") is True
        assert SessionStateMachine.can_transition("authenticated", "anonymous") is True

    def test_invalid_transitions(self):
        """Test that self-transitions are blocked."""
        assert SessionStateMachine.can_transition("anonymous", "anonymous") is False
        assert SessionStateMachine.can_transition("authenticated", "authenticated") is False
        assert SessionStateMachine.can_transition("unknown", "authenticated") is False

    def test_validate_transition_raises(self):
        """Test that validate_transition raises for invalid transitions."""
        with pytest.raises(InvalidTransitionError) as exc_info:
            SessionStateMachine.validate_transition("anonymous", "anonymous")

        assert exc_info.value.from_state == "anonymous"
        assert exc_info.value.to_state == "anonymous"


class TestLoginSession:
    """Test a single client's login lifecycle."""

    def test_starts_anonymous(self):
        login_session = LoginSession()

        assert login_session.state is SessionState.ANONYMOUS
        assert login_session.is_authenticated is False

    def test_authenticate_then_logout(self):
        login_session = LoginSession()
        user = make_user()

        login_session.authenticate(user)
        assert login_session.is_authenticated is True
        assert login_session.user is user

        assert login_session.logout() is user
        assert login_session.user is None

    def test_double_login_raises(self):
        login_session = LoginSession()
        login_session.authenticate(make_user())

        with pytest.raises(InvalidTransitionError):
            login_session.authenticate(make_user())


class TestUserSessionPermissions:
    """Test role checks on UserSession."""

    def test_admin_has_every_permission(self):
        admin = make_user()

        assert admin.is_admin is True
        assert admin.can_write is True
        assert all(admin.has_permission(p) for p in Permission)
        assert admin.can_view_employee(42) is True

    def test_employee_permissions(self):
        employee = make_user(UserRole.EMPLOYEE, employee_id=7)

        assert employee.can_write is False
        assert employee.has_permission(Permission.VIEW_PAY_STATEMENTS) is True
        assert employee.has_permission("UPDATE_SALARY") is False
        assert employee.has_permission("NOT_A_PERMISSION") is False
        assert employee.can_view_employee(7) is True
        assert employee.can_view_employee(8) is False

    def test_unlinked_employee_sees_nobody(self):
        assert make_user(UserRole.EMPLOYEE).can_view_employee(1) is False

    def test_role_parsing(self):
        assert UserRole.from_string("hr admin") is UserRole.HR_ADMIN
        assert UserRole.from_string("HR Administrator") is UserRole.HR_ADMIN
        assert UserRole.from_string(" employee ") is UserRole.EMPLOYEE
        with pytest.raises(ValueError):
            UserRole.from_string("manager")


class TestSessionRegistry:
    """Test the API's token registry."""

    @staticmethod
    def logged_in(user_id: int) -> LoginSession:
        login_session = LoginSession()
        login_session.authenticate(UserSession(user_id=user_id, username=f"user{user_id}", role=UserRole.EMPLOYEE))
        return login_session

    def test_revoke_user_drops_only_that_users_tokens(self):
        registry = SessionRegistry()
        first = registry.open(self.logged_in(1))
        second = registry.open(self.logged_in(1))
        other = registry.open(self.logged_in(2))

        assert registry.revoke_user(1) == 2
        assert registry.get(first) is None
        assert registry.get(second) is None
        assert registry.user(other).user_id == 2
        assert len(registry) == 1

    def test_revoke_unknown_user(self):
        registry = SessionRegistry()
        registry.open(self.logged_in(1))

        assert registry.revoke_user(99) == 0
        assert len(registry) == 1
