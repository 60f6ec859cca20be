"""Login session state machine with transition validation."""

from __future__ import annotations

from enum import Enum

from employee_mgmt.services.authorization import UserSession


class SessionState(str, Enum):
    """Login session states."""

    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class InvalidTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_state: str, to_state: str, reason: str | None = None):
        self.from_state = from_state
        self.to_state = to_state
        self.reason = reason
        msg = f"Invalid transition from '{from_state}' to '{to_state}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class SessionStateMachine:
    """State machine for login sessions.

    Allowed transitions:
    - anonymous → authenticated (successful login)
    - authenticated → anonymous (logout)
    """

    VALID_TRANSITIONS: dict[str, list[str]] = {
        SessionState.ANONYMOUS: [SessionState.AUTHENTICATED],
        SessionState.AUTHENTICATED: [SessionState.ANONYMOUS],
    }

    @classmethod
    def can_transition(cls, from_state: str, to_state: str) -> bool:
        """Check if a transition is valid."""
        allowed = cls.VALID_TRANSITIONS.get(from_state, [])
        return to_state in allowed

    @classmethod
    def validate_transition(cls, from_state: str, to_state: str) -> None:
        """Validate a transition, raising InvalidTransitionError if invalid."""
        if not cls.can_transition(from_state, to_state):
            raise InvalidTransitionError(from_state, to_state)


class LoginSession:
    """One client's login state. Starts anonymous."""

    def __init__(self) -> None:
        self.state = SessionState.ANONYMOUS
        self.user: UserSession | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    def authenticate(self, user: UserSession) -> None:
        SessionStateMachine.validate_transition(self.state, SessionState.AUTHENTICATED)
        self.state = SessionState.AUTHENTICATED
        self.user = user

    def logout(self) -> UserSession:
        """End the session, returning who was logged in."""
        SessionStateMachine.validate_transition(self.state, SessionState.ANONYMOUS)
        user = self.user
        self.state = SessionState.ANONYMOUS
        self.user = None
        return user
