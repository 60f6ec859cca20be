"""In-process registry of logged-in API clients."""

from __future__ import annotations

import secrets

from employee_mgmt.services import LoginSession, UserSession


class SessionRegistry:
    """Maps opaque bearer tokens to authenticated login sessions.

    Tokens live only as long as the process; there is no expiry.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, LoginSession] = {}

    def open(self, login_session: LoginSession) -> str:
        token = secrets.token_urlsafe(32)
        self._sessions[token] = login_session
        return token

    def get(self, token: str) -> LoginSession | None:
        login_session = self._sessions.get(token)
        if login_session is None or not login_session.is_authenticated:
            return None
        return login_session

    def user(self, token: str) -> UserSession | None:
        login_session = self.get(token)
        return login_session.user if login_session else None

    def close(self, token: str) -> LoginSession | None:
        return self._sessions.pop(token, None)

    def revoke_user(self, user_id: int) -> int:
        """Drop every token held by one account; returns how many were dropped."""
        tokens = [
            token
            for token, login_session in self._sessions.items()
            if login_session.user is not None and login_session.user.user_id == user_id
        ]
        for token in tokens:
            del self._sessions[token]
        return len(tokens)

    def __len__(self) -> int:
        return len(self._sessions)
