"""Client authentication session.

A single observable cell holding the current bearer token. It changes
only on login, logout, and when the server rejects the token (401).
"""

from dataclasses import dataclass
from typing import Callable

import structlog

logger = structlog.get_logger()

SessionListener = Callable[["Session | None", str], None]


@dataclass(frozen=True)
class Session:
    """An authenticated identity."""

    token: str
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        """Check whether the session may mutate the catalog."""
        return self.role == "ADMIN"


class SessionState:
    """Observable holder of the current session.

    Listeners are called with the new session (None when signed out)
    and a reason: ``"login"``, ``"logout"`` or ``"expired"``. A listener
    receiving ``"expired"`` should send the user back to the login view.
    """

    def __init__(self) -> None:
        self._session: Session | None = None
        self._listeners: list[SessionListener] = []

    @property
    def current(self) -> Session | None:
        """The active session, if any."""
        return self._session

    @property
    def token(self) -> str | None:
        """Bearer token of the active session."""
        return self._session.token if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener.

        Returns:
            Function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def login(self, session: Session) -> None:
        """Replace the current session after a successful login."""
        self._set(session, "login")

    def logout(self) -> None:
        """Drop the current session at the user's request."""
        self._set(None, "logout")

    def expire(self) -> None:
        """Drop the current session because the server rejected it."""
        if self._session is None:
            return
        logger.warning("Session expired", username=self._session.username)
        self._set(None, "expired")

    def _set(self, session: Session | None, reason: str) -> None:
        self._session = session
        for listener in list(self._listeners):
            listener(session, reason)
