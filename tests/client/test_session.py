"""Tests for the client session state."""

from catalog_client.session import Session, SessionState

ADMIN = Session(token="t1", username="admin", role="ADMIN")


class TestSessionState:
    """Tests for SessionState."""

    def test_starts_signed_out(self) -> None:
        """No session until login."""
        state = SessionState()
        assert state.current is None
        assert state.token is None
        assert not state.is_authenticated

    def test_login_notifies(self) -> None:
        """Listeners see the new session and the reason."""
        state = SessionState()
        events = []
        state.subscribe(lambda session, reason: events.append((session, reason)))

        state.login(ADMIN)

        assert state.token == "t1"
        assert state.current.is_admin
        assert events == [(ADMIN, "login")]

    def test_expire_signals_redirect(self) -> None:
        """A rejected token clears the session with reason 'expired'."""
        state = SessionState()
        state.login(ADMIN)
        events = []
        state.subscribe(lambda session, reason: events.append((session, reason)))

        state.expire()
        state.expire()

        assert state.current is None
        assert events == [(None, "expired")]

    def test_logout(self) -> None:
        """Logout clears the session."""
        state = SessionState()
        state.login(ADMIN)
        state.logout()
        assert state.current is None

    def test_unsubscribe(self) -> None:
        """Unsubscribed listeners are not called."""
        state = SessionState()
        events = []
        unsubscribe = state.subscribe(lambda session, reason: events.append(reason))
        unsubscribe()

        state.login(ADMIN)

        assert events == []

    def test_user_role_is_not_admin(self) -> None:
        """USER sessions are read-only."""
        assert not Session(token="t", username="user", role="USER").is_admin
