"""Session gate in front of the authentication provider."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from healthy_track.domain.errors import AuthError
from healthy_track.domain.sessions import AuthSession

logger = logging.getLogger(__name__)

SessionListener = Callable[[AuthSession | None], None]


class Subscription(Protocol):
    """Handle returned by a change subscription."""

    def unsubscribe(self) -> None:
        """Stop receiving notifications."""


class AuthClient(Protocol):
    """Interface for the external authentication provider.

    Implementations raise ``AuthError`` when the provider rejects a call.
    """

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""

    def sign_up(self, email: str, password: str) -> AuthSession | None:
        """Register a new account."""

    def sign_out(self) -> None:
        """End the current session."""

    def get_session(self) -> AuthSession | None:
        """Return the provider's current session, if any."""

    def on_change(self, callback: SessionListener) -> Subscription:
        """Subscribe to session changes made by the provider."""


@dataclass
class _ListenerSubscription:
    listeners: list[SessionListener]
    listener: SessionListener

    def unsubscribe(self) -> None:
        if self.listener in self.listeners:
            self.listeners.remove(self.listener)


@dataclass
class SessionGate:
    """Tracks whether a user is signed in and notifies listeners on change."""

    auth_client: AuthClient
    _session: AuthSession | None = field(default=None, init=False)
    _listeners: list[SessionListener] = field(default_factory=list, init=False)
    _provider_subscription: Subscription | None = field(default=None, init=False)

    def start(self) -> AuthSession | None:
        """Pick up an existing session and follow provider-side changes."""
        if self._provider_subscription is None:
            self._provider_subscription = self.auth_client.on_change(self._apply)
        self._apply(self.auth_client.get_session())
        return self._session

    def stop(self) -> None:
        """Stop following provider-side changes."""
        if self._provider_subscription is not None:
            self._provider_subscription.unsubscribe()
            self._provider_subscription = None

    def current_session(self) -> AuthSession | None:
        """Return the active session, if any."""
        return self._session

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in; the session is unchanged when the provider refuses."""
        session = self.auth_client.sign_in(email, password)
        logger.info("Signed in", extra={"user_id": session.user_id})
        self._apply(session)
        return session

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Register and immediately sign in with the same credentials."""
        self.auth_client.sign_up(email, password)
        try:
            session = self.auth_client.sign_in(email, password)
        except AuthError as exc:
            raise AuthError(
                f"Account created, but signing in failed: {exc}", stage="sign_in"
            ) from exc
        logger.info("Signed up", extra={"user_id": session.user_id})
        self._apply(session)
        return session

    def sign_out(self) -> None:
        """Sign out and notify listeners so per-user state is dropped."""
        self.auth_client.sign_out()
        self._apply(None)

    def subscribe(self, listener: SessionListener) -> Subscription:
        """Register a listener called with the new session on every change."""
        self._listeners.append(listener)
        return _ListenerSubscription(self._listeners, listener)

    def _apply(self, session: AuthSession | None) -> None:
        self._session = session
        for listener in list(self._listeners):
            listener(session)
