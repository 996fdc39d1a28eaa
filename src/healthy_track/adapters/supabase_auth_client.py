"""Supabase Auth client adapter."""

from dataclasses import dataclass
from typing import Any

import httpx
from supabase import AuthError as SupabaseAuthError
from supabase import Client

from healthy_track.domain.errors import AuthError
from healthy_track.domain.sessions import AuthSession
from healthy_track.services.auth import AuthClient, SessionListener, Subscription


@dataclass
class SupabaseAuthClient(AuthClient):
    """Email and password auth backed by ``client.auth``."""

    client: Client

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except (SupabaseAuthError, httpx.HTTPError) as exc:
            raise AuthError(str(exc), stage="sign_in") from exc
        if response.session is None:
            raise AuthError("Sign-in did not return a session.", stage="sign_in")
        return _to_session(response.session)

    def sign_up(self, email: str, password: str) -> AuthSession | None:
        """Register a new account; the session is None until confirmed."""
        try:
            response = self.client.auth.sign_up({"email": email, "password": password})
        except (SupabaseAuthError, httpx.HTTPError) as exc:
            raise AuthError(str(exc), stage="sign_up") from exc
        return _to_session(response.session) if response.session else None

    def sign_out(self) -> None:
        """Sign out of the current session."""
        try:
            self.client.auth.sign_out()
        except (SupabaseAuthError, httpx.HTTPError) as exc:
            raise AuthError(str(exc), stage="sign_out") from exc

    def get_session(self) -> AuthSession | None:
        """Return the stored session, if any."""
        try:
            session = self.client.auth.get_session()
        except (SupabaseAuthError, httpx.HTTPError) as exc:
            raise AuthError(str(exc), stage="session") from exc
        return _to_session(session) if session else None

    def on_change(self, callback: SessionListener) -> Subscription:
        """Forward Supabase auth state changes as domain sessions."""

        def _forward(_event: object, session: Any | None) -> None:
            callback(_to_session(session) if session else None)

        return self.client.auth.on_auth_state_change(_forward)


def _to_session(session: Any) -> AuthSession:
    user = session.user
    return AuthSession(
        access_token=str(session.access_token),
        user_id=str(user.id),
        email=getattr(user, "email", None),
    )
