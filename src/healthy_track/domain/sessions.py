"""Domain models for authenticated sessions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthSession:
    """Authenticated identity scoping which records are visible."""

    access_token: str
    user_id: str
    email: str | None = None
