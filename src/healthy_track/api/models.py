"""Pydantic models for API request payloads."""

from pydantic import BaseModel


class Credentials(BaseModel):
    """Email and password submitted to sign in or sign up."""

    email: str
    password: str


class FieldUpdate(BaseModel):
    """A single form field change."""

    name: str
    value: str | int | float | None = None
