"""
Auth Schemas.

Request/response bodies for the PIN login flow.
"""

from pydantic import BaseModel, Field


class PinLogin(BaseModel):
    """PIN submitted to unlock hidden notes."""

    pin: str | None = Field(default=None, description="Hidden notes PIN")


class AuthStatus(BaseModel):
    """Whether the request carries a valid PIN cookie."""

    logged_in: bool


class AuthMessage(BaseModel):
    message: str
