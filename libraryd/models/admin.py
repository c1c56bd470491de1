"""Models for admin login."""

from pydantic import BaseModel
from pydantic import Field


class LoginRequest(BaseModel):
    """Admin login request."""

    password: str = Field(..., description="Admin password")


class LoginResponse(BaseModel):
    """Issued admin token."""

    token: str = Field(..., description="Bearer token for mutating endpoints")
    expires_in: int = Field(..., description="Token lifetime in seconds")


class LogoutResponse(BaseModel):
    success: bool = True
    message: str = "Logged out"
