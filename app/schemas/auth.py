"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from app.core.roles import Role


class LoginRequest(BaseModel):
    """Credentials for login. Emptiness is checked by the login flow, not here."""

    email: str = Field(default="", max_length=255, description="Account email")
    password: str = Field(default="", max_length=128, description="Password")


class UserSummary(BaseModel):
    """Minimal user view returned with tokens."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: Role


class LoginData(BaseModel):
    """Tokens returned after successful login."""

    model_config = ConfigDict(populate_by_name=True)

    user: UserSummary
    token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., alias="refreshToken", description="JWT refresh token")


class CurrentUser(BaseModel):
    """Authenticated identity (id, email, role) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: Role


class DemoCredential(BaseModel):
    email: str
    password: str
    role: Role


class DemoCredentialsData(BaseModel):
    credentials: list[DemoCredential]
