"""Request/response schemas for user management endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.core.roles import DEFAULT_ROLE, Role
from app.core.security import EMAIL_MAX_LEN, NAME_MAX_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN


class UserOut(BaseModel):
    """User entry (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: Role
    is_active: bool
    last_login_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class UserCreate(BaseModel):
    email: str = Field(..., min_length=3, max_length=EMAIL_MAX_LEN, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    role: Role = DEFAULT_ROLE
    is_active: bool = True


class UserUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LEN)
    role: Role | None = None
    is_active: bool | None = None
    password: str | None = Field(default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class RoleCounts(BaseModel):
    admin: int
    user: int
    total: int


class DashboardStats(BaseModel):
    last_login_at: datetime | None = None
    account_age_days: int


class UserDashboard(BaseModel):
    """Own profile plus account stats for the dashboard view."""

    user: UserOut
    stats: DashboardStats
