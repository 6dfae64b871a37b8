"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentUser,
    DemoCredential,
    DemoCredentialsData,
    LoginData,
    LoginRequest,
    UserSummary,
)
from app.schemas.common import ErrorBody, ErrorResponse, PaginatedData, PaginationInfo, SuccessResponse
from app.schemas.health import HealthResponse, PingResponse
from app.schemas.user import DashboardStats, RoleCounts, UserCreate, UserDashboard, UserOut, UserUpdate

__all__ = [
    "CurrentUser",
    "DashboardStats",
    "DemoCredential",
    "DemoCredentialsData",
    "ErrorBody",
    "ErrorResponse",
    "HealthResponse",
    "LoginData",
    "LoginRequest",
    "PaginatedData",
    "PaginationInfo",
    "PingResponse",
    "RoleCounts",
    "SuccessResponse",
    "UserCreate",
    "UserDashboard",
    "UserOut",
    "UserSummary",
    "UserUpdate",
]
