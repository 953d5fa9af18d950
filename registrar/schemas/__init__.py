"""Pydantic request/response schemas."""

from registrar.schemas.auth import (
    AuthResponse,
    CurrentUser,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    TokenValidationResponse,
    UpdateProfileRequest,
    UserInfo,
)
from registrar.schemas.health import HealthResponse
from registrar.schemas.users import AdminUserInfo, UsersListResponse

__all__ = [
    "AdminUserInfo",
    "AuthResponse",
    "CurrentUser",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenValidationResponse",
    "UpdateProfileRequest",
    "UserInfo",
    "UsersListResponse",
]
