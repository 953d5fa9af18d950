"""Schemas for admin user administration."""

from registrar.schemas.auth import CamelModel, UserInfo


class AdminUserInfo(UserInfo):
    """User projection for admins; adds the active flag."""

    is_active: bool


class UsersListResponse(CamelModel):
    """Response for GET /users (admin only)."""

    users: list[AdminUserInfo]
