"""Request/response schemas for auth endpoints.

JSON field names are camelCase (``usernameOrEmail``, ``fullName``); Python
attributes stay snake_case.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema that reads and writes camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RegisterRequest(CamelModel):
    """New account details. Presence and format are checked by AuthGateway."""

    username: str = ""
    email: str = ""
    password: str = ""
    full_name: str = ""


class LoginRequest(CamelModel):
    """Credentials for login: username or email, plus password."""

    username_or_email: str = ""
    password: str = ""


class UpdateProfileRequest(CamelModel):
    """Partial profile update; omitted fields are left unchanged."""

    full_name: str | None = None
    email: str | None = None
    current_password: str | None = None
    new_password: str | None = None


class UserInfo(CamelModel):
    """Public projection of a credential record (never includes the password hash)."""

    id: int
    username: str
    email: str
    full_name: str
    role: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        # SQLite returns naive datetimes; stored values are always UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v.astimezone(UTC)


class AuthResponse(CamelModel):
    """Bearer token returned after successful login."""

    token: str = Field(..., description="JWT access token")
    expires_at: datetime = Field(..., description="UTC expiry of the token")
    user: UserInfo


class TokenValidationResponse(CamelModel):
    """Claims echoed back by GET /auth/validate."""

    message: str = "Token is valid."
    user_id: int
    username: str
    role: str


class CurrentUser(CamelModel):
    """Authenticated caller (identity context) built from validated token claims."""

    id: int
    username: str
    role: str
    full_name: str = ""


class ErrorResponse(BaseModel):
    """Body of every error response."""

    message: str
