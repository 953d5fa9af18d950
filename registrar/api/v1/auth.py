"""Auth endpoints: register, login, profile, token validation.

Handlers are plain ``def`` so FastAPI runs bcrypt and store I/O on its threadpool.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from registrar.api.deps import get_auth_gateway, get_current_user
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
from registrar.services.auth import AuthGateway

router = APIRouter()

_errors_400 = {400: {"model": ErrorResponse}}
_errors_401 = {401: {"model": ErrorResponse}}


@router.post(
    "/register",
    response_model=UserInfo,
    status_code=status.HTTP_201_CREATED,
    responses=_errors_400,
)
def register(
    body: RegisterRequest,
    gateway: Annotated[AuthGateway, Depends(get_auth_gateway)],
) -> UserInfo:
    """Create a new account with role 'User'."""
    return gateway.register(
        username=body.username,
        email=body.email,
        password=body.password,
        full_name=body.full_name,
    )


@router.post("/login", response_model=AuthResponse, responses={**_errors_400, **_errors_401})
def login(
    body: LoginRequest,
    gateway: Annotated[AuthGateway, Depends(get_auth_gateway)],
) -> AuthResponse:
    """
    Authenticate with username or email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    return gateway.login(body.username_or_email, body.password)


@router.get("/profile", response_model=UserInfo, responses=_errors_401)
def get_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    gateway: Annotated[AuthGateway, Depends(get_auth_gateway)],
) -> UserInfo:
    """Return the caller's own profile."""
    return gateway.get_profile(current_user.id)


@router.put("/profile", response_model=UserInfo, responses={**_errors_400, **_errors_401})
def update_profile(
    body: UpdateProfileRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    gateway: Annotated[AuthGateway, Depends(get_auth_gateway)],
) -> UserInfo:
    """Update full name, email, and/or password of the caller's own account."""
    return gateway.update_profile(
        current_user.id,
        full_name=body.full_name,
        email=body.email,
        current_password=body.current_password,
        new_password=body.new_password,
    )


@router.get("/validate", response_model=TokenValidationResponse, responses=_errors_401)
def validate_token(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> TokenValidationResponse:
    """Echo the identity carried by a valid bearer token."""
    return TokenValidationResponse(
        user_id=current_user.id,
        username=current_user.username,
        role=current_user.role,
    )
