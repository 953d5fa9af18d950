"""Admin-only user administration (listing and deactivation)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from registrar.api.deps import get_auth_gateway, require_role
from registrar.models import ROLE_ADMIN
from registrar.schemas.auth import CurrentUser, ErrorResponse
from registrar.schemas.users import UsersListResponse
from registrar.services.auth import AuthGateway

router = APIRouter()

require_admin = require_role(ROLE_ADMIN)


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    gateway: Annotated[AuthGateway, Depends(get_auth_gateway)],
) -> UsersListResponse:
    """List all users, including deactivated ones (admin only)."""
    return UsersListResponse(users=gateway.list_users())


@router.post(
    "/{user_id}/deactivate",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def deactivate_user(
    user_id: int,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    gateway: Annotated[AuthGateway, Depends(get_auth_gateway)],
) -> Response:
    """Deactivate an account; it can no longer log in or be looked up (admin only)."""
    gateway.deactivate_user(actor_id=admin.id, user_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
