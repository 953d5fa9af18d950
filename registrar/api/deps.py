"""FastAPI dependencies: service wiring and bearer-token access control."""

from collections.abc import Callable
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from registrar.core.config import get_settings
from registrar.core.database import get_db
from registrar.core.errors import AuthError, ForbiddenError
from registrar.core.security import PasswordHasher
from registrar.core.tokens import TokenService
from registrar.repositories.users import SqlAlchemyCredentialStore
from registrar.schemas.auth import CurrentUser
from registrar.services.auth import AuthGateway

security = HTTPBearer(auto_error=False)


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide TokenService. Raises ConfigError if the signing config is invalid."""
    return TokenService.from_settings(get_settings())


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)


def get_auth_gateway(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthGateway:
    return AuthGateway(SqlAlchemyCredentialStore(db), hasher, tokens)


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """Dependency: require a valid Bearer token and return the caller's identity. Raises 401 otherwise."""
    if credentials is None:
        raise AuthError("Not authenticated.")
    claims = tokens.validate(credentials.credentials)
    if claims is None:
        raise AuthError("Invalid or expired token.")
    identity = CurrentUser(
        id=claims.subject_id,
        username=claims.username,
        role=claims.role,
        full_name=claims.full_name,
    )
    request.state.identity = identity
    return identity


def require_role(role: str) -> Callable[[CurrentUser], CurrentUser]:
    """Dependency factory: require an authenticated caller whose role equals ``role``. 403 otherwise."""

    def _require_role(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role != role:
            raise ForbiddenError(f"{role} access required.")
        return current_user

    return _require_role
