"""Registration, login, and profile management (AuthGateway).

Validation and uniqueness failures are raised as ValidationError/ConflictError;
bad credentials and inactive accounts both raise the same AuthError so a caller
cannot tell which check failed.
"""

import logging
from datetime import UTC, datetime

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from registrar.core.errors import (
    AuthError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from registrar.core.security import (
    BCRYPT_MAX_BYTES,
    EMAIL_MAX_LEN,
    FULL_NAME_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    PasswordHasher,
)
from registrar.core.tokens import TokenService
from registrar.models import ROLE_USER, ROLES, User
from registrar.repositories.users import CredentialStore
from registrar.schemas.auth import AuthResponse, UserInfo
from registrar.schemas.users import AdminUserInfo

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."
NO_CHANGES = "No changes were made."

_email_adapter = TypeAdapter(EmailStr)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_valid_email(email: str) -> bool:
    """Syntax check only (no DNS). Rejects display-name forms like 'A <a@x.com>'."""
    if _is_blank(email) or email != email.strip():
        return False
    try:
        normalized = _email_adapter.validate_python(email)
    except PydanticValidationError:
        return False
    return normalized.lower() == email.lower()


def _check_email(email: str) -> None:
    if len(email) > EMAIL_MAX_LEN:
        raise ValidationError(f"Email must be at most {EMAIL_MAX_LEN} characters.")
    if not is_valid_email(email):
        raise ValidationError("Invalid email.")


def _check_full_name(full_name: str) -> None:
    if len(full_name) > FULL_NAME_MAX_LEN:
        raise ValidationError(f"Full name must be at most {FULL_NAME_MAX_LEN} characters.")


def _check_new_password(password: str, label: str = "Password") -> None:
    if len(password) < PASSWORD_MIN_LEN:
        raise ValidationError(f"{label} must be at least {PASSWORD_MIN_LEN} characters.")
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValidationError(f"{label} must be at most {BCRYPT_MAX_BYTES} bytes.")


class AuthGateway:
    """Orchestrates CredentialStore, PasswordHasher, and TokenService for one request.

    ``tokens`` may be omitted by callers that only register accounts (the create_user CLI).
    """

    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        tokens: TokenService | None = None,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    def register(
        self,
        username: str,
        email: str,
        password: str,
        full_name: str,
        role: str = ROLE_USER,
    ) -> UserInfo:
        """Create an active account (role 'User' unless given); returns its public projection."""
        if role not in ROLES:
            raise ValidationError("Invalid role.")
        if any(_is_blank(v) for v in (username, email, password, full_name)):
            raise ValidationError("All fields are required.")
        if username != username.strip():
            raise ValidationError("Username must not start or end with whitespace.")
        if "@" in username:
            raise ValidationError("Username must not contain '@'.")
        if len(username) < USERNAME_MIN_LEN:
            raise ValidationError(
                f"Username must be at least {USERNAME_MIN_LEN} characters."
            )
        if len(username) > USERNAME_MAX_LEN:
            raise ValidationError(f"Username must be at most {USERNAME_MAX_LEN} characters.")
        _check_new_password(password)
        _check_email(email)
        _check_full_name(full_name)

        # Pre-checks only; the unique indexes are authoritative (see CredentialStore.insert).
        if self.store.exists_by_username(username):
            raise ConflictError("Username already exists.")
        if self.store.exists_by_email(email):
            raise ConflictError("Email already in use.")

        user = User(
            username=username,
            email=email,
            password_hash=self.hasher.hash(password),
            full_name=full_name,
            role=role,
            is_active=True,
            created_at=datetime.now(UTC),
        )
        user_id = self.store.insert(user)
        logger.info("Registered user", extra={"user_id": user_id, "username": username})
        return UserInfo.model_validate(user)

    def login(self, username_or_email: str, password: str) -> AuthResponse:
        """Check credentials and issue a bearer token."""
        if _is_blank(username_or_email) or _is_blank(password):
            raise ValidationError("Username/email and password are required.")

        user = self.store.find_by_username_or_email(username_or_email)
        if user is None:
            self.hasher.verify_dummy(password)
            logger.info("Login failed: unknown identity")
            raise AuthError(INVALID_CREDENTIALS)
        if not self.hasher.verify(password, user.password_hash):
            logger.info("Login failed: bad password", extra={"user_id": user.id})
            raise AuthError(INVALID_CREDENTIALS)
        if not user.is_active:
            logger.info("Login failed: inactive account", extra={"user_id": user.id})
            raise AuthError(INVALID_CREDENTIALS)

        if self.tokens is None:
            raise InternalError()
        token, expires_at = self.tokens.issue(user)
        logger.info("Login succeeded", extra={"user_id": user.id, "username": user.username})
        return AuthResponse(
            token=token,
            expires_at=expires_at,
            user=UserInfo.model_validate(user),
        )

    def _load(self, user_id: int) -> User:
        user = self.store.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user

    def get_profile(self, user_id: int) -> UserInfo:
        return UserInfo.model_validate(self._load(user_id))

    def update_profile(
        self,
        user_id: int,
        full_name: str | None = None,
        email: str | None = None,
        current_password: str | None = None,
        new_password: str | None = None,
    ) -> UserInfo:
        """
        Apply the provided changes to the caller's own record.

        Blank fields are ignored. The password changes only when both the current and
        the new password are given and the current one verifies.
        """
        user = self._load(user_id)
        changes: dict[str, str] = {}

        if not _is_blank(full_name) and full_name != user.full_name:
            _check_full_name(full_name)
            changes["full_name"] = full_name

        if not _is_blank(email) and email != user.email:
            _check_email(email)
            if self.store.exists_by_email(email):
                raise ConflictError("Email already in use.")
            changes["email"] = email

        if not _is_blank(current_password) and not _is_blank(new_password):
            if not self.hasher.verify(current_password, user.password_hash):
                raise ValidationError("Current password is incorrect.")
            _check_new_password(new_password, label="New password")
            changes["password_hash"] = self.hasher.hash(new_password)

        if not changes:
            raise ValidationError(NO_CHANGES)

        for attr, value in changes.items():
            setattr(user, attr, value)
        if self.store.update(user) == 0:
            raise ValidationError(NO_CHANGES)

        logger.info(
            "Profile updated",
            extra={"user_id": user.id, "fields": sorted(changes)},
        )
        return UserInfo.model_validate(user)

    def list_users(self) -> list[AdminUserInfo]:
        return [AdminUserInfo.model_validate(u) for u in self.store.list_all()]

    def deactivate_user(self, actor_id: int, user_id: int) -> None:
        """Deactivate an account (terminal). Admins cannot deactivate themselves."""
        if actor_id == user_id:
            raise ValidationError("You cannot deactivate your own account.")
        if self.store.deactivate(user_id) == 0:
            raise NotFoundError("User not found.")
        logger.info("User deactivated", extra={"user_id": user_id, "actor_id": actor_id})
