"""ORM model for credential records (auth and RBAC)."""

from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String, true

from registrar.models.base import Base

ROLE_USER = "User"
ROLE_ADMIN = "Admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """
    Credential record: identity, bcrypt password hash, role, and active flag.

    role: 'User' or 'Admin'. Deactivated users (is_active=False) are never
    returned by lookups and cannot authenticate; there is no hard delete.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_USER, server_default=ROLE_USER)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def __repr__(self) -> str:
        # never include password_hash
        return f"<User id={self.id} username={self.username!r} role={self.role!r}>"
