"""SQLAlchemy ORM models."""

from registrar.models.base import Base
from registrar.models.user import ROLE_ADMIN, ROLE_USER, ROLES, User

__all__ = ["Base", "ROLE_ADMIN", "ROLE_USER", "ROLES", "User"]
