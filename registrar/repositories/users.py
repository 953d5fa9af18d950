"""Credential store: lookup and persistence of user credential records.

Lookups compare strings as the database collation does; nothing is
case-folded here.
"""

import logging
from typing import Protocol

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from registrar.core.errors import ConflictError
from registrar.models import User

logger = logging.getLogger(__name__)

USERNAME_OR_EMAIL_TAKEN = "Username or email already in use."


class CredentialStore(Protocol):
    """Operations the auth core needs from the credential store."""

    def find_by_username_or_email(self, username_or_email: str) -> User | None: ...

    def find_by_id(self, user_id: int) -> User | None: ...

    def exists_by_username(self, username: str) -> bool: ...

    def exists_by_email(self, email: str) -> bool: ...

    def insert(self, user: User) -> int: ...

    def update(self, user: User) -> int: ...

    def list_all(self) -> list[User]: ...

    def deactivate(self, user_id: int) -> int: ...


class SqlAlchemyCredentialStore:
    """CredentialStore backed by the ``users`` table. One instance per session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_username_or_email(self, username_or_email: str) -> User | None:
        """Active user whose email (input contains '@') or username equals the given value."""
        column = User.email if "@" in username_or_email else User.username
        return (
            self.db.query(User)
            .filter(column == username_or_email, User.is_active.is_(True))
            .first()
        )

    def find_by_id(self, user_id: int) -> User | None:
        return (
            self.db.query(User)
            .filter(User.id == user_id, User.is_active.is_(True))
            .first()
        )

    def exists_by_username(self, username: str) -> bool:
        """True if any record, active or not, holds this username."""
        return self.db.query(User.id).filter(User.username == username).first() is not None

    def exists_by_email(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email).first() is not None

    def insert(self, user: User) -> int:
        """
        Persist a new record and return its id.
        Raises ConflictError if the unique username/email constraint is violated.
        """
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Insert rejected by unique constraint: username=%s", user.username)
            raise ConflictError(USERNAME_OR_EMAIL_TAKEN) from e
        self.db.refresh(user)
        return user.id

    def update(self, user: User) -> int:
        """Write pending changes on ``user``; returns rows affected (0 or 1)."""
        if user not in self.db or not self.db.is_modified(user):
            return 0
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Update rejected by unique constraint: user_id=%s", user.id)
            raise ConflictError(USERNAME_OR_EMAIL_TAKEN) from e
        self.db.refresh(user)
        return 1

    def list_all(self) -> list[User]:
        """All records including inactive ones, ordered by id."""
        return self.db.query(User).order_by(User.id).all()

    def deactivate(self, user_id: int) -> int:
        """Set is_active=False on an active record; returns rows affected."""
        result = self.db.execute(
            update(User)
            .where(User.id == user_id, User.is_active.is_(True))
            .values(is_active=False)
        )
        self.db.commit()
        return result.rowcount or 0
