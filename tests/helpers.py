"""Shared builders for tests: in-memory SQLite store, fast hasher, token service."""

from collections.abc import Callable
from datetime import datetime

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from registrar.core.security import PasswordHasher
from registrar.core.tokens import TokenService
from registrar.models import Base

TEST_SECRET = "test-signing-secret-0123456789-abcdefghij"
OTHER_SECRET = "another-signing-secret-9876543210-zyxwvuts"
TEST_ISSUER = "Registrar"
TEST_AUDIENCE = "RegistrarUsers"


def make_session_factory() -> sessionmaker[Session]:
    """Fresh in-memory database with the schema created; one shared connection."""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


def make_token_service(
    secret: str = TEST_SECRET,
    issuer: str = TEST_ISSUER,
    audience: str = TEST_AUDIENCE,
    expire_minutes: int = 60,
    clock: Callable[[], datetime] | None = None,
) -> TokenService:
    kwargs = {"clock": clock} if clock is not None else {}
    return TokenService(
        secret=secret,
        issuer=issuer,
        audience=audience,
        expire_minutes=expire_minutes,
        **kwargs,
    )
