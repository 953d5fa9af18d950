"""
Create a user (e.g. the first admin). Run from project root:
  python -m registrar.scripts.create_user USERNAME EMAIL PASSWORD FULL_NAME [role]
Example:
  python -m registrar.scripts.create_user admin admin@school.edu your-secure-password "Administrator" Admin
"""
import argparse
import logging
import sys

from registrar.core.config import get_settings
from registrar.core.database import SessionLocal
from registrar.core.errors import RegistrarError
from registrar.core.security import PasswordHasher
from registrar.models import ROLE_USER, ROLES
from registrar.repositories.users import SqlAlchemyCredentialStore
from registrar.services.auth import AuthGateway

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def create_user(
    store: SqlAlchemyCredentialStore,
    hasher: PasswordHasher,
    username: str,
    email: str,
    password: str,
    full_name: str,
    role: str = ROLE_USER,
) -> int:
    """Register through AuthGateway so the CLI applies the same validation as the API."""
    gateway = AuthGateway(store, hasher)
    return gateway.register(username, email, password, full_name, role=role).id


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Registrar user account.")
    parser.add_argument("username", help="Username (3-50 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (at least 6 chars)")
    parser.add_argument("full_name", help="Full name")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=list(ROLES))
    args = parser.parse_args(argv)

    hasher = PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)
    db = SessionLocal()
    try:
        user_id = create_user(
            SqlAlchemyCredentialStore(db),
            hasher,
            args.username.strip(),
            args.email.strip(),
            args.password,
            args.full_name.strip(),
            args.role,
        )
    except RegistrarError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    logger.info("Created user '%s' (id=%s) with role '%s'.", args.username.strip(), user_id, args.role)
    return 0


if __name__ == "__main__":
    sys.exit(main())
