"""Password hashing and verification (bcrypt)."""

from functools import cached_property

import bcrypt

from registrar.core.errors import InvalidInputError

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
DEFAULT_BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of a secret.
BCRYPT_MAX_BYTES = 72

# Length limits for registration/profile input validation (match the users table).
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 50
EMAIL_MAX_LEN = 100
FULL_NAME_MAX_LEN = 100
PASSWORD_MIN_LEN = 6


class PasswordHasher:
    """Salted, adaptive one-way hashing of user secrets.

    The output of :meth:`hash` is a self-contained bcrypt string (``$2b$<cost>$<salt><digest>``)
    so verification needs nothing but the stored value.
    """

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self.rounds = rounds

    def hash(self, secret: str) -> str:
        """Hash a plain-text secret for storage. Raises InvalidInputError if empty."""
        if not secret:
            raise InvalidInputError("Password must not be empty.")
        pw_bytes = secret.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, secret: str, hashed: str) -> bool:
        """Verify a plain secret against a stored hash; False on any malformed input."""
        if not secret or not hashed:
            return False
        pw_bytes = secret.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    @cached_property
    def _dummy_hash(self) -> str:
        return self.hash("not-a-real-password")

    def verify_dummy(self, secret: str) -> None:
        """Spend one verification on a throwaway hash (login with unknown user)."""
        self.verify(secret or "x", self._dummy_hash)
