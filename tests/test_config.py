"""Unit tests for registrar.core.config.Settings validation."""

import unittest

from pydantic import ValidationError

from registrar.core.config import Settings


class TestSettingsValidation(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings(JWT_SECRET="x" * 40, _env_file=None)
        self.assertEqual(settings.JWT_ISSUER, "Registrar")
        self.assertEqual(settings.JWT_AUDIENCE, "RegistrarUsers")
        self.assertEqual(settings.JWT_EXPIRE_MINUTES, 60)

    def test_secret_is_masked(self) -> None:
        settings = Settings(JWT_SECRET="x" * 40, _env_file=None)
        self.assertNotIn("x" * 40, repr(settings))

    def test_rejects_non_sql_database_url(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://localhost/db", _env_file=None)

    def test_accepts_sqlite_url(self) -> None:
        settings = Settings(DATABASE_URL="sqlite:///registrar.db", _env_file=None)
        self.assertEqual(settings.DATABASE_URL, "sqlite:///registrar.db")

    def test_expire_minutes_bounds(self) -> None:
        for value in (0, 10081):
            with self.subTest(value=value), self.assertRaises(ValidationError):
                Settings(JWT_EXPIRE_MINUTES=value, _env_file=None)

    def test_blank_issuer(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_ISSUER="  ", _env_file=None)

    def test_bcrypt_rounds_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(BCRYPT_ROUNDS=3, _env_file=None)

    def test_log_level_normalized(self) -> None:
        self.assertEqual(Settings(LOG_LEVEL="debug", _env_file=None).LOG_LEVEL, "DEBUG")

    def test_frozen(self) -> None:
        settings = Settings(_env_file=None)
        with self.assertRaises(ValidationError):
            settings.JWT_EXPIRE_MINUTES = 5


if __name__ == "__main__":
    unittest.main()
