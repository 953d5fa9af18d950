"""Unit tests for registrar.core.tokens.TokenService: issue, validate, expiry, tampering."""

import base64
import json
import unittest
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

import jwt
from pydantic import SecretStr

from registrar.core.errors import ConfigError
from registrar.core.tokens import MIN_SECRET_LENGTH, TokenClaims, TokenService
from tests.helpers import OTHER_SECRET, TEST_SECRET, make_token_service


def _user(**overrides: object) -> SimpleNamespace:
    fields = {"id": 7, "username": "alice", "role": "User", "full_name": "Alice A"}
    fields.update(overrides)
    return SimpleNamespace(**fields)


class _Clock:
    """Settable clock for deterministic expiry tests."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _b64url_decode(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


class TestTokenServiceConfig(unittest.TestCase):
    """Constructor rejects missing or weak signing configuration."""

    def test_missing_secret(self) -> None:
        for secret in (None, "", "   "):
            with self.subTest(secret=secret), self.assertRaises(ConfigError):
                TokenService(secret=secret, issuer="i", audience="a")

    def test_short_secret(self) -> None:
        with self.assertRaises(ConfigError):
            TokenService(secret="x" * (MIN_SECRET_LENGTH - 1), issuer="i", audience="a")

    def test_minimum_length_secret_accepted(self) -> None:
        TokenService(secret="x" * MIN_SECRET_LENGTH, issuer="i", audience="a")

    def test_missing_issuer_or_audience(self) -> None:
        with self.assertRaises(ConfigError):
            TokenService(secret=TEST_SECRET, issuer="", audience="a")
        with self.assertRaises(ConfigError):
            TokenService(secret=TEST_SECRET, issuer="i", audience="")

    def test_from_settings(self) -> None:
        settings = SimpleNamespace(
            JWT_SECRET=SecretStr(TEST_SECRET),
            JWT_ISSUER="Registrar",
            JWT_AUDIENCE="RegistrarUsers",
            JWT_EXPIRE_MINUTES=15,
        )
        service = TokenService.from_settings(settings)
        self.assertEqual(service.ttl, timedelta(minutes=15))
        self.assertEqual(service.issuer, "Registrar")

    def test_from_settings_without_secret(self) -> None:
        settings = SimpleNamespace(
            JWT_SECRET=None,
            JWT_ISSUER="Registrar",
            JWT_AUDIENCE="RegistrarUsers",
            JWT_EXPIRE_MINUTES=60,
        )
        with self.assertRaises(ConfigError):
            TokenService.from_settings(settings)


class TestIssueAndValidate(unittest.TestCase):
    """A freshly issued token validates and carries the source user's identity."""

    def setUp(self) -> None:
        self.service = make_token_service()

    def test_claims_match_user(self) -> None:
        token, expires_at = self.service.issue(_user())
        claims = self.service.validate(token)
        self.assertIsInstance(claims, TokenClaims)
        self.assertEqual(claims.subject_id, 7)
        self.assertEqual(claims.username, "alice")
        self.assertEqual(claims.role, "User")
        self.assertEqual(claims.full_name, "Alice A")
        self.assertEqual(claims.expires_at, expires_at)
        self.assertEqual(claims.expires_at - claims.issued_at, timedelta(minutes=60))

    def test_payload_has_issuer_audience_and_unique_jti(self) -> None:
        token1, _ = self.service.issue(_user())
        token2, _ = self.service.issue(_user())
        payload1 = jwt.decode(token1, options={"verify_signature": False})
        payload2 = jwt.decode(token2, options={"verify_signature": False})
        self.assertEqual(payload1["iss"], "Registrar")
        self.assertEqual(payload1["aud"], "RegistrarUsers")
        self.assertEqual(payload1["sub"], "7")
        self.assertNotEqual(payload1["jti"], payload2["jti"])

    def test_header_is_hs256(self) -> None:
        token, _ = self.service.issue(_user())
        self.assertEqual(jwt.get_unverified_header(token)["alg"], "HS256")

    def test_expiry_uses_configured_ttl(self) -> None:
        service = make_token_service(expire_minutes=5)
        _, expires_at = service.issue(_user())
        remaining = expires_at - datetime.now(UTC)
        self.assertLessEqual(remaining, timedelta(minutes=5))
        self.assertGreater(remaining, timedelta(minutes=4))


class TestExpiryWindow(unittest.TestCase):
    """Validity is [issued_at, expires_at) with no clock-skew allowance."""

    def setUp(self) -> None:
        self.start = datetime.now(UTC).replace(microsecond=0) - timedelta(minutes=30)
        self.clock = _Clock(self.start)
        self.service = make_token_service(expire_minutes=60, clock=self.clock)
        self.token, self.expires_at = self.service.issue(_user())

    def test_valid_one_second_before_expiry(self) -> None:
        self.clock.now = self.expires_at - timedelta(seconds=1)
        self.assertIsNotNone(self.service.validate(self.token))

    def test_exactly_at_expiry_is_expired(self) -> None:
        self.clock.now = self.expires_at
        self.assertIsNone(self.service.validate(self.token))

    def test_one_second_after_expiry_is_expired(self) -> None:
        self.clock.now = self.expires_at + timedelta(seconds=1)
        self.assertIsNone(self.service.validate(self.token))

    def test_before_issued_at_is_rejected(self) -> None:
        self.clock.now = self.start - timedelta(seconds=1)
        self.assertIsNone(self.service.validate(self.token))

    def test_clock_ahead_of_wall_time(self) -> None:
        ahead = _Clock(datetime.now(UTC) + timedelta(minutes=10))
        service = make_token_service(clock=ahead)
        token, _ = service.issue(_user())
        self.assertIsNotNone(service.validate(token))

    def test_expiry_judged_by_service_clock(self) -> None:
        token, _ = make_token_service().issue(_user())
        later = _Clock(datetime.now(UTC) + timedelta(hours=2))
        self.assertIsNone(make_token_service(clock=later).validate(token))

    def test_expired_by_wall_clock(self) -> None:
        past = _Clock(datetime.now(UTC) - timedelta(hours=2))
        token, _ = make_token_service(clock=past).issue(_user())
        self.assertIsNone(make_token_service().validate(token))


class TestRejectedTokens(unittest.TestCase):
    """Any tampering, foreign key, or wrong deployment yields None (never an exception)."""

    def setUp(self) -> None:
        self.service = make_token_service()
        self.token, _ = self.service.issue(_user())

    def test_different_secret(self) -> None:
        foreign = make_token_service(secret=OTHER_SECRET)
        token, _ = foreign.issue(_user())
        self.assertIsNone(self.service.validate(token))

    def test_wrong_issuer(self) -> None:
        token, _ = make_token_service(issuer="SomeoneElse").issue(_user())
        self.assertIsNone(self.service.validate(token))

    def test_wrong_audience(self) -> None:
        token, _ = make_token_service(audience="OtherUsers").issue(_user())
        self.assertIsNone(self.service.validate(token))

    def test_tampered_claims(self) -> None:
        header, payload, signature = self.token.split(".")
        claims = json.loads(_b64url_decode(payload))
        claims["role"] = "Admin"
        forged_payload = _b64url_encode(json.dumps(claims).encode("utf-8"))
        self.assertIsNone(self.service.validate(f"{header}.{forged_payload}.{signature}"))

    def test_truncated_token(self) -> None:
        self.assertIsNone(self.service.validate(self.token[:-1]))

    def test_unsigned_token(self) -> None:
        payload = jwt.decode(self.token, options={"verify_signature": False})
        unsigned = jwt.encode(payload, key=None, algorithm="none")
        self.assertIsNone(self.service.validate(unsigned))

    def test_missing_required_claim(self) -> None:
        payload = jwt.decode(self.token, options={"verify_signature": False})
        del payload["username"]
        token = jwt.encode(payload, TEST_SECRET, algorithm="HS256")
        self.assertIsNone(self.service.validate(token))

    def test_non_numeric_subject(self) -> None:
        payload = jwt.decode(self.token, options={"verify_signature": False})
        payload["sub"] = "alice"
        token = jwt.encode(payload, TEST_SECRET, algorithm="HS256")
        self.assertIsNone(self.service.validate(token))

    def test_garbage(self) -> None:
        for garbage in ("", "abc", "a.b.c", "Bearer x"):
            with self.subTest(garbage=garbage):
                self.assertIsNone(self.service.validate(garbage))


class TestExtractClaim(unittest.TestCase):
    """extract_claim() is a thin accessor over validate()."""

    def setUp(self) -> None:
        self.service = make_token_service()
        self.token, _ = self.service.issue(_user(id=42, role="Admin"))

    def test_known_claims(self) -> None:
        self.assertEqual(self.service.extract_claim(self.token, "subject_id"), 42)
        self.assertEqual(self.service.extract_claim(self.token, "role"), "Admin")
        self.assertEqual(self.service.extract_claim(self.token, "username"), "alice")

    def test_unknown_claim(self) -> None:
        self.assertIsNone(self.service.extract_claim(self.token, "password_hash"))

    def test_invalid_token(self) -> None:
        self.assertIsNone(self.service.extract_claim(self.token[:-2], "subject_id"))


if __name__ == "__main__":
    unittest.main()
