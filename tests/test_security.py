"""Unit tests for app.core.security: password rules, token issuance, validation and revocation."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import jwt

from app.core.config import settings
from app.core.security import (
    as_utc,
    create_access_token,
    create_refresh_token,
    decode_access_token,
    hash_password,
    is_token_revoked,
    issued_at,
    password_rule_violations,
    validate_refresh_token,
    verify_password,
)


def _raw_claims(token: str) -> dict:
    return jwt.decode(token, options={"verify_signature": False})


class TestPasswordHashing(unittest.TestCase):
    def test_hash_and_verify(self) -> None:
        hashed = hash_password("Passw0rd!")
        self.assertNotEqual(hashed, "Passw0rd!")
        self.assertTrue(verify_password("Passw0rd!", hashed))
        self.assertFalse(verify_password("passw0rd!", hashed))

    def test_verify_against_garbage_hash_is_false(self) -> None:
        self.assertFalse(verify_password("Passw0rd!", "not-a-bcrypt-hash"))


class TestPasswordRules(unittest.TestCase):
    def test_strong_password_has_no_violations(self) -> None:
        self.assertEqual(password_rule_violations("#Aa123456"), [])

    def test_all_violations_reported_together(self) -> None:
        violations = password_rule_violations("abc")
        # too short, no digit, no uppercase, no symbol
        self.assertEqual(len(violations), 4)
        self.assertTrue(any("digit" in v for v in violations))
        self.assertTrue(any("uppercase" in v for v in violations))
        self.assertTrue(any("non alphanumeric" in v for v in violations))
        self.assertTrue(any("between" in v for v in violations))


class TestAccessToken(unittest.TestCase):
    def test_claims(self) -> None:
        token = create_access_token("user-1", "alice", "Admin")
        payload = decode_access_token(token)
        self.assertEqual(payload["sub"], "user-1")
        self.assertEqual(payload["username"], "alice")
        self.assertEqual(payload["role"], "Admin")
        self.assertEqual(payload["aud"], settings.JWT_AUDIENCE)
        self.assertEqual(payload["iss"], settings.JWT_ISSUER)
        self.assertIn("jti", payload)
        self.assertIn("iat", payload)

    def test_lifetime_is_access_expiry(self) -> None:
        payload = _raw_claims(create_access_token("user-1", "alice", "Admin"))
        lifetime = payload["exp"] - payload["iat"]
        expected = settings.JWT_ACCESS_EXPIRE_MINUTES * 60
        self.assertAlmostEqual(lifetime, expected, delta=1)

    def test_each_token_has_unique_id(self) -> None:
        a = _raw_claims(create_access_token("user-1", "alice", "Admin"))
        b = _raw_claims(create_access_token("user-1", "alice", "Admin"))
        self.assertNotEqual(a["jti"], b["jti"])

    def test_refresh_token_is_not_an_access_token(self) -> None:
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(create_refresh_token("user-1"))

    def test_wrong_secret_rejected(self) -> None:
        token = jwt.encode(
            {"sub": "user-1", "type": "access", "jti": "x", "iat": 1, "exp": 9999999999},
            "another-secret-another-secret-another-secret",
            algorithm="HS256",
        )
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(token)

    def test_expired_token_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=1)
        with patch("app.core.security.datetime") as mock_dt:
            mock_dt.now.return_value = past
            token = create_access_token("user-1", "alice", "Admin")
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token)


class TestRefreshToken(unittest.TestCase):
    def test_valid_refresh_token_returns_claims(self) -> None:
        claims = validate_refresh_token(create_refresh_token("user-7"))
        self.assertIsNotNone(claims)
        self.assertEqual(claims["sub"], "user-7")
        self.assertNotIn("role", claims)

    def test_lifetime_is_refresh_expiry(self) -> None:
        payload = _raw_claims(create_refresh_token("user-7"))
        expected = settings.JWT_REFRESH_EXPIRE_HOURS * 3600
        self.assertAlmostEqual(payload["exp"] - payload["iat"], expected, delta=1)

    def test_garbage_returns_none_without_raising(self) -> None:
        self.assertIsNone(validate_refresh_token("not.a.jwt"))
        self.assertIsNone(validate_refresh_token(""))

    def test_access_token_is_not_a_refresh_token(self) -> None:
        self.assertIsNone(validate_refresh_token(create_access_token("u", "n", "Admin")))

    def test_wrong_audience_returns_none(self) -> None:
        with patch.object(settings, "JWT_AUDIENCE", "someone-else"):
            token = create_refresh_token("user-7")
        self.assertIsNone(validate_refresh_token(token))

    def test_wrong_issuer_returns_none(self) -> None:
        with patch.object(settings, "JWT_ISSUER", "someone-else"):
            token = create_refresh_token("user-7")
        self.assertIsNone(validate_refresh_token(token))


class TestRevocation(unittest.TestCase):
    def test_no_threshold_never_revoked(self) -> None:
        self.assertFalse(is_token_revoked(None, datetime.now(UTC)))

    def test_threshold_equal_to_issue_time_revokes(self) -> None:
        t = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)
        self.assertTrue(is_token_revoked(t, t))

    def test_threshold_after_issue_time_revokes(self) -> None:
        t = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)
        self.assertTrue(is_token_revoked(t + timedelta(seconds=1), t))

    def test_token_issued_after_threshold_is_valid(self) -> None:
        t = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)
        self.assertFalse(is_token_revoked(t, t + timedelta(microseconds=1)))

    def test_naive_threshold_treated_as_utc(self) -> None:
        naive = datetime(2030, 1, 1, 12, 0)
        self.assertEqual(as_utc(naive), datetime(2030, 1, 1, 12, 0, tzinfo=UTC))
        self.assertTrue(is_token_revoked(naive, datetime(2030, 1, 1, 12, 0, tzinfo=UTC)))

    def test_issued_at_keeps_sub_second_precision(self) -> None:
        payload = decode_access_token(create_access_token("u", "n", "Admin"))
        iat = issued_at(payload)
        self.assertEqual(iat.tzinfo, UTC)
        self.assertAlmostEqual(iat.timestamp(), payload["iat"], places=5)


if __name__ == "__main__":
    unittest.main()
