"""Unit tests for casedesk.core.security: bcrypt hashing and JWT issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from casedesk.core.security import (
    InvalidTokenError,
    Role,
    TokenIdentity,
    TokenService,
    hash_password,
    verify_password,
)

SECRET = "unit-test-secret"


def _tokens(**kwargs: object) -> TokenService:
    """Build a TokenService with test defaults."""
    defaults: dict = {"secret": SECRET, "algorithm": "HS256", "expire_minutes": 1440}
    defaults.update(kwargs)
    return TokenService(**defaults)


class TestPasswordHashing(unittest.TestCase):
    """hash_password / verify_password round trip and failure modes."""

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("pw1", rounds=4)
        self.assertNotEqual(hashed, "pw1")
        self.assertTrue(verify_password("pw1", hashed))

    def test_wrong_password_does_not_verify(self) -> None:
        hashed = hash_password("pw1", rounds=4)
        self.assertFalse(verify_password("pw2", hashed))

    def test_same_password_hashes_differently(self) -> None:
        self.assertNotEqual(hash_password("pw1", rounds=4), hash_password("pw1", rounds=4))

    def test_cost_factor_is_encoded_in_hash(self) -> None:
        self.assertIn("$10$", hash_password("pw1"))

    def test_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("pw1", "not-a-bcrypt-hash"))


class TestTokenIssueVerify(unittest.TestCase):
    """TokenService.issue produces tokens that verify back to the same identity."""

    def test_round_trip_user(self) -> None:
        tokens = _tokens()
        identity = tokens.verify(tokens.issue("abc123", Role.USER))
        self.assertEqual(identity, TokenIdentity(user_id="abc123", role=Role.USER))

    def test_round_trip_admin_from_string_role(self) -> None:
        tokens = _tokens()
        identity = tokens.verify(tokens.issue("abc123", "admin"))
        self.assertEqual(identity.role, Role.ADMIN)

    def test_expiry_is_24_hours_after_issue(self) -> None:
        now = datetime(2026, 1, 1, tzinfo=UTC)
        token = _tokens().issue("u1", Role.USER, now=now)
        payload = jwt.decode(token, options={"verify_signature": False})
        self.assertEqual(payload["exp"] - payload["iat"], 24 * 3600)
        self.assertEqual(payload["sub"], "u1")
        self.assertEqual(payload["role"], "user")


class TestTokenRejection(unittest.TestCase):
    """Every failure raises the same InvalidTokenError."""

    def test_expired_token(self) -> None:
        tokens = _tokens()
        token = tokens.issue("u1", Role.USER, now=datetime.now(UTC) - timedelta(days=2))
        with self.assertRaises(InvalidTokenError):
            tokens.verify(token)

    def test_wrong_secret(self) -> None:
        token = _tokens(secret="other-secret").issue("u1", Role.ADMIN)
        with self.assertRaises(InvalidTokenError):
            _tokens().verify(token)

    def test_swapped_payload_fails_signature(self) -> None:
        tokens = _tokens()
        user_token = tokens.issue("u1", Role.USER)
        admin_token = tokens.issue("u1", Role.ADMIN)
        header, _, signature = user_token.split(".")
        forged = ".".join([header, admin_token.split(".")[1], signature])
        with self.assertRaises(InvalidTokenError):
            tokens.verify(forged)

    def test_garbage_token(self) -> None:
        with self.assertRaises(InvalidTokenError):
            _tokens().verify("not.a.token")

    def test_unknown_role(self) -> None:
        exp = datetime.now(UTC) + timedelta(hours=1)
        token = jwt.encode({"sub": "u1", "role": "root", "exp": exp}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidTokenError):
            _tokens().verify(token)

    def test_missing_subject(self) -> None:
        exp = datetime.now(UTC) + timedelta(hours=1)
        token = jwt.encode({"role": "user", "exp": exp}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidTokenError):
            _tokens().verify(token)

    def test_missing_expiry(self) -> None:
        token = jwt.encode({"sub": "u1", "role": "user"}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidTokenError):
            _tokens().verify(token)

    def test_error_carries_no_reason(self) -> None:
        tokens = _tokens()
        expired = tokens.issue("u1", Role.USER, now=datetime.now(UTC) - timedelta(days=2))
        messages = []
        for token in (expired, "garbage"):
            try:
                tokens.verify(token)
            except InvalidTokenError as e:
                messages.append(str(e))
        self.assertEqual(messages, ["", ""])


if __name__ == "__main__":
    unittest.main()
