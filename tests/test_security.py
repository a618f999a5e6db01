"""Unit tests for app.core.security: bcrypt hashing and access token issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.errors import (
    ExpiredTokenError,
    InvalidTokenError,
    MalformedTokenError,
    TokenError,
)
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from tests.helpers import TEST_SECRET, make_settings

PASSWORDS = ["secret1", "123456", "correct horse battery staple", "pässwörd€", "x" * 60]


class TestHashPassword(unittest.TestCase):
    """hash_password produces salted bcrypt hashes; verify_password checks them."""

    def test_hash_is_not_plaintext_and_embeds_cost(self) -> None:
        hashed = hash_password("secret1", rounds=10)
        self.assertNotEqual(hashed, "secret1")
        self.assertTrue(hashed.startswith("$2b$10$"))

    def test_same_input_gives_different_hashes(self) -> None:
        first = hash_password("secret1", rounds=4)
        second = hash_password("secret1", rounds=4)
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("secret1", first))
        self.assertTrue(verify_password("secret1", second))

    def test_verify_accepts_same_plaintext_and_rejects_others(self) -> None:
        for password in PASSWORDS:
            with self.subTest(password=password):
                hashed = hash_password(password, rounds=4)
                self.assertTrue(verify_password(password, hashed))
                self.assertFalse(verify_password(password + "x", hashed))
                self.assertFalse(verify_password(password[:-1] + "?", hashed))

    def test_verify_returns_false_for_garbage_hash(self) -> None:
        self.assertFalse(verify_password("secret1", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("secret1", ""))


class TestAccessToken(unittest.TestCase):
    """create_access_token / decode_access_token round trip and failure kinds."""

    def setUp(self) -> None:
        self.settings = make_settings()

    def test_round_trip_resolves_id_and_email(self) -> None:
        token = create_access_token(7, "jane@example.com", settings=self.settings)
        payload = decode_access_token(token, settings=self.settings)
        self.assertEqual(payload.id, 7)
        self.assertEqual(payload.email, "jane@example.com")
        self.assertEqual(payload.v, 1)

    def test_expiry_is_three_days_after_issue(self) -> None:
        now = datetime.now(UTC).replace(microsecond=0)
        token = create_access_token(1, "a@example.com", settings=self.settings, now=now)
        payload = decode_access_token(token, settings=self.settings)
        self.assertEqual(payload.iat, int(now.timestamp()))
        self.assertEqual(payload.exp - payload.iat, 3 * 24 * 60 * 60)

    def test_valid_just_before_expiry(self) -> None:
        issued = datetime.now(UTC) - timedelta(days=3) + timedelta(minutes=1)
        token = create_access_token(1, "a@example.com", settings=self.settings, now=issued)
        self.assertEqual(decode_access_token(token, settings=self.settings).id, 1)

    def test_expired_after_three_days(self) -> None:
        issued = datetime.now(UTC) - timedelta(days=3, seconds=5)
        token = create_access_token(1, "a@example.com", settings=self.settings, now=issued)
        with self.assertRaises(ExpiredTokenError):
            decode_access_token(token, settings=self.settings)

    def test_wrong_secret_is_invalid(self) -> None:
        other = make_settings(JWT_SECRET="another-secret-key-that-is-long-enough-xx")
        token = create_access_token(1, "a@example.com", settings=other)
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token, settings=self.settings)

    def test_garbage_is_malformed(self) -> None:
        for token in ["", "not-a-token", "a.b.c", "Bearer x"]:
            with self.subTest(token=token):
                with self.assertRaises(MalformedTokenError):
                    decode_access_token(token, settings=self.settings)

    def test_corrupted_token_is_rejected(self) -> None:
        token = create_access_token(1, "a@example.com", settings=self.settings)
        corrupted = token[:-4] + ("AAAA" if not token.endswith("AAAA") else "BBBB")
        with self.assertRaises(TokenError):
            decode_access_token(corrupted, settings=self.settings)

    def test_unknown_schema_version_is_invalid(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"v": 2, "id": 1, "email": "a@example.com", "iat": now, "exp": now + timedelta(days=1)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token, settings=self.settings)

    def test_payload_missing_fields_is_malformed(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"v": 1, "id": 1, "iat": now, "exp": now + timedelta(days=1)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(MalformedTokenError):
            decode_access_token(token, settings=self.settings)

    def test_loosely_typed_id_is_malformed(self) -> None:
        now = datetime.now(UTC)
        for user_id in ("1", True, 1.0):
            with self.subTest(user_id=user_id):
                token = jwt.encode(
                    {
                        "v": 1,
                        "id": user_id,
                        "email": "a@example.com",
                        "iat": now,
                        "exp": now + timedelta(days=1),
                    },
                    TEST_SECRET,
                    algorithm="HS256",
                )
                with self.assertRaises(MalformedTokenError):
                    decode_access_token(token, settings=self.settings)

    def test_missing_exp_is_invalid(self) -> None:
        token = jwt.encode(
            {"v": 1, "id": 1, "email": "a@example.com", "iat": datetime.now(UTC)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token, settings=self.settings)


if __name__ == "__main__":
    unittest.main()
