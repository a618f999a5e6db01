"""Unit tests for request/response schemas: field bounds and sanitized user view."""

import unittest
from datetime import UTC, datetime

from pydantic import ValidationError

from app.models.user import User, UserRole
from app.schemas.auth import LoginRequest, RegisterRequest, UserOut


def _register(**overrides: str) -> RegisterRequest:
    data = {"fullname": "Jane Doe", "email": "jane@example.com", "password": "secret1"}
    data.update(overrides)
    return RegisterRequest(**data)


class TestRegisterRequestBounds(unittest.TestCase):
    """fullname must be 3-30 characters, password at least 6, email well-formed."""

    def test_fullname_lengths(self) -> None:
        for length, ok in ((2, False), (3, True), (30, True), (31, False)):
            with self.subTest(length=length):
                if ok:
                    self.assertEqual(len(_register(fullname="a" * length).fullname), length)
                else:
                    with self.assertRaises(ValidationError):
                        _register(fullname="a" * length)

    def test_password_lengths(self) -> None:
        with self.assertRaises(ValidationError):
            _register(password="12345")
        self.assertEqual(_register(password="123456").password, "123456")
        self.assertEqual(len(_register(password="p" * 129).password), 129)
        self.assertEqual(
            len(LoginRequest(email="jane@example.com", password="p" * 1000).password), 1000
        )

    def test_invalid_email(self) -> None:
        for email in ("jane", "jane@", "@example.com", "jane example.com"):
            with self.subTest(email=email):
                with self.assertRaises(ValidationError):
                    _register(email=email)

    def test_email_lowercased(self) -> None:
        self.assertEqual(_register(email="Jane@Example.COM").email, "jane@example.com")

    def test_missing_field(self) -> None:
        with self.assertRaises(ValidationError):
            RegisterRequest(email="jane@example.com", password="secret1")


class TestLoginRequestBounds(unittest.TestCase):
    def test_password_min_length(self) -> None:
        with self.assertRaises(ValidationError):
            LoginRequest(email="jane@example.com", password="12345")
        self.assertEqual(
            LoginRequest(email="JANE@example.com", password="123456").email,
            "jane@example.com",
        )


class TestUserOut(unittest.TestCase):
    """UserOut never exposes the password hash."""

    def test_from_orm_user_excludes_hash(self) -> None:
        user = User(
            id=1,
            fullname="Jane Doe",
            email="jane@example.com",
            password_hash="$2b$10$abcdefghijklmnopqrstuv",
            role=UserRole.USER,
            has_shipping_address=False,
            created_at=datetime.now(UTC),
        )
        dumped = UserOut.model_validate(user).model_dump()
        self.assertNotIn("password_hash", dumped)
        self.assertNotIn("password", dumped)
        self.assertEqual(dumped["role"], UserRole.USER)
        self.assertEqual(dumped["email"], "jane@example.com")


if __name__ == "__main__":
    unittest.main()
