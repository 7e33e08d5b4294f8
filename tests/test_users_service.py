"""Unit tests for app.services.users: registration rules and password checks."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, OperationalError

from app.core.exceptions import DuplicateError, StoreError, ValidationError
from app.core.security import hash_password
from app.models import User
from app.services.users import register_user, verify_user_password


def _session(existing: User | None = None) -> MagicMock:
    """MagicMock session whose email lookup returns existing."""
    session = MagicMock()
    session.query.return_value.filter.return_value.first.return_value = existing
    return session


class TestRegisterValidation(unittest.TestCase):
    """Missing or blank fields fail before touching the database."""

    def test_missing_password(self) -> None:
        session = _session()
        with self.assertRaises(ValidationError) as ctx:
            register_user(session, "u1", "u1@x.com", None, rounds=4)
        self.assertIn("password", ctx.exception.message)
        session.query.assert_not_called()

    def test_blank_username_and_email(self) -> None:
        session = _session()
        with self.assertRaises(ValidationError) as ctx:
            register_user(session, "  ", "", "pw", rounds=4)
        self.assertIn("username", ctx.exception.message)
        self.assertIn("email", ctx.exception.message)
        session.add.assert_not_called()


class TestRegisterDuplicate(unittest.TestCase):
    """An existing email (or a unique-constraint hit) is a DuplicateError."""

    def test_existing_email(self) -> None:
        session = _session(existing=User(id=1, username="u1", email="u1@x.com"))
        with self.assertRaises(DuplicateError):
            register_user(session, "other", "u1@x.com", "pw", rounds=4)
        session.add.assert_not_called()
        session.commit.assert_not_called()

    def test_integrity_error_on_commit(self) -> None:
        session = _session()
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("unique"))
        with self.assertRaises(DuplicateError):
            register_user(session, "u1", "u1@x.com", "pw", rounds=4)
        session.rollback.assert_called_once()


class TestRegisterStoreFailure(unittest.TestCase):
    """Other database errors become StoreError with a generic message."""

    def test_operational_error(self) -> None:
        session = _session()
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("down"))
        with self.assertRaises(StoreError) as ctx:
            register_user(session, "u1", "u1@x.com", "pw", rounds=4)
        self.assertEqual(ctx.exception.message, "Server error")
        session.rollback.assert_called_once()


class TestRegisterSuccess(unittest.TestCase):
    """A new user is persisted with a bcrypt hash, never the raw password."""

    def test_persists_hashed_user(self) -> None:
        session = _session()
        user = register_user(session, " u1 ", " u1@x.com ", "pw-123", rounds=4)
        session.add.assert_called_once_with(user)
        session.commit.assert_called_once()
        self.assertEqual(user.username, " u1 ")
        self.assertEqual(user.email, " u1@x.com ")
        self.assertNotEqual(user.password_hash, "pw-123")
        self.assertTrue(verify_user_password(user, "pw-123"))


class TestVerifyUserPassword(unittest.TestCase):
    def test_wrong_password(self) -> None:
        user = User(username="u1", email="u1@x.com", password_hash=hash_password("right", rounds=4))
        self.assertFalse(verify_user_password(user, "wrong"))


if __name__ == "__main__":
    unittest.main()
