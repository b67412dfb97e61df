"""Unit and integration tests for seeding the initial Admin account."""

import unittest
from unittest.mock import MagicMock

from pydantic import SecretStr

from app.core.security import verify_password
from app.models import User, UserRole
from app.services.seed import seed_admin
from tests.support import ApiTestCase


def _settings() -> MagicMock:
    settings = MagicMock()
    settings.ADMIN_USERNAME = "admin"
    settings.ADMIN_PASSWORD = SecretStr("#Aa123456")
    settings.ADMIN_EMAIL = "admin@example.com"
    settings.ADMIN_FIRST_NAME = "Site"
    settings.ADMIN_LAST_NAME = "Admin"
    return settings


class TestSeedAdminExisting(unittest.TestCase):
    """When the admin username is taken, seed_admin adds nothing."""

    def test_returns_false_and_does_not_add(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = MagicMock()
        self.assertFalse(seed_admin(session, _settings()))
        session.add.assert_not_called()
        session.commit.assert_not_called()


class TestSeedAdminMissing(unittest.TestCase):
    """When no such user exists, seed_admin adds an Admin and commits once."""

    def test_adds_admin(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = None
        self.assertTrue(seed_admin(session, _settings()))
        session.commit.assert_called_once()
        (user,), _ = session.add.call_args
        self.assertEqual(user.username, "admin")
        self.assertIs(user.role, UserRole.ADMIN)
        self.assertTrue(verify_password("#Aa123456", user.password_hash))


class TestSeedAdminIntegration(ApiTestCase):
    """Against a real database: seeding twice leaves one Admin who can log in."""

    def test_idempotent(self) -> None:
        with self.Session() as db:
            self.assertTrue(seed_admin(db, _settings()))
            self.assertFalse(seed_admin(db, _settings()))
            self.assertEqual(db.query(User).filter(User.role == UserRole.ADMIN).count(), 1)
        tokens = self.login("admin", "#Aa123456")
        self.assertIn("accessToken", tokens)

    def test_existing_username_in_other_case_counts(self) -> None:
        self.make_user("ADMIN", role=UserRole.ADMIN)
        with self.Session() as db:
            self.assertFalse(seed_admin(db, _settings()))
            self.assertEqual(db.query(User).count(), 1)


if __name__ == "__main__":
    unittest.main()
