"""Tests for the global error handlers and the health endpoint."""

import unittest
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.core.database import check_db_connected, session_scope
from app.core.errors import INTERNAL_ERROR_MESSAGE, MALFORMED_BODY_MESSAGE
from app.main import app
from app.models import UserRole
from tests.support import API, ApiTestCase


class TestErrorHandlers(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.make_user("admin", role=UserRole.ADMIN)
        self.admin = self.auth("admin")

    def test_body_that_is_not_an_object_is_400(self) -> None:
        response = self.client.post(f"{API}/cities", json=[1, 2], headers=self.admin)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"detail": MALFORMED_BODY_MESSAGE})

    def test_truncated_json_is_400(self) -> None:
        response = self.client.post(
            f"{API}/cities",
            content=b'{"name": "Vil',
            headers={**self.admin, "Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 400)

    def test_unexpected_error_is_500_without_details(self) -> None:
        client = TestClient(app, raise_server_exceptions=False)
        with patch(
            "app.api.v1.cities.get_city_or_404", side_effect=RuntimeError("boom")
        ), self.assertLogs("app.core.errors", level="ERROR"):
            response = client.get(f"{API}/cities/1", headers=self.admin)
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"detail": INTERNAL_ERROR_MESSAGE})
        self.assertNotIn("boom", response.text)


class TestHealth(ApiTestCase):
    def test_ok_without_authentication(self) -> None:
        response = self.client.get(f"{API}/health/")
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "ok")
        self.assertEqual(data["database"], "connected")

    def test_degraded_when_database_unreachable(self) -> None:
        with patch("app.api.v1.health.check_db_connected", return_value=False):
            response = self.client.get(f"{API}/health/")
        self.assertEqual(response.json()["status"], "degraded")
        self.assertEqual(response.json()["database"], "disconnected")


class TestCheckDbConnected(unittest.TestCase):
    def test_false_on_database_error(self) -> None:
        session = MagicMock()
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        self.assertFalse(check_db_connected(session))

    def test_true_when_query_runs(self) -> None:
        self.assertTrue(check_db_connected(MagicMock()))


class TestSessionScope(unittest.TestCase):
    def test_rolls_back_and_closes_on_error(self) -> None:
        with patch("app.core.database.SessionLocal") as factory:
            session = factory.return_value
            with self.assertRaises(ValueError):
                with session_scope():
                    raise ValueError("bad row")
        session.rollback.assert_called_once()
        session.close.assert_called_once()

    def test_closes_without_rollback_on_success(self) -> None:
        with patch("app.core.database.SessionLocal") as factory:
            session = factory.return_value
            with session_scope() as db:
                self.assertIs(db, session)
        session.rollback.assert_not_called()
        session.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
