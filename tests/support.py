"""Shared fixtures for API tests: in-memory SQLite, dependency override, seed helpers."""

import datetime as dt
import unittest
from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.database import get_db
from app.core.security import hash_password
from app.main import app
from app.models import Base, City, Reservation, ReservationStatus, Restaurant, User, UserRole

API = settings.API_V1_PREFIX
PASSWORD = "Passw0rd!"


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def future_date(days: int = 30) -> dt.date:
    return dt.date.today() + dt.timedelta(days=days)


class ApiTestCase(unittest.TestCase):
    """Fresh database per test; requests go through the real app with get_db overridden."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        event.listen(self.engine, "connect", _enable_foreign_keys)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    # --- seed helpers (write straight to the database) ---

    def make_user(
        self,
        username: str,
        role: UserRole = UserRole.REGISTERED_USER,
        password: str = PASSWORD,
        is_banned: bool = False,
    ) -> str:
        with self.Session() as db:
            user = User(
                username=username,
                email=f"{username}@example.com",
                password_hash=hash_password(password),
                first_name="Test",
                last_name=username.capitalize(),
                role=role,
                is_banned=is_banned,
            )
            db.add(user)
            db.commit()
            return user.id

    def make_city(
        self,
        name: str = "Vilnius",
        latitude: str = "54.687157",
        longitude: str = "25.279652",
    ) -> int:
        with self.Session() as db:
            city = City(latitude=Decimal(latitude), longitude=Decimal(longitude), name=name)
            db.add(city)
            db.commit()
            return city.id

    def make_restaurant(
        self,
        city_id: int,
        manager_id: str,
        name: str = "Bistro",
        street_address: str = "Gedimino pr. 1",
    ) -> int:
        with self.Session() as db:
            restaurant = Restaurant(
                name=name,
                description="Seasonal food",
                street_address=street_address,
                website_url="https://www.bistro.lt",
                city_id=city_id,
                restaurant_manager_id=manager_id,
            )
            db.add(restaurant)
            db.commit()
            return restaurant.id

    def make_reservation(
        self,
        restaurant_id: int,
        user_id: str,
        status: ReservationStatus = ReservationStatus.PENDING,
    ) -> int:
        with self.Session() as db:
            reservation = Reservation(
                date=future_date(),
                time=dt.time(19, 0),
                party_size=2,
                status=status,
                restaurant_id=restaurant_id,
                reserving_user_id=user_id,
            )
            db.add(reservation)
            db.commit()
            return reservation.id

    def get_row(self, model, pk):
        with self.Session() as db:
            return db.get(model, pk)

    # --- request helpers ---

    def login(self, username: str, password: str = PASSWORD) -> dict:
        response = self.client.post(
            f"{API}/login", json={"username": username, "password": password}
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def auth(self, username: str, password: str = PASSWORD) -> dict[str, str]:
        token = self.login(username, password)["accessToken"]
        return {"Authorization": f"Bearer {token}"}
