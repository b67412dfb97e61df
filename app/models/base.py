"""SQLAlchemy declarative Base and shared model helpers."""

from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def utc_now() -> datetime:
    """Timezone-aware current time, used for Python-side column defaults."""
    return datetime.now(UTC)
