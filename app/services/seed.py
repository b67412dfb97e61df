"""Bootstrap data: the initial Admin account."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.models import User, UserRole

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def seed_admin(session: Session, settings: "Settings") -> bool:
    """
    Create the Admin account from ADMIN_* settings unless the username exists.

    Returns True when a user was created. Idempotent: safe to run on every deploy.
    """
    existing = (
        session.query(User).filter(User.username_is(settings.ADMIN_USERNAME)).first()
    )
    if existing is not None:
        logger.info("Admin user '%s' already exists; skipping.", settings.ADMIN_USERNAME)
        return False

    admin = User(
        username=settings.ADMIN_USERNAME,
        email=settings.ADMIN_EMAIL,
        password_hash=hash_password(settings.ADMIN_PASSWORD.get_secret_value()),
        first_name=settings.ADMIN_FIRST_NAME,
        last_name=settings.ADMIN_LAST_NAME,
        role=UserRole.ADMIN,
    )
    session.add(admin)
    session.commit()
    logger.info("Created admin user '%s'.", settings.ADMIN_USERNAME)
    return True
