"""
CLI entrypoint that seeds the initial Admin account. Run after migrations, e.g.:

  alembic upgrade head && python -m app.seed
"""

import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import get_settings
from app.core.database import session_scope
from app.services.seed import seed_admin

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Create the Admin account from ADMIN_* settings if it is missing."""
    settings = get_settings()
    try:
        with session_scope() as db:
            created = seed_admin(db, settings)
    except SQLAlchemyError:
        logger.exception("Seed failed")
        return 1
    logger.info("Seed completed: admin_created=%s", created)
    return 0


if __name__ == "__main__":
    sys.exit(main())
