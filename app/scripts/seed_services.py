"""
Insert the default service catalog when the services table is empty. Run from project root:
  python -m app.scripts.seed_services
"""
import logging
import sys

from app.core.database import session_scope
from app.core.errors import AppError
from app.services.catalog import seed_default_services

logger = logging.getLogger(__name__)


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    with session_scope() as db:
        try:
            inserted = seed_default_services(db)
        except AppError as e:
            logger.error("Seeding failed: %s", e.message)
            return 1
    if inserted:
        logger.info("Seeded %s services", inserted)
    else:
        logger.info("Services table not empty; nothing seeded")
    return 0


if __name__ == "__main__":
    sys.exit(main())
