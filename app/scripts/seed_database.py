"""
Seed demo accounts for local development. Safe to run repeatedly:

  python -m app.scripts.seed_database
"""

import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.logging_config import configure_logging
from app.core.roles import Role
from app.services.user_store import UserStore
from app.services.users import register_user

logger = logging.getLogger(__name__)

DEMO_USERS = (
    {"email": "admin@example.com", "name": "Admin User", "password": "admin123", "role": Role.ADMIN},
    {"email": "user@example.com", "name": "Demo User", "password": "password123", "role": Role.USER},
)


def seed(store: UserStore) -> int:
    """Create any missing demo users; return how many were created."""
    created = 0
    for demo in DEMO_USERS:
        if store.find_by_email(demo["email"]) is not None:
            logger.info("User %s already exists, skipping", demo["email"])
            continue
        register_user(store, **demo)
        logger.info("Created %s user %s", demo["role"].value, demo["email"])
        created += 1
    return created


def main() -> int:
    settings = get_settings()
    configure_logging(settings)
    if settings.APP_ENV == "prod":
        logger.error("Refusing to seed demo users with APP_ENV=prod")
        return 1
    db = SessionLocal()
    try:
        store = UserStore(db)
        created = seed(store)
        logger.info("Seeding completed: created=%s counts=%s", created, store.count_by_role())
        return 0
    except Exception as e:
        logger.exception("Seeding failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
