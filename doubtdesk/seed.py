"""Create the demo student and instructor accounts.

Usage:
    python -m doubtdesk.seed
"""
import logging

from doubtdesk.core.security import get_password_hash
from doubtdesk.db.base import Base
from doubtdesk.db.sessions import SessionLocal, engine
from doubtdesk.domain.identity import Role
from doubtdesk.repositories.doubt_repository import DoubtRepository

import doubtdesk.models  # noqa: F401

logger = logging.getLogger("doubtdesk.seed")

DEMO_PASSWORD = "password123"
DEMO_USERS = [
    ("Test Student", "student@test.com", Role.STUDENT),
    ("Test Instructor", "instructor@test.com", Role.INSTRUCTOR),
]


def seed(repository: DoubtRepository) -> int:
    """Insert any demo user that does not exist yet. Returns how many were added."""
    created = 0
    password_hash = get_password_hash(DEMO_PASSWORD)
    for name, email, role in DEMO_USERS:
        if repository.get_user_by_email(email):
            continue
        repository.create_user(name=name, email=email, password_hash=password_hash, role=role)
        created += 1
    return created


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        created = seed(DoubtRepository(db))
    finally:
        db.close()
    logger.info("Seeded users (%d new)", created)


if __name__ == "__main__":
    main()
