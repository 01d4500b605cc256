import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from guestdesk.core.config import get_settings
from guestdesk.core.logging import configure_logging
from guestdesk.db.session import SessionLocal
from guestdesk.models.enums import UserRole
from guestdesk.models.list_type import ListType
from guestdesk.models.sector import Sector
from guestdesk.services.users_service import NewUser, UsersService

logger = logging.getLogger(__name__)

DEFAULT_LIST_TYPES = [
    ("VIP", "Free entry, priority access", "#8B5CF6"),
    ("Desconto", "Reduced ticket price", "#3B82F6"),
    ("Imprensa", "Press and media", "#F59E0B"),
]

DEFAULT_SECTORS = [
    ("Pista", "Main floor", "#10B981", None),
    ("Camarote", "Boxes", "#EF4444", 80),
]


def seed_catalog(db: Session) -> None:
    """Insert default list types and sectors that are not there yet."""
    have = set(db.execute(select(ListType.name)).scalars())
    for name, description, color in DEFAULT_LIST_TYPES:
        if name not in have:
            db.add(ListType(name=name, description=description, color=color))

    have = set(db.execute(select(Sector.name)).scalars())
    for name, description, color, capacity in DEFAULT_SECTORS:
        if name not in have:
            db.add(Sector(name=name, description=description, color=color, capacity=capacity))

    db.commit()


def seed_admin(db: Session) -> None:
    settings = get_settings()
    if not settings.bootstrap_admin_email or not settings.bootstrap_admin_password:
        logger.info("no bootstrap admin configured; skipping")
        return

    svc = UsersService()
    if svc.get_by_email(db, settings.bootstrap_admin_email) is not None:
        return

    svc.create(
        db,
        NewUser(
            email=settings.bootstrap_admin_email,
            password=settings.bootstrap_admin_password,
            name=settings.bootstrap_admin_name,
            role=UserRole.ADMIN.value,
        ),
    )


def seed():
    configure_logging(get_settings())
    db: Session = SessionLocal()
    try:
        seed_admin(db)
        seed_catalog(db)
    finally:
        db.close()


if __name__ == "__main__":
    seed()
