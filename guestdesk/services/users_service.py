# guestdesk/services/users_service.py
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, List, Optional

from sqlalchemy import delete, desc, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from guestdesk.core.security import hash_password
from guestdesk.models.enums import UserRole
from guestdesk.models.event import Event
from guestdesk.models.event_list import EventList
from guestdesk.models.guest import Guest
from guestdesk.models.site_setting import SiteSetting
from guestdesk.models.user import User
from guestdesk.services.errors import Conflict, NotFound
from guestdesk.services.submission import EMAIL_RE

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 2
VALID_ROLES = {r.value for r in UserRole}
NEW_USER_FIELDS = ("email", "password", "name", "role")


class UserValidationError(ValueError):
    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


@dataclass(frozen=True)
class NewUser:
    email: Any
    password: Any
    name: Any
    role: Any


def validate_new_user(req: NewUser) -> NewUser:
    """Field checks for account creation, in the order the form reports them."""
    if not req.email or not req.password or not req.name or not req.role:
        raise UserValidationError("All fields are required.", "email, password, name and role")
    not_text = [f for f in NEW_USER_FIELDS if not isinstance(getattr(req, f), str)]
    if not_text:
        raise UserValidationError("Invalid field type.", f"{', '.join(not_text)} must be text")

    email = req.email.strip().lower()
    name = req.name.strip()

    if not EMAIL_RE.match(email):
        raise UserValidationError("Invalid email.")
    if len(req.password) < MIN_PASSWORD_LENGTH:
        raise UserValidationError(f"Password must have at least {MIN_PASSWORD_LENGTH} characters.")
    if len(name) < MIN_NAME_LENGTH:
        raise UserValidationError(f"Name must have at least {MIN_NAME_LENGTH} characters.")
    if req.role not in VALID_ROLES:
        raise UserValidationError(
            "Invalid role.", f"Allowed values: {', '.join(sorted(VALID_ROLES))}"
        )

    return NewUser(email=email, password=req.password, name=name, role=req.role)


class UsersService:
    def get(self, db: Session, user_id: uuid.UUID) -> Optional[User]:
        return db.get(User, user_id)

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        ).scalar_one_or_none()

    def list(self, db: Session) -> List[User]:
        return list(db.execute(select(User).order_by(desc(User.created_at))).scalars().all())

    def create(self, db: Session, req: NewUser) -> User:
        """
        Identity (credentials) and profile are one row written in one
        transaction; any failure rolls both back.
        """
        clean = validate_new_user(req)

        if self.get_by_email(db, clean.email) is not None:
            raise Conflict("A user with this email already exists.")

        user = User(
            email=clean.email,
            name=clean.name,
            role=clean.role,
            password_hash=hash_password(clean.password),
        )
        try:
            db.add(user)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise Conflict("A user with this email already exists.")
        except SQLAlchemyError:
            db.rollback()
            logger.exception("user creation failed", extra={"email": clean.email})
            raise

        logger.info("user created", extra={"user_id": str(user.id), "role": user.role})
        return user

    def update(
        self,
        db: Session,
        *,
        user_id: uuid.UUID,
        acting_user_id: str,
        name: Optional[str],
        role: Optional[str],
    ) -> User:
        user = self.get(db, user_id)
        if user is None:
            raise NotFound("User not found.")

        if name is not None:
            name = name.strip()
            if len(name) < MIN_NAME_LENGTH:
                raise UserValidationError(f"Name must have at least {MIN_NAME_LENGTH} characters.")
            user.name = name

        if role is not None:
            if role not in VALID_ROLES:
                raise UserValidationError("Invalid role.")
            if str(user.id) == acting_user_id and role != UserRole.ADMIN.value:
                raise Conflict("You cannot remove your own admin role.")
            user.role = role

        db.commit()
        return user

    def delete(
        self,
        db: Session,
        *,
        user_id: uuid.UUID,
        acting_user_id: str,
        transfer_to: Optional[uuid.UUID] = None,
    ) -> User:
        """
        With transfer_to: the user's events, lists and submitted guests are
        handed over. Without it: their events and submitted guests go with
        them. Activity rows are never deleted; they just lose the actor.
        """
        if str(user_id) == acting_user_id:
            raise Conflict("You cannot delete your own account.")

        user = self.get(db, user_id)
        if user is None:
            raise NotFound("User not found.")

        if transfer_to is not None:
            if transfer_to == user_id:
                raise Conflict("Cannot transfer data to the user being deleted.")
            if self.get(db, transfer_to) is None:
                raise NotFound("Transfer target user not found.")

        try:
            if transfer_to is not None:
                db.execute(update(Event).where(Event.created_by == user_id).values(created_by=transfer_to))
                db.execute(
                    update(EventList).where(EventList.created_by == user_id).values(created_by=transfer_to)
                )
                db.execute(
                    update(Guest).where(Guest.submitted_by == user_id).values(submitted_by=transfer_to)
                )
            else:
                db.execute(delete(Guest).where(Guest.submitted_by == user_id))
                owned = select(Event.id).where(Event.created_by == user_id)
                owned_lists = select(EventList.id).where(EventList.event_id.in_(owned))
                db.execute(delete(Guest).where(Guest.event_list_id.in_(owned_lists)))
                db.execute(delete(Guest).where(Guest.event_id.in_(owned)))
                db.execute(delete(EventList).where(EventList.event_id.in_(owned)))
                db.execute(delete(Event).where(Event.created_by == user_id))

            # detach remaining references so the row can go
            db.execute(update(Guest).where(Guest.checked_in_by == user_id).values(checked_in_by=None))
            db.execute(update(EventList).where(EventList.created_by == user_id).values(created_by=None))
            db.execute(update(SiteSetting).where(SiteSetting.updated_by == user_id).values(updated_by=None))
            db.delete(user)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("user deletion failed", extra={"user_id": str(user_id)})
            raise

        return user
