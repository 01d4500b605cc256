# guestdesk/services/auth_service.py
from typing import Optional

from sqlalchemy.orm import Session

from guestdesk.core.security import create_access_token, verify_password
from guestdesk.models.enums import UserRole
from guestdesk.models.user import User
from guestdesk.policies.permissions import Principal
from guestdesk.services.users_service import NewUser, UsersService


def principal_of(user: User) -> Principal:
    return Principal(user_id=str(user.id), email=user.email, name=user.name, role=user.role)


def authenticate(db: Session, email: str, password: str) -> Optional[Principal]:
    user = UsersService().get_by_email(db, email)
    if not user:
        return None

    if not verify_password(password, user.password_hash):
        return None

    return principal_of(user)


def issue_token(principal: Principal) -> str:
    return create_access_token(
        user_id=principal.user_id,
        email=principal.email,
        name=principal.name,
        role=principal.role,
    )


def signup(db: Session, *, email: str, password: str, name: str) -> Principal:
    """Self-service accounts always start with the basic role."""
    user = UsersService().create(
        db,
        NewUser(email=email, password=password, name=name, role=UserRole.USER.value),
    )
    return principal_of(user)
