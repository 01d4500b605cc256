#guestdesk/core/auth_deps.py
from __future__ import annotations

import uuid
from typing import Callable, Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from guestdesk.core.security import decode_token
from guestdesk.db.session import get_db
from guestdesk.models.user import User
from guestdesk.policies.permissions import Principal, PermissionDenied, require

bearer = HTTPBearer(auto_error=True)
optional_bearer = HTTPBearer(auto_error=False)


def _principal_from_token(request: Request, token: str, db: Session) -> Principal:
    try:
        payload = decode_token(token)
    except Exception:
        raise HTTPException(status_code=401, detail="Invalid or expired token.")

    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=401, detail="Token missing required claims.")

    try:
        user_id = uuid.UUID(str(sub))
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid subject in token.")

    # Role is read from the row, not the token, so admin edits apply at once
    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Account no longer exists.")

    principal = Principal(
        user_id=str(user.id),
        email=user.email,
        name=user.name,
        role=user.role,
    )
    request.state.principal = principal
    return principal


def get_current_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials = Depends(bearer),
    db: Session = Depends(get_db),
) -> Principal:
    """
    Canonical authentication dependency.

    Guarantees:
    - JWT is valid and not expired
    - subject refers to an existing user
    - principal carries the user's current role
    """
    return _principal_from_token(request, creds.credentials, db)


def get_optional_principal(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer),
    db: Session = Depends(get_db),
) -> Optional[Principal]:
    """Public routes: anonymous callers get None, bad tokens still fail."""
    if creds is None:
        return None
    return _principal_from_token(request, creds.credentials, db)


def require_permission(capability: str) -> Callable[..., Principal]:
    def _dep(principal: Principal = Depends(get_current_principal)) -> Principal:
        try:
            require(principal, capability)
        except PermissionDenied:
            raise HTTPException(
                status_code=403,
                detail="Access denied: you do not have permission for this action.",
            )
        return principal

    return _dep
