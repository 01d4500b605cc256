#guestdesk/api/v1/auth.py
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from guestdesk.api.v1.views import user_view
from guestdesk.core.auth_deps import get_current_principal
from guestdesk.db.session import get_db
from guestdesk.policies.permissions import Principal, permissions_for
from guestdesk.schemas.auth import LoginRequest, SignupRequest, TokenResponse
from guestdesk.services.activity_service import ActivityAction, ActivityService
from guestdesk.services.auth_service import authenticate, issue_token, signup
from guestdesk.services.errors import Conflict
from guestdesk.services.users_service import UsersService, UserValidationError

router = APIRouter(prefix="/auth")


@router.post("/login", response_model=TokenResponse)
def login(req: LoginRequest, db: Session = Depends(get_db)):
    principal = authenticate(db, req.email, req.password)
    if not principal:
        raise HTTPException(status_code=401, detail="Invalid email or password.")
    return TokenResponse(access_token=issue_token(principal))


@router.post("/signup", response_model=TokenResponse)
def signup_account(req: SignupRequest, request: Request, db: Session = Depends(get_db)):
    try:
        principal = signup(db, email=req.email, password=req.password, name=req.name)
    except UserValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Conflict as e:
        raise HTTPException(status_code=409, detail=str(e))

    ActivityService().write(
        db,
        action=ActivityAction.USER_CREATED,
        details=f"Account {principal.email} signed up",
        user_id=principal.user_id,
        request=request,
    )
    return TokenResponse(access_token=issue_token(principal))


@router.get("/me")
def get_me(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    user = UsersService().get(db, uuid.UUID(principal.user_id))
    return {
        "user": user_view(user),
        "permissions": permissions_for(principal).as_dict(),
    }
