# guestdesk/api/v1/admin_users.py
from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from guestdesk.api.v1.views import user_view
from guestdesk.core.auth_deps import require_permission
from guestdesk.db.session import get_db
from guestdesk.policies.permissions import Principal
from guestdesk.schemas.users import CreateUserRequest, UpdateUserRequest
from guestdesk.services.activity_service import ActivityAction, ActivityService
from guestdesk.services.errors import Conflict, NotFound
from guestdesk.services.reports_service import ReportsService
from guestdesk.services.users_service import NewUser, UsersService, UserValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")

admin_only = require_permission("can_manage_users")


def _error(status_code: int, message: str, details: Optional[str] = None) -> JSONResponse:
    body = {"error": message}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


@router.post("/create-user")
def create_user(
    body: CreateUserRequest,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(admin_only),
):
    svc = UsersService()
    try:
        user = svc.create(
            db,
            NewUser(email=body.email, password=body.password, name=body.name, role=body.role),
        )
    except UserValidationError as e:
        return _error(400, e.message, e.details)
    except Conflict as e:
        return _error(409, str(e))
    except SQLAlchemyError as e:
        return _error(500, "Internal server error.", str(e.__class__.__name__))

    ActivityService().write(
        db,
        action=ActivityAction.USER_CREATED,
        details=f"User {user.email} ({user.role}) created by {principal.name}",
        user_id=principal.user_id,
        request=request,
    )
    return {
        "success": True,
        "message": "User created successfully.",
        "user": user_view(user),
    }


@router.get("/users")
def list_users(
    db: Session = Depends(get_db),
    principal: Principal = Depends(admin_only),
):
    try:
        users = UsersService().list(db)
    except SQLAlchemyError:
        logger.exception("listing users failed")
        return _error(500, "Internal server error.")
    return {"users": [user_view(u) for u in users], "count": len(users)}


@router.patch("/users/{user_id}")
def update_user(
    user_id: uuid.UUID,
    body: UpdateUserRequest,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(admin_only),
):
    try:
        user = UsersService().update(
            db,
            user_id=user_id,
            acting_user_id=principal.user_id,
            name=body.name,
            role=body.role,
        )
    except UserValidationError as e:
        return _error(400, e.message, e.details)
    except NotFound as e:
        return _error(404, str(e))
    except Conflict as e:
        return _error(409, str(e))

    ActivityService().write(
        db,
        action=ActivityAction.USER_UPDATED,
        details=f"User {user.email} updated by {principal.name}",
        user_id=principal.user_id,
        request=request,
    )
    return {"success": True, "user": user_view(user)}


@router.delete("/users/{user_id}")
def delete_user(
    user_id: uuid.UUID,
    request: Request,
    transfer_to: Optional[uuid.UUID] = Query(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(admin_only),
):
    try:
        user = UsersService().delete(
            db, user_id=user_id, acting_user_id=principal.user_id, transfer_to=transfer_to
        )
    except NotFound as e:
        return _error(404, str(e))
    except Conflict as e:
        return _error(409, str(e))
    except SQLAlchemyError:
        return _error(500, "Internal server error.")

    mode = f"data transferred to {transfer_to}" if transfer_to else "data deleted"
    ActivityService().write(
        db,
        action=ActivityAction.USER_DELETED,
        details=f"User {user.email} deleted by {principal.name}; {mode}",
        user_id=principal.user_id,
        request=request,
    )
    return {"success": True, "message": "User deleted successfully."}


@router.get("/stats")
def admin_stats(
    db: Session = Depends(get_db),
    principal: Principal = Depends(admin_only),
):
    return ReportsService().admin_stats(db)
