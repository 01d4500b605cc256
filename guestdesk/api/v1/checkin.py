# guestdesk/api/v1/checkin.py
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from guestdesk.api.v1.views import guest_view
from guestdesk.core.auth_deps import require_permission
from guestdesk.core.config import get_settings
from guestdesk.db.session import get_db
from guestdesk.models.enums import CheckInFilter
from guestdesk.policies.permissions import Principal
from guestdesk.schemas.guests import CheckInRequest
from guestdesk.services.checkin import CheckInConflict, CheckInService
from guestdesk.services.errors import NotFound
from guestdesk.services.guests_service import GuestsService
from guestdesk.services.listing import filter_guests
from guestdesk.services.pagination import paginate

router = APIRouter(prefix="/checkin")

door_staff = require_permission("can_check_in")


@router.get("")
def door_list(
    search: Optional[str] = Query(default=None),
    status: CheckInFilter = Query(default=CheckInFilter.all),
    event_id: Optional[uuid.UUID] = Query(default=None),
    page: int = Query(default=1),
    page_size: Optional[int] = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    principal: Principal = Depends(door_staff),
):
    settings = get_settings()
    size = min(page_size or settings.default_page_size, settings.max_page_size)

    guests = GuestsService().list_for_door(db)
    if event_id is not None:
        guests = filter_guests(guests, event_id=event_id)
    scoped = filter_guests(guests, search=search)
    shown = filter_guests(scoped, status=status.value)

    p = paginate(shown, page, size)
    return {
        "guests": [guest_view(g) for g in p.items],
        "pagination": p.meta(),
        "totalGuests": len(scoped),
        "checkedInCount": sum(1 for g in scoped if g.checked_in),
    }


@router.post("/{guest_id}")
def check_in_guest(
    guest_id: uuid.UUID,
    request: Request,
    body: Optional[CheckInRequest] = Body(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(door_staff),
):
    try:
        g = CheckInService().check_in(
            db,
            guest_id=guest_id,
            principal=principal,
            expected_checked_in=body.expected_checked_in if body else None,
            request=request,
        )
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CheckInConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    return guest_view(g)


@router.delete("/{guest_id}")
def undo_check_in(
    guest_id: uuid.UUID,
    request: Request,
    expected_checked_in: Optional[bool] = Query(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(door_staff),
):
    try:
        g = CheckInService().check_out(
            db,
            guest_id=guest_id,
            principal=principal,
            expected_checked_in=expected_checked_in,
            request=request,
        )
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CheckInConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    return guest_view(g)
