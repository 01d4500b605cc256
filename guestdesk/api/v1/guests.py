# guestdesk/api/v1/guests.py
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from guestdesk.api.v1.views import guest_view
from guestdesk.core.auth_deps import get_current_principal, require_permission
from guestdesk.core.config import get_settings
from guestdesk.db.session import get_db
from guestdesk.models.enums import CheckInFilter, GuestStatus
from guestdesk.policies.permissions import Principal, permissions_for
from guestdesk.schemas.guests import GuestStatusRequest, GuestSubmissionRequest
from guestdesk.services.activity_service import ActivityAction, ActivityService
from guestdesk.services.errors import Conflict, NotFound
from guestdesk.services.guests_service import GuestsService
from guestdesk.services.listing import filter_guests, group_submissions, guest_event
from guestdesk.services.pagination import paginate
from guestdesk.services.submission import (
    CAPACITY_EXCEEDED,
    SUBMISSIONS_CLOSED,
    GuestSubmissionService,
    Sender,
    SubmissionError,
)

router = APIRouter()


def _page_size(page_size: Optional[int]) -> int:
    settings = get_settings()
    return min(page_size or settings.default_page_size, settings.max_page_size)


def submission_http_error(e: SubmissionError) -> HTTPException:
    if e.code == CAPACITY_EXCEEDED:
        return HTTPException(status_code=409, detail=e.as_dict())
    if e.code == SUBMISSIONS_CLOSED:
        return HTTPException(status_code=403, detail=e.as_dict())
    return HTTPException(status_code=400, detail=e.as_dict())


@router.get("/guests")
def list_guests(
    search: Optional[str] = Query(default=None),
    status: CheckInFilter = Query(default=CheckInFilter.all),
    guest_status: Optional[GuestStatus] = Query(default=None),
    event_id: Optional[uuid.UUID] = Query(default=None),
    page: int = Query(default=1),
    page_size: Optional[int] = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_view_guests")),
):
    guests = GuestsService().list_all(db, event_id=event_id)
    filtered = filter_guests(
        guests,
        search=search,
        status=status.value,
        guest_status=guest_status.value if guest_status else None,
    )
    p = paginate(filtered, page, _page_size(page_size))
    return {
        "guests": [guest_view(g) for g in p.items],
        "pagination": p.meta(),
        "checkedInCount": sum(1 for g in filtered if g.checked_in),
    }


@router.get("/guests/groups")
def list_submission_groups(
    search: Optional[str] = Query(default=None),
    event_id: Optional[uuid.UUID] = Query(default=None),
    page: int = Query(default=1),
    page_size: Optional[int] = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """
    Guests grouped by sender and event. Staff who can view guests see every
    submission; submitters only see their own.
    """
    perms = permissions_for(principal)
    if not (perms.can_view_guests or perms.can_submit_guests):
        raise HTTPException(status_code=403, detail="Access denied: you do not have permission for this action.")

    guests = GuestsService().list_all(db, event_id=event_id)
    if not perms.can_view_guests:
        guests = [g for g in guests if str(g.submitted_by) == principal.user_id]
    guests = filter_guests(guests, search=search)

    groups = group_submissions(guests)
    p = paginate(groups, page, _page_size(page_size))
    return {
        "groups": [grp.as_dict(guest_view) for grp in p.items],
        "pagination": p.meta(),
    }


@router.patch("/guests/{guest_id}/status")
def set_guest_status(
    guest_id: uuid.UUID,
    body: GuestStatusRequest,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_moderate_guests")),
):
    try:
        g = GuestsService().set_status(db, guest_id=guest_id, status=body.status.value)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Conflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    event = guest_event(g)
    ActivityService().write(
        db,
        action=ActivityAction.GUEST_STATUS_CHANGED,
        details=f'Guest "{g.guest_name}" marked {g.status}',
        user_id=principal.user_id,
        event_id=event.id if event is not None else None,
        request=request,
    )
    return guest_view(g)


@router.delete("/guests/{guest_id}")
def delete_guest(
    guest_id: uuid.UUID,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_delete_guests")),
):
    svc = GuestsService()
    try:
        g = svc.get_or_404(db, guest_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    event = guest_event(g)
    event_id = event.id if event is not None else None
    name = g.guest_name
    svc.delete(db, guest_id=guest_id)

    ActivityService().write(
        db,
        action=ActivityAction.GUEST_DELETED,
        details=f'Guest "{name}" removed',
        user_id=principal.user_id,
        event_id=event_id,
        request=request,
    )
    return {"deleted": True, "id": str(guest_id)}


@router.post("/events/{event_id}/lists/{list_id}/guests")
def submit_guests(
    event_id: uuid.UUID,
    list_id: uuid.UUID,
    body: GuestSubmissionRequest,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_submit_guests")),
):
    """
    Staff entry: names go in approved. Accounts that cannot manage lists may
    only submit into open lists of active events.
    """
    settings = get_settings()
    perms = permissions_for(principal)
    try:
        result = GuestSubmissionService().submit(
            db,
            text=body.names,
            sender=Sender(user_id=principal.user_id, name=principal.name, email=principal.email),
            event_id=event_id,
            event_list_id=list_id,
            max_names=settings.max_guests_per_submission_internal,
            max_name_length=settings.max_guest_name_length,
            status=GuestStatus.approved.value,
            require_open=not perms.can_manage_lists,
            request=request,
        )
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SubmissionError as e:
        raise submission_http_error(e)

    return {
        "success": True,
        "count": result.count,
        "guests": [guest_view(g) for g in result.guests],
    }
