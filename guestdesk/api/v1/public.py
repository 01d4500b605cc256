# guestdesk/api/v1/public.py
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from guestdesk.api.v1.guests import submission_http_error
from guestdesk.api.v1.views import catalog_view, event_view
from guestdesk.core.config import get_settings
from guestdesk.db.session import get_db
from guestdesk.models.enums import EventStatus, GuestStatus
from guestdesk.schemas.guests import PublicGuestSubmissionRequest
from guestdesk.services.errors import NotFound
from guestdesk.services.event_lists_service import EventListsService
from guestdesk.services.events_service import EventsService
from guestdesk.services.settings_service import (
    ALLOW_PUBLIC_SUBMISSIONS,
    AUTO_APPROVE_PUBLIC,
    MAX_GUESTS_PER_SUBMISSION,
    SiteSettingsService,
)
from guestdesk.services.submission import (
    SUBMISSIONS_CLOSED,
    GuestSubmissionService,
    Sender,
    SubmissionError,
)

router = APIRouter(prefix="/public")


def _open_lists(db: Session, event_id: uuid.UUID):
    return [
        lst for lst in EventListsService().list_for_event(db, event_id)
        if lst.is_active
        and lst.list_type is not None and lst.list_type.is_active
        and lst.sector is not None and lst.sector.is_active
    ]


@router.get("/events/{event_id}")
def public_event(event_id: uuid.UUID, db: Session = Depends(get_db)):
    """What the public form needs: the event, its open lists, the limits."""
    e = EventsService().get(db, event_id)
    if e is None or e.status != EventStatus.active.value:
        raise HTTPException(status_code=404, detail="Event not found.")

    settings = SiteSettingsService()
    return {
        "event": event_view(e),
        "lists": [
            {
                "id": str(lst.id),
                "name": lst.name,
                "listType": catalog_view(lst.list_type),
                "sector": catalog_view(lst.sector),
            }
            for lst in _open_lists(db, e.id)
        ],
        "acceptingSubmissions": settings.get_bool(db, ALLOW_PUBLIC_SUBMISSIONS),
        "maxGuestsPerSubmission": settings.get_int(db, MAX_GUESTS_PER_SUBMISSION),
    }


@router.post("/events/{event_id}/guests")
def public_submit_guests(
    event_id: uuid.UUID,
    body: PublicGuestSubmissionRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    site = SiteSettingsService()
    try:
        if not site.get_bool(db, ALLOW_PUBLIC_SUBMISSIONS):
            raise SubmissionError(SUBMISSIONS_CLOSED, "Public submissions are closed.")

        status = (
            GuestStatus.approved.value
            if site.get_bool(db, AUTO_APPROVE_PUBLIC)
            else GuestStatus.pending.value
        )
        result = GuestSubmissionService().submit(
            db,
            text=body.names,
            sender=Sender(name=body.sender_name.strip(), email=body.sender_email.strip().lower()),
            event_id=event_id,
            event_list_id=body.event_list_id,
            max_names=site.get_int(db, MAX_GUESTS_PER_SUBMISSION),
            max_name_length=get_settings().max_guest_name_length,
            status=status,
            require_open=True,
            request=request,
        )
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SubmissionError as e:
        raise submission_http_error(e)

    return {
        "success": True,
        "count": result.count,
        "status": status,
        "names": [g.guest_name for g in result.guests],
    }
