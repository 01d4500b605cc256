# guestdesk/api/v1/events.py
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from guestdesk.api.v1.views import event_list_view, event_view
from guestdesk.core.auth_deps import require_permission
from guestdesk.core.config import get_settings
from guestdesk.db.session import get_db
from guestdesk.policies.permissions import Principal
from guestdesk.schemas.events import EventCreateRequest, EventPatchRequest
from guestdesk.services.activity_service import ActivityAction, ActivityService
from guestdesk.services.errors import Conflict, NotFound
from guestdesk.services.event_lists_service import EventListsService
from guestdesk.services.events_service import EventsService
from guestdesk.services.listing import filter_events
from guestdesk.services.pagination import paginate

router = APIRouter(prefix="/events")


@router.get("")
def list_events(
    search: Optional[str] = Query(default=None),
    status: Optional[str] = Query(default=None),
    page: int = Query(default=1),
    page_size: Optional[int] = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_view_events")),
):
    settings = get_settings()
    size = min(page_size or settings.default_page_size, settings.max_page_size)

    events = filter_events(EventsService().list(db), search=search, status=status)
    p = paginate(events, page, size)
    return {"events": [event_view(e) for e in p.items], "pagination": p.meta()}


@router.post("")
def create_event(
    body: EventCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_manage_events")),
):
    fields = body.model_dump()
    fields["status"] = body.status.value
    try:
        e = EventsService().create(db, created_by=principal.user_id, fields=fields)
    except ValueError as ex:
        raise HTTPException(status_code=400, detail=str(ex))

    ActivityService().write(
        db,
        action=ActivityAction.EVENT_CREATED,
        details=f'Event "{e.name}" created',
        user_id=principal.user_id,
        event_id=e.id,
        request=request,
    )
    return event_view(e)


@router.get("/{event_id}")
def get_event(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_view_events")),
):
    try:
        e = EventsService().get_or_404(db, event_id)
    except NotFound as ex:
        raise HTTPException(status_code=404, detail=str(ex))

    svc = EventListsService()
    lists = svc.list_for_event(db, e.id)
    counts = svc.counts(db, [lst.id for lst in lists])
    out = event_view(e)
    out["lists"] = [event_list_view(lst, counts[lst.id]) for lst in lists]
    return out


@router.patch("/{event_id}")
def patch_event(
    event_id: uuid.UUID,
    body: EventPatchRequest,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_manage_events")),
):
    fields = body.model_dump(exclude_unset=True)
    # required columns cannot be cleared
    for key in ("name", "date", "status"):
        if key in fields and fields[key] is None:
            fields.pop(key)
    if "status" in fields:
        fields["status"] = body.status.value
    try:
        e = EventsService().patch(db, event_id=event_id, fields=fields)
    except NotFound as ex:
        raise HTTPException(status_code=404, detail=str(ex))
    except ValueError as ex:
        raise HTTPException(status_code=400, detail=str(ex))

    ActivityService().write(
        db,
        action=ActivityAction.EVENT_UPDATED,
        details=f'Event "{e.name}" updated ({", ".join(sorted(fields)) or "no changes"})',
        user_id=principal.user_id,
        event_id=e.id,
        request=request,
    )
    return event_view(e)


@router.delete("/{event_id}")
def delete_event(
    event_id: uuid.UUID,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_manage_events")),
):
    try:
        e = EventsService().delete(db, event_id=event_id)
    except NotFound as ex:
        raise HTTPException(status_code=404, detail=str(ex))
    except Conflict as ex:
        raise HTTPException(status_code=409, detail=str(ex))

    ActivityService().write(
        db,
        action=ActivityAction.EVENT_DELETED,
        details=f'Event "{e.name}" deleted',
        user_id=principal.user_id,
        event_id=event_id,
        request=request,
    )
    return {"deleted": True, "id": str(event_id)}
