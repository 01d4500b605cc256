# guestdesk/api/v1/event_lists.py
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from guestdesk.api.v1.views import event_list_view
from guestdesk.core.auth_deps import require_permission
from guestdesk.db.session import get_db
from guestdesk.policies.permissions import Principal
from guestdesk.schemas.event_lists import EventListCreateRequest, EventListPatchRequest
from guestdesk.services.activity_service import ActivityAction, ActivityService
from guestdesk.services.errors import Conflict, NotFound
from guestdesk.services.event_lists_service import EventListsService
from guestdesk.services.events_service import EventsService

router = APIRouter(prefix="/events/{event_id}/lists")


def _event_or_404(db: Session, event_id: uuid.UUID):
    try:
        return EventsService().get_or_404(db, event_id)
    except NotFound as ex:
        raise HTTPException(status_code=404, detail=str(ex))


@router.get("")
def list_event_lists(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_view_lists")),
):
    _event_or_404(db, event_id)
    svc = EventListsService()
    lists = svc.list_for_event(db, event_id)
    counts = svc.counts(db, [lst.id for lst in lists])
    return {"lists": [event_list_view(lst, counts[lst.id]) for lst in lists]}


@router.post("")
def create_event_list(
    event_id: uuid.UUID,
    body: EventListCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_manage_lists")),
):
    event = _event_or_404(db, event_id)
    try:
        lst = EventListsService().create(
            db, event_id=event_id, created_by=principal.user_id, fields=body.model_dump()
        )
    except NotFound as ex:
        raise HTTPException(status_code=404, detail=str(ex))
    except ValueError as ex:
        raise HTTPException(status_code=400, detail=str(ex))

    ActivityService().write(
        db,
        action=ActivityAction.LIST_CREATED,
        details=f'List "{lst.name}" created in event "{event.name}"',
        user_id=principal.user_id,
        event_id=event_id,
        request=request,
    )
    return event_list_view(lst)


@router.get("/{list_id}")
def get_event_list(
    event_id: uuid.UUID,
    list_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_view_lists")),
):
    svc = EventListsService()
    try:
        lst = svc.get_or_404(db, event_id=event_id, list_id=list_id)
    except NotFound as ex:
        raise HTTPException(status_code=404, detail=str(ex))
    return event_list_view(lst, svc.counts(db, [lst.id])[lst.id])


@router.patch("/{list_id}")
def patch_event_list(
    event_id: uuid.UUID,
    list_id: uuid.UUID,
    body: EventListPatchRequest,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_manage_lists")),
):
    svc = EventListsService()
    fields = body.model_dump(exclude_unset=True)
    for key in ("list_type_id", "sector_id", "is_active"):
        if key in fields and fields[key] is None:
            fields.pop(key)
    try:
        lst = svc.patch(db, event_id=event_id, list_id=list_id, fields=fields)
    except NotFound as ex:
        raise HTTPException(status_code=404, detail=str(ex))
    except Conflict as ex:
        raise HTTPException(status_code=409, detail=str(ex))
    except ValueError as ex:
        raise HTTPException(status_code=400, detail=str(ex))

    ActivityService().write(
        db,
        action=ActivityAction.LIST_UPDATED,
        details=f'List "{lst.name}" updated',
        user_id=principal.user_id,
        event_id=event_id,
        request=request,
    )
    return event_list_view(lst, svc.counts(db, [lst.id])[lst.id])


@router.delete("/{list_id}")
def delete_event_list(
    event_id: uuid.UUID,
    list_id: uuid.UUID,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_manage_lists")),
):
    try:
        lst = EventListsService().delete(db, event_id=event_id, list_id=list_id)
    except NotFound as ex:
        raise HTTPException(status_code=404, detail=str(ex))
    except Conflict as ex:
        raise HTTPException(status_code=409, detail=str(ex))

    ActivityService().write(
        db,
        action=ActivityAction.LIST_DELETED,
        details=f'List "{lst.name}" deleted',
        user_id=principal.user_id,
        event_id=event_id,
        request=request,
    )
    return {"deleted": True, "id": str(list_id)}
