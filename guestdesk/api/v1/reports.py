# guestdesk/api/v1/reports.py
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from guestdesk.core.auth_deps import require_permission
from guestdesk.core.streaming import csv_stream
from guestdesk.db.session import get_db
from guestdesk.policies.permissions import Principal
from guestdesk.services.errors import NotFound
from guestdesk.services.reports_service import ReportsService

router = APIRouter(prefix="/reports")


@router.get("/dashboard")
def dashboard(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_view_dashboard")),
):
    return ReportsService().dashboard(db)


@router.get("/summary")
def summary(
    event_id: Optional[uuid.UUID] = Query(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_view_reports")),
):
    try:
        events = ReportsService().summary(db, event_id=event_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"events": events}


@router.get("/guests.csv")
def export_guests_csv(
    event_id: Optional[uuid.UUID] = Query(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_export_reports")),
):
    svc = ReportsService()
    # materialize before the session closes; the response streams afterwards
    rows = list(svc.iter_guest_rows(db, event_id=event_id))
    name = f"guests_{event_id}.csv" if event_id else "guests.csv"
    return StreamingResponse(
        csv_stream(rows, svc.fieldnames()),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{name}"'},
    )
