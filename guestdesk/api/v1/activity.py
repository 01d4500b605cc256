from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from guestdesk.api.v1.views import activity_view
from guestdesk.core.auth_deps import require_permission
from guestdesk.core.config import get_settings
from guestdesk.db.session import get_db
from guestdesk.policies.permissions import Principal
from guestdesk.services.activity_service import ActivityService
from guestdesk.services.pagination import paginate

router = APIRouter(prefix="/activity")


@router.get("")
def list_activity(
    event_id: Optional[uuid.UUID] = Query(default=None),
    action: Optional[str] = Query(default=None),
    page: int = Query(default=1),
    page_size: Optional[int] = Query(default=None, ge=1),
    limit: int = Query(default=1000, ge=1, le=5000),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permission("can_view_logs")),
):
    settings = get_settings()
    size = min(page_size or settings.default_page_size, settings.max_page_size)

    rows = ActivityService().list(db, event_id=event_id, action=action, limit=limit)
    p = paginate(rows, page, size)
    return {"activity": [activity_view(a) for a in p.items], "pagination": p.meta()}
