from __future__ import annotations

import logging
import uuid
from typing import List, Optional, Union

from sqlalchemy import desc, select
from sqlalchemy.orm import Session
from starlette.requests import Request

from guestdesk.models.activity_log import ActivityLog

logger = logging.getLogger(__name__)

IdLike = Union[str, uuid.UUID, None]


class ActivityAction:
    # Events
    EVENT_CREATED = "EVENT_CREATED"
    EVENT_UPDATED = "EVENT_UPDATED"
    EVENT_DELETED = "EVENT_DELETED"

    # Event lists
    LIST_CREATED = "LIST_CREATED"
    LIST_UPDATED = "LIST_UPDATED"
    LIST_DELETED = "LIST_DELETED"

    # Catalog
    LIST_TYPE_CREATED = "LIST_TYPE_CREATED"
    LIST_TYPE_UPDATED = "LIST_TYPE_UPDATED"
    LIST_TYPE_TOGGLED = "LIST_TYPE_TOGGLED"
    LIST_TYPE_DELETED = "LIST_TYPE_DELETED"
    SECTOR_CREATED = "SECTOR_CREATED"
    SECTOR_UPDATED = "SECTOR_UPDATED"
    SECTOR_TOGGLED = "SECTOR_TOGGLED"
    SECTOR_DELETED = "SECTOR_DELETED"

    # Guests
    GUESTS_SUBMITTED = "GUESTS_SUBMITTED"
    PUBLIC_GUESTS_SUBMITTED = "PUBLIC_GUESTS_SUBMITTED"
    GUEST_STATUS_CHANGED = "GUEST_STATUS_CHANGED"
    GUEST_DELETED = "GUEST_DELETED"

    # Door
    CHECK_IN = "CHECK_IN"
    CHECK_OUT = "CHECK_OUT"

    # Admin
    USER_CREATED = "USER_CREATED"
    USER_UPDATED = "USER_UPDATED"
    USER_DELETED = "USER_DELETED"
    SETTINGS_CHANGED = "SETTINGS_CHANGED"


def _as_uuid(value: IdLike) -> Optional[uuid.UUID]:
    if value is None or isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


class ActivityService:
    def write(
        self,
        db: Session,
        *,
        action: str,
        details: Optional[str] = None,
        user_id: IdLike = None,
        event_id: IdLike = None,
        request: Optional[Request] = None,
    ) -> ActivityLog:
        """
        Append-only insert, committed on its own.

        Runs after the mutation it describes has been committed; the two are
        not one transaction.
        """
        rid = getattr(request.state, "request_id", None) if request is not None else None
        row = ActivityLog(
            user_id=_as_uuid(user_id),
            event_id=_as_uuid(event_id),
            action=action,
            details=details,
            request_id=rid,
        )
        db.add(row)
        db.commit()
        logger.info("activity logged", extra={"action": action, "request_id": rid})
        return row

    def list(
        self,
        db: Session,
        *,
        event_id: Optional[uuid.UUID] = None,
        action: Optional[str] = None,
        limit: int = 1000,
    ) -> List[ActivityLog]:
        stmt = select(ActivityLog)
        if event_id is not None:
            stmt = stmt.where(ActivityLog.event_id == event_id)
        if action:
            stmt = stmt.where(ActivityLog.action == action)
        stmt = stmt.order_by(desc(ActivityLog.created_at)).limit(limit)
        return list(db.execute(stmt).scalars().unique().all())
