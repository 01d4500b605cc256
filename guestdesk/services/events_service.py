# guestdesk/services/events_service.py
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import asc, func, select
from sqlalchemy.orm import Session

from guestdesk.models.event import Event
from guestdesk.models.event_list import EventList
from guestdesk.models.guest import Guest
from guestdesk.services.errors import Conflict, NotFound

MIN_EVENT_NAME_LENGTH = 3
MAX_EVENT_NAME_LENGTH = 100

# columns a PATCH may touch
EDITABLE_FIELDS = {"name", "description", "date", "time", "location", "max_capacity", "status"}


def validate_event_name(name: Optional[str]) -> str:
    value = (name or "").strip()
    if not value:
        raise ValueError("Event name is required.")
    if len(value) < MIN_EVENT_NAME_LENGTH:
        raise ValueError(f"Event name must have at least {MIN_EVENT_NAME_LENGTH} characters.")
    if len(value) > MAX_EVENT_NAME_LENGTH:
        raise ValueError(f"Event name must have at most {MAX_EVENT_NAME_LENGTH} characters.")
    return value


class EventsService:
    def create(self, db: Session, *, created_by: str, fields: Dict[str, Any]) -> Event:
        data = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        data["name"] = validate_event_name(data.get("name"))
        e = Event(created_by=uuid.UUID(created_by), **data)
        db.add(e)
        db.commit()
        return e

    def get(self, db: Session, event_id: uuid.UUID) -> Optional[Event]:
        return db.get(Event, event_id)

    def get_or_404(self, db: Session, event_id: uuid.UUID) -> Event:
        e = self.get(db, event_id)
        if e is None:
            raise NotFound("Event not found.")
        return e

    def list(self, db: Session, *, status: Optional[str] = None) -> List[Event]:
        stmt = select(Event)
        if status:
            stmt = stmt.where(Event.status == status)
        stmt = stmt.order_by(asc(Event.date), asc(Event.name))
        return list(db.execute(stmt).scalars().all())

    def patch(self, db: Session, *, event_id: uuid.UUID, fields: Dict[str, Any]) -> Event:
        e = self.get_or_404(db, event_id)
        for key, value in fields.items():
            if key not in EDITABLE_FIELDS:
                continue
            if key == "name":
                value = validate_event_name(value)
            setattr(e, key, value)
        e.updated_at = datetime.now(timezone.utc)
        db.commit()
        return e

    def delete(self, db: Session, *, event_id: uuid.UUID) -> Event:
        """Refused while the event still has active lists or any guests."""
        e = self.get_or_404(db, event_id)

        active_lists = db.execute(
            select(func.count(EventList.id)).where(
                EventList.event_id == event_id, EventList.is_active.is_(True)
            )
        ).scalar_one()
        if active_lists:
            raise Conflict(
                f'Cannot delete event "{e.name}": it has {active_lists} active list(s).'
            )

        list_ids = select(EventList.id).where(EventList.event_id == event_id)
        guests = db.execute(
            select(func.count(Guest.id)).where(
                (Guest.event_id == event_id) | (Guest.event_list_id.in_(list_ids))
            )
        ).scalar_one()
        if guests:
            raise Conflict(f'Cannot delete event "{e.name}": it has {guests} guest(s).')

        # inactive, empty lists go with the event (delete-orphan cascade)
        db.delete(e)
        db.commit()
        return e
