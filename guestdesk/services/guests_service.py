from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import asc, or_, select
from sqlalchemy.orm import Session

from guestdesk.models.enums import EventStatus, GuestStatus
from guestdesk.models.event import Event
from guestdesk.models.event_list import EventList
from guestdesk.models.guest import Guest
from guestdesk.services.errors import Conflict, NotFound

VALID_STATUSES = {s.value for s in GuestStatus}


class GuestsService:
    def list_all(self, db: Session, *, event_id: Optional[uuid.UUID] = None) -> List[Guest]:
        stmt = select(Guest)
        if event_id is not None:
            list_ids = select(EventList.id).where(EventList.event_id == event_id)
            stmt = stmt.where(or_(Guest.event_id == event_id, Guest.event_list_id.in_(list_ids)))
        stmt = stmt.order_by(asc(Guest.guest_name))
        return list(db.execute(stmt).scalars().unique().all())

    def list_for_list(self, db: Session, event_list_id: uuid.UUID) -> List[Guest]:
        stmt = select(Guest).where(Guest.event_list_id == event_list_id).order_by(asc(Guest.guest_name))
        return list(db.execute(stmt).scalars().unique().all())

    def list_for_door(self, db: Session) -> List[Guest]:
        """Approved guests of active events, as the check-in screen shows them."""
        active = select(Event.id).where(Event.status == EventStatus.active.value)
        active_lists = select(EventList.id).where(EventList.event_id.in_(active))
        stmt = (
            select(Guest)
            .where(
                Guest.status == GuestStatus.approved.value,
                or_(Guest.event_id.in_(active), Guest.event_list_id.in_(active_lists)),
            )
            .order_by(asc(Guest.guest_name))
        )
        return list(db.execute(stmt).scalars().unique().all())

    def get_or_404(self, db: Session, guest_id: uuid.UUID) -> Guest:
        g = db.get(Guest, guest_id)
        if g is None:
            raise NotFound("Guest not found.")
        return g

    def set_status(self, db: Session, *, guest_id: uuid.UUID, status: str) -> Guest:
        if status not in VALID_STATUSES:
            raise ValueError(f"Invalid status {status}.")
        g = self.get_or_404(db, guest_id)
        if g.checked_in and status != GuestStatus.approved.value:
            raise Conflict("Undo the check-in before changing this guest's status.")
        g.status = status
        db.commit()
        return g

    def delete(self, db: Session, *, guest_id: uuid.UUID) -> Guest:
        g = self.get_or_404(db, guest_id)
        db.delete(g)
        db.commit()
        return g
