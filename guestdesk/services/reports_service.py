# guestdesk/services/reports_service.py
from __future__ import annotations

import uuid
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from guestdesk.models.activity_log import ActivityLog
from guestdesk.models.event import Event
from guestdesk.models.guest import Guest
from guestdesk.models.list_type import ListType
from guestdesk.models.sector import Sector
from guestdesk.models.user import User
from guestdesk.services.event_lists_service import EventListsService, remaining_capacity
from guestdesk.services.events_service import EventsService
from guestdesk.services.guests_service import GuestsService
from guestdesk.services.listing import guest_event


GUEST_FIELDS = [
    "guest_name", "event", "event_date", "list", "list_type", "sector",
    "status", "checked_in", "checked_in_at", "sender_name", "sender_email", "created_at",
]


def _iso(dt):
    return dt.isoformat() if dt else None


class ReportsService:
    def event_summary(self, db: Session, event: Event) -> Dict[str, Any]:
        guests = GuestsService().list_all(db, event_id=event.id)
        lists = EventListsService().list_for_event(db, event.id)
        counts = EventListsService().counts(db, [lst.id for lst in lists])

        checked_in = sum(1 for g in guests if g.checked_in)
        by_status: Dict[str, int] = {}
        for g in guests:
            by_status[g.status] = by_status.get(g.status, 0) + 1

        return {
            "eventId": str(event.id),
            "eventName": event.name,
            "eventDate": event.date.isoformat(),
            "status": event.status,
            "totalGuests": len(guests),
            "checkedIn": checked_in,
            "notCheckedIn": len(guests) - checked_in,
            "byStatus": by_status,
            "lists": [
                {
                    "listId": str(lst.id),
                    "name": lst.name,
                    "listType": lst.list_type.name if lst.list_type else None,
                    "sector": lst.sector.name if lst.sector else None,
                    "maxCapacity": lst.max_capacity,
                    "guestCount": counts[lst.id].guest_count,
                    "checkedInCount": counts[lst.id].checked_in_count,
                    "remainingCapacity": remaining_capacity(lst.max_capacity, counts[lst.id].guest_count),
                }
                for lst in lists
            ],
        }

    def summary(self, db: Session, *, event_id: Optional[uuid.UUID] = None) -> List[Dict[str, Any]]:
        svc = EventsService()
        events = [svc.get_or_404(db, event_id)] if event_id else svc.list(db)
        return [self.event_summary(db, e) for e in events]

    def iter_guest_rows(
        self, db: Session, *, event_id: Optional[uuid.UUID] = None
    ) -> Iterable[Dict[str, Any]]:
        for g in GuestsService().list_all(db, event_id=event_id):
            event = guest_event(g)
            lst = g.event_list
            yield {
                "guest_name": g.guest_name,
                "event": event.name if event else None,
                "event_date": event.date.isoformat() if event else None,
                "list": lst.name if lst else None,
                "list_type": lst.list_type.name if lst and lst.list_type else None,
                "sector": lst.sector.name if lst and lst.sector else None,
                "status": g.status,
                "checked_in": "yes" if g.checked_in else "no",
                "checked_in_at": _iso(g.checked_in_at),
                "sender_name": g.submitter.name if g.submitter else g.sender_name,
                "sender_email": g.submitter.email if g.submitter else g.sender_email,
                "created_at": _iso(g.created_at),
            }

    def fieldnames(self) -> List[str]:
        return GUEST_FIELDS

    def admin_stats(self, db: Session) -> Dict[str, int]:
        def count(model) -> int:
            return db.execute(select(func.count()).select_from(model)).scalar_one()

        return {
            "users": count(User),
            "events": count(Event),
            "guests": count(Guest),
            "activityLogs": count(ActivityLog),
            "listTypes": count(ListType),
            "sectors": count(Sector),
        }

    def dashboard(self, db: Session) -> Dict[str, int]:
        events = db.execute(select(Event.status)).scalars().all()
        guests = db.execute(select(Guest.checked_in)).scalars().all()
        return {
            "totalEvents": len(events),
            "activeEvents": sum(1 for s in events if s == "active"),
            "totalGuests": len(guests),
            "checkedIn": sum(1 for c in guests if c),
        }
