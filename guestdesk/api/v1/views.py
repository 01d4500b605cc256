# guestdesk/api/v1/views.py
"""Response dict builders shared by several routers."""
from __future__ import annotations

from typing import Any, Dict, Optional

from guestdesk.services.event_lists_service import ListCounts, remaining_capacity
from guestdesk.services.listing import guest_event


def iso(dt):
    return dt.isoformat() if dt else None


def sid(value) -> Optional[str]:
    return str(value) if value is not None else None


def user_view(u) -> Dict[str, Any]:
    return {
        "id": str(u.id),
        "email": u.email,
        "name": u.name,
        "role": u.role,
        "createdAtIso": iso(u.created_at),
        "updatedAtIso": iso(u.updated_at),
    }


def event_view(e) -> Dict[str, Any]:
    return {
        "id": str(e.id),
        "name": e.name,
        "description": e.description,
        "date": e.date.isoformat() if e.date else None,
        "time": e.time,
        "location": e.location,
        "maxCapacity": e.max_capacity,
        "status": e.status,
        "createdBy": sid(e.created_by),
        "createdAtIso": iso(e.created_at),
        "updatedAtIso": iso(e.updated_at),
    }


def catalog_view(item) -> Dict[str, Any]:
    out = {
        "id": str(item.id),
        "name": item.name,
        "description": item.description,
        "color": item.color,
        "isActive": bool(item.is_active),
        "createdAtIso": iso(item.created_at),
    }
    if hasattr(item, "capacity"):
        out["capacity"] = item.capacity
    return out


def event_list_view(lst, counts: Optional[ListCounts] = None) -> Dict[str, Any]:
    counts = counts or ListCounts()
    return {
        "id": str(lst.id),
        "eventId": str(lst.event_id),
        "name": lst.name,
        "description": lst.description,
        "maxCapacity": lst.max_capacity,
        "isActive": bool(lst.is_active),
        "listType": catalog_view(lst.list_type) if lst.list_type else None,
        "sector": catalog_view(lst.sector) if lst.sector else None,
        "guestCount": counts.guest_count,
        "checkedInCount": counts.checked_in_count,
        "remainingCapacity": remaining_capacity(lst.max_capacity, counts.guest_count),
        "createdBy": sid(lst.created_by),
        "createdAtIso": iso(lst.created_at),
    }


def guest_view(g) -> Dict[str, Any]:
    event = guest_event(g)
    lst = g.event_list
    return {
        "id": str(g.id),
        "guestName": g.guest_name,
        "guestEmail": g.guest_email,
        "guestPhone": g.guest_phone,
        "status": g.status,
        "checkedIn": bool(g.checked_in),
        "checkedInAtIso": iso(g.checked_in_at),
        "checkedInBy": sid(g.checked_in_by),
        "eventId": sid(event.id if event is not None else g.event_id),
        "eventName": event.name if event is not None else None,
        "eventListId": sid(g.event_list_id),
        "listName": lst.name if lst is not None else None,
        "listType": lst.list_type.name if lst is not None and lst.list_type else None,
        "sector": lst.sector.name if lst is not None and lst.sector else None,
        "submittedBy": sid(g.submitted_by),
        "senderName": g.submitter.name if g.submitter else g.sender_name,
        "senderEmail": g.submitter.email if g.submitter else g.sender_email,
        "createdAtIso": iso(g.created_at),
    }


def activity_view(a) -> Dict[str, Any]:
    return {
        "id": str(a.id),
        "action": a.action,
        "details": a.details,
        "userId": sid(a.user_id),
        "userName": a.user.name if a.user else None,
        "eventId": sid(a.event_id),
        "eventName": a.event.name if a.event else None,
        "requestId": a.request_id,
        "createdAtIso": iso(a.created_at),
    }
