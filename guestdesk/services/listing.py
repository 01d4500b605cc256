"""
In-memory filtering and grouping over already-fetched collections.

Everything here runs after a full fetch; there is no query pushdown.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from guestdesk.models.enums import CheckInFilter
from guestdesk.services.names import format_name


def _lower(value: Optional[str]) -> str:
    return (value or "").lower()


def _get(obj: Any, *path: str) -> Any:
    for attr in path:
        if obj is None:
            return None
        obj = getattr(obj, attr, None)
    return obj


def guest_event(guest: Any) -> Any:
    """The guest's event, directly or through its list."""
    return _get(guest, "event") or _get(guest, "event_list", "event")


def guest_search_fields(guest: Any) -> List[str]:
    return [
        _lower(_get(guest, "guest_name")),
        _lower(_get(guest_event(guest), "name")),
        _lower(_get(guest, "event_list", "name")),
        _lower(_get(guest, "event_list", "list_type", "name")),
        _lower(_get(guest, "event_list", "sector", "name")),
    ]


def filter_guests(
    guests: Iterable[Any],
    *,
    search: Optional[str] = None,
    status: str = CheckInFilter.all.value,
    event_id: Optional[Any] = None,
    guest_status: Optional[str] = None,
) -> List[Any]:
    out = list(guests)

    if event_id is not None:
        out = [
            g for g in out
            if g.event_id == event_id or _get(g, "event_list", "event_id") == event_id
        ]

    if status == CheckInFilter.checked_in.value:
        out = [g for g in out if g.checked_in]
    elif status == CheckInFilter.pending.value:
        out = [g for g in out if not g.checked_in]

    if guest_status:
        out = [g for g in out if g.status == guest_status]

    needle = (search or "").strip().lower()
    if needle:
        out = [g for g in out if any(needle in f for f in guest_search_fields(g))]

    return out


def filter_events(
    events: Iterable[Any],
    *,
    search: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Any]:
    out = list(events)
    if status and status != "all":
        out = [e for e in out if e.status == status]

    needle = (search or "").strip().lower()
    if needle:
        out = [
            e for e in out
            if needle in _lower(e.name)
            or needle in _lower(e.location)
            or needle in _lower(e.description)
        ]
    return out


@dataclass
class SubmissionGroup:
    key: str
    event_id: Any
    event_name: Optional[str]
    event_date: Any
    sender_type: str
    sender_name: Optional[str]
    sender_email: Optional[str]
    submitted_by: Any
    created_at: Optional[datetime]
    guests: List[Any] = field(default_factory=list)

    def as_dict(self, guest_view) -> Dict[str, Any]:
        return {
            "id": self.key,
            "eventId": str(self.event_id) if self.event_id else None,
            "eventName": self.event_name,
            "eventDate": self.event_date.isoformat() if self.event_date else None,
            "senderType": self.sender_type,
            "senderName": self.sender_name,
            "senderEmail": self.sender_email,
            "submittedBy": str(self.submitted_by) if self.submitted_by else None,
            "createdAtIso": self.created_at.isoformat() if self.created_at else None,
            "guests": [guest_view(g) for g in self.guests],
        }


def sender_key(guest: Any) -> str:
    if guest.submitted_by:
        return f"user_{guest.submitted_by}"
    return f"public_{guest.sender_email}"


def group_submissions(guests: Iterable[Any]) -> List[SubmissionGroup]:
    """
    Group guests by (sender, event). Newest group first, guests alphabetical
    by display name inside a group.
    """
    groups: Dict[str, SubmissionGroup] = {}

    for g in guests:
        event = guest_event(g)
        event_id = g.event_id or _get(g, "event_list", "event_id")
        key = f"{sender_key(g)}_{event_id}"

        grp = groups.get(key)
        if grp is None:
            is_user = bool(g.submitted_by)
            grp = SubmissionGroup(
                key=key,
                event_id=event_id,
                event_name=_get(event, "name"),
                event_date=_get(event, "date"),
                sender_type="user" if is_user else "public",
                sender_name=_get(g, "submitter", "name") if is_user else g.sender_name,
                sender_email=_get(g, "submitter", "email") if is_user else g.sender_email,
                submitted_by=g.submitted_by,
                created_at=g.created_at,
            )
            groups[key] = grp
        elif g.created_at and (grp.created_at is None or g.created_at > grp.created_at):
            grp.created_at = g.created_at

        grp.guests.append(g)

    out = list(groups.values())
    out.sort(key=lambda grp: grp.created_at.timestamp() if grp.created_at else 0.0, reverse=True)
    for grp in out:
        grp.guests.sort(key=lambda g: format_name(g.guest_name).casefold())
    return out
