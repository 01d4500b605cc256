# guestdesk/services/submission.py
from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.requests import Request

from guestdesk.db.types import utcnow
from guestdesk.models.enums import EventStatus, GuestStatus
from guestdesk.models.event import Event
from guestdesk.models.event_list import EventList
from guestdesk.models.guest import Guest
from guestdesk.services.activity_service import ActivityAction, ActivityService
from guestdesk.services.errors import NotFound
from guestdesk.services.names import format_name

logger = logging.getLogger(__name__)

EMPTY_SUBMISSION = "EMPTY_SUBMISSION"
TOO_MANY_NAMES = "TOO_MANY_NAMES"
NAME_TOO_LONG = "NAME_TOO_LONG"
CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
SUBMISSIONS_CLOSED = "SUBMISSIONS_CLOSED"
INVALID_SENDER = "INVALID_SENDER"

DEFAULT_MAX_NAME_LENGTH = 100

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class SubmissionError(ValueError):
    def __init__(self, code: str, message: str, **context: Any):
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = context

    def as_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, **self.context}


@dataclass(frozen=True)
class Sender:
    """Who is submitting: an account, or a name/email pair from the public form."""

    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None

    def label(self) -> str:
        if self.email:
            return f"{self.name or 'unknown'} ({self.email})"
        return self.name or "unknown"


# ---------------------------
# PURE RULES
# ---------------------------

def parse_names(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [line.strip() for line in _LINE_BREAK.split(text) if line.strip()]


def validate_submission(
    text: Optional[str],
    *,
    max_names: int,
    max_name_length: int = DEFAULT_MAX_NAME_LENGTH,
) -> List[str]:
    """
    Returns the candidate names, or raises SubmissionError.
    Checks run in order: empty, too many, too long.
    """
    names = parse_names(text)

    if not names:
        raise SubmissionError(EMPTY_SUBMISSION, "Add at least one name.")

    if len(names) > max_names:
        raise SubmissionError(
            TOO_MANY_NAMES,
            f"At most {max_names} names per submission ({len(names)} sent).",
            max_names=max_names,
            count=len(names),
        )

    too_long = [n for n in names if len(n) > max_name_length]
    if too_long:
        raise SubmissionError(
            NAME_TOO_LONG,
            f"Some names are too long (maximum {max_name_length} characters).",
            max_name_length=max_name_length,
            names=too_long,
        )

    return names


def check_capacity(current: int, incoming: int, max_capacity: Optional[int]) -> None:
    if max_capacity is None:
        return
    total_after = current + incoming
    if total_after > max_capacity:
        overflow = total_after - max_capacity
        raise SubmissionError(
            CAPACITY_EXCEEDED,
            f"List holds {max_capacity} people and already has {current}; "
            f"adding {incoming} would exceed it by {overflow}.",
            max_capacity=max_capacity,
            current=current,
            incoming=incoming,
            overflow=overflow,
        )


def build_guest_rows(
    names: List[str],
    *,
    sender: Sender,
    event_id: Optional[uuid.UUID],
    event_list_id: Optional[uuid.UUID],
    status: str,
    submitted_at: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    ts = submitted_at or utcnow()
    return [
        {
            "event_id": event_id,
            "event_list_id": event_list_id,
            "guest_name": format_name(name),
            "submitted_by": uuid.UUID(sender.user_id) if sender.user_id else None,
            "sender_name": sender.name,
            "sender_email": sender.email,
            "status": status,
            "checked_in": False,
            "checked_in_at": None,
            "checked_in_by": None,
            "created_at": ts,
        }
        for name in names
    ]


def validate_sender(sender: Sender) -> None:
    if not sender.is_anonymous:
        return
    if not (sender.name or "").strip():
        raise SubmissionError(INVALID_SENDER, "Sender name is required.")
    if not sender.email or not EMAIL_RE.match(sender.email):
        raise SubmissionError(INVALID_SENDER, "A valid sender email is required.")


# ---------------------------
# PERSISTENCE
# ---------------------------

@dataclass(frozen=True)
class SubmissionResult:
    event_id: uuid.UUID
    event_list_id: Optional[uuid.UUID]
    guests: List[Guest]

    @property
    def count(self) -> int:
        return len(self.guests)


class GuestSubmissionService:
    def count_list_guests(self, db: Session, event_list_id: uuid.UUID) -> int:
        return db.execute(
            select(func.count(Guest.id)).where(Guest.event_list_id == event_list_id)
        ).scalar_one()

    def _load_target(
        self,
        db: Session,
        *,
        event_id: uuid.UUID,
        event_list_id: Optional[uuid.UUID],
        require_open: bool,
    ) -> tuple[Event, Optional[EventList]]:
        event = db.get(Event, event_id)
        if event is None:
            raise NotFound("Event not found.")

        if require_open and event.status != EventStatus.active.value:
            raise SubmissionError(SUBMISSIONS_CLOSED, "Event is not accepting names.")

        if event_list_id is None:
            return event, None

        event_list = db.get(EventList, event_list_id)
        if event_list is None or event_list.event_id != event.id:
            raise NotFound("Event list not found.")

        if require_open:
            usable = (
                event_list.is_active
                and event_list.list_type is not None
                and event_list.list_type.is_active
                and event_list.sector is not None
                and event_list.sector.is_active
            )
            if not usable:
                raise SubmissionError(SUBMISSIONS_CLOSED, "List is not accepting names.")

        return event, event_list

    def submit(
        self,
        db: Session,
        *,
        text: str,
        sender: Sender,
        event_id: uuid.UUID,
        event_list_id: Optional[uuid.UUID],
        max_names: int,
        max_name_length: int = DEFAULT_MAX_NAME_LENGTH,
        status: str = GuestStatus.approved.value,
        require_open: bool = False,
        request: Optional[Request] = None,
    ) -> SubmissionResult:
        """
        Validate, guard capacity, then insert every name in one commit.
        Any failure before the commit leaves the store untouched.
        """
        validate_sender(sender)
        names = validate_submission(text, max_names=max_names, max_name_length=max_name_length)

        event, event_list = self._load_target(
            db, event_id=event_id, event_list_id=event_list_id, require_open=require_open
        )

        if event_list is not None:
            current = self.count_list_guests(db, event_list.id)
            check_capacity(current, len(names), event_list.max_capacity)

        rows = build_guest_rows(
            names,
            sender=sender,
            event_id=event.id,
            event_list_id=event_list.id if event_list else None,
            status=status,
        )
        guests = [Guest(**row) for row in rows]

        try:
            db.add_all(guests)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("guest bulk insert failed", extra={"event_id": str(event.id)})
            raise

        target = f'"{event_list.name}" in event "{event.name}"' if event_list else f'event "{event.name}"'
        action = (
            ActivityAction.PUBLIC_GUESTS_SUBMITTED if sender.is_anonymous else ActivityAction.GUESTS_SUBMITTED
        )
        ActivityService().write(
            db,
            action=action,
            details=f"{len(guests)} names sent to {target} by {sender.label()}",
            user_id=sender.user_id,
            event_id=event.id,
            request=request,
        )

        return SubmissionResult(
            event_id=event.id,
            event_list_id=event_list.id if event_list else None,
            guests=guests,
        )
