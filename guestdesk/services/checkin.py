# guestdesk/services/checkin.py
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session
from starlette.requests import Request

from guestdesk.db.types import utcnow
from guestdesk.models.enums import EventStatus, GuestStatus
from guestdesk.models.guest import Guest
from guestdesk.policies.permissions import Principal
from guestdesk.services.activity_service import ActivityAction, ActivityService
from guestdesk.services.errors import Conflict, NotFound

logger = logging.getLogger(__name__)


class CheckInConflict(Conflict):
    pass


# ---------------------------
# PURE TRANSITIONS
# ---------------------------

def check_in(guest, actor_id: uuid.UUID, now: Optional[datetime] = None):
    """
    PENDING -> CHECKED_IN. Re-applying re-stamps time and actor.
    """
    guest.checked_in = True
    guest.checked_in_at = now or utcnow()
    guest.checked_in_by = actor_id
    return guest


def check_out(guest):
    """CHECKED_IN -> PENDING; clears timestamp and actor."""
    guest.checked_in = False
    guest.checked_in_at = None
    guest.checked_in_by = None
    return guest


def list_label(guest: Guest) -> str:
    if guest.event_list is not None:
        return guest.event_list.name
    return "general list"


class CheckInService:
    def _load(self, db: Session, guest_id: uuid.UUID) -> Guest:
        guest = db.get(Guest, guest_id)
        if guest is None:
            raise NotFound("Guest not found.")
        return guest

    def _guard(self, guest: Guest, expected_checked_in: Optional[bool]) -> None:
        # Without a precondition the last writer wins
        if expected_checked_in is not None and guest.checked_in != expected_checked_in:
            raise CheckInConflict("Guest check-in state changed; reload and try again.")

    def check_in(
        self,
        db: Session,
        *,
        guest_id: uuid.UUID,
        principal: Principal,
        expected_checked_in: Optional[bool] = None,
        request: Optional[Request] = None,
    ) -> Guest:
        guest = self._load(db, guest_id)
        if guest.status != GuestStatus.approved.value:
            raise CheckInConflict(f"Only approved guests can check in (status is {guest.status}).")
        event = self._event(guest)
        if event is None or event.status != EventStatus.active.value:
            raise CheckInConflict("Check-in is only open for guests of active events.")
        self._guard(guest, expected_checked_in)

        check_in(guest, uuid.UUID(principal.user_id))
        db.commit()

        ActivityService().write(
            db,
            action=ActivityAction.CHECK_IN,
            details=f'Check-in of "{guest.guest_name}" ({list_label(guest)}) by {principal.name}',
            user_id=principal.user_id,
            event_id=self._event_id(guest),
            request=request,
        )
        logger.info("guest checked in", extra={"guest_id": str(guest.id)})
        return guest

    def check_out(
        self,
        db: Session,
        *,
        guest_id: uuid.UUID,
        principal: Principal,
        expected_checked_in: Optional[bool] = None,
        request: Optional[Request] = None,
    ) -> Guest:
        guest = self._load(db, guest_id)
        self._guard(guest, expected_checked_in)

        check_out(guest)
        db.commit()

        ActivityService().write(
            db,
            action=ActivityAction.CHECK_OUT,
            details=f'Check-in of "{guest.guest_name}" ({list_label(guest)}) undone by {principal.name}',
            user_id=principal.user_id,
            event_id=self._event_id(guest),
            request=request,
        )
        logger.info("guest check-in undone", extra={"guest_id": str(guest.id)})
        return guest

    @staticmethod
    def _event(guest: Guest):
        if guest.event is not None:
            return guest.event
        if guest.event_list is not None:
            return guest.event_list.event
        return None

    @staticmethod
    def _event_id(guest: Guest) -> Optional[uuid.UUID]:
        if guest.event_id is not None:
            return guest.event_id
        if guest.event_list is not None:
            return guest.event_list.event_id
        return None
