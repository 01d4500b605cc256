# guestdesk/models/guest.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from guestdesk.db.base import Base
from guestdesk.db.types import UTCDateTime, utcnow


class Guest(Base):
    """
    One name on a guest list.

    Check-in columns move together: checked_in_at and checked_in_by are set
    exactly when checked_in is true.
    """
    __tablename__ = "guest_lists"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    event_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=True
    )
    event_list_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("event_lists.id", ondelete="CASCADE"), nullable=True
    )

    guest_name: Mapped[str] = mapped_column(String(100), nullable=False)
    guest_email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    guest_phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    # Sender: authenticated user, or name/email pair for public submissions
    submitted_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    sender_name: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    sender_email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)

    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")

    checked_in: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    checked_in_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    checked_in_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)

    event = relationship("Event", foreign_keys=[event_id], lazy="joined")
    event_list = relationship("EventList", foreign_keys=[event_list_id], lazy="joined")
    submitter = relationship("User", foreign_keys=[submitted_by], lazy="joined")

    __table_args__ = (
        Index("ix_guest_lists_event", "event_id"),
        Index("ix_guest_lists_event_list", "event_list_id"),
        Index("ix_guest_lists_submitted_by", "submitted_by"),
    )
