from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from guestdesk.db.base import Base
from guestdesk.db.types import UTCDateTime, utcnow


class ActivityLog(Base):
    """
    Audit trail row.
    - Append-only (never UPDATE, never DELETE)
    - user_id / event_id are plain ids, not foreign keys: they outlive the
      user or event they point at.
    - actor and event are optional: public submissions have no actor,
      settings changes have no event.
    """
    __tablename__ = "activity_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    event_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)

    action: Mapped[str] = mapped_column(String(128), nullable=False)
    details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    request_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)

    user = relationship(
        "User", primaryjoin="foreign(ActivityLog.user_id) == User.id", lazy="joined", viewonly=True
    )
    event = relationship(
        "Event", primaryjoin="foreign(ActivityLog.event_id) == Event.id", lazy="joined", viewonly=True
    )

    __table_args__ = (
        Index("ix_activity_logs_created_at", "created_at"),
        Index("ix_activity_logs_event", "event_id"),
        Index("ix_activity_logs_user", "user_id"),
    )
