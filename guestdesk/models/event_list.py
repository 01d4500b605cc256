# guestdesk/models/event_list.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from guestdesk.db.base import Base
from guestdesk.db.types import UTCDateTime, utcnow


class EventList(Base):
    __tablename__ = "event_lists"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    )
    list_type_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("list_types.id"), nullable=False
    )
    sector_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("sectors.id"), nullable=False
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # None = unbounded
    max_capacity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)

    event = relationship("Event", back_populates="lists")
    list_type = relationship("ListType", lazy="joined")
    sector = relationship("Sector", lazy="joined")

    __table_args__ = (
        Index("ix_event_lists_event", "event_id"),
        Index("ix_event_lists_type", "list_type_id"),
        Index("ix_event_lists_sector", "sector_id"),
    )
