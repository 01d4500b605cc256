#guestdesk/schemas/events.py
from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from guestdesk.models.enums import EventStatus


class EventCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    description: Optional[str] = None
    date: dt.date
    time: Optional[str] = Field(default=None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    location: Optional[str] = None
    max_capacity: Optional[int] = Field(default=None, gt=0)
    status: EventStatus = EventStatus.active


class EventPatchRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = Field(default=None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    location: Optional[str] = None
    max_capacity: Optional[int] = Field(default=None, gt=0)
    status: Optional[EventStatus] = None
