#guestdesk/schemas/guests.py
from __future__ import annotations

import uuid
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from guestdesk.models.enums import GuestStatus


class GuestSubmissionRequest(BaseModel):
    """Names arrive as one block of text, one name per line."""
    model_config = ConfigDict(extra="forbid")

    names: str = Field(..., description="newline-separated guest names")


class PublicGuestSubmissionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    names: str = Field(..., description="newline-separated guest names")
    sender_name: str
    sender_email: str
    event_list_id: Optional[uuid.UUID] = None


class GuestStatusRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: GuestStatus


class CheckInRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # optimistic precondition; omit for last-writer-wins
    expected_checked_in: Optional[bool] = None
