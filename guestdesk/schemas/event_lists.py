from __future__ import annotations

import uuid
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class EventListCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., max_length=100)
    list_type_id: uuid.UUID
    sector_id: uuid.UUID
    description: Optional[str] = None
    max_capacity: Optional[int] = Field(default=None, gt=0)
    is_active: bool = True


class EventListPatchRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, max_length=100)
    list_type_id: Optional[uuid.UUID] = None
    sector_id: Optional[uuid.UUID] = None
    description: Optional[str] = None
    max_capacity: Optional[int] = Field(default=None, gt=0)
    is_active: Optional[bool] = None
