from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ListTypeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    color: Optional[str] = None
    is_active: Optional[bool] = None


class SectorRequest(ListTypeRequest):
    capacity: Optional[int] = Field(default=None, gt=0)
