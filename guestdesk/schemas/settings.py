from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, ConfigDict


class SiteSettingsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    site_name: Optional[str] = None
    site_description: Optional[str] = None
    allow_public_submissions: Optional[bool] = None
    auto_approve_public_submissions: Optional[bool] = None
    max_guests_per_submission: Optional[int] = None

    def as_values(self) -> dict:
        out = {}
        for key, value in self.model_dump(exclude_none=True).items():
            if isinstance(value, bool):
                out[key] = "true" if value else "false"
            else:
                out[key] = str(value)
        return out
