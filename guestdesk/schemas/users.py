#guestdesk/schemas/users.py
from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict


class CreateUserRequest(BaseModel):
    """
    Fields are untyped at the schema level so a missing or mistyped field
    reaches the handler and is reported as {error, details} instead of a 422.
    """
    email: Any = None
    password: Any = None
    name: Any = None
    role: Any = None


class UpdateUserRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    role: Optional[str] = None
