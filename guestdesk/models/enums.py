#guestdesk/models/enums.py
from __future__ import annotations
from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    PORTARIA = "portaria"
    USER = "user"


class EventStatus(str, Enum):
    draft = "draft"
    active = "active"
    inactive = "inactive"
    completed = "completed"
    cancelled = "cancelled"


class GuestStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class CheckInFilter(str, Enum):
    all = "all"
    checked_in = "checked-in"
    pending = "pending"
