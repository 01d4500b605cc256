from fastapi import APIRouter

from guestdesk.api.v1.health import router as health_router
from guestdesk.api.v1.auth import router as auth_router
from guestdesk.api.v1.admin_users import router as admin_users_router
from guestdesk.api.v1.events import router as events_router
from guestdesk.api.v1.event_lists import router as event_lists_router
from guestdesk.api.v1.catalog import list_types_router, sectors_router
from guestdesk.api.v1.guests import router as guests_router
from guestdesk.api.v1.public import router as public_router
from guestdesk.api.v1.checkin import router as checkin_router
from guestdesk.api.v1.activity import router as activity_router
from guestdesk.api.v1.settings import router as settings_router
from guestdesk.api.v1.reports import router as reports_router


v1_router = APIRouter()

# ------------------------------------------------------------------
# SYSTEM / CORE
# ------------------------------------------------------------------
v1_router.include_router(health_router, tags=["health"])
v1_router.include_router(auth_router, tags=["auth"])

# ------------------------------------------------------------------
# EVENTS / CATALOG
# ------------------------------------------------------------------
v1_router.include_router(events_router, tags=["events"])
v1_router.include_router(event_lists_router, tags=["event-lists"])
v1_router.include_router(list_types_router, tags=["list-types"])
v1_router.include_router(sectors_router, tags=["sectors"])

# ------------------------------------------------------------------
# GUESTS / DOOR
# ------------------------------------------------------------------
v1_router.include_router(guests_router, tags=["guests"])
v1_router.include_router(public_router, tags=["public"])
v1_router.include_router(checkin_router, tags=["checkin"])

# ------------------------------------------------------------------
# ADMIN
# ------------------------------------------------------------------
v1_router.include_router(admin_users_router, tags=["admin"])
v1_router.include_router(activity_router, tags=["activity"])
v1_router.include_router(settings_router, tags=["settings"])
v1_router.include_router(reports_router, tags=["reports"])
