from guestdesk.models.user import User
from guestdesk.models.event import Event
from guestdesk.models.list_type import ListType
from guestdesk.models.sector import Sector
from guestdesk.models.event_list import EventList
from guestdesk.models.guest import Guest
from guestdesk.models.activity_log import ActivityLog
from guestdesk.models.site_setting import SiteSetting

__all__ = [
    "User",
    "Event",
    "ListType",
    "Sector",
    "EventList",
    "Guest",
    "ActivityLog",
    "SiteSetting",
]
