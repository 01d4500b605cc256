import datetime as dt
import uuid
from types import SimpleNamespace

from guestdesk.services.listing import filter_events, filter_guests, group_submissions

T0 = dt.datetime(2026, 11, 1, 20, 0, tzinfo=dt.timezone.utc)

EVENT = SimpleNamespace(id=uuid.uuid4(), name="Friday Night", date=dt.date(2026, 11, 20))
OTHER_EVENT = SimpleNamespace(id=uuid.uuid4(), name="Samba Sunday", date=dt.date(2026, 11, 22))
VIP = SimpleNamespace(
    id=uuid.uuid4(),
    event_id=EVENT.id,
    event=EVENT,
    name="Lista Amigos",
    list_type=SimpleNamespace(name="VIP"),
    sector=SimpleNamespace(name="Camarote"),
)


def guest(name, *, event=None, event_list=None, checked_in=False, submitted_by=None,
          sender_email=None, minutes=0, status="approved"):
    return SimpleNamespace(
        guest_name=name,
        event=event,
        event_id=event.id if event else None,
        event_list=event_list,
        checked_in=checked_in,
        status=status,
        submitted_by=submitted_by,
        submitter=None,
        sender_name="Carla" if sender_email else None,
        sender_email=sender_email,
        created_at=T0 + dt.timedelta(minutes=minutes),
    )


def test_search_covers_list_type_and_sector():
    guests = [guest("Ana", event_list=VIP), guest("Bia", event=OTHER_EVENT)]
    assert [g.guest_name for g in filter_guests(guests, search="camarote")] == ["Ana"]
    assert [g.guest_name for g in filter_guests(guests, search="SAMBA")] == ["Bia"]


def test_check_in_status_filter():
    guests = [guest("Ana", event=EVENT, checked_in=True), guest("Bia", event=EVENT)]
    assert [g.guest_name for g in filter_guests(guests, status="checked-in")] == ["Ana"]
    assert [g.guest_name for g in filter_guests(guests, status="pending")] == ["Bia"]
    assert len(filter_guests(guests, status="all")) == 2


def test_event_filter_follows_list():
    guests = [guest("Ana", event_list=VIP), guest("Bia", event=OTHER_EVENT)]
    assert [g.guest_name for g in filter_guests(guests, event_id=EVENT.id)] == ["Ana"]


def test_filter_events_by_status_and_search():
    events = [
        SimpleNamespace(name="Friday Night", location="Main Hall", description=None, status="active"),
        SimpleNamespace(name="Old Party", location=None, description="closed", status="completed"),
    ]
    assert [e.name for e in filter_events(events, status="active")] == ["Friday Night"]
    assert [e.name for e in filter_events(events, search="hall")] == ["Friday Night"]
    assert len(filter_events(events, status="all")) == 2


def test_groups_by_sender_and_event():
    user_id = uuid.uuid4()
    guests = [
        guest("zeca", event=EVENT, submitted_by=user_id, minutes=0),
        guest("ANA", event=EVENT, submitted_by=user_id, minutes=1),
        guest("Bia", event=EVENT, sender_email="carla@example.com", minutes=5),
        guest("Caio", event=OTHER_EVENT, submitted_by=user_id, minutes=2),
    ]
    groups = group_submissions(guests)

    assert len(groups) == 3
    # newest group first
    assert groups[0].sender_type == "public"
    assert groups[0].key == f"public_carla@example.com_{EVENT.id}"
    assert groups[1].event_id == OTHER_EVENT.id

    mine = groups[2]
    assert mine.key == f"user_{user_id}_{EVENT.id}"
    assert [g.guest_name for g in mine.guests] == ["ANA", "zeca"]
    assert mine.created_at == T0 + dt.timedelta(minutes=1)
