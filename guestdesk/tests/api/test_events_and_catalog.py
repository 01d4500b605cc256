import uuid

import pytest

from guestdesk.models.activity_log import ActivityLog
from guestdesk.models.event_list import EventList
from guestdesk.tests.conftest import make_catalog, make_event, make_guest

EVENT = {"name": "Friday Night", "date": "2026-11-20", "time": "22:00", "location": "Main Hall"}


def test_create_and_fetch_event(client, db, admin_headers):
    r = client.post("/api/v1/events", json=EVENT, headers=admin_headers)
    assert r.status_code == 200, r.text
    event_id = r.json()["id"]
    assert r.json()["status"] == "active"

    got = client.get(f"/api/v1/events/{event_id}", headers=admin_headers)
    assert got.status_code == 200
    assert got.json()["lists"] == []

    actions = [a.action for a in db.query(ActivityLog).all()]
    assert "EVENT_CREATED" in actions


@pytest.mark.parametrize("time", ["99:99", "24:00", "12:60", "7:30"])
def test_event_time_must_be_a_clock_time(client, admin_headers, time):
    r = client.post("/api/v1/events", json={**EVENT, "time": time}, headers=admin_headers)
    assert r.status_code == 422


def test_event_time_accepts_last_minute_of_day(client, admin_headers):
    r = client.post("/api/v1/events", json={**EVENT, "time": "23:59"}, headers=admin_headers)
    assert r.status_code == 200, r.text


def test_event_name_too_short(client, admin_headers):
    r = client.post("/api/v1/events", json={**EVENT, "name": "ab"}, headers=admin_headers)
    assert r.status_code == 400


def test_portaria_cannot_create_events(client, portaria_headers):
    r = client.post("/api/v1/events", json=EVENT, headers=portaria_headers)
    assert r.status_code == 403


def test_missing_event_is_404(client, user_headers):
    r = client.get("/api/v1/events/00000000-0000-0000-0000-000000000000", headers=user_headers)
    assert r.status_code == 404


def test_list_events_search_and_paginate(client, db, admin, user_headers):
    for i in range(25):
        make_event(db, name=f"Party {i:02d}", created_by=admin.id)
    make_event(db, name="Samba Sunday", status="completed", created_by=admin.id)

    r = client.get("/api/v1/events", params={"page": 2}, headers=user_headers)
    body = r.json()
    assert body["pagination"]["totalItems"] == 26
    assert body["pagination"]["startIndex"] == 21
    assert len(body["events"]) == 6

    r = client.get("/api/v1/events", params={"search": "samba"}, headers=user_headers)
    assert [e["name"] for e in r.json()["events"]] == ["Samba Sunday"]

    r = client.get("/api/v1/events", params={"status": "completed"}, headers=user_headers)
    assert r.json()["pagination"]["totalItems"] == 1


def test_patch_event(client, db, admin, admin_headers):
    e = make_event(db, created_by=admin.id)
    r = client.patch(f"/api/v1/events/{e.id}", json={"status": "completed", "location": "Rooftop"},
                     headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "completed"
    assert r.json()["location"] == "Rooftop"


def test_event_with_active_list_cannot_be_deleted(client, venue, admin_headers):
    event, _ = venue
    r = client.delete(f"/api/v1/events/{event.id}", headers=admin_headers)
    assert r.status_code == 409


def test_empty_event_can_be_deleted(client, db, admin, admin_headers):
    e = make_event(db, created_by=admin.id)
    r = client.delete(f"/api/v1/events/{e.id}", headers=admin_headers)
    assert r.status_code == 200
    assert client.get(f"/api/v1/events/{e.id}", headers=admin_headers).status_code == 404


def test_event_delete_keeps_earlier_log_rows(client, db, admin, admin_headers):
    r = client.post("/api/v1/events", json=EVENT, headers=admin_headers)
    event_id = uuid.UUID(r.json()["id"])

    assert client.delete(f"/api/v1/events/{event_id}", headers=admin_headers).status_code == 200
    db.expire_all()

    logs = db.query(ActivityLog).filter(ActivityLog.event_id == event_id).all()
    assert sorted(log.action for log in logs) == ["EVENT_CREATED", "EVENT_DELETED"]
    assert all(log.user_id == admin.id for log in logs)


def test_list_type_lifecycle(client, admin_headers):
    r = client.post("/api/v1/list-types", json={"name": "VIP", "color": "#8b5cf6"}, headers=admin_headers)
    assert r.status_code == 200, r.text
    item = r.json()
    assert item["color"] == "#8B5CF6"
    assert item["isActive"] is True

    dup = client.post("/api/v1/list-types", json={"name": "VIP"}, headers=admin_headers)
    assert dup.status_code == 409

    toggled = client.post(f"/api/v1/list-types/{item['id']}/toggle", headers=admin_headers)
    assert toggled.json()["isActive"] is False

    active = client.get("/api/v1/list-types", params={"only_active": True}, headers=admin_headers)
    assert active.json()["count"] == 0

    assert client.delete(f"/api/v1/list-types/{item['id']}", headers=admin_headers).status_code == 200


def test_bad_color(client, admin_headers):
    r = client.post("/api/v1/sectors", json={"name": "Pista", "color": "green"}, headers=admin_headers)
    assert r.status_code == 400


def test_sector_in_use_cannot_be_deleted(client, venue, admin_headers):
    _, lst = venue
    r = client.delete(f"/api/v1/sectors/{lst.sector_id}", headers=admin_headers)
    assert r.status_code == 409


def test_event_list_crud_and_counts(client, db, admin, portaria_headers):
    event = make_event(db, created_by=admin.id)
    lt, sec = make_catalog(db)

    r = client.post(
        f"/api/v1/events/{event.id}/lists",
        json={"name": "Amigos", "list_type_id": str(lt.id), "sector_id": str(sec.id), "max_capacity": 10},
        headers=portaria_headers,
    )
    assert r.status_code == 200, r.text
    list_id = r.json()["id"]
    assert r.json()["remainingCapacity"] == 10

    make_guest(db, event=event, event_list=db.get(EventList, uuid.UUID(list_id)))

    got = client.get(f"/api/v1/events/{event.id}/lists/{list_id}", headers=portaria_headers)
    assert got.json()["guestCount"] == 1
    assert got.json()["remainingCapacity"] == 9

    shrink = client.patch(
        f"/api/v1/events/{event.id}/lists/{list_id}", json={"max_capacity": 1}, headers=portaria_headers
    )
    assert shrink.status_code == 200

    too_small = client.patch(
        f"/api/v1/events/{event.id}/lists/{list_id}", json={"max_capacity": 0}, headers=portaria_headers
    )
    assert too_small.status_code == 422

    busy = client.delete(f"/api/v1/events/{event.id}/lists/{list_id}", headers=portaria_headers)
    assert busy.status_code == 409


def test_list_with_unknown_type_is_404(client, db, admin, admin_headers):
    event = make_event(db, created_by=admin.id)
    _, sec = make_catalog(db)
    r = client.post(
        f"/api/v1/events/{event.id}/lists",
        json={"name": "Amigos", "list_type_id": "00000000-0000-0000-0000-000000000000", "sector_id": str(sec.id)},
        headers=admin_headers,
    )
    assert r.status_code == 404
