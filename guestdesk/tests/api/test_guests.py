from guestdesk.models.activity_log import ActivityLog
from guestdesk.models.guest import Guest
from guestdesk.services.settings_service import AUTO_APPROVE_PUBLIC, ALLOW_PUBLIC_SUBMISSIONS, SiteSettingsService
from guestdesk.tests.conftest import make_guest, make_user, headers_for


def _submit(client, event, lst, names, headers):
    return client.post(
        f"/api/v1/events/{event.id}/lists/{lst.id}/guests",
        json={"names": names},
        headers=headers,
    )


def test_internal_submission_formats_and_approves(client, db, venue, user_headers):
    event, lst = venue
    r = _submit(client, event, lst, "joão silva\n\nMARIA DE SOUZA\n", user_headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["count"] == 2
    assert sorted(g["guestName"] for g in body["guests"]) == ["João Silva", "Maria de Souza"]
    assert all(g["status"] == "approved" for g in body["guests"])

    log = db.query(ActivityLog).filter(ActivityLog.action == "GUESTS_SUBMITTED").one()
    assert log.event_id == event.id


def test_empty_submission(client, venue, user_headers):
    event, lst = venue
    r = _submit(client, event, lst, "\n  \n", user_headers)
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "EMPTY_SUBMISSION"


def test_too_many_names_internal(client, venue, user_headers):
    event, lst = venue
    r = _submit(client, event, lst, "\n".join(f"Guest {i}" for i in range(51)), user_headers)
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "TOO_MANY_NAMES"


def test_capacity_exceeded(client, db, venue, user_headers):
    event, lst = venue
    lst.max_capacity = 50
    db.commit()
    for i in range(48):
        make_guest(db, event=event, event_list=lst, name=f"Guest {i}")

    r = _submit(client, event, lst, "Ana\nBia\nCaio", user_headers)
    assert r.status_code == 409
    detail = r.json()["detail"]
    assert detail["code"] == "CAPACITY_EXCEEDED"
    assert detail["overflow"] == 1
    assert db.query(Guest).count() == 48

    ok = _submit(client, event, lst, "Ana\nBia", user_headers)
    assert ok.status_code == 200
    assert db.query(Guest).count() == 50


def test_basic_user_cannot_submit_into_inactive_list(client, db, venue, user_headers, portaria_headers):
    event, lst = venue
    lst.is_active = False
    db.commit()

    assert _submit(client, event, lst, "Ana", user_headers).status_code == 403
    # staff who manage lists can still add names
    assert _submit(client, event, lst, "Ana", portaria_headers).status_code == 200


def test_public_submission_respects_auto_approve(client, db, venue):
    event, lst = venue
    SiteSettingsService().upsert(db, values={AUTO_APPROVE_PUBLIC: "false"}, updated_by=None)

    r = client.post(
        f"/api/v1/public/events/{event.id}/guests",
        json={"names": "ana souza", "sender_name": "Carla", "sender_email": "Carla@Example.com",
              "event_list_id": str(lst.id)},
    )
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "pending"

    g = db.query(Guest).one()
    assert g.submitted_by is None
    assert g.sender_email == "carla@example.com"
    assert g.event_list_id == lst.id


def test_public_submission_without_list(client, db, venue):
    event, _ = venue
    r = client.post(
        f"/api/v1/public/events/{event.id}/guests",
        json={"names": "Ana\nBia", "sender_name": "Carla", "sender_email": "carla@example.com"},
    )
    assert r.status_code == 200
    assert r.json()["status"] == "approved"
    assert r.json()["names"] == ["Ana", "Bia"]


def test_public_submission_needs_valid_email(client, venue):
    event, _ = venue
    r = client.post(
        f"/api/v1/public/events/{event.id}/guests",
        json={"names": "Ana", "sender_name": "Carla", "sender_email": "carla"},
    )
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "INVALID_SENDER"


def test_public_submissions_closed(client, db, venue):
    event, _ = venue
    SiteSettingsService().upsert(db, values={ALLOW_PUBLIC_SUBMISSIONS: "false"}, updated_by=None)
    r = client.post(
        f"/api/v1/public/events/{event.id}/guests",
        json={"names": "Ana", "sender_name": "Carla", "sender_email": "carla@example.com"},
    )
    assert r.status_code == 403
    assert r.json()["detail"]["code"] == "SUBMISSIONS_CLOSED"


def test_public_event_page(client, venue):
    event, lst = venue
    r = client.get(f"/api/v1/public/events/{event.id}")
    assert r.status_code == 200
    body = r.json()
    assert [x["id"] for x in body["lists"]] == [str(lst.id)]
    assert body["maxGuestsPerSubmission"] == 50


def test_list_guests_filters(client, db, venue, portaria_headers):
    event, lst = venue
    make_guest(db, event=event, event_list=lst, name="Ana Souza", checked_in=False)
    make_guest(db, event=event, event_list=lst, name="Bia Lima", status="pending")

    r = client.get("/api/v1/guests", params={"search": "souza"}, headers=portaria_headers)
    assert [g["guestName"] for g in r.json()["guests"]] == ["Ana Souza"]

    r = client.get("/api/v1/guests", params={"guest_status": "pending"}, headers=portaria_headers)
    assert [g["guestName"] for g in r.json()["guests"]] == ["Bia Lima"]

    r = client.get("/api/v1/guests", params={"search": "vip pista"}, headers=portaria_headers)
    assert r.json()["pagination"]["totalItems"] == 2


def test_basic_user_cannot_list_all_guests(client, user_headers):
    assert client.get("/api/v1/guests", headers=user_headers).status_code == 403


def test_groups_show_only_own_submissions_to_submitters(client, db, venue, basic_user, user_headers):
    event, lst = venue
    other = make_user(db, "user")
    _submit(client, event, lst, "Ana\nBia", user_headers)
    _submit(client, event, lst, "Caio", headers_for(other))

    r = client.get("/api/v1/guests/groups", headers=user_headers)
    groups = r.json()["groups"]
    assert len(groups) == 1
    assert groups[0]["submittedBy"] == str(basic_user.id)
    assert [g["guestName"] for g in groups[0]["guests"]] == ["Ana", "Bia"]


def test_groups_for_admin(client, db, venue, user_headers, admin_headers):
    event, lst = venue
    _submit(client, event, lst, "Ana", user_headers)
    client.post(
        f"/api/v1/public/events/{event.id}/guests",
        json={"names": "Zeca", "sender_name": "Carla", "sender_email": "carla@example.com"},
    )
    groups = client.get("/api/v1/guests/groups", headers=admin_headers).json()["groups"]
    assert [g["senderType"] for g in groups] == ["public", "user"]


def test_moderation(client, db, venue, admin_headers, portaria_headers):
    event, lst = venue
    g = make_guest(db, event=event, event_list=lst, status="pending")

    assert client.patch(f"/api/v1/guests/{g.id}/status", json={"status": "approved"},
                        headers=portaria_headers).status_code == 403

    r = client.patch(f"/api/v1/guests/{g.id}/status", json={"status": "rejected"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "rejected"

    bad = client.patch(f"/api/v1/guests/{g.id}/status", json={"status": "maybe"}, headers=admin_headers)
    assert bad.status_code == 422


def test_delete_guest(client, db, venue, admin_headers):
    event, lst = venue
    g = make_guest(db, event=event, event_list=lst)
    assert client.delete(f"/api/v1/guests/{g.id}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/v1/guests/{g.id}", headers=admin_headers).status_code == 404
