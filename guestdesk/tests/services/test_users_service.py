import pytest

from guestdesk.models.activity_log import ActivityLog
from guestdesk.models.event import Event
from guestdesk.models.guest import Guest
from guestdesk.services.activity_service import ActivityService
from guestdesk.services.errors import Conflict, NotFound
from guestdesk.services.users_service import (
    NewUser,
    UsersService,
    UserValidationError,
    validate_new_user,
)
from guestdesk.tests.conftest import make_catalog, make_event, make_guest, make_list, make_user


@pytest.mark.parametrize(
    "req, message",
    [
        (NewUser(email=None, password="secret1", name="Ana", role="user"), "All fields are required."),
        (NewUser(email="nope", password="secret1", name="Ana", role="user"), "Invalid email."),
        (NewUser(email="a@b.co", password="12345", name="Ana", role="user"),
         "Password must have at least 6 characters."),
        (NewUser(email="a@b.co", password="secret1", name="A", role="user"),
         "Name must have at least 2 characters."),
        (NewUser(email="a@b.co", password="secret1", name="Ana", role="owner"), "Invalid role."),
        (NewUser(email="a@b.co", password="secret1", name=["Ana"], role="user"), "Invalid field type."),
        (NewUser(email="a@b.co", password=123456, name="Ana", role="user"), "Invalid field type."),
    ],
)
def test_validation_messages(req, message):
    with pytest.raises(UserValidationError) as exc:
        validate_new_user(req)
    assert exc.value.message == message


def test_email_is_normalized():
    clean = validate_new_user(NewUser(email=" Ana@Example.COM ", password="secret1", name=" Ana ", role="user"))
    assert clean.email == "ana@example.com"
    assert clean.name == "Ana"


def test_duplicate_email_conflicts(db):
    make_user(db, "user", email="dup@example.com")
    with pytest.raises(Conflict):
        UsersService().create(
            db, NewUser(email="DUP@example.com", password="secret1", name="Other", role="user")
        )


def test_admin_cannot_demote_self(db, admin):
    with pytest.raises(Conflict):
        UsersService().update(db, user_id=admin.id, acting_user_id=str(admin.id), name=None, role="user")


def test_admin_cannot_delete_self(db, admin):
    with pytest.raises(Conflict):
        UsersService().delete(db, user_id=admin.id, acting_user_id=str(admin.id))


def test_delete_missing_user(db, admin):
    other = make_user(db, "user")
    svc = UsersService()
    svc.delete(db, user_id=other.id, acting_user_id=str(admin.id))
    with pytest.raises(NotFound):
        svc.delete(db, user_id=other.id, acting_user_id=str(admin.id))


def test_delete_with_transfer_keeps_data(db, admin):
    promoter = make_user(db, "portaria")
    event = make_event(db, created_by=promoter.id)
    lt, sec = make_catalog(db)
    lst = make_list(db, event, lt, sec, created_by=promoter.id)
    g = make_guest(db, event=event, event_list=lst, submitted_by=promoter.id)

    UsersService().delete(db, user_id=promoter.id, acting_user_id=str(admin.id), transfer_to=admin.id)
    db.expire_all()

    assert db.get(Event, event.id).created_by == admin.id
    assert db.get(Guest, g.id).submitted_by == admin.id


def test_delete_without_transfer_removes_owned_data_but_keeps_logs(db, admin):
    promoter = make_user(db, "portaria")
    event = make_event(db, created_by=promoter.id)
    lt, sec = make_catalog(db)
    lst = make_list(db, event, lt, sec, created_by=promoter.id)
    make_guest(db, event=event, event_list=lst, submitted_by=promoter.id)
    promoter_id = promoter.id
    ActivityService().write(db, action="EVENT_CREATED", user_id=promoter.id, details="x")

    UsersService().delete(db, user_id=promoter.id, acting_user_id=str(admin.id))
    db.expire_all()

    assert db.get(Event, event.id) is None
    assert db.query(Guest).count() == 0
    logs = db.query(ActivityLog).all()
    assert len(logs) == 1
    assert logs[0].user_id == promoter_id
    assert logs[0].action == "EVENT_CREATED"


def test_transfer_to_self_is_refused(db, admin):
    other = make_user(db, "user")
    with pytest.raises(Conflict):
        UsersService().delete(db, user_id=other.id, acting_user_id=str(admin.id), transfer_to=other.id)
