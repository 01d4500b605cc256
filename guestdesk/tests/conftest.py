import os

# settings are read at import time; these must be set first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"

import datetime as dt  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

# FORCE model registration
import guestdesk.models  # noqa: E402,F401

from guestdesk.db.base import Base  # noqa: E402
from guestdesk.db.session import get_db  # noqa: E402
from guestdesk.main import app  # noqa: E402
from guestdesk.models.event import Event  # noqa: E402
from guestdesk.models.event_list import EventList  # noqa: E402
from guestdesk.models.guest import Guest  # noqa: E402
from guestdesk.models.list_type import ListType  # noqa: E402
from guestdesk.models.sector import Sector  # noqa: E402
from guestdesk.services.auth_service import issue_token, principal_of  # noqa: E402
from guestdesk.services.users_service import NewUser, UsersService  # noqa: E402

PASSWORD = "secret123"


@pytest.fixture(scope="function")
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_user(db, role="user", email=None, name=None):
    email = email or f"{role}-{os.urandom(3).hex()}@example.com"
    return UsersService().create(
        db, NewUser(email=email, password=PASSWORD, name=name or f"Test {role}", role=role)
    )


def headers_for(user) -> dict:
    return {"Authorization": f"Bearer {issue_token(principal_of(user))}"}


@pytest.fixture
def admin(db):
    return make_user(db, "admin", email="admin@example.com", name="Admin")


@pytest.fixture
def portaria(db):
    return make_user(db, "portaria", email="door@example.com", name="Door Staff")


@pytest.fixture
def basic_user(db):
    return make_user(db, "user", email="promoter@example.com", name="Promoter")


@pytest.fixture
def admin_headers(admin):
    return headers_for(admin)


@pytest.fixture
def portaria_headers(portaria):
    return headers_for(portaria)


@pytest.fixture
def user_headers(basic_user):
    return headers_for(basic_user)


def make_event(db, name="Friday Night", status="active", created_by=None, date=None):
    e = Event(
        name=name,
        date=date or dt.date(2026, 11, 20),
        time="22:00",
        location="Main Hall",
        status=status,
        created_by=created_by,
    )
    db.add(e)
    db.commit()
    return e


def make_catalog(db, type_name="VIP", sector_name="Pista"):
    lt = ListType(name=type_name, color="#8B5CF6")
    sec = Sector(name=sector_name, color="#10B981")
    db.add_all([lt, sec])
    db.commit()
    return lt, sec


def make_list(db, event, list_type, sector, name="VIP Pista", max_capacity=None, created_by=None):
    lst = EventList(
        event_id=event.id,
        list_type_id=list_type.id,
        sector_id=sector.id,
        name=name,
        max_capacity=max_capacity,
        created_by=created_by,
    )
    db.add(lst)
    db.commit()
    return lst


def make_guest(db, event=None, event_list=None, name="Ana Souza", status="approved", **kw):
    g = Guest(
        event_id=event.id if event is not None else None,
        event_list_id=event_list.id if event_list is not None else None,
        guest_name=name,
        status=status,
        **kw,
    )
    db.add(g)
    db.commit()
    return g


@pytest.fixture
def venue(db, admin):
    """An active event with one VIP list, ready for submissions."""
    event = make_event(db, created_by=admin.id)
    lt, sec = make_catalog(db)
    lst = make_list(db, event, lt, sec, created_by=admin.id)
    return event, lst
