import pytest

from guestdesk.services.settings_service import (
    ALLOW_PUBLIC_SUBMISSIONS,
    MAX_GUESTS_PER_SUBMISSION,
    SITE_NAME,
    SiteSettingsService,
)


def test_defaults_without_rows(db):
    svc = SiteSettingsService()
    assert svc.get(db, SITE_NAME) == "Casa de Show"
    assert svc.get_bool(db, ALLOW_PUBLIC_SUBMISSIONS) is True
    assert svc.get_int(db, MAX_GUESTS_PER_SUBMISSION) == 50


def test_upsert_reports_only_changes(db, admin):
    svc = SiteSettingsService()
    changed = svc.upsert(db, values={SITE_NAME: "Casa de Show", MAX_GUESTS_PER_SUBMISSION: "20"},
                         updated_by=str(admin.id))
    assert changed == {MAX_GUESTS_PER_SUBMISSION: "20"}
    assert svc.get_int(db, MAX_GUESTS_PER_SUBMISSION) == 20

    assert svc.upsert(db, values={MAX_GUESTS_PER_SUBMISSION: "20"}, updated_by=str(admin.id)) == {}


@pytest.mark.parametrize(
    "values",
    [
        {SITE_NAME: "X"},
        {SITE_NAME: "x" * 51},
        {ALLOW_PUBLIC_SUBMISSIONS: "maybe"},
        {MAX_GUESTS_PER_SUBMISSION: "0"},
        {"theme": "dark"},
    ],
)
def test_invalid_values_are_rejected(db, values):
    with pytest.raises(ValueError):
        SiteSettingsService().upsert(db, values=values, updated_by=None)


def test_site_name_drops_angle_brackets(db):
    svc = SiteSettingsService()
    svc.upsert(db, values={SITE_NAME: "<b>Club</b>"}, updated_by=None)
    assert svc.get(db, SITE_NAME) == "bClub/b"
