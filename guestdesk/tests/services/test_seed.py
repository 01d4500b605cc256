from guestdesk.models.list_type import ListType
from guestdesk.models.sector import Sector
from guestdesk.seed import DEFAULT_LIST_TYPES, DEFAULT_SECTORS, seed_catalog


def test_seed_catalog_is_repeatable(db):
    seed_catalog(db)
    seed_catalog(db)

    assert db.query(ListType).count() == len(DEFAULT_LIST_TYPES)
    assert db.query(Sector).count() == len(DEFAULT_SECTORS)
