import pytest

from guestdesk.services.pagination import paginate

ITEMS = list(range(1, 48))  # 47 items


def test_last_page_is_partial():
    p = paginate(ITEMS, 3, 20)
    assert p.items == list(range(41, 48))
    assert (p.start_index, p.end_index) == (41, 47)
    assert p.total_pages == 3
    assert p.has_next is False
    assert p.has_previous is True


@pytest.mark.parametrize("requested, clamped", [(0, 1), (-5, 1), (4, 3), (99, 3)])
def test_out_of_range_pages_clamp(requested, clamped):
    assert paginate(ITEMS, requested, 20).page == clamped


def test_first_page():
    p = paginate(ITEMS, 1, 20)
    assert (p.start_index, p.end_index) == (1, 20)
    assert p.has_previous is False
    assert p.has_next is True


def test_empty_collection_has_one_page():
    p = paginate([], 1, 20)
    assert p.total_pages == 1
    assert p.items == []
    assert (p.start_index, p.end_index) == (0, 0)
    assert p.has_next is False


def test_meta_uses_camel_case():
    meta = paginate(ITEMS, 2, 20).meta()
    assert meta["totalItems"] == 47
    assert meta["startIndex"] == 21
    assert meta["endIndex"] == 40


def test_page_size_must_be_positive():
    with pytest.raises(ValueError):
        paginate(ITEMS, 1, 0)
