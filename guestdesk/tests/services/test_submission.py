import pytest

from guestdesk.services.submission import (
    CAPACITY_EXCEEDED,
    EMPTY_SUBMISSION,
    INVALID_SENDER,
    NAME_TOO_LONG,
    TOO_MANY_NAMES,
    Sender,
    SubmissionError,
    build_guest_rows,
    check_capacity,
    parse_names,
    validate_sender,
    validate_submission,
)


def test_parse_names_handles_every_line_break():
    assert parse_names("a\r\nb\rc\nd") == ["a", "b", "c", "d"]


def test_blank_lines_are_dropped():
    assert validate_submission("  \nAna\n\n  Bia  \n", max_names=50) == ["Ana", "Bia"]


@pytest.mark.parametrize("text", [None, "", "\n\n", "   \n  "])
def test_empty_submission(text):
    with pytest.raises(SubmissionError) as exc:
        validate_submission(text, max_names=50)
    assert exc.value.code == EMPTY_SUBMISSION


def test_too_many_names():
    text = "\n".join(f"Guest {i}" for i in range(51))
    with pytest.raises(SubmissionError) as exc:
        validate_submission(text, max_names=50)
    assert exc.value.code == TOO_MANY_NAMES
    assert exc.value.context["count"] == 51


def test_exactly_max_names_is_fine():
    text = "\n".join(f"Guest {i}" for i in range(50))
    assert len(validate_submission(text, max_names=50)) == 50


def test_name_too_long():
    with pytest.raises(SubmissionError) as exc:
        validate_submission("Ana\n" + "x" * 101, max_names=50)
    assert exc.value.code == NAME_TOO_LONG
    assert exc.value.context["names"] == ["x" * 101]


def test_count_is_checked_before_length():
    text = "\n".join(["x" * 200] * 3)
    with pytest.raises(SubmissionError) as exc:
        validate_submission(text, max_names=2)
    assert exc.value.code == TOO_MANY_NAMES


def test_capacity_overflow_is_reported():
    with pytest.raises(SubmissionError) as exc:
        check_capacity(48, 3, 50)
    assert exc.value.code == CAPACITY_EXCEEDED
    assert exc.value.context["overflow"] == 1


def test_capacity_exactly_full_is_accepted():
    check_capacity(48, 2, 50)


def test_unbounded_list_never_overflows():
    check_capacity(10_000, 500, None)


def test_guest_rows_are_formatted_and_tagged():
    sender = Sender(name="Carla", email="carla@example.com")
    rows = build_guest_rows(
        ["MARIA DE SOUZA", "joão"],
        sender=sender,
        event_id=None,
        event_list_id=None,
        status="pending",
    )
    assert [r["guest_name"] for r in rows] == ["Maria de Souza", "João"]
    assert all(r["submitted_by"] is None for r in rows)
    assert all(r["sender_email"] == "carla@example.com" for r in rows)
    assert all(r["checked_in"] is False for r in rows)
    assert rows[0]["created_at"] == rows[1]["created_at"]


def test_anonymous_sender_needs_name_and_email():
    with pytest.raises(SubmissionError) as exc:
        validate_sender(Sender(name="", email="x@example.com"))
    assert exc.value.code == INVALID_SENDER

    with pytest.raises(SubmissionError):
        validate_sender(Sender(name="Carla", email="not-an-email"))

    validate_sender(Sender(user_id="6c1b1d7e-0000-0000-0000-000000000000"))
