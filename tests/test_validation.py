import pytest

from calendar_app.exceptions import ValidationError
from calendar_app.validation import (
    ensure_valid_event,
    validate_event,
    validate_month,
    violations_from_errors,
)


def _fields(violations):
    return [v.field for v in violations]


def test_valid_payload_has_no_violations(make_payload):
    assert validate_event(make_payload()) == []


def test_optional_fields_may_be_absent(make_payload):
    fields = ensure_valid_event(make_payload(description=None, color=None))
    assert fields.description is None
    assert fields.color is None


@pytest.mark.parametrize(
    "title, message",
    [
        (None, "Title is required"),
        ("", "Title is required"),
        ("   ", "Title is required"),
        ("x" * 101, "Title is too long"),
        (42, "Title must be a string"),
    ],
)
def test_title_rules(make_payload, title, message):
    payload = make_payload()
    payload["title"] = title
    violations = validate_event(payload)
    assert [(v.field, v.message) for v in violations] == [("title", message)]


def test_title_length_is_measured_after_trimming(make_payload):
    assert validate_event(make_payload(title="  " + "x" * 100 + "  ")) == []


def test_title_of_101_characters_after_trimming_is_too_long(make_payload):
    violations = validate_event(make_payload(title="  " + "x" * 101 + "  "))
    assert [(v.field, v.message) for v in violations] == [("title", "Title is too long")]


def test_title_is_kept_as_submitted(make_payload):
    assert ensure_valid_event(make_payload(title="  Dentist ")).title == "  Dentist "


@pytest.mark.parametrize(
    "value",
    ["2024-03-05 10:00:00", "2024-03-05T10:00", "2024-03-05T10:00:00Z", "05/03/2024", ""],
)
def test_start_date_format_is_strict(make_payload, value):
    violations = validate_event(make_payload(start_date=value))
    assert ("start_date", "Invalid date format") in [(v.field, v.message) for v in violations]


def test_impossible_calendar_date_is_rejected(make_payload):
    violations = validate_event(make_payload(end_date="2024-02-30T10:00:00"))
    assert [(v.field, v.message) for v in violations] == [("end_date", "Invalid date")]


@pytest.mark.parametrize("color", ["1976d2", "#1976d", "#1976d2f", "#zzzzzz", "red", ""])
def test_color_must_be_six_hex_digits(make_payload, color):
    violations = validate_event(make_payload(color=color))
    assert _fields(violations) == ["color"]


def test_color_accepts_mixed_case(make_payload):
    assert validate_event(make_payload(color="#aBcDeF")) == []


@pytest.mark.parametrize(
    "start, end",
    [
        ("2024-03-05T10:00:00", "2024-03-05T10:00:00"),
        ("2024-03-05T10:00:00", "2024-03-05T09:59:59"),
        ("2024-03-06T00:00:00", "2024-03-05T23:00:00"),
    ],
)
def test_end_must_be_after_start(make_payload, start, end):
    violations = validate_event(make_payload(start_date=start, end_date=end))
    assert [(v.field, v.message) for v in violations] == [
        ("end_date", "End date must be after start date")
    ]


def test_chronological_check_runs_even_when_other_fields_fail(make_payload):
    violations = validate_event(
        make_payload(
            title="",
            color="blue",
            start_date="2024-03-05T12:00:00",
            end_date="2024-03-05T08:00:00",
        )
    )
    assert _fields(violations) == ["title", "end_date", "color"]
    assert violations[1].message == "End date must be after start date"


def test_every_violation_is_reported(make_payload):
    violations = validate_event(
        {"title": "", "description": 5, "start_date": "soon", "color": "#12"}
    )
    assert _fields(violations) == ["title", "description", "start_date", "end_date", "color"]


def test_non_object_payload():
    violations = validate_event(["not", "an", "object"])
    assert _fields(violations) == ["body"]


def test_ensure_valid_event_raises_with_details(make_payload):
    with pytest.raises(ValidationError) as excinfo:
        ensure_valid_event(make_payload(title=""))
    assert excinfo.value.details == [{"field": "title", "message": "Title is required"}]
    assert excinfo.value.to_dict()["error"] == "Validation error"


@pytest.mark.parametrize(
    "year, month, expected",
    [("2024", "3", (2024, 3)), ("2024", "03", (2024, 3)), ("1999", "12", (1999, 12)), (2024, 1, (2024, 1))],
)
def test_validate_month_accepts_padded_and_unpadded(year, month, expected):
    assert validate_month(year, month) == expected


@pytest.mark.parametrize(
    "year, month, bad",
    [
        ("24", "3", ["year"]),
        ("2024", "13", ["month"]),
        ("2024", "0", ["month"]),
        ("2024", "00", ["month"]),
        ("abcd", "x", ["year", "month"]),
    ],
)
def test_validate_month_rejects(year, month, bad):
    with pytest.raises(ValidationError) as excinfo:
        validate_month(year, month)
    assert [v.field for v in excinfo.value.violations] == bad


@pytest.mark.parametrize("field", ["start_date", "end_date"])
def test_timestamp_with_trailing_newline_is_rejected(make_payload, field):
    payload = make_payload()
    payload[field] += "\n"
    violations = validate_event(payload)
    assert [(v.field, v.message) for v in violations] == [(field, "Invalid date format")]


def test_timestamp_with_non_ascii_digits_is_rejected(make_payload):
    violations = validate_event(
        make_payload(start_date="２０２４-03-05T10:00:00", end_date="２０２４-03-05T11:00:00")
    )
    assert [(v.field, v.message) for v in violations] == [
        ("start_date", "Invalid date format"),
        ("end_date", "Invalid date format"),
    ]


def test_color_with_trailing_newline_is_rejected(make_payload):
    violations = validate_event(make_payload(color="#1976d2\n"))
    assert [(v.field, v.message) for v in violations] == [("color", "Invalid color format")]


@pytest.mark.parametrize(
    "year, month, bad",
    [
        ("２０２４", "3", ["year"]),
        ("2024\n", "3", ["year"]),
        ("2024", "3\n", ["month"]),
        ("2024", "３", ["month"]),
    ],
)
def test_validate_month_requires_exact_ascii_digits(year, month, bad):
    with pytest.raises(ValidationError) as excinfo:
        validate_month(year, month)
    assert [v.field for v in excinfo.value.violations] == bad


def test_violations_from_request_errors():
    errors = [
        {"type": "missing", "loc": ("title",), "msg": "Field required"},
        {"type": "string_pattern_mismatch", "loc": ("color",), "msg": "String should match pattern"},
        {"type": "json_invalid", "loc": (7,), "msg": "JSON decode error"},
        {"type": "int_parsing", "loc": ("event_id",), "msg": "Input should be a valid integer"},
    ]
    assert [(v.field, v.message) for v in violations_from_errors(errors)] == [
        ("title", "Title is required"),
        ("color", "Invalid color format"),
        ("body", "Malformed JSON"),
        ("event_id", "Input should be a valid integer"),
    ]
