"""Tests for the construction stage field rules."""

import pytest

from app.construction_stages.exceptions import InvalidStatusError
from app.construction_stages.services.validation import (
    apply_defaults,
    ensure_valid_status,
    validate_fields,
)


def test_valid_create_input_has_no_errors(stage_input):
    assert validate_fields(stage_input, creating=True) == {}


def test_absent_fields_are_skipped_on_update():
    assert validate_fields({}) == {}


def test_create_requires_name_and_start_date():
    errors = validate_fields({}, creating=True)
    assert set(errors) == {"name", "startDate"}


def test_name_longer_than_255_fails():
    errors = validate_fields({"name": "x" * 256})
    assert list(errors) == ["name"]
    assert validate_fields({"name": "x" * 255}) == {}


def test_non_string_name_fails():
    assert "name" in validate_fields({"name": 42})


@pytest.mark.parametrize(
    "value",
    [
        "2024-01-01",
        "2024-01-01 00:00:00",
        "2024-01-01T00:00:00",
        "2024-01-01T00:00:00+00:00",
        "2024-01-01T00:00:00.000Z",
        "2024-1-1T00:00:00Z",
        "2024-02-30T00:00:00Z",
        "not a date",
        20240101,
    ],
)
def test_start_date_must_be_exact_iso_8601(value):
    assert "startDate" in validate_fields({"startDate": value})


def test_end_date_must_be_later_than_start_date():
    same = {"startDate": "2024-01-01T00:00:00Z", "endDate": "2024-01-01T00:00:00Z"}
    earlier = {"startDate": "2024-01-02T00:00:00Z", "endDate": "2024-01-01T00:00:00Z"}
    later = {"startDate": "2024-01-01T00:00:00Z", "endDate": "2024-01-01T00:00:01Z"}

    assert list(validate_fields(same)) == ["endDate"]
    assert list(validate_fields(earlier)) == ["endDate"]
    assert validate_fields(later) == {}


def test_end_date_is_nullable():
    assert validate_fields({"startDate": "2024-01-01T00:00:00Z", "endDate": None}) == {}
    assert validate_fields({"endDate": ""}) == {}


def test_invalid_end_date_reports_only_format_error():
    errors = validate_fields({"startDate": "2024-01-01T00:00:00Z", "endDate": "tomorrow"})
    assert len(errors["endDate"]) == 1
    assert "ISO 8601" in errors["endDate"][0]


def test_duration_is_never_validated():
    assert validate_fields({"duration": "anything"}) == {}


@pytest.mark.parametrize("unit", ["MONTHS", "days", "", None])
def test_duration_unit_outside_enum_fails(unit):
    assert "durationUnit" in validate_fields({"durationUnit": unit})


def test_absent_duration_unit_defaults_to_days():
    assert validate_fields({"name": "Foo", "startDate": "2024-03-01T10:00:00Z"}, creating=True) == {}
    assert apply_defaults({})["durationUnit"] == "DAYS"


@pytest.mark.parametrize("color", ["#12345", "123456", "#GGGGGG", "#1234567", "red"])
def test_bad_color_fails(color):
    assert "color" in validate_fields({"color": color})


@pytest.mark.parametrize("color", ["#abcdef", "#ABCDEF", "#a1B2c3", "", None])
def test_good_or_empty_color_passes(color):
    assert validate_fields({"color": color}) == {}


def test_external_id_max_length():
    assert "externalId" in validate_fields({"externalId": "e" * 256})
    assert validate_fields({"externalId": None}) == {}


def test_status_must_be_enumerated():
    errors = validate_fields({"status": "BOGUS"})
    assert errors["status"] == [
        "Field 'status' must be one of the allowed values: NEW, PLANNED, DELETED."
    ]


def test_required_fields_cannot_be_cleared():
    errors = validate_fields({"name": "", "startDate": None, "status": None})
    assert set(errors) == {"name", "startDate", "status"}


def test_all_errors_are_collected_together():
    errors = validate_fields(
        {"name": "x" * 300, "startDate": "bad", "color": "blue", "status": "GONE"},
        creating=True,
    )
    assert set(errors) == {"name", "startDate", "color", "status"}
    assert all(isinstance(messages, list) and messages for messages in errors.values())


def test_validation_is_idempotent():
    data = {"name": "x" * 300, "startDate": "2024-01-02T00:00:00Z", "endDate": "2024-01-01T00:00:00Z"}
    assert validate_fields(data) == validate_fields(data)


def test_apply_defaults_keeps_given_values():
    result = apply_defaults({"status": "PLANNED"})
    assert result == {"status": "PLANNED", "durationUnit": "DAYS"}
    assert apply_defaults({})["status"] == "NEW"


def test_ensure_valid_status():
    ensure_valid_status("NEW")
    with pytest.raises(InvalidStatusError, match="BOGUS"):
        ensure_valid_status("BOGUS")
