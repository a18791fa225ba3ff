from datetime import date

import pytest

from surfshop.core.errors import ValidationError
from surfshop.services import slot_calendar


def test_lesson_times_cover_eight_hourly_slots():
    assert slot_calendar.LESSON_TIMES == (
        "08:00",
        "09:00",
        "10:00",
        "11:00",
        "12:00",
        "13:00",
        "14:00",
        "15:00",
    )


def test_parse_lesson_date_keeps_calendar_day():
    assert slot_calendar.parse_lesson_date("2024-06-01") == date(2024, 6, 1)
    assert slot_calendar.parse_lesson_date(date(2024, 6, 2)) == date(2024, 6, 2)


@pytest.mark.parametrize("value", ["2024-6-1", "2024-06-01T00:00:00Z", "2024-02-30", "", "tomorrow"])
def test_parse_lesson_date_rejects_malformed_values(value):
    with pytest.raises(ValidationError):
        slot_calendar.parse_lesson_date(value)


def test_only_weekends_are_lesson_dates():
    assert slot_calendar.is_valid_lesson_date(date(2024, 6, 1))  # Saturday
    assert slot_calendar.is_valid_lesson_date(date(2024, 6, 2))  # Sunday
    assert not slot_calendar.is_valid_lesson_date(date(2024, 6, 3))  # Monday
    assert not slot_calendar.is_valid_lesson_date(date(2024, 6, 7))  # Friday


@pytest.mark.parametrize("value", ["08:00", "12:00", "15:00"])
def test_valid_lesson_times(value):
    assert slot_calendar.is_valid_lesson_time(value)


@pytest.mark.parametrize("value", ["07:00", "15:30", "16:00", "8:00", "09:30", "9am", ""])
def test_invalid_lesson_times(value):
    assert not slot_calendar.is_valid_lesson_time(value)


def test_validate_slot_messages():
    with pytest.raises(ValidationError, match="Saturdays or Sundays"):
        slot_calendar.validate_slot("2024-06-03", "09:00")
    with pytest.raises(ValidationError, match="between 8am and 4pm"):
        slot_calendar.validate_slot("2024-06-01", "07:00")


def test_slot_key_format():
    assert slot_calendar.slot_key(date(2024, 6, 1), "09:00") == "2024-06-01_09:00"


@pytest.mark.parametrize("value", ["09:00\n", " 09:00", "\u0660\u0669:\u0660\u0660", "\uff10\uff19:00"])
def test_only_ascii_times_are_accepted(value):
    assert not slot_calendar.is_valid_lesson_time(value)
    with pytest.raises(ValidationError, match="between 8am and 4pm"):
        slot_calendar.validate_slot("2024-06-01", value)


def test_validate_slot_returns_stored_form():
    assert slot_calendar.validate_slot(" 2024-06-01 ", "09:00") == (date(2024, 6, 1), "09:00")
    assert slot_calendar.normalize_lesson_time("15:00") == "15:00"


@pytest.mark.parametrize("value", ["2024-06-01\n2024-06-08", "\u0662\u0660\u0662\u0664-06-01"])
def test_dates_must_be_ascii_and_whole(value):
    with pytest.raises(ValidationError):
        slot_calendar.parse_lesson_date(value)


def test_weekend_dates_in_range():
    days = list(slot_calendar.weekend_dates(date(2024, 5, 31), date(2024, 6, 9)))
    assert days == [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 8), date(2024, 6, 9)]
