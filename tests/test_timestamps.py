from datetime import datetime, timezone

from finance_engine.records import Transaction
from finance_engine.timestamps import Invalid, Valid, count_invalid_dates, normalize_timestamp


def test_seconds_and_milliseconds_resolve_to_same_instant():
    seconds = normalize_timestamp(1731400000)
    millis = normalize_timestamp(1731400000000)
    assert seconds.is_valid and millis.is_valid
    assert seconds.instant == millis.instant
    assert seconds.instant == datetime.fromtimestamp(1731400000)


def test_ten_digit_boundary_is_seconds():
    result = normalize_timestamp(9_999_999_999)
    assert result == Valid(datetime.fromtimestamp(9_999_999_999))


def test_iso_string_is_parsed_as_calendar_time():
    result = normalize_timestamp('2024-11-12T08:30:00')
    assert result == Valid(datetime(2024, 11, 12, 8, 30))


def test_timezone_aware_string_is_converted_to_local_time():
    result = normalize_timestamp('2024-11-12T08:30:00Z')
    expected = datetime(2024, 11, 12, 8, 30, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert result.is_valid
    assert result.instant == expected


def test_unparseable_values_are_invalid():
    for value in ['not a date', '', None, True, float('nan'), object()]:
        result = normalize_timestamp(value)
        assert isinstance(result, Invalid), value
        assert not result.is_valid


def test_datetime_passes_through():
    moment = datetime(2026, 10, 1, 12)
    assert normalize_timestamp(moment) == Valid(moment)


def test_count_invalid_dates():
    transactions = [
        Transaction(id=1, amount=10, kind='expense', date=1731400000),
        Transaction(id=2, amount=10, kind='expense', date='garbage'),
        Transaction(id=3, amount=10, kind='expense', date=None),
    ]
    assert count_invalid_dates(transactions) == 2
