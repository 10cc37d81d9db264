"""Tests for Retry-After parsing."""

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

from gmail_client.retry_after import DEFAULT_RETRY_AFTER_SECONDS, parse_retry_after

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_numeric_seconds():
    assert parse_retry_after("60") == 60
    assert parse_retry_after(" 5 ") == 5


def test_http_date_in_future():
    value = format_datetime(NOW + timedelta(seconds=90), usegmt=True)
    assert parse_retry_after(value, now=NOW) == 90


def test_http_date_in_past_is_zero():
    value = format_datetime(NOW - timedelta(minutes=5), usegmt=True)
    assert parse_retry_after(value, now=NOW) == 0


def test_http_date_against_real_clock_is_non_negative():
    value = format_datetime(datetime.now(timezone.utc) + timedelta(seconds=30), usegmt=True)
    assert 0 <= parse_retry_after(value) <= 30


def test_missing_or_garbage_uses_default():
    assert parse_retry_after(None) == DEFAULT_RETRY_AFTER_SECONDS
    assert parse_retry_after("") == DEFAULT_RETRY_AFTER_SECONDS
    assert parse_retry_after("soon-ish please") == DEFAULT_RETRY_AFTER_SECONDS


def test_list_value_uses_first():
    assert parse_retry_after(["10", "20"]) == 10


def test_decimal_seconds_are_truncated():
    assert parse_retry_after("10.5") == 10
    assert parse_retry_after("0.9") == 0
    assert parse_retry_after("7.") == 7
