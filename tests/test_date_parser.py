"""Tests for date parser with relative dates."""

import pytest
from datetime import date, datetime, timedelta
from dateutil.relativedelta import relativedelta
from farmledger.utils.date_parser import coerce_date, get_date_range, parse_date


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_relative_words():
    """Test parsing 'today', 'yesterday' and 'tomorrow'."""
    today = date.today()
    assert parse_date("Today") == today
    assert parse_date("yesterday") == today - timedelta(days=1)
    assert parse_date(" tomorrow ") == today + timedelta(days=1)


def test_parse_standard_formats():
    """Test parsing free-form date formats."""
    assert parse_date("15 Jan 2024") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_invalid():
    """Test that garbage is rejected."""
    with pytest.raises(ValueError):
        parse_date("not-a-date")


def test_coerce_date():
    """Test best-effort conversion of stored values."""
    fallback = date(2000, 1, 1)
    assert coerce_date("2024-03-05T10:30:00.000Z") == date(2024, 3, 5)
    assert coerce_date(datetime(2024, 3, 5, 10, 30)) == date(2024, 3, 5)
    assert coerce_date(date(2024, 3, 5)) == date(2024, 3, 5)
    assert coerce_date("", default=fallback) == fallback
    assert coerce_date(None, default=fallback) == fallback
    assert coerce_date("rubbish", default=fallback) == fallback


def test_get_date_range_this_month():
    """Test getting date range for this month."""
    start_date, end_date = get_date_range("this-month")
    today = date.today()
    assert start_date == today.replace(day=1)
    assert end_date == today


def test_get_date_range_this_week():
    """Test getting date range for this week."""
    start_date, end_date = get_date_range("this-week")
    assert start_date.weekday() == 0
    assert end_date == date.today()


def test_get_date_range_last_month():
    """Test getting date range for last month."""
    start_date, end_date = get_date_range("last-month")
    first_of_this_month = date.today().replace(day=1)
    assert start_date == first_of_this_month - relativedelta(months=1)
    assert end_date == first_of_this_month - timedelta(days=1)


def test_get_date_range_last_week():
    """Test getting date range for last week."""
    start_date, end_date = get_date_range("last-week")
    assert start_date.weekday() == 0
    assert (end_date - start_date).days == 6
    assert end_date < date.today()


def test_get_date_range_last_year():
    """Test getting date range for last year."""
    start_date, end_date = get_date_range("last-year")
    year = date.today().year - 1
    assert start_date == date(year, 1, 1)
    assert end_date == date(year, 12, 31)


def test_get_date_range_invalid_period():
    """Test that unknown periods are rejected."""
    with pytest.raises(ValueError):
        get_date_range("next-decade")
