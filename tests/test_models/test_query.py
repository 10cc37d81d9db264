"""Tests for the search query builder."""

from datetime import date

import pytest

from gmail_client.query import build_query, date_range, format_date


def test_simple_sender():
    assert build_query(sender="alice@example.com") == "from:alice@example.com"


def test_flags():
    assert build_query(unread=True) == "is:unread"
    assert build_query(starred=True) == "is:starred"
    assert build_query(unread=False) == ""


def test_and_terms():
    q = build_query(sender="alice@example.com", subject="Meeting")
    assert q == "(from:alice@example.com subject:Meeting)"


def test_or_list_and_tuple():
    assert build_query(sender=["a@x.com", "b@x.com"]) == "{from:a@x.com from:b@x.com}"
    assert build_query(label=("Work", "Urgent")) == "(label:Work label:Urgent)"


def test_exclude():
    assert build_query(exclude_sender="spam@example.com") == "-from:spam@example.com"


def test_phrase_is_quoted():
    assert build_query(subject="weekly report") == 'subject:"weekly report"'


def test_dates():
    assert build_query(after=date(2024, 3, 5)) == "after:2024/03/05"
    assert format_date("2024/01/01") == "2024/01/01"
    assert date_range(date(2024, 1, 1), date(2024, 1, 31)) == (
        "after:2024/01/01 before:2024/01/31"
    )


def test_unknown_term():
    with pytest.raises(ValueError, match="Unknown query term"):
        build_query(colour="red")
