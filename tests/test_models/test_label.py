"""Tests for Gmail label."""

from gmail_client.label import INBOX, UNREAD, Label

FULL = {
    "id": "Label_1",
    "name": "Work",
    "type": "user",
    "messageListVisibility": "show",
    "labelListVisibility": "labelShow",
    "messagesTotal": 10,
    "messagesUnread": 2,
    "threadsTotal": 8,
    "threadsUnread": 1,
    "color": {"backgroundColor": "#000000", "textColor": "#ffffff"},
}


def test_label_equality_with_string():
    assert INBOX == "INBOX"
    assert UNREAD == "UNREAD"


def test_label_equality_with_label():
    assert INBOX == Label("INBOX", "Inbox")


def test_label_inequality():
    assert INBOX != UNREAD


def test_label_hash():
    labels = {INBOX, UNREAD}
    assert INBOX in labels


def test_label_str_and_repr():
    assert str(INBOX) == "INBOX"
    assert "INBOX" in repr(INBOX)


def test_round_trip_reproduces_all_fields():
    assert Label.from_api_response(FULL).to_dict() == FULL


def test_partial_round_trip_and_missing_fields_are_none():
    data = {"id": "INBOX", "name": "INBOX", "type": "system"}
    label = Label.from_api_response(data)
    assert label.to_dict() == data
    assert label.messages_total is None
    assert label.color is None
    assert label.label_list_visibility is None


def test_classification():
    label = Label.from_api_response(FULL)
    assert label.is_user and not label.is_system
    assert label.is_visible and not label.is_hidden
    assert label.has_messages and label.has_unread

    hidden = Label.from_api_response({"id": "x", "name": "x", "labelListVisibility": "labelHide"})
    assert hidden.is_hidden
    assert not hidden.is_visible
