from datetime import datetime, timedelta

import pytest

from helpers import create_user
from skillmatch.crud import user as user_crud
from skillmatch.exceptions import NotFound, ValidationError
from skillmatch.services import conversation_service

BASE = datetime(2024, 1, 15, 10, 30)


@pytest.fixture
def people(db_session):
    return {
        "alice": create_user(db_session, "Alice Johnson"),
        "bob": create_user(db_session, "Bob Smith"),
        "carol": create_user(db_session, "Carol Davis"),
    }


def _send(db, sender, receiver, content, minutes):
    return conversation_service.send_message(
        db, sender.id, receiver.id, content, sent_at=BASE + timedelta(minutes=minutes)
    )


def test_three_messages_form_one_ordered_thread(db_session, people):
    alice, bob = people["alice"], people["bob"]
    # Inserted out of order on purpose; threads sort by sent_at.
    third = _send(db_session, alice, bob, "Weekend works", 75)
    first = _send(db_session, alice, bob, "Hi Bob!", 0)
    second = _send(db_session, bob, alice, "Hi Alice, want to swap?", 45)

    conversations = conversation_service.list_conversations(db_session, alice.id)

    assert len(conversations) == 1
    thread = conversations[0]
    assert thread.counterpart_id == bob.id
    assert thread.counterpart_name == "Bob Smith"
    assert [m.id for m in thread.messages] == [first.id, second.id, third.id]
    assert thread.last_message.id == third.id


def test_conversations_bucket_by_counterpart_most_recent_first(db_session, people):
    alice, bob, carol = people["alice"], people["bob"], people["carol"]
    _send(db_session, alice, bob, "old", 0)
    latest = _send(db_session, carol, alice, "newer", 10)
    _send(db_session, bob, carol, "not alice's business", 20)

    conversations = conversation_service.list_conversations(db_session, alice.id)

    assert [c.counterpart_id for c in conversations] == [carol.id, bob.id]
    assert conversations[0].last_message.id == latest.id
    assert all(len(c.messages) == 1 for c in conversations)


def test_user_without_messages_has_no_conversations(db_session, people):
    assert conversation_service.list_conversations(db_session, people["carol"].id) == []


@pytest.mark.parametrize("content", ["", "   ", None])
def test_empty_content_is_rejected(db_session, people, content):
    with pytest.raises(ValidationError):
        conversation_service.send_message(
            db_session, people["alice"].id, people["bob"].id, content
        )


def test_unknown_receiver_is_a_validation_error(db_session, people):
    with pytest.raises(ValidationError):
        conversation_service.send_message(db_session, people["alice"].id, 999, "hello?")


def test_unknown_sender_is_not_found(db_session, people):
    with pytest.raises(NotFound):
        conversation_service.send_message(db_session, 999, people["alice"].id, "hello")


def test_cannot_message_yourself(db_session, people):
    with pytest.raises(ValidationError):
        conversation_service.send_message(
            db_session, people["alice"].id, people["alice"].id, "note to self"
        )


def test_content_length_limit(db_session, people, monkeypatch):
    from skillmatch.config import settings

    monkeypatch.setattr(settings, "MESSAGE_MAX_LENGTH", 5)
    with pytest.raises(ValidationError):
        conversation_service.send_message(
            db_session, people["alice"].id, people["bob"].id, "too long"
        )


def test_deleted_counterpart_keeps_thread(db_session, people):
    alice, bob = people["alice"], people["bob"]
    bob_id = bob.id
    _send(db_session, bob, alice, "bye", 0)

    user_crud.delete_user(db_session, bob_id)

    [thread] = conversation_service.list_conversations(db_session, alice.id)
    assert thread.counterpart_id == bob_id
    assert thread.counterpart_name is None
    assert thread.messages[0].content == "bye"


def test_get_thread_returns_both_directions(db_session, people):
    alice, bob, carol = people["alice"], people["bob"], people["carol"]
    _send(db_session, bob, alice, "two", 2)
    _send(db_session, alice, bob, "one", 1)
    _send(db_session, alice, carol, "elsewhere", 3)

    thread = conversation_service.get_thread(db_session, alice.id, bob.id)

    assert [m.content for m in thread] == ["one", "two"]


def test_unknown_user_is_not_found(db_session, people):
    with pytest.raises(NotFound):
        conversation_service.list_conversations(db_session, 12345)
    with pytest.raises(NotFound):
        conversation_service.get_thread(db_session, 12345, people["alice"].id)


def test_deleted_user_keeps_own_history(db_session, people):
    alice, bob = people["alice"], people["bob"]
    alice_id, bob_id = alice.id, bob.id
    _send(db_session, alice, bob, "see you", 0)

    user_crud.delete_user(db_session, alice_id)

    [thread] = conversation_service.list_conversations(db_session, alice_id)
    assert thread.counterpart_id == bob_id
    assert [m.content for m in conversation_service.get_thread(db_session, alice_id, bob_id)] == [
        "see you"
    ]
