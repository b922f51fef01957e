from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from skillmatch import models
from skillmatch.config import settings
from skillmatch.crud import message as message_crud
from skillmatch.crud import user as user_crud
from skillmatch.exceptions import NotFound, ValidationError
from skillmatch.schemas.message import Conversation, Message

logger = logging.getLogger(__name__)


def _chronological(message: models.Message):
    return (message.sent_at, message.id)


def _require_user_or_history(db: Session, user_id: int, history) -> None:
    # Deleted users keep read access to the rows that outlived them.
    if not history and not user_crud.get_user(db, user_id):
        raise NotFound(f"User {user_id} not found")


def send_message(
    db: Session,
    sender_id: int,
    receiver_id: int,
    content: str,
    *,
    sent_at: Optional[datetime] = None,
) -> models.Message:
    text = (content or "").strip()
    if not text:
        raise ValidationError("Message content cannot be empty")
    if len(text) > settings.MESSAGE_MAX_LENGTH:
        raise ValidationError(
            f"Message content must be {settings.MESSAGE_MAX_LENGTH} characters or less"
        )

    user_crud.require_user(db, sender_id, role="Sender")
    if sender_id == receiver_id:
        raise ValidationError("Cannot send a message to yourself")
    if not user_crud.get_user(db, receiver_id):
        raise ValidationError(f"Receiver {receiver_id} does not exist")

    try:
        message = message_crud.create_message(
            db,
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=text,
            sent_at=sent_at,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(message)
    logger.debug("Message %s sent %s -> %s", message.id, sender_id, receiver_id)
    return message


def list_conversations(db: Session, user_id: int) -> List[Conversation]:
    """
    Group the user's messages into one thread per counterpart.

    Threads are ordered oldest-first inside; the list itself is ordered by
    the latest message, most recent conversation first. Counterparts that
    were deleted keep their thread with ``counterpart_name=None``.

    Raises:
        NotFound: Unknown user with no message history
    """
    history = message_crud.get_messages_for_user(db, user_id)
    _require_user_or_history(db, user_id, history)

    buckets: Dict[int, List[models.Message]] = defaultdict(list)
    for message in history:
        other = message.receiver_id if message.sender_id == user_id else message.sender_id
        buckets[other].append(message)

    names = user_crud.display_names(db, buckets.keys())

    conversations = []
    for counterpart_id, messages in buckets.items():
        ordered = sorted(messages, key=_chronological)
        conversations.append(
            Conversation(
                counterpart_id=counterpart_id,
                counterpart_name=names.get(counterpart_id),
                last_message=Message.model_validate(max(ordered, key=_chronological)),
                messages=[Message.model_validate(m) for m in ordered],
            )
        )

    conversations.sort(key=lambda c: (c.last_message.sent_at, c.last_message.id), reverse=True)
    return conversations


def get_thread(db: Session, user_id: int, counterpart_id: int) -> List[models.Message]:
    """Messages between two users, oldest first."""
    thread = message_crud.get_messages_between(db, user_id, counterpart_id)
    _require_user_or_history(db, user_id, thread)
    return sorted(thread, key=_chronological)
